"""Application exceptions and centralized handlers rendering the response envelope."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tradementor.models.schemas import ApiResponse

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception carrying an HTTP status and error list."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[str]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message or self.message
        self.errors = errors or []
        self.status_code = status_code or self.status_code
        super().__init__(self.message)

    def to_response(self) -> ApiResponse:
        return ApiResponse.error_response(self.message, self.errors)


class BadRequestError(AppException):
    """Bad request."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"


class PayloadTooLargeError(AppException):
    """Request carries more records than the service accepts."""

    status_code = 413
    message = "Too many records in request"


def _envelope(status_code: int, body: ApiResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
    )


def _format_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    if location:
        return f"{location}: {error.get('msg', 'invalid value')}"
    return error.get("msg", "invalid value")


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers so every failure is rendered as an ApiResponse."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
        return _envelope(exc.status_code, exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [_format_validation_error(e) for e in exc.errors()]
        return _envelope(
            422,
            ApiResponse.error_response("Validation failed", errors),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _envelope(
            exc.status_code,
            ApiResponse.error_response(str(exc.detail)),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            f"Unhandled exception on {request.method} {request.url.path}"
        )
        return _envelope(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ApiResponse.error_response("An unexpected error occurred"),
        )
