"""
Core infrastructure package for the TradeMentor backend.

Provides:
- Configuration management via pydantic-settings
- Application exceptions rendered as the ApiResponse envelope
- FastAPI dependency injection utilities

This module re-exports key components from submodules for convenient importing:

    from tradementor.core import get_settings, SettingsDep, BadRequestError
"""

# =============================================================================
# Re-exports from tradementor.core.config
# =============================================================================
from tradementor.core.config import Settings, get_settings

# =============================================================================
# Re-exports from tradementor.core.exceptions
# =============================================================================
from tradementor.core.exceptions import (
    AppException,
    BadRequestError,
    PayloadTooLargeError,
    register_exception_handlers,
)

# =============================================================================
# Re-exports from tradementor.core.dependencies
# =============================================================================
from tradementor.core.dependencies import (
    get_clock,
    get_settings_dependency,
    ClockDep,
    SettingsDep,
)

__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Error handling (from exceptions.py)
    'AppException',
    'BadRequestError',
    'PayloadTooLargeError',
    'register_exception_handlers',
    # FastAPI dependency injection (from dependencies.py)
    'get_clock',
    'get_settings_dependency',
    'ClockDep',
    'SettingsDep',
]
