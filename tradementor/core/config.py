"""
Settings and environment management module for the TradeMentor backend.

This module provides centralized configuration management using pydantic-settings,
which automatically loads settings from environment variables and .env files.

Key Features:
- Environment variable validation and type coercion
- Sensible defaults for development
- Singleton pattern via @lru_cache for efficient access

Environment Variables:
- APP_NAME: Service name reported by the root endpoint
- LOG_LEVEL: Root logging level (default: INFO)
- CORS_ORIGINS: JSON list of allowed browser origins
- MAX_RECORDS_PER_REQUEST: Upper bound on emotion samples + trades per request
- DEFAULT_TREND_WEEKS: Weekly trend window when the caller gives none
- MAX_TREND_WEEKS: Largest weekly trend window accepted

The insight thresholds (0.1 slope cutoff, 0.7/0.3 win-rate cutoffs, 2.0 stddev
cutoff, sample-size confidence ladder) are not settings. They live as constants
in tradementor.services.pattern_analysis so results stay comparable across
deployments.

Usage:
    from tradementor.core.config import get_settings

    settings = get_settings()
    limit = settings.max_records_per_request
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Human-readable service name.
        app_version: Version string reported by the root endpoint.
        log_level: Logging level name passed to logging.basicConfig.
        cors_origins: Browser origins allowed by the CORS middleware.
        max_records_per_request: Maximum combined number of emotion samples and
            trades accepted in a single request body. Callers are expected to
            narrow their data set by date range before posting it.
        default_trend_weeks: Number of weeks covered by weekly trends by default.
        max_trend_weeks: Largest accepted weekly trend window.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    # =========================================================================
    # Service identity
    # =========================================================================

    app_name: str = 'TradeMentor Pattern API'
    app_version: str = '1.0.0'

    # =========================================================================
    # Logging
    # =========================================================================

    log_level: str = 'INFO'

    # =========================================================================
    # HTTP surface
    # =========================================================================

    # Next.js dev server origins
    cors_origins: List[str] = [
        'http://localhost:3000',
        'http://127.0.0.1:3000',
    ]

    # Bound on per-request collection size; the engine itself does no paging
    max_records_per_request: int = 10000

    # =========================================================================
    # Weekly trend window
    # =========================================================================

    default_trend_weeks: int = 4
    max_trend_weeks: int = 52


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The cached settings instance.

    Note:
        To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
