"""
FastAPI dependency injection module for the TradeMentor backend.

Provides reusable dependencies so endpoint handlers never reach for global
state directly:
- get_settings_dependency: Returns the cached Settings singleton
- get_clock: Returns the clock used to stamp generated insights
- SettingsDep / ClockDep: Annotated aliases for endpoint signatures

Tests swap either one through FastAPI's override mechanism:

    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
"""

from datetime import datetime
from typing import Annotated, Callable

from fastapi import Depends

from tradementor.core.config import Settings, get_settings
from tradementor.models import utc_now


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    Thin wrapper around get_settings() so that tests can override it:

        app.dependency_overrides[get_settings_dependency] = lambda: mock_settings
    """
    return get_settings()


# =============================================================================
# Clock Dependency
# =============================================================================

def get_clock() -> Callable[[], datetime]:
    """Return the callable that supplies insight creation times (UTC now)."""
    return utc_now


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

# Usage: async def endpoint(settings: SettingsDep)
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

# Usage: async def endpoint(clock: ClockDep)
ClockDep = Annotated[Callable[[], datetime], Depends(get_clock)]
