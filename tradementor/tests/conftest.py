"""
Pytest Configuration and Shared Fixtures for TradeMentor Tests.

This module provides fixtures and configuration for all tests, supporting:
- Async test execution with pytest-asyncio
- A fixed clock and sequential id factory for deterministic insights
- Builders for emotion samples and trades on a known calendar
- A FastAPI TestClient with the clock dependency pinned

Calendar used throughout the suite:
    BASE_TIME = Monday 2025-06-02 10:00 UTC
    FIXED_NOW = Monday 2025-06-30 12:00 UTC
"""

from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Callable, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

from tradementor.core.dependencies import get_clock
from tradementor.main import app
from tradementor.models import EmotionSample, TradeRecord


# ============================================================
# PYTEST PLUGINS CONFIGURATION
# ============================================================

pytest_plugins: List[str] = ['pytest_asyncio']


# ============================================================
# CALENDAR CONSTANTS
# ============================================================

BASE_TIME = datetime(2025, 6, 2, 10, 0, tzinfo=timezone.utc)  # a Monday
FIXED_NOW = datetime(2025, 6, 30, 12, 0, tzinfo=timezone.utc)
TEST_USER_ID = "user-123"


# ============================================================
# DETERMINISM FIXTURES
# ============================================================

@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def sequential_ids() -> Callable[[], str]:
    """
    Id factory yielding insight-1, insight-2, ... for a single test.
    """
    counter = count(1)
    return lambda: f"insight-{next(counter)}"


# ============================================================
# DATA BUILDER FIXTURES
# ============================================================

@pytest.fixture
def make_samples() -> Callable[..., List[EmotionSample]]:
    """
    Build one emotion sample per level, one day apart starting at BASE_TIME.

    Usage:
        samples = make_samples([5, 6, 7])
    """
    def _make(
        levels: List[float],
        start: datetime = BASE_TIME,
        step: timedelta = timedelta(days=1),
    ) -> List[EmotionSample]:
        return [
            EmotionSample(
                timestamp=start + step * i,
                level=level,
                userId=TEST_USER_ID,
            )
            for i, level in enumerate(levels)
        ]
    return _make


@pytest.fixture
def make_trades() -> Callable[..., List[TradeRecord]]:
    """
    Build trades sharing one timestamp, emotion level and profit pattern.

    Usage:
        # 3 wins then 2 losses at emotion 7 on Tuesday 2025-06-03 15:00 UTC
        trades = make_trades([50, 50, 50, -20, -20], emotion=7,
                             timestamp=datetime(2025, 6, 3, 15, tzinfo=timezone.utc))
    """
    ids = count(1)

    def _make(
        profits: List[float],
        emotion: Optional[float] = 5,
        timestamp: datetime = BASE_TIME,
        symbol: str = "AAPL",
    ) -> List[TradeRecord]:
        return [
            TradeRecord(
                id=f"trade-{next(ids)}",
                timestamp=timestamp,
                symbol=symbol,
                profit=profit,
                preTradeEmotion=emotion,
            )
            for profit in profits
        ]
    return _make


@pytest.fixture
def winning_streak_trades(make_trades) -> List[TradeRecord]:
    """Ten winning trades of 100 each at emotion level 8."""
    return make_trades([100.0] * 10, emotion=8)


# ============================================================
# API FIXTURES
# ============================================================

@pytest.fixture
def client(fixed_clock) -> Generator[TestClient, None, None]:
    """
    TestClient with the insight clock pinned to FIXED_NOW.

    Dependency overrides are cleared after each test.
    """
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
