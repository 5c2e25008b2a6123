"""
FastAPI router module for emotion/performance pattern endpoints.

This module implements endpoints for:
- Insights: Ranked sweet spot, danger zone, trend, volatility and time patterns
- Trend: Least-squares emotion trend with confidence
- Emotion performance: Win rate and average profit per emotion level
- Analysis: Emotion summary, performance correlation, weekly trends, distribution
- Insight records: Insights reshaped for the persistence layer

Every endpoint is stateless: the caller posts one user's emotion checks and
trades (already resolved for the authenticated user and narrowed by date
range) and receives the result wrapped in the ApiResponse envelope.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Query

from tradementor.core.dependencies import ClockDep, SettingsDep
from tradementor.core.exceptions import (
    AppException,
    BadRequestError,
    PayloadTooLargeError,
)
from tradementor.core.config import Settings
from tradementor.models import (
    ApiResponse,
    EmotionPerformanceBucket,
    Insight,
    PatternAnalysis,
    PatternDataset,
    TrendAnalysis,
    UserInsightRecord,
)
from tradementor.services.emotion_statistics import (
    build_pattern_analysis,
    to_user_insight_records,
)
from tradementor.services.pattern_analysis import (
    analyze_emotion_performance,
    calculate_trend,
    generate_insights,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patterns", tags=["patterns"])


# =============================================================================
# Helper Functions
# =============================================================================


def _enforce_record_limit(dataset: PatternDataset, settings: Settings) -> None:
    """
    Reject data sets larger than the configured per-request bound.

    Raises:
        PayloadTooLargeError: If emotion samples + trades exceed
            settings.max_records_per_request
    """
    total = len(dataset.emotionSamples) + len(dataset.trades)
    if total > settings.max_records_per_request:
        raise PayloadTooLargeError(
            errors=[
                f"Received {total} records; at most "
                f"{settings.max_records_per_request} are accepted. "
                "Narrow the date range and retry."
            ]
        )


def _resolve_weeks(weeks: Optional[int], settings: Settings) -> int:
    if weeks is None:
        return settings.default_trend_weeks
    if weeks < 1 or weeks > settings.max_trend_weeks:
        raise BadRequestError(f"Weeks must be between 1 and {settings.max_trend_weeks}")
    return weeks


# =============================================================================
# Insight Endpoints
# =============================================================================


@router.post("/insights", response_model=ApiResponse[List[Insight]])
async def get_insights(
    dataset: PatternDataset,
    settings: SettingsDep,
    clock: ClockDep,
) -> ApiResponse[List[Insight]]:
    """
    Generate ranked insights for the posted data set.

    Insights are ordered high -> medium -> low priority, then by descending
    confidence. An empty list is a valid result: there was not enough data for
    any rule to fire.

    Raises:
        PayloadTooLargeError (413): Data set exceeds the per-request bound
    """
    _enforce_record_limit(dataset, settings)
    try:
        insights = generate_insights(
            dataset.userId,
            dataset.emotionSamples,
            dataset.trades,
            clock=clock,
        )
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error generating insights for user {dataset.userId}: {e}", exc_info=True)
        raise AppException("Error generating insights")

    logger.info(f"Generated {len(insights)} insights for user {dataset.userId}")
    return ApiResponse[List[Insight]].success_response(insights)


@router.post("/insights/records", response_model=ApiResponse[List[UserInsightRecord]])
async def get_insight_records(
    dataset: PatternDataset,
    settings: SettingsDep,
    clock: ClockDep,
) -> ApiResponse[List[UserInsightRecord]]:
    """
    Generate insights and return them in the shape the persistence layer stores.

    Nothing is written by this service; the caller decides whether to persist.
    """
    _enforce_record_limit(dataset, settings)
    try:
        insights = generate_insights(
            dataset.userId,
            dataset.emotionSamples,
            dataset.trades,
            clock=clock,
        )
        records = to_user_insight_records(dataset.userId, insights)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error preparing insight records for user {dataset.userId}: {e}", exc_info=True)
        raise AppException("Error generating insight records")

    return ApiResponse[List[UserInsightRecord]].success_response(records)


# =============================================================================
# Component Endpoints
# =============================================================================


@router.post("/trend", response_model=ApiResponse[TrendAnalysis])
async def get_trend(
    dataset: PatternDataset,
    settings: SettingsDep,
) -> ApiResponse[TrendAnalysis]:
    """
    Least-squares emotion trend.

    Fewer than three emotion samples yield direction 'insufficient_data',
    which is reported as a successful response.
    """
    _enforce_record_limit(dataset, settings)
    try:
        trend = calculate_trend(dataset.emotionSamples)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error calculating emotion trend for user {dataset.userId}: {e}", exc_info=True)
        raise AppException("Error calculating emotion trend")

    return ApiResponse[TrendAnalysis].success_response(trend)


@router.post(
    "/emotion-performance",
    response_model=ApiResponse[List[EmotionPerformanceBucket]],
)
async def get_emotion_performance(
    dataset: PatternDataset,
    settings: SettingsDep,
) -> ApiResponse[List[EmotionPerformanceBucket]]:
    """Win rate, trade count and average profit per rounded emotion level."""
    _enforce_record_limit(dataset, settings)
    try:
        buckets = analyze_emotion_performance(dataset.trades)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error analyzing emotion performance for user {dataset.userId}: {e}", exc_info=True)
        raise AppException("Error analyzing emotion performance")

    return ApiResponse[List[EmotionPerformanceBucket]].success_response(buckets)


@router.post("/analysis", response_model=ApiResponse[PatternAnalysis])
async def get_pattern_analysis(
    dataset: PatternDataset,
    settings: SettingsDep,
    clock: ClockDep,
    weeks: Optional[int] = Query(
        default=None,
        description="Weekly trend window in weeks (defaults to settings)",
    ),
) -> ApiResponse[PatternAnalysis]:
    """
    Dashboard bundle: emotion summary, performance correlation, weekly trends
    ending now, and the 1-10 emotion distribution.

    Raises:
        BadRequestError (400): weeks outside 1..settings.max_trend_weeks
        PayloadTooLargeError (413): Data set exceeds the per-request bound
    """
    window_weeks = _resolve_weeks(weeks, settings)
    _enforce_record_limit(dataset, settings)

    try:
        analysis = build_pattern_analysis(
            dataset.emotionSamples,
            dataset.trades,
            window_weeks,
            end=clock(),
        )
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error building pattern analysis for user {dataset.userId}: {e}", exc_info=True)
        raise AppException("Error retrieving pattern analysis")

    return ApiResponse[PatternAnalysis].success_response(analysis)
