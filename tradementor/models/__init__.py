"""
Package initialization file for TradeMentor models.

This module exports all Pydantic schemas and enumerations from schemas.py and
enums.py, making them importable from tradementor.models directly.

Usage:
    from tradementor.models import (
        EmotionSample,
        TradeRecord,
        Insight,
        InsightPriority,
        # ... etc
    )
"""

# =============================================================================
# Enums - Import and re-export all enumerations from enums.py
# =============================================================================

from tradementor.models.enums import (
    InsightType,
    InsightPriority,
    TrendDirection,
    EmotionRange,
)


# =============================================================================
# Schemas - Import and re-export all Pydantic models from schemas.py
# =============================================================================

from tradementor.models.schemas import (
    # -------------------------------------------------------------------------
    # Engine inputs
    # -------------------------------------------------------------------------
    EmotionSample,
    TradeRecord,
    PatternDataset,

    # -------------------------------------------------------------------------
    # Engine outputs
    # -------------------------------------------------------------------------
    EmotionPerformanceBucket,
    TrendAnalysis,
    Insight,

    # -------------------------------------------------------------------------
    # Supplementary analytics
    # -------------------------------------------------------------------------
    EmotionPatternSummary,
    PerformanceCorrelation,
    WeeklyTrend,
    EmotionDistributionEntry,
    PatternAnalysis,
    UserInsightRecord,

    # -------------------------------------------------------------------------
    # Envelope and helpers
    # -------------------------------------------------------------------------
    ApiResponse,
    as_utc,
    utc_now,
)


__all__ = [
    # Enums
    "InsightType",
    "InsightPriority",
    "TrendDirection",
    "EmotionRange",
    # Engine inputs
    "EmotionSample",
    "TradeRecord",
    "PatternDataset",
    # Engine outputs
    "EmotionPerformanceBucket",
    "TrendAnalysis",
    "Insight",
    # Supplementary analytics
    "EmotionPatternSummary",
    "PerformanceCorrelation",
    "WeeklyTrend",
    "EmotionDistributionEntry",
    "PatternAnalysis",
    "UserInsightRecord",
    # Envelope and helpers
    "ApiResponse",
    "as_utc",
    "utc_now",
]
