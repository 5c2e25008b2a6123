"""
Pydantic request/response models for the TradeMentor pattern analysis backend.

This module provides type-safe data validation and serialization for:
- Engine inputs: EmotionSample, TradeRecord, PatternDataset
- Engine outputs: EmotionPerformanceBucket, TrendAnalysis, Insight
- Supplementary analytics: EmotionPatternSummary, PerformanceCorrelation,
  WeeklyTrend, EmotionDistributionEntry, PatternAnalysis
- Persistence hand-off: UserInsightRecord
- Response envelope: ApiResponse

Field names are camelCase to match the JSON contract consumed by the
Next.js frontend.

All models use Pydantic v2 syntax with proper field validation and examples.
"""

from datetime import datetime, timezone
from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field, ConfigDict, computed_field

from tradementor.models.enums import (
    EmotionRange,
    InsightPriority,
    InsightType,
    TrendDirection,
)

T = TypeVar("T")


def utc_now() -> datetime:
    """Timezone-aware current UTC time; the default clock for generated records."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """
    Normalize a timestamp to aware UTC.

    Payloads may mix naive and offset-carrying timestamps; naive ones are taken
    to be UTC already so the two kinds can be ordered against each other.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# =============================================================================
# Engine Input Models
# =============================================================================


class EmotionSample(BaseModel):
    """
    Point-in-time emotional self-report.

    The level follows the 1 (panic) to 10 (peak confidence) convention. The
    analysis engine does not enforce that range; validation belongs to the
    ingestion layer that produced the sample.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "timestamp": "2025-06-30T14:05:00Z",
                "level": 7,
                "userId": "user-123",
                "tradeId": "trade-42",
                "notes": "Calm after morning review",
            }
        }
    )

    timestamp: datetime = Field(
        ...,
        description="When the emotion check was recorded"
    )
    level: float = Field(
        ...,
        description="Emotion level, 1-10 by convention"
    )
    userId: str = Field(
        ...,
        description="Owner of the emotion check"
    )
    tradeId: Optional[str] = Field(
        default=None,
        description="Trade this check was attached to, if any"
    )
    notes: Optional[str] = Field(
        default=None,
        description="Free-form notes"
    )


class TradeRecord(BaseModel):
    """
    Closed or logged trade event.

    `isWin` is derived from profit and serialized alongside the input fields.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "trade-42",
                "timestamp": "2025-06-30T14:10:00Z",
                "symbol": "AAPL",
                "profit": 125.5,
                "preTradeEmotion": 7,
                "postTradeEmotion": 8,
            }
        }
    )

    id: str = Field(
        ...,
        description="Unique trade identifier"
    )
    timestamp: datetime = Field(
        ...,
        description="When the trade was executed"
    )
    symbol: str = Field(
        ...,
        description="Instrument symbol"
    )
    profit: float = Field(
        ...,
        description="Signed profit in account currency"
    )
    preTradeEmotion: Optional[float] = Field(
        default=None,
        description="Emotion level recorded before entering the trade"
    )
    postTradeEmotion: Optional[float] = Field(
        default=None,
        description="Emotion level recorded after closing the trade"
    )

    @computed_field
    @property
    def isWin(self) -> bool:
        return self.profit > 0


class PatternDataset(BaseModel):
    """
    Request body for every pattern endpoint: one user's emotion checks and trades.

    The caller is responsible for narrowing the collections (e.g. by date range)
    before posting them.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
    )

    userId: str = Field(
        ...,
        min_length=1,
        description="User the data set belongs to"
    )
    emotionSamples: List[EmotionSample] = Field(
        default_factory=list,
        description="Emotion checks in any order"
    )
    trades: List[TradeRecord] = Field(
        default_factory=list,
        description="Trades in any order"
    )


# =============================================================================
# Engine Output Models
# =============================================================================


class EmotionPerformanceBucket(BaseModel):
    """
    Trades aggregated by rounded pre-trade emotion level.

    Only emitted for levels with at least one trade; tradeCount always
    equals len(tradeIds).
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "emotionLevel": 8,
                "winRate": 0.8,
                "tradeCount": 5,
                "averageProfit": 42.0,
                "tradeIds": ["t1", "t2", "t3", "t4", "t5"],
            }
        }
    )

    emotionLevel: int = Field(
        ...,
        ge=1,
        le=10,
        description="Integer emotion level"
    )
    winRate: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Winning trades / trades in bucket"
    )
    tradeCount: int = Field(
        ...,
        ge=1,
        description="Number of trades in bucket"
    )
    averageProfit: float = Field(
        ...,
        description="Mean profit of trades in bucket"
    )
    tradeIds: List[str] = Field(
        default_factory=list,
        description="Contributing trade identifiers"
    )


class TrendAnalysis(BaseModel):
    """Least-squares fit of emotion level against chronological position."""

    direction: TrendDirection = Field(
        ...,
        description="improving, declining, stable or insufficient_data"
    )
    slope: float = Field(
        default=0.0,
        description="Regression slope (level change per sample)"
    )
    intercept: float = Field(
        default=0.0,
        description="Regression intercept"
    )
    confidence: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Sample-size-damped R-squared, 0-100"
    )


class Insight(BaseModel):
    """
    Generated, human-readable observation about emotion and performance.

    `id` and `createdAt` are fresh on every engine call; callers must not
    rely on them being stable across calls.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "3f0c1c9e-8d1b-4b8e-9f3a-0d8f4b1a2c3d",
                "type": "performance_correlation",
                "title": "Your Sweet Spot",
                "description": "You win 80% when emotion level is 7",
                "confidence": 85,
                "priority": "high",
                "actionable": True,
                "createdAt": "2025-06-30T14:10:00Z",
            }
        }
    )

    id: str = Field(
        ...,
        description="Identifier generated for this call"
    )
    type: InsightType = Field(
        ...,
        description="Insight category"
    )
    title: str = Field(
        ...,
        description="Short headline"
    )
    description: str = Field(
        ...,
        description="Full sentence shown to the trader"
    )
    confidence: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Heuristic confidence, 0-100"
    )
    priority: InsightPriority = Field(
        ...,
        description="Display priority"
    )
    actionable: bool = Field(
        default=True,
        description="Whether the trader can act on this insight"
    )
    createdAt: datetime = Field(
        ...,
        description="When the insight was generated"
    )


# =============================================================================
# Supplementary Analytics Models
# =============================================================================


class EmotionPatternSummary(BaseModel):
    """Descriptive statistics over a user's emotion checks."""

    averageEmotion: float = Field(default=0.0)
    mostCommonEmotion: float = Field(default=0.0)
    emotionVolatility: float = Field(
        default=0.0,
        description="Population standard deviation of emotion levels"
    )
    totalChecks: int = Field(default=0, ge=0)


class PerformanceCorrelation(BaseModel):
    """
    Win rate and average profit keyed by rounded pre-trade emotion level.

    Win rates here are percentages (0-100), unlike EmotionPerformanceBucket.
    """

    winRateByEmotion: Dict[int, float] = Field(default_factory=dict)
    avgProfitByEmotion: Dict[int, float] = Field(default_factory=dict)
    bestPerformingEmotionRange: EmotionRange = Field(default=EmotionRange.NO_DATA)
    worstPerformingEmotionRange: EmotionRange = Field(default=EmotionRange.NO_DATA)


class WeeklyTrend(BaseModel):
    """One seven-day slice of the weekly trend window."""

    weekStartDate: datetime
    averageEmotion: float = Field(default=0.0)
    totalTrades: int = Field(default=0, ge=0)
    totalProfit: float = Field(default=0.0)
    winRate: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Winning trades as a percentage"
    )


class EmotionDistributionEntry(BaseModel):
    """Share of emotion checks at one integer level."""

    emotionLevel: int = Field(..., ge=1, le=10)
    count: int = Field(default=0, ge=0)
    percentage: float = Field(default=0.0, ge=0.0, le=100.0)


class PatternAnalysis(BaseModel):
    """Bundle returned by the analysis endpoint."""

    emotionPatterns: EmotionPatternSummary
    performanceCorrelation: PerformanceCorrelation
    weeklyTrends: List[WeeklyTrend] = Field(default_factory=list)
    emotionDistribution: List[EmotionDistributionEntry] = Field(default_factory=list)


class UserInsightRecord(BaseModel):
    """
    Durable shape of an insight as stored by the persistence layer.

    confidenceScore is on a 0-10 scale with two decimals.
    """

    userId: str
    insightType: InsightType
    title: str = Field(..., max_length=200)
    description: str
    confidenceScore: float = Field(..., ge=0.0, le=10.0)
    isActive: bool = True
    generatedAt: datetime


# =============================================================================
# Response Envelope
# =============================================================================


class ApiResponse(BaseModel, Generic[T]):
    """
    Standard success/error envelope wrapping every API response.

    Example:
        {"success": true, "message": "Success", "data": [...],
         "errors": [], "timestamp": "2025-06-30T14:10:00Z"}
    """

    success: bool
    message: str = ""
    data: Optional[T] = None
    errors: List[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=utc_now)

    @classmethod
    def success_response(cls, data: T, message: str = "Success") -> "ApiResponse[T]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def error_response(
        cls, message: str, errors: Optional[List[str]] = None
    ) -> "ApiResponse[T]":
        return cls(success=False, message=message, errors=errors or [])
