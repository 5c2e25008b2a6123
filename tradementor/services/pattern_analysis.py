"""
Emotion/Performance Pattern Analysis Engine.

Turns a user's emotion checks and trades into a ranked list of insights.
Everything here is a pure, synchronous computation over caller-supplied lists:
no I/O, no shared state, inputs are never mutated. The only non-determinism is
the wall clock and identifier generator used for Insight.createdAt / Insight.id,
and both are injectable.

Components:
1. TREND - Least-squares fit of emotion level over chronological position
   - Direction cutoff |slope| > 0.1
   - Confidence = R^2 x 100, damped by min(1, n/20)
2. EMOTION PERFORMANCE - Win rate / average profit per rounded emotion level 1-10
3. INSIGHT RULES - Independently evaluated, each may or may not fire:
   - Sweet Spot: best bucket, win rate > 0.7 with >= 5 trades
   - Danger Zone: worst bucket with >= 3 trades, win rate < 0.3
   - Trend: direction known and confidence > 60
   - Volatility: population stddev of levels > 2.0 (needs >= 2 samples)
   - Day-of-week: best/worst weekday win-rate spread > 0.3
   - Hour-of-day: best/worst hour win-rate spread > 0.4
4. ORDERING - priority (high > medium > low), then confidence, then insertion

Preconditions:
    Emotion levels are expected on the 1-10 scale. The engine does not validate
    them; out-of-range levels simply never land in a 1-10 bucket.

Dependencies:
    - numpy: regression sums and population standard deviation
    - pandas: weekday/hour grouping for the time-pattern rules

Usage:
    from tradementor.services.pattern_analysis import generate_insights

    insights = generate_insights(user_id, emotion_samples, trades)
"""

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, List, Optional, Sequence
from uuid import uuid4

import numpy as np
import pandas as pd

from tradementor.models import (
    EmotionPerformanceBucket,
    EmotionSample,
    Insight,
    InsightPriority,
    InsightType,
    TradeRecord,
    TrendAnalysis,
    TrendDirection,
    as_utc,
    utc_now,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


# =============================================================================
# Constants
# =============================================================================
# Fixed policy values. They are kept as-is for behavioral compatibility with
# existing journals; none of them has a documented statistical derivation.

# Minimum samples before a regression is attempted
MIN_TREND_SAMPLES: int = 3

# |slope| above this is a trend, otherwise stable
TREND_SLOPE_THRESHOLD: float = 0.1

# Number of samples at which trend confidence stops being damped
TREND_FULL_CONFIDENCE_SAMPLES: int = 20

# Trend insight fires only above this confidence
TREND_INSIGHT_MIN_CONFIDENCE: float = 60.0

# Emotion levels analysed by the bucket analysis (inclusive)
EMOTION_LEVEL_MIN: int = 1
EMOTION_LEVEL_MAX: int = 10

SWEET_SPOT_MIN_WIN_RATE: float = 0.7
SWEET_SPOT_MIN_TRADES: int = 5

DANGER_ZONE_MAX_WIN_RATE: float = 0.3
DANGER_ZONE_MIN_TRADES: int = 3

VOLATILITY_THRESHOLD: float = 2.0
VOLATILITY_MIN_SAMPLES: int = 2
VOLATILITY_CONFIDENCE: float = 85.0

# Weekday/hour groups need this many trades to be compared
TIME_GROUP_MIN_TRADES: int = 3
DAY_OF_WEEK_MIN_SPREAD: float = 0.3
HOUR_OF_DAY_MIN_SPREAD: float = 0.4

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

TREND_MESSAGES = {
    TrendDirection.IMPROVING: (
        "Your emotional state has been steadily improving over time. "
        "Keep up the great work!"
    ),
    TrendDirection.DECLINING: (
        "Your emotional state shows a declining trend. "
        "Consider implementing stress management techniques."
    ),
    TrendDirection.STABLE: (
        "Your emotional state remains stable. "
        "Consistency is key for trading success."
    ),
}
TREND_FALLBACK_MESSAGE = "Unable to determine emotional trend."


# =============================================================================
# Statistical Helper Functions
# =============================================================================


def insight_confidence(sample_size: int) -> float:
    """
    Map a trade/sample count onto a confidence percentage.

    Fixed step function, not interpolated:
        < 3 -> 30, < 5 -> 50, < 10 -> 70, < 20 -> 85, otherwise 95

    Args:
        sample_size: Number of trades or samples behind an insight

    Returns:
        Confidence percentage
    """
    if sample_size < 3:
        return 30.0
    if sample_size < 5:
        return 50.0
    if sample_size < 10:
        return 70.0
    if sample_size < 20:
        return 85.0
    return 95.0


def calculate_emotion_volatility(
    emotion_samples: Sequence[EmotionSample],
) -> Optional[float]:
    """
    Population standard deviation of emotion levels.

    Returns:
        The standard deviation, or None with fewer than two samples. None is
        not the same as 0: a single sample has no measurable spread, while
        identical repeated levels have a spread of exactly zero.
    """
    if len(emotion_samples) < VOLATILITY_MIN_SAMPLES:
        return None
    levels = np.array([s.level for s in emotion_samples], dtype=np.float64)
    return float(np.std(levels))  # ddof=0


def _sort_chronologically(
    emotion_samples: Sequence[EmotionSample],
) -> List[EmotionSample]:
    # Naive and aware timestamps may be mixed in one payload
    return sorted(emotion_samples, key=lambda s: as_utc(s.timestamp))


def _trend_confidence(
    levels: np.ndarray,
    slope: float,
    intercept: float,
) -> float:
    """
    Sample-size-damped R-squared of the fitted line, clamped to [0, 100].

    Zero-variance input (every level identical) has no defined R-squared and
    scores 0.
    """
    n = len(levels)
    x = np.arange(n, dtype=np.float64)
    mean_y = float(np.mean(levels))

    total_sum_squares = float(np.sum((levels - mean_y) ** 2))
    if total_sum_squares <= 1e-12:
        return 0.0

    predicted = slope * x + intercept
    residual_sum_squares = float(np.sum((levels - predicted) ** 2))

    r_squared = 1.0 - (residual_sum_squares / total_sum_squares)
    sample_size_adjustment = min(1.0, n / TREND_FULL_CONFIDENCE_SAMPLES)
    return max(0.0, min(100.0, r_squared * 100.0 * sample_size_adjustment))


# =============================================================================
# Trend Analysis
# =============================================================================


def calculate_trend(emotion_samples: Sequence[EmotionSample]) -> TrendAnalysis:
    """
    Fit a least-squares line of emotion level against chronological position.

    Samples are sorted by timestamp; the 0-based position after sorting is the
    independent variable and the level is the dependent variable:

        slope     = (n*Sxy - Sx*Sy) / (n*Sxx - Sx^2)
        intercept = (Sy - slope*Sx) / n

    Direction: slope > 0.1 improving, slope < -0.1 declining, otherwise stable.

    Args:
        emotion_samples: Emotion checks in any order

    Returns:
        TrendAnalysis. With fewer than three samples the direction is
        INSUFFICIENT_DATA and slope/intercept/confidence stay 0; no regression
        is computed.

    Example:
        >>> trend = calculate_trend(samples_rising_by_one_per_day)
        >>> trend.direction
        <TrendDirection.IMPROVING: 'improving'>
    """
    n = len(emotion_samples)
    if n < MIN_TREND_SAMPLES:
        return TrendAnalysis(direction=TrendDirection.INSUFFICIENT_DATA)

    ordered = _sort_chronologically(emotion_samples)
    y = np.array([s.level for s in ordered], dtype=np.float64)
    x = np.arange(n, dtype=np.float64)

    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_xx = float(np.sum(x * x))

    # n >= 3 guarantees a non-zero denominator
    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n

    if slope > TREND_SLOPE_THRESHOLD:
        direction = TrendDirection.IMPROVING
    elif slope < -TREND_SLOPE_THRESHOLD:
        direction = TrendDirection.DECLINING
    else:
        direction = TrendDirection.STABLE

    return TrendAnalysis(
        direction=direction,
        slope=slope,
        intercept=intercept,
        confidence=_trend_confidence(y, slope, intercept),
    )


# =============================================================================
# Emotion Performance Buckets
# =============================================================================


def analyze_emotion_performance(
    trades: Sequence[TradeRecord],
) -> List[EmotionPerformanceBucket]:
    """
    Aggregate trades by rounded pre-trade emotion level.

    For each level L in 1..10 (ascending), the bucket holds every trade whose
    pre-trade emotion rounds to L. Rounding is half-to-even, so 7.5 lands in
    bucket 8 and 8.5 also lands in bucket 8. Trades without a pre-trade
    emotion are left out entirely.

    Args:
        trades: Trades in any order

    Returns:
        One EmotionPerformanceBucket per level with at least one trade; empty
        levels are omitted rather than zero-filled.
    """
    by_level = {level: [] for level in range(EMOTION_LEVEL_MIN, EMOTION_LEVEL_MAX + 1)}
    for trade in trades:
        if trade.preTradeEmotion is None:
            continue
        level = round(trade.preTradeEmotion)
        if level in by_level:
            by_level[level].append(trade)

    buckets: List[EmotionPerformanceBucket] = []
    for level, level_trades in by_level.items():
        if not level_trades:
            continue
        win_count = sum(1 for t in level_trades if t.isWin)
        buckets.append(
            EmotionPerformanceBucket(
                emotionLevel=level,
                winRate=win_count / len(level_trades),
                tradeCount=len(level_trades),
                averageProfit=float(np.mean([t.profit for t in level_trades])),
                tradeIds=[t.id for t in level_trades],
            )
        )
    return buckets


# =============================================================================
# Time Pattern Grouping
# =============================================================================


def _hour_label(hour: int) -> str:
    """Render an hour-of-24 on a 12-hour clock: 0 -> '12 AM', 15 -> '3 PM'."""
    if hour == 0:
        return "12 AM"
    if hour < 12:
        return f"{hour} AM"
    if hour == 12:
        return "12 PM"
    return f"{hour - 12} PM"


def _format_percent(rate: float) -> str:
    return f"{round(rate * 100)}%"


def _format_percent_half_up(rate: float) -> str:
    # Time-pattern text rounds halves away from zero: 1/8 reads "13%"
    percent = Decimal(rate * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{int(percent)}%"


def _time_group_win_rates(
    trades: Sequence[TradeRecord],
    key: Callable[[TradeRecord], object],
) -> pd.DataFrame:
    """
    Win rate per time slot for trades that carry a pre-trade emotion.

    Groups keep the order in which their key first appears in `trades`, so
    idxmax/idxmin break ties in favor of the earliest slot seen. Slots with
    fewer than TIME_GROUP_MIN_TRADES trades are dropped.

    Returns:
        DataFrame indexed by slot with columns wins, tradeCount, winRate
        (empty if nothing qualifies).
    """
    rows = [
        {"slot": key(t), "isWin": t.isWin}
        for t in trades
        if t.preTradeEmotion is not None
    ]
    if not rows:
        return pd.DataFrame(columns=["wins", "tradeCount", "winRate"])

    frame = pd.DataFrame(rows)
    grouped = frame.groupby("slot", sort=False)["isWin"].agg(
        wins="sum",
        tradeCount="size",
    )
    grouped = grouped[grouped["tradeCount"] >= TIME_GROUP_MIN_TRADES]
    return grouped.assign(winRate=grouped["wins"] / grouped["tradeCount"])


def _best_and_worst_slots(slots: pd.DataFrame):
    if slots.empty:
        return None
    best = slots["winRate"].idxmax()
    worst = slots["winRate"].idxmin()
    return best, slots.loc[best], worst, slots.loc[worst]


# =============================================================================
# Insight Rules
# =============================================================================


class _InsightBuilder:
    """Stamps insights with an id and creation time from injected sources."""

    def __init__(self, clock: Clock, id_factory: IdFactory):
        self._clock = clock
        self._id_factory = id_factory

    def build(
        self,
        insight_type: InsightType,
        title: str,
        description: str,
        confidence: float,
        priority: InsightPriority,
        actionable: bool = True,
    ) -> Insight:
        return Insight(
            id=self._id_factory(),
            type=insight_type,
            title=title,
            description=description,
            confidence=confidence,
            priority=priority,
            actionable=actionable,
            createdAt=self._clock(),
        )


def _sweet_spot_insight(
    buckets: List[EmotionPerformanceBucket],
    builder: _InsightBuilder,
) -> Optional[Insight]:
    if not buckets:
        return None
    # max() keeps the first (lowest) level on ties
    best = max(buckets, key=lambda b: b.winRate)
    if best.winRate > SWEET_SPOT_MIN_WIN_RATE and best.tradeCount >= SWEET_SPOT_MIN_TRADES:
        return builder.build(
            InsightType.PERFORMANCE_CORRELATION,
            "Your Sweet Spot",
            f"You win {_format_percent(best.winRate)} when emotion level is {best.emotionLevel}",
            insight_confidence(best.tradeCount),
            InsightPriority.HIGH,
        )
    return None


def _danger_zone_insight(
    buckets: List[EmotionPerformanceBucket],
    builder: _InsightBuilder,
) -> Optional[Insight]:
    qualifying = [b for b in buckets if b.tradeCount >= DANGER_ZONE_MIN_TRADES]
    if not qualifying:
        return None
    worst = min(qualifying, key=lambda b: b.winRate)
    if worst.winRate < DANGER_ZONE_MAX_WIN_RATE:
        return builder.build(
            InsightType.WARNING,
            "Danger Zone Detected",
            f"You only win {_format_percent(worst.winRate)} when emotion level is {worst.emotionLevel}",
            insight_confidence(worst.tradeCount),
            InsightPriority.HIGH,
        )
    return None


def _trend_insight(
    trend: TrendAnalysis,
    builder: _InsightBuilder,
) -> Optional[Insight]:
    if trend.direction == TrendDirection.INSUFFICIENT_DATA:
        return None
    if trend.confidence <= TREND_INSIGHT_MIN_CONFIDENCE:
        return None

    priority = (
        InsightPriority.HIGH
        if trend.direction == TrendDirection.DECLINING
        else InsightPriority.MEDIUM
    )
    return builder.build(
        InsightType.TREND,
        f"Emotional Trend: {trend.direction.value.capitalize()}",
        TREND_MESSAGES.get(trend.direction, TREND_FALLBACK_MESSAGE),
        trend.confidence,
        priority,
    )


def _volatility_insight(
    emotion_samples: Sequence[EmotionSample],
    builder: _InsightBuilder,
) -> Optional[Insight]:
    volatility = calculate_emotion_volatility(emotion_samples)
    if volatility is None or volatility <= VOLATILITY_THRESHOLD:
        return None
    return builder.build(
        InsightType.WARNING,
        "High Emotional Volatility",
        (
            f"Your emotions vary significantly (±{volatility:.1f}). "
            "Consider mindfulness practices to stabilize your emotional state."
        ),
        VOLATILITY_CONFIDENCE,
        InsightPriority.HIGH,
    )


def _day_of_week_insight(
    trades: Sequence[TradeRecord],
    builder: _InsightBuilder,
) -> Optional[Insight]:
    slots = _time_group_win_rates(trades, lambda t: WEEKDAY_NAMES[t.timestamp.weekday()])
    picked = _best_and_worst_slots(slots)
    if picked is None:
        return None
    best_day, best, worst_day, worst = picked
    if best["winRate"] - worst["winRate"] <= DAY_OF_WEEK_MIN_SPREAD:
        return None
    return builder.build(
        InsightType.PERFORMANCE_CORRELATION,
        "Day-of-Week Pattern",
        (
            f"You perform best on {best_day}s ({_format_percent_half_up(best['winRate'])} win rate) "
            f"and worst on {worst_day}s ({_format_percent_half_up(worst['winRate'])})"
        ),
        insight_confidence(int(best["tradeCount"]) + int(worst["tradeCount"])),
        InsightPriority.MEDIUM,
    )


def _hour_of_day_insight(
    trades: Sequence[TradeRecord],
    builder: _InsightBuilder,
) -> Optional[Insight]:
    slots = _time_group_win_rates(trades, lambda t: t.timestamp.hour)
    picked = _best_and_worst_slots(slots)
    if picked is None:
        return None
    best_hour, best, worst_hour, worst = picked
    if best["winRate"] - worst["winRate"] <= HOUR_OF_DAY_MIN_SPREAD:
        return None
    return builder.build(
        InsightType.PERFORMANCE_CORRELATION,
        "Time-of-Day Pattern",
        (
            f"You trade best around {_hour_label(int(best_hour))} "
            f"({_format_percent_half_up(best['winRate'])} win rate) and struggle around "
            f"{_hour_label(int(worst_hour))} ({_format_percent_half_up(worst['winRate'])})"
        ),
        insight_confidence(int(best["tradeCount"]) + int(worst["tradeCount"])),
        InsightPriority.MEDIUM,
    )


def sort_insights(insights: List[Insight]) -> List[Insight]:
    """
    Order insights by priority (high first), then by descending confidence.

    The sort is stable, so equal priority and confidence keep insertion order.
    """
    return sorted(
        insights,
        key=lambda i: (-i.priority.rank, -i.confidence),
    )


# =============================================================================
# Main Entry Point
# =============================================================================


def _new_insight_id() -> str:
    return str(uuid4())


def generate_insights(
    user_id: str,
    emotion_samples: Sequence[EmotionSample],
    trades: Sequence[TradeRecord],
    *,
    clock: Clock = utc_now,
    id_factory: IdFactory = _new_insight_id,
) -> List[Insight]:
    """
    Generate ranked insights for one user's emotion checks and trades.

    Rules are evaluated independently in a fixed order (sweet spot, danger
    zone, trend, volatility, day-of-week, hour-of-day); zero, one or several
    may fire. Nothing is raised for empty or tiny inputs: a rule without
    enough data simply does not fire.

    Args:
        user_id: Owner of the data set (used for logging only)
        emotion_samples: Emotion checks in any order
        trades: Trades in any order
        clock: Source of Insight.createdAt, defaults to UTC now
        id_factory: Source of Insight.id, defaults to a random UUID4 string

    Returns:
        Insights sorted by priority, then confidence, then insertion order.
        Calling twice with the same input yields the same content apart from
        id and createdAt.
    """
    builder = _InsightBuilder(clock, id_factory)
    buckets = analyze_emotion_performance(trades)
    trend = calculate_trend(emotion_samples)

    candidates = [
        _sweet_spot_insight(buckets, builder),
        _danger_zone_insight(buckets, builder),
        _trend_insight(trend, builder),
        _volatility_insight(emotion_samples, builder),
        _day_of_week_insight(trades, builder),
        _hour_of_day_insight(trades, builder),
    ]
    insights = [i for i in candidates if i is not None]

    logger.debug(
        f"Generated {len(insights)} insights for user {user_id} from "
        f"{len(emotion_samples)} emotion samples and {len(trades)} trades"
    )
    return sort_insights(insights)
