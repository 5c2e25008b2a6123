"""
Descriptive emotion and performance statistics.

Companion analytics to the insight engine, feeding the pattern analysis
dashboard:
- Emotion pattern summary (average, modal level, volatility, check count)
- Performance correlation by rounded pre-trade emotion level
- Weekly trends over a trailing window of seven-day buckets
- Emotion level distribution, zero-filled for levels 1-10
- Hand-off of generated insights to the persistence collaborator

Like the insight engine these are pure functions over caller-supplied lists.
Weekly trends take the window end explicitly so results are reproducible.

Dependencies:
    - numpy: means and population standard deviation
    - pandas: bucketing timestamps into weeks
"""

import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from tradementor.models import (
    EmotionDistributionEntry,
    EmotionPatternSummary,
    EmotionRange,
    EmotionSample,
    Insight,
    PatternAnalysis,
    PerformanceCorrelation,
    TradeRecord,
    UserInsightRecord,
    WeeklyTrend,
    as_utc,
    utc_now,
)
from tradementor.services.pattern_analysis import EMOTION_LEVEL_MAX, EMOTION_LEVEL_MIN

logger = logging.getLogger(__name__)

DAYS_PER_WEEK: int = 7


# =============================================================================
# Emotion Pattern Summary
# =============================================================================


def summarize_emotion_patterns(
    emotion_samples: Sequence[EmotionSample],
) -> EmotionPatternSummary:
    """
    Summarize a user's emotion checks.

    Returns:
        EmotionPatternSummary with the average level and population standard
        deviation rounded to two decimals, the most frequent level (ties go to
        the level seen first) and the number of checks. Empty input yields an
        all-zero summary.
    """
    if not emotion_samples:
        return EmotionPatternSummary()

    levels = np.array([s.level for s in emotion_samples], dtype=np.float64)
    most_common_level, _ = Counter(s.level for s in emotion_samples).most_common(1)[0]

    return EmotionPatternSummary(
        averageEmotion=round(float(np.mean(levels)), 2),
        mostCommonEmotion=most_common_level,
        emotionVolatility=round(float(np.std(levels)), 2),
        totalChecks=len(emotion_samples),
    )


# =============================================================================
# Performance Correlation
# =============================================================================


def emotion_range_for_level(level: int) -> EmotionRange:
    """Low for 1-3, Medium for 4-6, High for 7-10, Unknown otherwise."""
    if 1 <= level <= 3:
        return EmotionRange.LOW
    if 4 <= level <= 6:
        return EmotionRange.MEDIUM
    if 7 <= level <= 10:
        return EmotionRange.HIGH
    return EmotionRange.UNKNOWN


def calculate_performance_correlation(
    trades: Sequence[TradeRecord],
) -> PerformanceCorrelation:
    """
    Win rate and average profit per rounded pre-trade emotion level.

    Win rates are percentages rounded to two decimals. The best and worst
    emotion ranges are picked by average profit; on ties the level that
    appears first in `trades` wins.

    Returns:
        PerformanceCorrelation; with no trades carrying a pre-trade emotion
        the maps are empty and both ranges are EmotionRange.NO_DATA.
    """
    groups: Dict[int, List[TradeRecord]] = {}
    for trade in trades:
        if trade.preTradeEmotion is None:
            continue
        groups.setdefault(round(trade.preTradeEmotion), []).append(trade)

    if not groups:
        return PerformanceCorrelation()

    win_rates: Dict[int, float] = {}
    avg_profits: Dict[int, float] = {}
    for level, level_trades in groups.items():
        wins = sum(1 for t in level_trades if t.isWin)
        win_rates[level] = wins / len(level_trades) * 100
        avg_profits[level] = float(np.mean([t.profit for t in level_trades]))

    best_level = max(avg_profits, key=avg_profits.get)
    worst_level = min(avg_profits, key=avg_profits.get)

    return PerformanceCorrelation(
        winRateByEmotion={k: round(v, 2) for k, v in win_rates.items()},
        avgProfitByEmotion={k: round(v, 2) for k, v in avg_profits.items()},
        bestPerformingEmotionRange=emotion_range_for_level(best_level),
        worstPerformingEmotionRange=emotion_range_for_level(worst_level),
    )


# =============================================================================
# Weekly Trends
# =============================================================================


def _week_index(timestamps: List[datetime], window_start: datetime) -> pd.Series:
    stamps = pd.to_datetime([as_utc(ts) for ts in timestamps], utc=True)
    offsets = stamps - pd.Timestamp(window_start)
    return pd.Series(offsets // pd.Timedelta(days=DAYS_PER_WEEK))


def calculate_weekly_trends(
    emotion_samples: Sequence[EmotionSample],
    trades: Sequence[TradeRecord],
    weeks: int,
    *,
    end: Optional[datetime] = None,
) -> List[WeeklyTrend]:
    """
    Split the trailing `weeks` * 7 days before `end` into weekly buckets.

    Each bucket is half-open, [week_start, week_start + 7 days). Records
    outside the window are ignored.

    Args:
        emotion_samples: Emotion checks in any order
        trades: Trades in any order
        weeks: Number of weekly buckets, at least 1
        end: Window end; defaults to the current UTC time

    Returns:
        One WeeklyTrend per week, oldest first. Weeks without emotion checks
        report an average of 0; weeks without trades report a win rate of 0.
    """
    window_end = as_utc(end or utc_now())
    window_start = window_end - timedelta(days=DAYS_PER_WEEK * weeks)

    emotion_frame = pd.DataFrame({
        "week": _week_index([s.timestamp for s in emotion_samples], window_start),
        "level": pd.Series([s.level for s in emotion_samples], dtype="float64"),
    })
    trade_frame = pd.DataFrame({
        "week": _week_index([t.timestamp for t in trades], window_start),
        "profit": pd.Series([t.profit for t in trades], dtype="float64"),
        "isWin": pd.Series([t.isWin for t in trades], dtype="bool"),
    })

    week_range = range(weeks)
    emotion_frame = emotion_frame[emotion_frame["week"].isin(week_range)]
    trade_frame = trade_frame[trade_frame["week"].isin(week_range)]

    avg_levels = emotion_frame.groupby("week")["level"].mean()
    trade_stats = trade_frame.groupby("week").agg(
        totalTrades=("profit", "size"),
        totalProfit=("profit", "sum"),
        wins=("isWin", "sum"),
    )

    trends: List[WeeklyTrend] = []
    for week in week_range:
        total_trades = int(trade_stats["totalTrades"].get(week, 0))
        wins = int(trade_stats["wins"].get(week, 0))
        trends.append(
            WeeklyTrend(
                weekStartDate=window_start + timedelta(days=DAYS_PER_WEEK * week),
                averageEmotion=round(float(avg_levels.get(week, 0.0)), 2),
                totalTrades=total_trades,
                totalProfit=round(float(trade_stats["totalProfit"].get(week, 0.0)), 2),
                winRate=round(wins / total_trades * 100, 2) if total_trades else 0.0,
            )
        )
    return trends


# =============================================================================
# Emotion Distribution
# =============================================================================


def calculate_emotion_distribution(
    emotion_samples: Sequence[EmotionSample],
) -> List[EmotionDistributionEntry]:
    """
    Count emotion checks per rounded level 1-10.

    Every level 1-10 is present in the result, zero-filled when unused.
    Percentages are relative to all checks and rounded to two decimals.
    """
    counts = Counter(round(s.level) for s in emotion_samples)
    total = len(emotion_samples)

    return [
        EmotionDistributionEntry(
            emotionLevel=level,
            count=counts.get(level, 0),
            percentage=round(counts.get(level, 0) / total * 100, 2) if total else 0.0,
        )
        for level in range(EMOTION_LEVEL_MIN, EMOTION_LEVEL_MAX + 1)
    ]


def build_pattern_analysis(
    emotion_samples: Sequence[EmotionSample],
    trades: Sequence[TradeRecord],
    weeks: int,
    *,
    end: Optional[datetime] = None,
) -> PatternAnalysis:
    """Bundle summary, correlation, weekly trends and distribution."""
    return PatternAnalysis(
        emotionPatterns=summarize_emotion_patterns(emotion_samples),
        performanceCorrelation=calculate_performance_correlation(trades),
        weeklyTrends=calculate_weekly_trends(emotion_samples, trades, weeks, end=end),
        emotionDistribution=calculate_emotion_distribution(emotion_samples),
    )


# =============================================================================
# Persistence Hand-off
# =============================================================================


def to_user_insight_records(
    user_id: str,
    insights: Sequence[Insight],
) -> List[UserInsightRecord]:
    """
    Convert engine insights into the rows a persistence layer stores.

    Confidence is rescaled from 0-100 to the 0-10 confidence score column
    (two decimals). Records are active on creation.
    """
    records = [
        UserInsightRecord(
            userId=user_id,
            insightType=insight.type,
            title=insight.title,
            description=insight.description,
            confidenceScore=round(insight.confidence / 10, 2),
            isActive=True,
            generatedAt=insight.createdAt,
        )
        for insight in insights
    ]
    logger.debug(f"Prepared {len(records)} insight records for user {user_id}")
    return records
