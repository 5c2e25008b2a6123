"""
TradeMentor Services Module

Stateless analysis services. Each takes the emotion checks and trades supplied
by the caller and returns new models; none performs I/O.

Services:
- pattern_analysis: Trend regression, emotion buckets, ranked insights
- emotion_statistics: Descriptive statistics, weekly trends, insight records

All services are designed to be consumed by the API layer (tradementor/api/).
"""

# =============================================================================
# Pattern Analysis Engine Exports
# Linear emotion trend, per-level performance buckets and the insight rules
# (sweet spot, danger zone, trend, volatility, day-of-week, hour-of-day)
# =============================================================================

from tradementor.services.pattern_analysis import (
    analyze_emotion_performance,
    calculate_emotion_volatility,
    calculate_trend,
    generate_insights,
    insight_confidence,
    sort_insights,
)

# =============================================================================
# Emotion Statistics Exports
# Dashboard statistics and the hand-off of insights to persistence
# =============================================================================

from tradementor.services.emotion_statistics import (
    build_pattern_analysis,
    calculate_emotion_distribution,
    calculate_performance_correlation,
    calculate_weekly_trends,
    emotion_range_for_level,
    summarize_emotion_patterns,
    to_user_insight_records,
)


__all__ = [
    # Pattern analysis
    "analyze_emotion_performance",
    "calculate_emotion_volatility",
    "calculate_trend",
    "generate_insights",
    "insight_confidence",
    "sort_insights",
    # Emotion statistics
    "build_pattern_analysis",
    "calculate_emotion_distribution",
    "calculate_performance_correlation",
    "calculate_weekly_trends",
    "emotion_range_for_level",
    "summarize_emotion_patterns",
    "to_user_insight_records",
]
