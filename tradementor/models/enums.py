"""
Enumeration definitions for the TradeMentor pattern analysis backend.

All enums inherit from both `str` and `Enum` so that Pydantic models serialize
them as their plain string values in API responses, while the analysis code
dispatches on closed sets instead of free-form strings.
"""

from enum import Enum


class InsightType(str, Enum):
    """
    Category of a generated insight.

    - performance_correlation: Emotion or time slot linked to better/worse results
    - warning: Pattern the trader should act on (danger zone, volatility)
    - trend: Direction of emotional state over time
    """
    PERFORMANCE_CORRELATION = "performance_correlation"
    WARNING = "warning"
    TREND = "trend"


class InsightPriority(str, Enum):
    """
    Display priority of a generated insight.

    Insights are ordered high -> medium -> low; `rank` gives the numeric
    weight used for that ordering.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    InsightPriority.HIGH: 3,
    InsightPriority.MEDIUM: 2,
    InsightPriority.LOW: 1,
}


class TrendDirection(str, Enum):
    """
    Direction of the least-squares emotion trend.

    INSUFFICIENT_DATA is a sentinel, not an error: fewer than three emotion
    samples were available and no regression was attempted.
    """
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"


class EmotionRange(str, Enum):
    """
    Coarse emotion band used by the performance correlation summary.

    Values: 'Low (1-3)', 'Medium (4-6)', 'High (7-10)', 'Unknown', 'No data'
    """
    LOW = "Low (1-3)"
    MEDIUM = "Medium (4-6)"
    HIGH = "High (7-10)"
    UNKNOWN = "Unknown"
    NO_DATA = "No data"
