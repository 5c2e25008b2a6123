'''
TradeMentor Pattern API Test Suite

Test Modules:
-------------
- test_pattern_analysis.py: Insight engine tests
  - Least-squares trend direction and damped confidence
  - Emotion buckets (half-to-even rounding, omitted empty levels)
  - Sweet spot / danger zone / trend / volatility / time-pattern thresholds
  - Priority-then-confidence ordering, injected clock and id factory

- test_emotion_statistics.py: Dashboard statistics tests
  - Emotion summary and mode tie-breaking
  - Performance correlation and emotion ranges
  - Weekly trend buckets over a fixed window end
  - Zero-filled 1-10 distribution
  - Insight record hand-off (0-10 confidence score)

- test_api.py: HTTP surface tests
  - ApiResponse envelope on success and on 400/413/422 errors
  - Settings and clock dependency overrides

Running Tests:
--------------
    pip install -e ".[test]"
    pytest tradementor/tests -v

Configuration:
--------------
See conftest.py for shared fixtures and the fixed test calendar.
'''

__all__ = []
