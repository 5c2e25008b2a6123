"""
TradeMentor Pattern Analysis Package.

FastAPI service layer for the TradeMentor trading-psychology journal.
Correlates self-reported emotion levels with trading performance and turns
the result into ranked, human-readable insights.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, error handling, and dependencies
    - models: Pydantic schemas and enums
    - services: Stateless analysis services

The analysis services never touch storage: callers supply the emotion checks
and trades they already hold and receive insights back.
"""

__version__ = "1.0.0"
