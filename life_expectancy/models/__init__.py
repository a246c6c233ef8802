"""Life Expectancy Models"""

from .input import BMIRequest, EstimateRequest, CountdownRequest
from .output import (
    PredictionMode,
    STRATEGY_DISPLAY_NAMES,
    RemainingTime,
    LifespanBreakdown,
    AgeAtTest,
    Projection,
    EstimateOutcome,
    EstimationResult,
    ShareSummary,
)

__all__ = [
    "BMIRequest",
    "EstimateRequest",
    "CountdownRequest",
    "PredictionMode",
    "STRATEGY_DISPLAY_NAMES",
    "RemainingTime",
    "LifespanBreakdown",
    "AgeAtTest",
    "Projection",
    "EstimateOutcome",
    "EstimationResult",
    "ShareSummary",
]
