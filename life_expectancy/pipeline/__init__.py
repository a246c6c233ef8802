"""Life Expectancy Pipeline"""

from .estimation_pipeline import EstimationPipeline
from .session import DeathClockSession, SessionStateError

__all__ = [
    "EstimationPipeline",
    "DeathClockSession",
    "SessionStateError",
]
