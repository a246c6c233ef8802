"""Life Expectancy Services"""

from .bmi_calculator import BMICalculator, calculate_bmi
from .ml_predictor import MLPredictor, ModelFeatures, prepare_features
from .expectancy_estimator import ExpectancyEstimator
from .calendar_projector import CalendarProjector, remaining_time
from .countdown_clock import CountdownClock, ClockState

__all__ = [
    "BMICalculator",
    "calculate_bmi",
    "MLPredictor",
    "ModelFeatures",
    "prepare_features",
    "ExpectancyEstimator",
    "CalendarProjector",
    "remaining_time",
    "CountdownClock",
    "ClockState",
]
