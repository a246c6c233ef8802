"""Shared models"""

from .profile import (
    UserProfile,
    FitnessDiet,
    ALCOHOL_FREQUENCIES,
    OUTLOOKS,
    FITNESS_LEVELS,
    DIET_RATINGS,
    BMI_CATEGORY_MIDPOINTS,
)
from .biometrics import BiometricInput

__all__ = [
    "UserProfile",
    "FitnessDiet",
    "BiometricInput",
    "ALCOHOL_FREQUENCIES",
    "OUTLOOKS",
    "FITNESS_LEVELS",
    "DIET_RATINGS",
    "BMI_CATEGORY_MIDPOINTS",
]
