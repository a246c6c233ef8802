"""Shared module - 기대수명 엔진과 API가 공유하는 모듈"""

from shared.models.profile import UserProfile, FitnessDiet
from shared.models.biometrics import BiometricInput

__all__ = [
    "UserProfile",
    "FitnessDiet",
    "BiometricInput",
]
