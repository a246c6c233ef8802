"""
Pytest configuration and shared fixtures for the test suite.
"""
import random
from datetime import date, datetime
from typing import List, Optional

import pytest

from shared.models import FitnessDiet, UserProfile
from life_expectancy.services import ExpectancyEstimator, ModelFeatures


class FixedJitter:
    """Random source whose uniform() always returns the same value."""

    def __init__(self, value: float = 0.0):
        self.value = value
        self.calls = 0

    def uniform(self, a: float, b: float) -> float:
        self.calls += 1
        return self.value


class FakePredictor:
    """Stand-in for MLPredictor that records the features it was given."""

    def __init__(self, prediction: Optional[float] = None, error: Optional[Exception] = None):
        self.prediction = prediction
        self.error = error
        self.received: List[ModelFeatures] = []

    async def predict(self, features: ModelFeatures) -> Optional[float]:
        self.received.append(features)
        if self.error is not None:
            raise self.error
        return self.prediction


@pytest.fixture
def now():
    """Fixed test time."""
    return datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def make_profile():
    """Factory for user profiles with no lifestyle adjustments by default."""

    def _make(**overrides) -> UserProfile:
        data = {
            "birth_date": date(2000, 1, 1),
            "sex": "male",
            "country": "Japan",
        }
        data.update(overrides)
        return UserProfile(**data)

    return _make


@pytest.fixture
def fitness_diet():
    return FitnessDiet(fitness_level="very-active", diet_rating="good")


@pytest.fixture
def no_jitter():
    return FixedJitter(0.0)


@pytest.fixture
def estimator(no_jitter):
    """Estimator without jitter or ML predictor."""
    return ExpectancyEstimator(rng=no_jitter)


@pytest.fixture
def seeded_rng():
    return random.Random(1234)
