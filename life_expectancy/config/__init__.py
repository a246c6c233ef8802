"""Life Expectancy Config"""

from .settings import LifeExpectancySettings, settings

__all__ = [
    "LifeExpectancySettings",
    "settings",
]
