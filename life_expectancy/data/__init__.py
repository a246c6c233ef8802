"""Life Expectancy 참조 데이터"""

from .country_baselines import COUNTRY_LIFE_EXPECTANCY, CountryBaseline, get_baseline

__all__ = [
    "COUNTRY_LIFE_EXPECTANCY",
    "CountryBaseline",
    "get_baseline",
]
