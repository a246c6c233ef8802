"""국가별 기준 기대수명 (정적 참조 데이터)

모듈 임포트 시 한 번만 만들어지는 읽기 전용 테이블.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class CountryBaseline:
    """국가별 성별 기대수명 (년)"""
    male: float
    female: float

    def for_sex(self, sex: str) -> float:
        """성별 기대수명 (female 외에는 남성 값)"""
        return self.female if sex == "female" else self.male


_RAW_BASELINES = {
    "Japan": (81.6, 87.7),
    "South Korea": (80.3, 86.1),
    "Switzerland": (81.8, 85.6),
    "Australia": (81.2, 85.4),
    "Spain": (80.9, 86.2),
    "Iceland": (81.3, 84.9),
    "Italy": (81.2, 85.6),
    "Israel": (81.1, 84.9),
    "Sweden": (81.3, 84.7),
    "France": (79.8, 85.7),
    "Norway": (81.0, 84.3),
    "Singapore": (81.4, 85.7),
    "Netherlands": (80.3, 83.8),
    "Canada": (80.2, 84.1),
    "New Zealand": (80.2, 83.5),
    "United Kingdom": (79.8, 83.4),
    "Germany": (78.9, 83.6),
    "United States": (76.4, 81.2),
    "China": (75.0, 79.9),
    "Monaco": (85.2, 89.4),
    "San Marino": (83.1, 86.2),
    "Hong Kong": (82.3, 88.1),
    "Andorra": (80.9, 84.8),
    "Luxembourg": (80.1, 84.9),
    "Slovenia": (79.0, 84.3),
    "Malta": (80.9, 84.3),
    "Ireland": (80.5, 84.1),
    "Cyprus": (79.1, 83.9),
    "Austria": (79.4, 84.0),
    "Finland": (79.7, 84.5),
    "Greece": (79.0, 84.2),
    "Belgium": (79.8, 84.2),
    "Portugal": (78.7, 84.6),
    "Denmark": (79.0, 82.9),
    "Poland": (74.1, 82.1),
    "Czech Republic": (76.4, 82.2),
    "Estonia": (74.4, 83.0),
    "Chile": (77.9, 83.4),
    "Costa Rica": (77.8, 82.6),
    "Slovakia": (73.9, 81.0),
    "Uruguay": (74.4, 81.2),
    "Croatia": (75.7, 82.2),
    "Latvia": (70.9, 80.5),
    "Lithuania": (70.2, 81.2),
    "Hungary": (73.0, 79.3),
    "Romania": (72.3, 79.7),
    "Bulgaria": (71.9, 78.8),
    "Panama": (75.8, 81.6),
    "Argentina": (73.2, 79.8),
    "Mexico": (72.1, 77.8),
    "Brazil": (72.8, 79.9),
    "Colombia": (73.8, 80.0),
    "Peru": (73.0, 78.3),
    "Ecuador": (74.5, 80.0),
    "Venezuela": (69.8, 77.7),
    "Turkey": (76.3, 81.4),
    "Russian Federation": (66.5, 77.6),
    "Belarus": (69.9, 79.4),
    "Ukraine": (67.7, 77.8),
    "Kazakhstan": (67.4, 76.4),
    "Thailand": (72.4, 79.7),
    "Malaysia": (74.1, 78.6),
    "Iran, Islamic Republic of": (75.4, 78.0),
    "Vietnam": (71.7, 80.9),
    "Philippines": (67.5, 75.5),
    "Indonesia": (69.1, 73.3),
    "India": (68.2, 70.3),
    "Bangladesh": (70.6, 74.2),
    "Pakistan": (66.1, 68.0),
    "Egypt": (69.6, 74.3),
    "Morocco": (74.0, 77.4),
    "Tunisia": (74.2, 78.7),
    "South Africa": (62.3, 67.5),
    "Kenya": (62.2, 67.1),
    "Ethiopia": (64.9, 68.9),
    "Nigeria": (52.7, 54.7),
    "Ghana": (62.4, 64.2),
    "Botswana": (66.7, 71.8),
    "Mauritius": (71.9, 78.3),
    "Rwanda": (67.3, 71.8),
    "Algeria": (75.6, 78.3),
}

COUNTRY_LIFE_EXPECTANCY: Mapping[str, CountryBaseline] = MappingProxyType(
    {name: CountryBaseline(male=m, female=f) for name, (m, f) in _RAW_BASELINES.items()}
)


def get_baseline(
    country: Optional[str],
    table: Mapping[str, CountryBaseline] = COUNTRY_LIFE_EXPECTANCY,
) -> Optional[CountryBaseline]:
    """국가 기준값 조회 (없으면 None)"""
    if not country:
        return None
    return table.get(country)
