"""사용자 프로필 모델 (공유)"""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


Sex = Literal["male", "female", "other"]
Outlook = Literal["optimistic", "neutral", "pessimistic"]
AlcoholFrequency = Literal[
    "never",
    "once-a-month",
    "2-4-times-per-month",
    "2-times-a-week",
    "daily",
    "constantly-blotto",
]
BMICategory = Literal["under18.5", "18.5-24.9", "25-29.9", "30-34.9", "35+"]
FitnessLevel = Literal["couch-potato", "moderately-active", "very-active", "ironman"]
DietRating = Literal["terrible", "ok", "good", "excellent"]

# 순서가 곧 ML 특성의 서열값
ALCOHOL_FREQUENCIES = (
    "never",
    "once-a-month",
    "2-4-times-per-month",
    "2-times-a-week",
    "daily",
    "constantly-blotto",
)
OUTLOOKS = ("pessimistic", "neutral", "optimistic")
FITNESS_LEVELS = ("couch-potato", "moderately-active", "very-active", "ironman")
DIET_RATINGS = ("terrible", "ok", "good", "excellent")

# BMI 구간 대표값
BMI_CATEGORY_MIDPOINTS = {
    "under18.5": 17.0,
    "18.5-24.9": 22.0,
    "25-29.9": 27.0,
    "30-34.9": 32.0,
    "35+": 37.0,
}


class FitnessDiet(BaseModel):
    """운동/식단 정보 (선택 입력 블록)

    블록 자체가 없으면 미포함, 있으면 두 값 모두 필수.
    """

    fitness_level: FitnessLevel = Field(..., description="운동 수준")
    diet_rating: DietRating = Field(..., description="식단 평가")

    @property
    def fitness_code(self) -> int:
        """운동 수준 서열값 (0-3)"""
        return FITNESS_LEVELS.index(self.fitness_level)

    @property
    def diet_code(self) -> int:
        """식단 평가 서열값 (0-3)"""
        return DIET_RATINGS.index(self.diet_rating)


class UserProfile(BaseModel):
    """사용자 프로필 (인구통계 + 생활습관)"""

    birth_date: date = Field(..., description="생년월일")
    sex: Sex = Field(..., description="성별 (male/female/other)")
    smoker: bool = Field(default=False, description="흡연 여부")
    country: Optional[str] = Field(default=None, description="국가명 (기준 기대수명 테이블 키)")
    alcohol: Optional[AlcoholFrequency] = Field(default=None, description="음주 빈도")
    outlook: Optional[Outlook] = Field(default=None, description="삶에 대한 태도")
    fitness_diet: Optional[FitnessDiet] = Field(
        default=None, description="운동/식단 (없으면 미포함)"
    )
    bmi_category: Optional[BMICategory] = Field(default=None, description="BMI 구간")
    bmi: Optional[float] = Field(default=None, gt=0, description="계산된 BMI")

    @field_validator("country")
    @classmethod
    def blank_country_is_unknown(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @property
    def bmi_midpoint(self) -> Optional[float]:
        """BMI 구간 대표값 반환"""
        if self.bmi_category is None:
            return None
        return BMI_CATEGORY_MIDPOINTS[self.bmi_category]

    def resolve_bmi(self, calculated_bmi: Optional[float] = None) -> Optional[float]:
        """사용할 BMI 결정 (계산값 > 프로필 수치 > 구간 대표값)"""
        if calculated_bmi is not None:
            return calculated_bmi
        if self.bmi is not None:
            return self.bmi
        return self.bmi_midpoint
