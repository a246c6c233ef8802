"""기대수명 추정 입력 모델 (앱 요청 스키마)

폼 입력값을 그대로 받는다 (생년월일은 년/월/일 분리, 월은 1-12).
"""

from datetime import date, datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shared.models import BiometricInput, FitnessDiet, UserProfile
from shared.models.profile import (
    AlcoholFrequency,
    BMICategory,
    DietRating,
    FitnessLevel,
    Outlook,
    Sex,
)
from shared.models.biometrics import HeightUnit, WeightUnit
from life_expectancy.models.output import PredictionMode


class BMIRequest(BaseModel):
    """BMI 계산 요청"""

    model_config = ConfigDict(populate_by_name=True)

    weight_value: Optional[Union[float, str]] = Field(default=None, alias="weightValue")
    weight_unit: WeightUnit = Field(default="kg", alias="weightUnit")
    height_value: Optional[Union[float, str]] = Field(default=None, alias="heightValue")
    height_unit: HeightUnit = Field(default="cm", alias="heightUnit")

    def to_biometrics(self) -> BiometricInput:
        return BiometricInput(
            weight_value=self.weight_value,
            weight_unit=self.weight_unit,
            height_value=self.height_value,
            height_unit=self.height_unit,
        )


class EstimateRequest(BMIRequest):
    """기대수명 추정 요청

    API 엔드포인트: POST /api/v1/estimate

    예시:
    {
        "birthYear": 2000, "birthMonth": 1, "birthDay": 1,
        "sex": "male", "smoker": false, "country": "Japan",
        "bmi": "18.5-24.9", "outlook": "neutral", "alcoholConsumption": "never",
        "includeFitnessDiet": true, "fitnessLevel": "very-active", "dietRating": "good",
        "predictionMode": "who"
    }
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "birthYear": 2000,
                "birthMonth": 1,
                "birthDay": 1,
                "sex": "male",
                "smoker": False,
                "country": "Japan",
                "bmi": "18.5-24.9",
                "outlook": "neutral",
                "alcoholConsumption": "never",
                "includeFitnessDiet": False,
                "predictionMode": "who",
            }
        },
    )

    birth_year: int = Field(..., alias="birthYear", ge=1, le=9999, description="출생 연도")
    birth_month: int = Field(..., alias="birthMonth", ge=1, le=12, description="출생 월 (1-12)")
    birth_day: int = Field(..., alias="birthDay", ge=1, le=31, description="출생 일")

    sex: Sex = Field(..., description="성별")
    smoker: bool = Field(default=False, description="흡연 여부")
    country: Optional[str] = Field(default=None, description="국가명")
    bmi_category: Optional[BMICategory] = Field(default=None, alias="bmi", description="BMI 구간")
    outlook: Optional[Outlook] = Field(default=None, description="삶에 대한 태도")
    alcohol: Optional[AlcoholFrequency] = Field(
        default=None, alias="alcoholConsumption", description="음주 빈도"
    )

    include_fitness_diet: bool = Field(default=False, alias="includeFitnessDiet")
    fitness_level: Optional[FitnessLevel] = Field(default=None, alias="fitnessLevel")
    diet_rating: Optional[DietRating] = Field(default=None, alias="dietRating")

    prediction_mode: Optional[PredictionMode] = Field(
        default=None, alias="predictionMode", description="추정 전략 (없으면 설정 기본값)"
    )

    @model_validator(mode="after")
    def check_dates_and_fitness(self) -> "EstimateRequest":
        # 실제 달력에 있는 날짜인지 확인
        try:
            birth_date = date(self.birth_year, self.birth_month, self.birth_day)
        except ValueError as e:
            raise ValueError(
                f"존재하지 않는 생년월일: {self.birth_year}-{self.birth_month}-{self.birth_day}"
            ) from e

        if birth_date > date.today():
            raise ValueError(f"생년월일이 미래입니다: {birth_date.isoformat()}")

        if self.include_fitness_diet and (
            self.fitness_level is None or self.diet_rating is None
        ):
            raise ValueError("includeFitnessDiet=true 이면 fitnessLevel, dietRating 모두 필요합니다")
        return self

    @property
    def birth_date(self) -> date:
        return date(self.birth_year, self.birth_month, self.birth_day)

    def to_profile(self) -> UserProfile:
        """UserProfile 변환"""
        fitness_diet = None
        if self.include_fitness_diet:
            fitness_diet = FitnessDiet(
                fitness_level=self.fitness_level,
                diet_rating=self.diet_rating,
            )

        return UserProfile(
            birth_date=self.birth_date,
            sex=self.sex,
            smoker=self.smoker,
            country=self.country,
            alcohol=self.alcohol,
            outlook=self.outlook,
            fitness_diet=fitness_diet,
            bmi_category=self.bmi_category,
        )


class CountdownRequest(BaseModel):
    """카운트다운 요청 (고정된 사망 예정 시각)"""

    model_config = ConfigDict(populate_by_name=True)

    target_death_date: datetime = Field(..., alias="targetDeathDate")
