"""기대수명 추정 출력 모델"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


PredictionMode = Literal["rule", "who", "ml"]

STRATEGY_DISPLAY_NAMES = {
    "ml": "Machine Learning",
    "who": "WHO + Rules",
    "rule": "Rule-based",
}


class RemainingTime(BaseModel):
    """남은 시간 (카운트다운 상태)

    모든 값은 0 이상. 목표 시점이 지나면 전부 0.
    """

    days: int = Field(default=0, ge=0, description="남은 일수")
    hours: int = Field(default=0, ge=0, description="남은 시간 (일 단위 나머지)")
    minutes: int = Field(default=0, ge=0, description="남은 분")
    seconds: int = Field(default=0, ge=0, description="남은 초")
    approximate_years: int = Field(default=0, ge=0, description="대략적인 남은 년수")

    @property
    def is_zero(self) -> bool:
        return not (self.days or self.hours or self.minutes or self.seconds)


class LifespanBreakdown(BaseModel):
    """기대수명 년/월/일 분해"""

    years: int = Field(..., ge=0)
    months: int = Field(..., ge=0, le=11)
    days: int = Field(..., ge=0)

    @property
    def text(self) -> str:
        return f"{self.years} years, {self.months} months and {self.days} days"


class AgeAtTest(BaseModel):
    """검사 시점 나이 정보"""

    years: int = Field(..., ge=0, description="만 나이")
    months: int = Field(..., ge=0, le=11, description="마지막 생일 이후 개월")
    days: int = Field(..., ge=0, description="마지막 월 기념일 이후 일수")
    total_days_lived: int = Field(..., description="살아온 총 일수")
    total_weeks_lived: int = Field(..., description="살아온 총 주수")
    total_months_lived: int = Field(..., description="살아온 총 개월수 (30.44일 기준)")


class Projection(BaseModel):
    """달력 계산 결과"""

    target_death_date: datetime = Field(..., description="사망 예정 시각")
    death_date_display: str = Field(..., description="사망 예정일 표시 문자열")
    lifespan: LifespanBreakdown
    age_at_test: AgeAtTest
    test_date_display: str = Field(..., description="검사일 표시 문자열")
    remaining: RemainingTime


class EstimateOutcome(BaseModel):
    """기대수명 추정 결과 (추정기 출력)"""

    years: float = Field(..., description="기대수명 (년, 소수)")
    strategy_used: PredictionMode = Field(..., description="실제 사용된 전략")


class ShareSummary(BaseModel):
    """공유용 요약"""

    lifespan_text: str
    death_date_display: str
    remaining_years: int
    strategy_used: PredictionMode

    def to_text(self) -> str:
        """공유 문구 생성"""
        return (
            "🔮 Death Clock Results 💀\n\n"
            f"I will live to be {self.lifespan_text} old!\n\n"
            f"Predicted death date: {self.death_date_display}\n\n"
            f"Time remaining: {self.remaining_years} years\n"
            f"Model: {self.strategy_used.upper()}\n\n"
            "#DeathClock #LifeExpectancy"
        )


class EstimationResult(BaseModel):
    """기대수명 추정 최종 결과

    제출 1회당 한 번 만들어지고 리셋 전까지 바뀌지 않는다.
    """

    expected_years: float = Field(..., description="기대수명 (년, 반올림하지 않음)")
    strategy_used: PredictionMode = Field(..., description="실제 사용된 전략")
    current_age: int = Field(..., ge=0, description="만 나이")
    bmi_used: Optional[float] = Field(default=None, description="보정에 사용된 BMI")
    projection: Projection

    # 메타데이터
    estimated_at: datetime = Field(..., description="추정 시각")

    model_config = {"frozen": True}

    @property
    def strategy_display_name(self) -> str:
        return STRATEGY_DISPLAY_NAMES[self.strategy_used]

    @property
    def target_death_date(self) -> datetime:
        return self.projection.target_death_date

    def share_summary(self, remaining: Optional[RemainingTime] = None) -> ShareSummary:
        """공유 요약 (remaining 없으면 추정 시점 값 사용)"""
        remaining = remaining or self.projection.remaining
        return ShareSummary(
            lifespan_text=self.projection.lifespan.text,
            death_date_display=self.projection.death_date_display,
            remaining_years=remaining.approximate_years,
            strategy_used=self.strategy_used,
        )
