"""기대수명 세션

한 사용자의 입력 → 결과 → 카운트다운 흐름을 관리한다.
결과는 제출 1회당 한 번만 만들어지고, 다시 하려면 reset()이 필요하다.
"""

from datetime import datetime
from typing import Optional

from shared.models import BiometricInput, UserProfile
from life_expectancy.models import EstimationResult, PredictionMode, RemainingTime, ShareSummary
from life_expectancy.pipeline.estimation_pipeline import EstimationPipeline
from life_expectancy.services import BMICalculator, CountdownClock


class SessionStateError(RuntimeError):
    """세션 상태와 맞지 않는 호출"""


class DeathClockSession:
    """기대수명 세션

    사용 예시:
        session = DeathClockSession()
        session.calculate_bmi(biometrics)
        result = await session.submit(profile, mode="who")
        session.countdown.latest   # 1초마다 갱신
        await session.reset()
    """

    def __init__(
        self,
        pipeline: Optional[EstimationPipeline] = None,
        countdown: Optional[CountdownClock] = None,
        bmi_calculator: Optional[BMICalculator] = None,
    ):
        self.pipeline = pipeline or EstimationPipeline()
        self.countdown = countdown or CountdownClock()
        self.bmi_calculator = bmi_calculator or BMICalculator()
        self._result: Optional[EstimationResult] = None

    @property
    def result(self) -> Optional[EstimationResult]:
        return self._result

    @property
    def is_submitted(self) -> bool:
        return self._result is not None

    @property
    def calculated_bmi(self) -> Optional[float]:
        return self.bmi_calculator.bmi

    def calculate_bmi(self, biometrics: BiometricInput) -> Optional[float]:
        """BMI 계산 (잘못된 입력이면 이전 값 유지)"""
        return self.bmi_calculator.calculate(biometrics)

    async def submit(
        self,
        profile: UserProfile,
        mode: Optional[PredictionMode] = None,
        now: Optional[datetime] = None,
    ) -> EstimationResult:
        """
        추정 실행 후 카운트다운 시작

        Raises:
            SessionStateError: 리셋 없이 다시 제출한 경우
        """
        if self._result is not None:
            raise SessionStateError("이미 결과가 있습니다. reset() 후 다시 제출하세요.")

        result = await self.pipeline.run(
            profile,
            mode=mode,
            now=now,
            bmi=self.calculated_bmi,
        )
        self._result = result
        self.countdown.start(result.target_death_date)
        return result

    def remaining(self) -> RemainingTime:
        """카운트다운 최신 값"""
        return self.countdown.latest

    def share_summary(self) -> ShareSummary:
        """
        공유 요약

        Raises:
            SessionStateError: 결과가 없는 경우
        """
        if self._result is None:
            raise SessionStateError("공유할 결과가 없습니다.")
        return self._result.share_summary(self.countdown.latest)

    async def reset(self) -> None:
        """다시 하기: BMI, 결과, 카운트다운 모두 초기화"""
        await self.countdown.reset()
        self.bmi_calculator.reset()
        self._result = None
