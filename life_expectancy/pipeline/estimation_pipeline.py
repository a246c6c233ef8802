"""기대수명 추정 파이프라인

전체 흐름:
1. BMI 계산 (계측값이 있으면)
2. 만 나이 계산
3. 기대수명 추정 (rule / who / ml)
4. 달력 계산 (사망 예정일, 나이 분해, 남은 시간)
"""

from datetime import datetime
from typing import Optional

from langsmith import traceable

from shared.models import BiometricInput, UserProfile
from shared.utils import get_logger
from life_expectancy.models import EstimationResult, PredictionMode
from life_expectancy.services import (
    CalendarProjector,
    ExpectancyEstimator,
    calculate_bmi,
)

logger = get_logger(__name__)


class EstimationPipeline:
    """기대수명 추정 파이프라인 (상태 없음)

    사용 예시:
        pipeline = EstimationPipeline(estimator=ExpectancyEstimator(predictor))
        result = await pipeline.run(profile, biometrics, mode="who")
    """

    def __init__(
        self,
        estimator: Optional[ExpectancyEstimator] = None,
        projector: Optional[CalendarProjector] = None,
    ):
        self.estimator = estimator or ExpectancyEstimator()
        self.projector = projector or CalendarProjector()

    @traceable(name="life_expectancy_pipeline")
    async def run(
        self,
        profile: UserProfile,
        biometrics: Optional[BiometricInput] = None,
        mode: Optional[PredictionMode] = None,
        now: Optional[datetime] = None,
        bmi: Optional[float] = None,
    ) -> EstimationResult:
        """
        기대수명 추정 실행

        Args:
            profile: 사용자 프로필
            biometrics: 몸무게/키 (없거나 잘못되면 BMI 구간 사용)
            mode: 추정 전략
            now: 기준 시각 (기본값: 현재)
            bmi: 이미 계산된 BMI (biometrics보다 우선)

        Returns:
            EstimationResult
        """
        now = now or datetime.now()

        # Step 1: BMI
        if bmi is None and biometrics is not None:
            bmi = calculate_bmi(
                biometrics.weight_value,
                biometrics.weight_unit,
                biometrics.height_value,
                biometrics.height_unit,
            )

        # Step 2: 만 나이
        age = self.projector.current_age(profile.birth_date, now)

        # Step 3: 기대수명
        outcome = await self.estimator.estimate(profile, age, bmi, mode)

        # Step 4: 달력 계산
        projection = self.projector.project(profile.birth_date, outcome.years, now)

        logger.info(
            "추정 완료: strategy=%s years=%.2f death_date=%s",
            outcome.strategy_used,
            outcome.years,
            projection.target_death_date.date().isoformat(),
        )

        return EstimationResult(
            expected_years=outcome.years,
            strategy_used=outcome.strategy_used,
            current_age=max(0, age),
            bmi_used=profile.resolve_bmi(bmi),
            projection=projection,
            estimated_at=now,
        )
