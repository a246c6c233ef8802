"""기대수명 추정 서비스

전략별 기준값 선택 → 보정 (고정 순서) → 무작위 보정

보정 순서:
1. 나이 감소
2. BMI
3. 흡연
4. 음주
5. 태도
6. 운동/식단 (포함 시)
7. 무작위 ±jitter_range
"""

import math
import random
from typing import Callable, Dict, Mapping, Optional, Protocol

from langsmith import traceable

from shared.models import UserProfile
from shared.utils import get_logger
from life_expectancy.config import settings
from life_expectancy.data import COUNTRY_LIFE_EXPECTANCY, CountryBaseline, get_baseline
from life_expectancy.models.output import EstimateOutcome, PredictionMode
from life_expectancy.services.ml_predictor import ModelFeatures, prepare_features

logger = get_logger(__name__)


# ML 예측 허용 상한 (년, 초과 시 who로 대체)
MAX_ML_PREDICTION = 150.0

SMOKING_PENALTY = {"male": -13.2, "female": -14.5, "other": -14.5}

ALCOHOL_ADJUSTMENTS = {
    "never": 0.5,
    "once-a-month": 1.0,
    "2-4-times-per-month": 0.5,
    "2-times-a-week": -1.0,
    "daily": -5.0,
    "constantly-blotto": -15.0,
}

OUTLOOK_ADJUSTMENTS = {
    "optimistic": 2.0,
    "neutral": 0.0,
    "pessimistic": -3.0,
}

FITNESS_ADJUSTMENTS = {
    "ironman": 8.0,
    "very-active": 5.0,
    "moderately-active": 3.0,
    "couch-potato": -4.0,
}

DIET_ADJUSTMENTS = {
    "excellent": 4.0,
    "good": 2.0,
    "ok": 0.0,
    "terrible": -3.0,
}


class Predictor(Protocol):
    """외부 수치 예측기 (MLPredictor 호환)"""

    async def predict(self, features: ModelFeatures) -> Optional[float]:
        ...


BaselineTable = Mapping[str, CountryBaseline]


def rule_baseline(profile: UserProfile, table: BaselineTable = COUNTRY_LIFE_EXPECTANCY) -> float:
    """rule 전략: 국가 기준값, 없으면 78 (+여성 4)"""
    country = get_baseline(profile.country, table)
    if country is not None:
        return country.for_sex(profile.sex)

    baseline = settings.rule_fallback_baseline
    if profile.sex == "female":
        baseline += settings.rule_female_fallback_bonus
    return baseline


def who_baseline(profile: UserProfile, table: BaselineTable = COUNTRY_LIFE_EXPECTANCY) -> float:
    """who 전략: 국가 기준값, 없으면 100 (성별 보정 없음)"""
    country = get_baseline(profile.country, table)
    if country is not None:
        return country.for_sex(profile.sex)
    return settings.who_fallback_baseline


BASELINE_STRATEGIES: Dict[str, Callable[[UserProfile, BaselineTable], float]] = {
    "rule": rule_baseline,
    "who": who_baseline,
}


def bmi_adjustment(bmi: float) -> float:
    """BMI 보정 (구간 하한 포함)"""
    if bmi < 16:
        return -8.0
    elif bmi < 18.5:
        return -3.0
    elif bmi < 25:
        return 2.0
    elif bmi < 30:
        return -2.0
    elif bmi < 35:
        return -6.0
    elif bmi < 40:
        return -10.0
    else:
        return -15.0


def apply_adjustments(
    baseline: float,
    profile: UserProfile,
    current_age: int,
    bmi: Optional[float] = None,
) -> float:
    """
    기준값에 생활습관 보정 적용 (무작위 보정 제외)

    Args:
        baseline: 전략별 기준 기대수명
        profile: 사용자 프로필
        current_age: 만 나이
        bmi: 계산된 BMI (없으면 프로필 값 → 구간 대표값)

    Returns:
        보정된 기대수명
    """
    value = baseline - current_age * settings.age_decay_per_year

    bmi_to_use = profile.resolve_bmi(bmi)
    if bmi_to_use is not None:
        value += bmi_adjustment(bmi_to_use)

    if profile.smoker:
        value += SMOKING_PENALTY[profile.sex]

    if profile.alcohol:
        value += ALCOHOL_ADJUSTMENTS[profile.alcohol]

    if profile.outlook:
        value += OUTLOOK_ADJUSTMENTS[profile.outlook]

    if profile.fitness_diet is not None:
        value += FITNESS_ADJUSTMENTS[profile.fitness_diet.fitness_level]
        value += DIET_ADJUSTMENTS[profile.fitness_diet.diet_rating]

    return value


def floor_at_current_age(expected: float, current_age: int) -> float:
    """현재 나이보다 이른 사망 예측 방지"""
    return current_age + max(0.0, expected - current_age)


class ExpectancyEstimator:
    """기대수명 추정기

    사용 예시:
        estimator = ExpectancyEstimator(predictor=MLPredictor())
        outcome = await estimator.estimate(profile, current_age=24, mode="who")
    """

    def __init__(
        self,
        predictor: Optional[Predictor] = None,
        table: Optional[BaselineTable] = None,
        rng: Optional[random.Random] = None,
        jitter_range: Optional[float] = None,
    ):
        """
        Args:
            predictor: ML 예측기 (없으면 ml 모드는 항상 who로 대체)
            table: 국가별 기준 기대수명 테이블
            rng: 난수 생성기 (기본값: 시드 없는 모듈 전역)
            jitter_range: 무작위 보정 범위 (±년)
        """
        self._predictor = predictor
        self._table = table if table is not None else COUNTRY_LIFE_EXPECTANCY
        self._rng = rng or random
        self._jitter_range = (
            settings.jitter_range if jitter_range is None else jitter_range
        )

    async def _ml_baseline(
        self,
        profile: UserProfile,
        current_age: int,
        bmi: Optional[float],
    ) -> Optional[float]:
        """ML 기준값 (실패 시 None)"""
        if self._predictor is None:
            logger.warning("ML 예측기가 없습니다. WHO + Rules로 대체합니다.")
            return None

        features = prepare_features(profile, current_age, bmi)
        try:
            prediction = await self._predictor.predict(features)
        except Exception as e:
            logger.warning("ML 예측 실패, WHO + Rules로 대체: %s", e)
            return None

        if prediction is None:
            logger.warning("ML 예측 결과가 없습니다. WHO + Rules로 대체합니다.")
            return None

        if not math.isfinite(prediction) or not 0 < prediction < MAX_ML_PREDICTION:
            logger.warning("ML 예측값이 범위를 벗어남 (%s), WHO + Rules로 대체", prediction)
            return None
        return prediction

    async def select_baseline(
        self,
        profile: UserProfile,
        current_age: int,
        bmi: Optional[float] = None,
        mode: PredictionMode = "who",
    ) -> EstimateOutcome:
        """전략별 기준값 선택 (ml 실패 시 who)"""
        if mode == "ml":
            prediction = await self._ml_baseline(profile, current_age, bmi)
            if prediction is not None:
                return EstimateOutcome(years=prediction, strategy_used="ml")
            mode = "who"

        baseline = BASELINE_STRATEGIES[mode](profile, self._table)
        return EstimateOutcome(years=baseline, strategy_used=mode)

    def jitter(self) -> float:
        """무작위 보정 (재현 불가)"""
        return self._rng.uniform(-self._jitter_range, self._jitter_range)

    @traceable(name="life_expectancy_estimation")
    async def estimate(
        self,
        profile: UserProfile,
        current_age: int,
        bmi: Optional[float] = None,
        mode: Optional[PredictionMode] = None,
    ) -> EstimateOutcome:
        """
        기대수명 추정

        Args:
            profile: 사용자 프로필
            current_age: 만 나이
            bmi: 계산된 BMI
            mode: 추정 전략 (없으면 설정 기본값)

        Returns:
            EstimateOutcome (기대수명, 실제 사용 전략)
        """
        mode = mode or settings.default_prediction_mode
        selected = await self.select_baseline(profile, current_age, bmi, mode)

        expected = apply_adjustments(selected.years, profile, current_age, bmi)
        expected += self.jitter()
        years = floor_at_current_age(expected, current_age)

        logger.debug(
            "기대수명 추정: mode=%s used=%s baseline=%.2f years=%.2f",
            mode, selected.strategy_used, selected.years, years,
        )
        return EstimateOutcome(years=years, strategy_used=selected.strategy_used)
