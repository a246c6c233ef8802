"""ML 기대수명 예측 서비스

외부 모델 (joblib 직렬화, predict() 제공)을 감싼다.
- 모델 로드는 최대 1회, 진행 중인 로드는 공유 작업으로 대기
- 로드/예측 실패는 예외 대신 None 반환 (호출 측에서 who 전략으로 대체)
"""

import asyncio
import math
from pathlib import Path
from typing import Any, Callable, List, Literal, Optional

import joblib
import numpy as np
from langsmith import traceable
from pydantic import BaseModel, Field

from shared.models import (
    ALCOHOL_FREQUENCIES,
    OUTLOOKS,
    UserProfile,
)
from shared.utils import get_logger
from life_expectancy.config import settings

logger = get_logger(__name__)

DEFAULT_FEATURE_BMI = 22.0

MLStatus = Literal["idle", "loading", "ready", "error"]


class ModelFeatures(BaseModel):
    """ML 모델 입력 특성 (8개, 순서 고정)"""

    age: int = Field(..., ge=0, description="만 나이")
    sex: int = Field(..., ge=0, le=1, description="0: 남성/기타, 1: 여성")
    bmi: float = Field(..., description="BMI")
    smoker: int = Field(..., ge=0, le=1, description="흡연 여부")
    alcohol_level: int = Field(..., ge=0, le=5, description="음주 서열 (0-5)")
    outlook_level: int = Field(..., ge=0, le=2, description="태도 서열 (0-2)")
    fitness_level: int = Field(..., ge=0, le=3, description="운동 서열 (0-3)")
    diet_level: int = Field(..., ge=0, le=3, description="식단 서열 (0-3)")

    def to_vector(self) -> List[float]:
        return [
            float(self.age),
            float(self.sex),
            float(self.bmi),
            float(self.smoker),
            float(self.alcohol_level),
            float(self.outlook_level),
            float(self.fitness_level),
            float(self.diet_level),
        ]


def prepare_features(
    profile: UserProfile,
    current_age: int,
    bmi: Optional[float] = None,
) -> ModelFeatures:
    """
    프로필을 모델 입력 특성으로 변환

    미입력 항목 기본값: BMI 22, 음주 0, 태도 1 (neutral),
    운동/식단 미포함 시 1 (moderate / ok)
    """
    resolved_bmi = profile.resolve_bmi(bmi)
    fitness_diet = profile.fitness_diet

    return ModelFeatures(
        age=int(current_age),
        sex=1 if profile.sex == "female" else 0,
        bmi=resolved_bmi if resolved_bmi else DEFAULT_FEATURE_BMI,
        smoker=1 if profile.smoker else 0,
        alcohol_level=ALCOHOL_FREQUENCIES.index(profile.alcohol) if profile.alcohol else 0,
        outlook_level=OUTLOOKS.index(profile.outlook) if profile.outlook else 1,
        fitness_level=fitness_diet.fitness_code if fitness_diet else 1,
        diet_level=fitness_diet.diet_code if fitness_diet else 1,
    )


class MLPredictor:
    """ML 기대수명 예측기

    사용 예시:
        predictor = MLPredictor()
        predictor.schedule_load()          # 유휴 시점에 로드 예약
        years = await predictor.predict(features)
    """

    def __init__(
        self,
        model_path: Optional[Path] = None,
        loader: Optional[Callable[[Path], Any]] = None,
        load_timeout: Optional[float] = None,
        predict_timeout: Optional[float] = None,
    ):
        """
        Args:
            model_path: 모델 파일 경로 (기본값: settings.ml_model_path)
            loader: 모델 로더 (기본값: joblib.load)
            load_timeout: 로드 제한 시간 (초)
            predict_timeout: 예측 제한 시간 (초)
        """
        self.model_path = Path(model_path or settings.ml_model_path)
        self._loader = loader or joblib.load
        self._load_timeout = load_timeout or settings.ml_load_timeout_seconds
        self._predict_timeout = predict_timeout or settings.ml_predict_timeout_seconds

        self._model: Any = None
        self._load_task: Optional[asyncio.Task] = None
        self._status: MLStatus = "idle"

    @property
    def status(self) -> MLStatus:
        return self._status

    def _load_blocking(self) -> Any:
        if not self.model_path.exists():
            raise FileNotFoundError(f"모델 파일을 찾을 수 없습니다: {self.model_path}")
        return self._loader(self.model_path)

    async def _load(self) -> Any:
        self._status = "loading"
        logger.info("ML 모델 로드 시작: %s", self.model_path)
        try:
            model = await asyncio.wait_for(
                asyncio.to_thread(self._load_blocking),
                timeout=self._load_timeout,
            )
        except Exception as e:
            self._status = "error"
            logger.warning("ML 모델 로드 실패 (WHO + Rules로 대체): %s", e)
            return None

        self._model = model
        self._status = "ready"
        logger.info("ML 모델 로드 완료")
        return model

    def _ensure_load_task(self) -> asyncio.Task:
        """로드 작업 (없으면 현재 루프에 생성)"""
        if self._load_task is None:
            self._load_task = asyncio.get_running_loop().create_task(self._load())
        return self._load_task

    async def load_model(self) -> Any:
        """
        모델 로드 (최대 1회)

        첫 호출이 로드 작업을 만들고, 이후 호출은 같은 작업을 기다린다.
        실패 결과(None)도 그대로 캐시된다.

        Returns:
            모델, 실패 시 None
        """
        return await self._ensure_load_task()

    def schedule_load(self) -> None:
        """이벤트 루프가 한가할 때 로드하도록 예약"""
        if self._load_task is not None:
            return
        loop = asyncio.get_running_loop()
        loop.call_soon(self._ensure_load_task)

    def _predict_blocking(self, model: Any, vector: List[float]) -> Optional[float]:
        prediction = model.predict(np.asarray([vector], dtype=np.float32))
        values = np.ravel(np.asarray(prediction, dtype=float))
        if values.size == 0:
            return None
        value = float(values[0])
        return value if math.isfinite(value) else None

    @traceable(name="ml_life_expectancy_prediction")
    async def predict(self, features: ModelFeatures) -> Optional[float]:
        """
        기대수명 예측

        Returns:
            예측 기대수명 (년), 실패 시 None
        """
        model = await self.load_model()
        if model is None:
            return None

        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._predict_blocking, model, features.to_vector()),
                timeout=self._predict_timeout,
            )
        except Exception as e:
            logger.warning("ML 예측 실패: %s", e)
            return None
