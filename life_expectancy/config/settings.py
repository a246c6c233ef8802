"""Life Expectancy 설정

환경 변수:
- DEFAULT_PREDICTION_MODE: 기본 추정 전략 (rule/who/ml, 기본값: who)
- ML_MODEL_PATH: ML 모델 파일 경로 (joblib)
- ML_PRELOAD: 서버 시작 시 모델 미리 로드 여부
- LOG_LEVEL: 로그 레벨
"""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings
from pydantic import Field


class LifeExpectancySettings(BaseSettings):
    """기대수명 엔진 설정"""

    # 추정 전략
    default_prediction_mode: Literal["rule", "who", "ml"] = Field(
        default="who", description="기본 추정 전략"
    )

    # 기준 기대수명 (국가 정보 없을 때)
    rule_fallback_baseline: float = Field(default=78.0, description="rule 전략 기본 기대수명")
    rule_female_fallback_bonus: float = Field(
        default=4.0, description="rule 전략 여성 보정 (국가 정보 없을 때만)"
    )
    who_fallback_baseline: float = Field(default=100.0, description="who 전략 기본 기대수명")

    # 보정값
    age_decay_per_year: float = Field(default=0.1, description="나이 1년당 감소폭")
    jitter_range: float = Field(default=2.0, ge=0, description="무작위 보정 범위 (±년)")

    # 카운트다운
    countdown_interval_seconds: float = Field(
        default=1.0, gt=0, description="카운트다운 갱신 주기 (초)"
    )

    # ML 모델
    ml_model_path: Path = Field(
        default=Path(__file__).parent.parent.parent / "data" / "model" / "life_expectancy.joblib",
        description="ML 모델 파일 경로",
    )
    ml_load_timeout_seconds: float = Field(default=10.0, gt=0, description="모델 로드 제한 시간")
    ml_predict_timeout_seconds: float = Field(default=5.0, gt=0, description="예측 제한 시간")
    ml_preload: bool = Field(default=False, description="서버 시작 시 모델 지연 로드 예약")

    # 로깅
    log_level: str = Field(default="INFO", description="로그 레벨")

    # 서버 설정
    host: str = Field(default="0.0.0.0", description="호스트")
    port: int = Field(default=8000, description="포트")

    class Config:
        env_prefix = ""
        env_file = ".env"
        extra = "ignore"


settings = LifeExpectancySettings()
