"""Life Expectancy FastAPI 서버

사용법:
    uvicorn life_expectancy.main:app

포트: 8000 (기본)
"""

import asyncio
import os
from contextlib import asynccontextmanager
from datetime import datetime
from functools import partial

from dotenv import load_dotenv
load_dotenv(override=True)

# LangSmith 프로젝트 분리
os.environ.setdefault("LANGSMITH_PROJECT", "death-clock-life-expectancy")

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from shared.utils import get_logger
from life_expectancy.config import settings
from life_expectancy.models import (
    BMIRequest,
    CountdownRequest,
    EstimateRequest,
    RemainingTime,
)
from life_expectancy.pipeline import EstimationPipeline
from life_expectancy.services import (
    CountdownClock,
    ExpectancyEstimator,
    MLPredictor,
    calculate_bmi,
    remaining_time,
)

logger = get_logger(__name__, settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 라이프사이클 관리"""
    logger.info("Life Expectancy Service 시작 중...")
    predictor = MLPredictor()
    if settings.ml_preload:
        predictor.schedule_load()
    app.state.predictor = predictor
    app.state.pipeline = EstimationPipeline(estimator=ExpectancyEstimator(predictor=predictor))
    logger.info("Life Expectancy Service 준비 완료")
    yield
    logger.info("Life Expectancy Service 종료")


app = FastAPI(
    title="Death Clock Life Expectancy",
    description="기대수명 추정 + 사망 예정일 카운트다운 API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """헬스 체크"""
    return {"status": "healthy", "service": "life-expectancy"}


@app.post("/api/v1/bmi")
async def compute_bmi(request: BMIRequest):
    """BMI 계산 (값이 없거나 0 이하이면 null)"""
    bmi = calculate_bmi(
        request.weight_value,
        request.weight_unit,
        request.height_value,
        request.height_unit,
    )
    return {"bmi": bmi}


@app.post("/api/v1/estimate")
async def estimate(request: EstimateRequest):
    """
    기대수명 추정 API

    입력:
    - 생년월일, 성별, 흡연, 국가, 음주, 태도
    - BMI 구간 또는 몸무게/키
    - 운동/식단 (선택), 추정 전략 (선택)

    출력:
    - EstimationResult + 공유 문구
    """
    try:
        result = await app.state.pipeline.run(
            request.to_profile(),
            biometrics=request.to_biometrics(),
            mode=request.prediction_mode,
        )
    except Exception as e:
        logger.exception("기대수명 추정 실패")
        raise HTTPException(status_code=500, detail=str(e))

    payload = result.model_dump(mode="json")
    payload["strategy_display_name"] = result.strategy_display_name
    payload["share_text"] = result.share_summary().to_text()
    return payload


@app.post("/api/v1/countdown", response_model=RemainingTime)
async def countdown(request: CountdownRequest):
    """현재 시각 기준 남은 시간"""
    return remaining_time(request.target_death_date, datetime.now())


@app.get("/api/v1/ml/status")
async def ml_status():
    """ML 모델 상태 (idle/loading/ready/error)"""
    predictor: MLPredictor = app.state.predictor
    return {"status": predictor.status, "model_path": str(predictor.model_path)}


def put_latest(queue: asyncio.Queue, item: RemainingTime) -> None:
    """크기 1 큐에 최신 값만 유지 (느린 클라이언트는 밀린 값을 건너뜀)"""
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(item)


@app.websocket("/ws/countdown")
async def countdown_stream(websocket: WebSocket):
    """
    실시간 카운트다운

    첫 메시지로 {"targetDeathDate": ...}를 받고,
    연결이 끊길 때까지 갱신 주기마다 남은 시간을 보낸다.
    """
    await websocket.accept()

    try:
        request = CountdownRequest.model_validate(await websocket.receive_json())
    except ValidationError as e:
        await websocket.send_json({"error": "invalid_request", "detail": e.errors(include_url=False, include_context=False)})
        await websocket.close(code=1003)
        return
    except WebSocketDisconnect:
        return

    ticks: asyncio.Queue = asyncio.Queue(maxsize=1)
    clock = CountdownClock(on_tick=partial(put_latest, ticks))

    async def pump():
        while True:
            remaining = await ticks.get()
            await websocket.send_json(remaining.model_dump())

    clock.start(request.target_death_date)
    sender = asyncio.create_task(pump())
    logger.info("카운트다운 스트림 연결")

    try:
        # 클라이언트 메시지는 무시, 연결 종료 감지용
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("카운트다운 스트림 종료")
    finally:
        sender.cancel()
        await asyncio.gather(sender, return_exceptions=True)
        await clock.reset()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "life_expectancy.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
