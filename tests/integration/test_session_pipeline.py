"""
Integration tests for the estimation pipeline and the session lifecycle.
"""
import asyncio
from datetime import date, datetime

import pytest

from shared.models import BiometricInput
from life_expectancy.pipeline import DeathClockSession, EstimationPipeline, SessionStateError
from life_expectancy.services import ClockState, CountdownClock, ExpectancyEstimator

from tests.conftest import FakePredictor, FixedJitter


@pytest.fixture
def pipeline(estimator):
    return EstimationPipeline(estimator=estimator)


@pytest.fixture
def session(pipeline, now):
    return DeathClockSession(
        pipeline=pipeline,
        countdown=CountdownClock(interval=0.01, now_fn=lambda: now),
    )


class TestEstimationPipeline:
    """End-to-end runs of the stateless pipeline."""

    def test_japan_male_without_jitter(self, pipeline, make_profile, now):
        result = asyncio.run(pipeline.run(make_profile(), now=now))

        assert result.current_age == 24
        assert result.expected_years == pytest.approx(79.2)
        assert result.strategy_used == "who"
        assert result.target_death_date == datetime(2079, 3, 13)
        assert result.projection.lifespan.text == "79 years, 2 months and 12 days"
        assert result.estimated_at == now

    def test_default_jitter_stays_in_band(self, make_profile, now):
        pipeline = EstimationPipeline()

        for _ in range(20):
            result = asyncio.run(pipeline.run(make_profile(), now=now))
            assert 77.2 <= result.expected_years <= 81.2
            assert 2077 <= result.target_death_date.year <= 2081

    def test_biometrics_override_bmi_category(self, pipeline, make_profile, now):
        profile = make_profile(bmi_category="35+")
        biometrics = BiometricInput(weight_value=70, height_value=175)

        result = asyncio.run(pipeline.run(profile, biometrics=biometrics, now=now))

        # 22.9 → +2 (구간값 37이면 -10)
        assert result.bmi_used == pytest.approx(22.9)
        assert result.expected_years == pytest.approx(81.2)

    def test_invalid_biometrics_fall_back_to_category(self, pipeline, make_profile, now):
        profile = make_profile(bmi_category="35+")
        biometrics = BiometricInput(weight_value="abc", height_value=175)

        result = asyncio.run(pipeline.run(profile, biometrics=biometrics, now=now))

        assert result.bmi_used == 37.0
        assert result.expected_years == pytest.approx(69.2)

    def test_ml_mode_without_predictor_uses_who(self, pipeline, make_profile, now):
        result = asyncio.run(pipeline.run(make_profile(), mode="ml", now=now))

        assert result.strategy_used == "who"
        assert result.strategy_display_name == "WHO + Rules"

    def test_ml_prediction_is_adjusted(self, make_profile, now):
        predictor = FakePredictor(prediction=90.0)
        pipeline = EstimationPipeline(
            estimator=ExpectancyEstimator(predictor=predictor, rng=FixedJitter(0.0))
        )

        result = asyncio.run(pipeline.run(make_profile(), mode="ml", now=now))

        assert result.strategy_used == "ml"
        assert result.expected_years == pytest.approx(87.6)
        assert predictor.received[0].age == 24

    def test_old_user_never_dies_in_the_past(self, pipeline, make_profile, now):
        profile = make_profile(
            birth_date=date(1920, 1, 1),
            smoker=True,
            alcohol="constantly-blotto",
            outlook="pessimistic",
        )

        result = asyncio.run(pipeline.run(profile, now=now))

        assert result.expected_years == pytest.approx(104.0)
        assert result.projection.remaining.is_zero

    def test_share_summary_text(self, pipeline, make_profile, now):
        result = asyncio.run(pipeline.run(make_profile(), now=now))

        text = result.share_summary().to_text()

        assert "I will live to be 79 years, 2 months and 12 days old!" in text
        assert "Predicted death date: Monday, 13th March 2079" in text
        assert "Time remaining: 54 years" in text
        assert "Model: WHO" in text


class TestDeathClockSession:
    """Submit / countdown / reset lifecycle."""

    def test_submit_starts_countdown(self, session, make_profile, now):
        async def scenario():
            result = await session.submit(make_profile(), now=now)
            state = session.countdown.state
            remaining = session.remaining()
            await session.reset()
            return result, state, remaining

        result, state, remaining = asyncio.run(scenario())

        assert state is ClockState.RUNNING
        assert remaining.days == (result.target_death_date - now).days

    def test_second_submit_requires_reset(self, session, make_profile, now):
        async def scenario():
            first = await session.submit(make_profile(), now=now)
            with pytest.raises(SessionStateError):
                await session.submit(make_profile(sex="female"), now=now)
            kept = session.result
            await session.reset()
            return first, kept

        first, kept = asyncio.run(scenario())
        assert kept is first

    def test_reset_clears_everything(self, session, make_profile, now):
        async def scenario():
            session.calculate_bmi(BiometricInput(weight_value=70, height_value=175))
            await session.submit(make_profile(), now=now)
            await session.reset()

        asyncio.run(scenario())

        assert session.result is None
        assert not session.is_submitted
        assert session.calculated_bmi is None
        assert session.countdown.state is ClockState.IDLE
        assert session.remaining().is_zero

    def test_resubmit_after_reset(self, session, make_profile, now):
        async def scenario():
            await session.submit(make_profile(), now=now)
            await session.reset()
            second = await session.submit(make_profile(sex="female"), now=now)
            await session.reset()
            return second

        second = asyncio.run(scenario())
        # Japan female 87.7 - 2.4
        assert second.expected_years == pytest.approx(85.3)

    def test_calculated_bmi_feeds_estimate(self, session, make_profile, now):
        async def scenario():
            session.calculate_bmi(BiometricInput(weight_value=120, height_value=175))
            result = await session.submit(make_profile(bmi_category="18.5-24.9"), now=now)
            await session.reset()
            return result

        result = asyncio.run(scenario())
        # 39.2 → -10
        assert result.bmi_used == pytest.approx(39.2)
        assert result.expected_years == pytest.approx(69.2)

    def test_invalid_bmi_input_keeps_previous_value(self, session):
        session.calculate_bmi(BiometricInput(weight_value=70, height_value=175))
        session.calculate_bmi(BiometricInput(weight_value=0, height_value=175))

        assert session.calculated_bmi == pytest.approx(22.9)

    def test_share_summary_requires_result(self, session):
        with pytest.raises(SessionStateError):
            session.share_summary()

    def test_share_summary_uses_countdown(self, session, make_profile, now):
        async def scenario():
            await session.submit(make_profile(), now=now)
            summary = session.share_summary()
            await session.reset()
            return summary

        summary = asyncio.run(scenario())
        assert summary.remaining_years == 54
        assert summary.strategy_used == "who"


class TestMLFallbackInPipeline:
    """Pipeline behaviour when the ML strategy returns unusable values."""

    def test_absurd_prediction_does_not_break_projection(self, make_profile, now):
        pipeline = EstimationPipeline(
            estimator=ExpectancyEstimator(predictor=FakePredictor(prediction=1e6), rng=FixedJitter(0.0))
        )

        result = asyncio.run(pipeline.run(make_profile(), mode="ml", now=now))

        assert result.strategy_used == "who"
        assert result.target_death_date == datetime(2079, 3, 13)
