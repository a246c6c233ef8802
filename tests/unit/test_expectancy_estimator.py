"""
Unit tests for the life expectancy estimator.
"""
import asyncio
from datetime import date

import pytest

from shared.models import FitnessDiet
from life_expectancy.data import CountryBaseline, get_baseline
from life_expectancy.services import ExpectancyEstimator
from life_expectancy.services.expectancy_estimator import (
    apply_adjustments,
    bmi_adjustment,
    floor_at_current_age,
    rule_baseline,
    who_baseline,
)
from tests.conftest import FakePredictor, FixedJitter


def run(coro):
    return asyncio.run(coro)


class TestBaselineStrategies:
    """Test cases for the rule and who baselines."""

    def test_known_country_uses_sex_column(self, make_profile):
        assert rule_baseline(make_profile(sex="male")) == 81.6
        assert rule_baseline(make_profile(sex="female")) == 87.7
        assert who_baseline(make_profile(sex="female")) == 87.7

    def test_other_sex_uses_male_column(self, make_profile):
        assert who_baseline(make_profile(sex="other")) == 81.6

    def test_rule_unknown_country_female_bonus(self, make_profile):
        assert rule_baseline(make_profile(country="Atlantis", sex="female")) == 82.0
        assert rule_baseline(make_profile(country="Atlantis", sex="male")) == 78.0
        assert rule_baseline(make_profile(country=None, sex="other")) == 78.0

    def test_who_unknown_country_has_no_sex_adjustment(self, make_profile):
        assert who_baseline(make_profile(country="Atlantis", sex="female")) == 100.0
        assert who_baseline(make_profile(country=None, sex="male")) == 100.0

    def test_custom_table(self, make_profile):
        table = {"Atlantis": CountryBaseline(male=70.0, female=75.0)}
        assert who_baseline(make_profile(country="Atlantis", sex="female"), table) == 75.0
        assert rule_baseline(make_profile(country="Japan"), table) == 78.0

    def test_get_baseline(self):
        assert get_baseline("Japan") == CountryBaseline(male=81.6, female=87.7)
        assert get_baseline("Atlantis") is None
        assert get_baseline("") is None
        assert get_baseline(None) is None


class TestAdjustments:
    """Test cases for the fixed-order lifestyle adjustments."""

    @pytest.mark.parametrize("bmi,expected", [
        (15.9, -8.0),
        (16.0, -3.0),
        (18.4, -3.0),
        (18.5, 2.0),
        (24.9, 2.0),
        (25.0, -2.0),
        (30.0, -6.0),
        (35.0, -10.0),
        (39.9, -10.0),
        (40.0, -15.0),
    ])
    def test_bmi_thresholds(self, bmi, expected):
        assert bmi_adjustment(bmi) == expected

    def test_age_decay_only(self, make_profile):
        assert apply_adjustments(81.6, make_profile(), 24) == pytest.approx(79.2)

    def test_bmi_category_midpoint_used_when_no_number(self, make_profile):
        profile = make_profile(bmi_category="30-34.9")
        assert apply_adjustments(80.0, profile, 0) == pytest.approx(74.0)

    def test_calculated_bmi_wins_over_category(self, make_profile):
        profile = make_profile(bmi_category="35+")
        assert apply_adjustments(80.0, profile, 0, bmi=22.9) == pytest.approx(82.0)

    def test_profile_bmi_used_when_no_calculated_value(self, make_profile):
        profile = make_profile(bmi=41.0, bmi_category="18.5-24.9")
        assert apply_adjustments(80.0, profile, 0) == pytest.approx(65.0)

    @pytest.mark.parametrize("sex,expected", [
        ("male", 80.0 - 13.2),
        ("female", 80.0 - 14.5),
        ("other", 80.0 - 14.5),
    ])
    def test_smoking_penalty(self, make_profile, sex, expected):
        assert apply_adjustments(80.0, make_profile(sex=sex, smoker=True), 0) == pytest.approx(expected)

    @pytest.mark.parametrize("alcohol,delta", [
        ("never", 0.5),
        ("once-a-month", 1.0),
        ("2-4-times-per-month", 0.5),
        ("2-times-a-week", -1.0),
        ("daily", -5.0),
        ("constantly-blotto", -15.0),
    ])
    def test_alcohol(self, make_profile, alcohol, delta):
        assert apply_adjustments(80.0, make_profile(alcohol=alcohol), 0) == pytest.approx(80.0 + delta)

    @pytest.mark.parametrize("outlook,delta", [
        ("optimistic", 2.0),
        ("neutral", 0.0),
        ("pessimistic", -3.0),
    ])
    def test_outlook(self, make_profile, outlook, delta):
        assert apply_adjustments(80.0, make_profile(outlook=outlook), 0) == pytest.approx(80.0 + delta)

    def test_fitness_diet_only_when_included(self, make_profile):
        included = make_profile(
            fitness_diet=FitnessDiet(fitness_level="ironman", diet_rating="terrible")
        )
        assert apply_adjustments(80.0, included, 0) == pytest.approx(85.0)
        assert apply_adjustments(80.0, make_profile(), 0) == pytest.approx(80.0)

    def test_combined(self, make_profile):
        profile = make_profile(
            sex="female",
            smoker=True,
            alcohol="daily",
            outlook="pessimistic",
            bmi_category="25-29.9",
            fitness_diet=FitnessDiet(fitness_level="couch-potato", diet_rating="good"),
        )
        # 80 - 3.0 - 2 - 14.5 - 5 - 3 - 4 + 2
        assert apply_adjustments(80.0, profile, 30) == pytest.approx(50.5)

    def test_floor_at_current_age(self):
        assert floor_at_current_age(40.0, 60) == 60
        assert floor_at_current_age(75.5, 60) == 75.5


class TestExpectancyEstimator:
    """Test cases for ExpectancyEstimator.estimate."""

    def test_who_japan_male(self, estimator, make_profile):
        outcome = run(estimator.estimate(make_profile(), 24, mode="who"))
        assert outcome.strategy_used == "who"
        assert outcome.years == pytest.approx(79.2)

    def test_rule_unknown_country_female(self, estimator, make_profile):
        profile = make_profile(country="Nowhere", sex="female")
        outcome = run(estimator.estimate(profile, 0, mode="rule"))
        assert outcome.strategy_used == "rule"
        assert outcome.years == pytest.approx(82.0)

    def test_jitter_is_added_once(self, make_profile):
        jitter = FixedJitter(1.5)
        estimator = ExpectancyEstimator(rng=jitter)
        outcome = run(estimator.estimate(make_profile(), 24, mode="who"))
        assert outcome.years == pytest.approx(80.7)
        assert jitter.calls == 1

    def test_never_below_current_age(self, make_profile):
        estimator = ExpectancyEstimator(rng=FixedJitter(-2.0))
        profile = make_profile(
            country="Nigeria",
            smoker=True,
            alcohol="constantly-blotto",
            bmi=45.0,
        )
        outcome = run(estimator.estimate(profile, 70, mode="rule"))
        assert outcome.years == 70

    def test_result_is_not_rounded(self, make_profile):
        estimator = ExpectancyEstimator(rng=FixedJitter(0.123456))
        outcome = run(estimator.estimate(make_profile(), 24, mode="who"))
        assert outcome.years == pytest.approx(79.323456)

    def test_default_mode_from_settings(self, estimator, make_profile):
        outcome = run(estimator.estimate(make_profile(country=None), 0))
        assert outcome.strategy_used == "who"
        assert outcome.years == pytest.approx(100.0)


class TestMLStrategy:
    """Test cases for the ml strategy and its who fallback."""

    def test_ml_prediction_used_as_baseline(self, no_jitter, make_profile):
        predictor = FakePredictor(prediction=90.0)
        estimator = ExpectancyEstimator(predictor=predictor, rng=no_jitter)

        outcome = run(estimator.estimate(make_profile(outlook="optimistic"), 20, mode="ml"))

        assert outcome.strategy_used == "ml"
        assert outcome.years == pytest.approx(90.0 - 2.0 + 2.0)
        assert len(predictor.received) == 1
        assert predictor.received[0].age == 20

    def test_null_prediction_falls_back_to_who(self, no_jitter, make_profile):
        estimator = ExpectancyEstimator(predictor=FakePredictor(prediction=None), rng=no_jitter)
        outcome = run(estimator.estimate(make_profile(country=None), 0, mode="ml"))
        assert outcome.strategy_used == "who"
        assert outcome.years == pytest.approx(100.0)

    def test_predictor_error_falls_back_to_who(self, no_jitter, make_profile):
        predictor = FakePredictor(error=RuntimeError("model exploded"))
        estimator = ExpectancyEstimator(predictor=predictor, rng=no_jitter)
        outcome = run(estimator.estimate(make_profile(), 24, mode="ml"))
        assert outcome.strategy_used == "who"
        assert outcome.years == pytest.approx(79.2)

    def test_missing_predictor_falls_back_to_who(self, estimator, make_profile):
        outcome = run(estimator.estimate(make_profile(birth_date=date(1990, 5, 5)), 34, mode="ml"))
        assert outcome.strategy_used == "who"

    @pytest.mark.parametrize("prediction", [1e6, 150.0, 0.0, -5.0, float("inf")])
    def test_implausible_prediction_falls_back_to_who(self, no_jitter, make_profile, prediction):
        estimator = ExpectancyEstimator(predictor=FakePredictor(prediction=prediction), rng=no_jitter)
        outcome = run(estimator.estimate(make_profile(), 24, mode="ml"))
        assert outcome.strategy_used == "who"
        assert outcome.years == pytest.approx(79.2)
