"""달력 계산 서비스

기대수명(년) → 사망 예정일, 나이 분해, 남은 시간 계산
"""

import math
from datetime import date, datetime, timedelta
from typing import Tuple, Union

from langsmith import traceable

from life_expectancy.models.output import (
    AgeAtTest,
    LifespanBreakdown,
    Projection,
    RemainingTime,
)


DAYS_IN_MONTH = 30.44
DAYS_IN_WEEK = 7
DAYS_IN_YEAR = 365.25

MS_IN_SECOND = 1000
MS_IN_MINUTE = MS_IN_SECOND * 60
MS_IN_HOUR = MS_IN_MINUTE * 60
MS_IN_DAY = MS_IN_HOUR * 24

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

DateLike = Union[date, datetime]


def _as_datetime(value: DateLike) -> datetime:
    """date는 자정 시각으로, 시간대가 있는 datetime은 로컬 시각으로 변환"""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    return datetime(value.year, value.month, value.day)


def normalize_date(year: int, month_index: int, day: int) -> date:
    """
    범위를 벗어난 월/일을 달력 규칙대로 넘김

    Args:
        year: 연도
        month_index: 0부터 시작하는 월 (12 이상/음수 허용)
        day: 일 (해당 월 일수 초과/0 이하 허용)

    예: (2001, 1, 29) → 2001-03-01, (2024, -1, 15) → 2023-12-15
    """
    year += month_index // 12
    month_index %= 12
    return date(year, month_index + 1, 1) + timedelta(days=day - 1)


def current_age(birth_date: date, now: DateLike) -> int:
    """만 나이 (올해 생일 전이면 -1)"""
    age = now.year - birth_date.year
    if (now.month, now.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def age_at_test(birth_date: date, now: DateLike) -> Tuple[int, int, int]:
    """
    검사 시점 나이 (년, 개월, 일)

    일수가 음수면 한 달을 빌려오고, 한 달 전 같은 일자부터 경과 일수를 센다.
    """
    month_diff = now.month - birth_date.month
    day_diff = now.day - birth_date.day

    months = month_diff if month_diff >= 0 else month_diff + 12

    if day_diff >= 0:
        days = day_diff
    else:
        months = months - 1 if months > 0 else 11
        last_month = normalize_date(now.year, now.month - 2, birth_date.day)
        elapsed = _as_datetime(now) - _as_datetime(last_month)
        # 짧은 달 (예: 3월 1일, 생일 31일)에는 기준일이 now보다 뒤로 넘어감
        days = max(0, elapsed // timedelta(days=1))

    return current_age(birth_date, now), months, days


def split_lifespan(expected_years: float) -> LifespanBreakdown:
    """기대수명을 년/월/일로 분해 (한 달 = 30.44일)"""
    years = math.floor(expected_years)
    month_fraction = (expected_years - years) * 12
    months = math.floor(month_fraction)
    days = math.floor((month_fraction - months) * DAYS_IN_MONTH)
    return LifespanBreakdown(years=years, months=months, days=days)


def add_calendar_offsets(birth_date: date, years: int, months: int, days: int) -> date:
    """
    생년월일에 년 → 월 → 일 순서로 오프셋 적용

    각 단계는 생년월일 기준 값(연도+years, 월+months, 일+days)을
    직전 단계 결과 위에 설정하며, 넘치는 값은 그 자리에서 다음 달/해로 넘긴다.
    예: 2000-01-31 + 1개월 → 3월 2일로 넘친 뒤 일자 31 설정 → 2000-03-31
    """
    step = normalize_date(birth_date.year + years, birth_date.month - 1, birth_date.day)
    step = normalize_date(step.year, birth_date.month - 1 + months, step.day)
    return normalize_date(step.year, step.month - 1, birth_date.day + days)


def death_date(birth_date: date, expected_years: float) -> datetime:
    """사망 예정일 (자정 기준)"""
    lifespan = split_lifespan(expected_years)
    target = add_calendar_offsets(
        birth_date, lifespan.years, lifespan.months, lifespan.days
    )
    return _as_datetime(target)


def remaining_time(target: DateLike, now: DateLike) -> RemainingTime:
    """
    남은 시간 분해 (밀리초 차이 기준)

    목표 시점이 지났으면 모든 값 0.
    """
    diff_ms = (_as_datetime(target) - _as_datetime(now)) // timedelta(milliseconds=1)
    if diff_ms <= 0:
        return RemainingTime()

    days = diff_ms // MS_IN_DAY
    return RemainingTime(
        days=days,
        hours=(diff_ms % MS_IN_DAY) // MS_IN_HOUR,
        minutes=(diff_ms % MS_IN_HOUR) // MS_IN_MINUTE,
        seconds=(diff_ms % MS_IN_MINUTE) // MS_IN_SECOND,
        approximate_years=math.floor(days / DAYS_IN_YEAR),
    )


def lived_totals(birth_date: date, now: DateLike) -> Tuple[int, int, int]:
    """살아온 총 일/주/개월 수"""
    total_days = (_as_datetime(now) - _as_datetime(birth_date)) // timedelta(days=1)
    return (
        total_days,
        math.floor(total_days / DAYS_IN_WEEK),
        math.floor(total_days / DAYS_IN_MONTH),
    )


def ordinal_suffix(day: int) -> str:
    """서수 접미사 (1st, 2nd, 3rd, 4th ... 11th, 12th, 13th ... 21st)"""
    if 3 < day < 21:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_display_date(value: DateLike) -> str:
    """'Saturday, 15th June 2024' 형식"""
    return (
        f"{WEEKDAYS[value.weekday()]}, {value.day}{ordinal_suffix(value.day)} "
        f"{MONTHS[value.month - 1]} {value.year}"
    )


class CalendarProjector:
    """달력 계산기

    사용 예시:
        projector = CalendarProjector()
        projection = projector.project(date(2000, 1, 1), 79.2, datetime.now())
    """

    def current_age(self, birth_date: date, now: DateLike) -> int:
        return current_age(birth_date, now)

    @traceable(name="calendar_projection")
    def project(
        self,
        birth_date: date,
        expected_years: float,
        now: DateLike,
    ) -> Projection:
        """
        사망 예정일 및 나이/남은 시간 계산

        Args:
            birth_date: 생년월일 (유효한 날짜로 가정)
            expected_years: 기대수명 (년, 소수)
            now: 기준 시각

        Returns:
            Projection
        """
        lifespan = split_lifespan(expected_years)
        target = death_date(birth_date, expected_years)

        years, months, days = age_at_test(birth_date, now)
        total_days, total_weeks, total_months = lived_totals(birth_date, now)

        return Projection(
            target_death_date=target,
            death_date_display=format_display_date(target),
            lifespan=lifespan,
            age_at_test=AgeAtTest(
                years=max(0, years),
                months=months,
                days=days,
                total_days_lived=total_days,
                total_weeks_lived=total_weeks,
                total_months_lived=total_months,
            ),
            test_date_display=format_display_date(now),
            remaining=remaining_time(target, now),
        )
