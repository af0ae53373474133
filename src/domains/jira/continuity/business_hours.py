"""
Business-calendar approximations used by the continuity analysis.

The response-time adjustment assumes an 8-hour business day, Monday to
Friday, 09:00-17:00 in the analysis timezone. It is an approximation rather
than a minute-exact business calendar: the weekend deduction combines a
coarse two-days-per-week estimate with a per-day weekend count, so spans of a
week or more are penalized twice. Reports produced with it are comparable
with each other, not with calendar-accurate tooling.

``tz`` arguments accept any ``tzinfo``; ``None`` means the host's local time.
"""

import math
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Optional

from domains.jira.continuity.timestamps import parse_jira_datetime

MS_PER_HOUR = 1000 * 60 * 60
MS_PER_DAY = MS_PER_HOUR * 24

BUSINESS_DAY_START_HOUR = 9
BUSINESS_DAY_END_HOUR = 17
AFTER_HOURS_PER_WEEKDAY = 16


def _from_epoch_ms(epoch_ms: float, tz: Optional[tzinfo]) -> datetime:
    return datetime.fromtimestamp(epoch_ms / 1000, tz)


def _is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def count_weekend_days_between(start: datetime, end: datetime) -> int:
    """
    Counts Saturdays and Sundays walking whole days from ``start``'s midnight.

    Args:
        start (datetime): Start instant; its time of day is reset to midnight.
        end (datetime): The walk stops once the cursor reaches this instant.

    Returns:
        int: Number of weekend days visited.
    """
    count = 0
    current = start.replace(hour=0, minute=0, second=0, microsecond=0)
    while current < end:
        if _is_weekend(current):
            count += 1
        current += timedelta(days=1)
    return count


def _partial_day_adjustment(question_hour: int, response_hour: int) -> int:
    adjustment = 0

    if question_hour < BUSINESS_DAY_START_HOUR:
        adjustment += BUSINESS_DAY_START_HOUR - question_hour
    elif question_hour >= BUSINESS_DAY_END_HOUR:
        adjustment += 24 - question_hour + BUSINESS_DAY_START_HOUR

    if response_hour < BUSINESS_DAY_START_HOUR:
        adjustment += response_hour
    elif response_hour >= BUSINESS_DAY_END_HOUR:
        adjustment += response_hour - BUSINESS_DAY_END_HOUR

    return adjustment


def adjust_for_business_hours(question_ms: float, response_ms: float, tz: Optional[tzinfo] = None) -> float:
    """
    Converts the interval between a question and its response into business hours.

    Args:
        question_ms (float): Question timestamp in epoch milliseconds.
        response_ms (float): Response timestamp in epoch milliseconds.
        tz (Optional[tzinfo]): Timezone defining the business day. Defaults to host local time.

    Returns:
        float: Approximate business hours elapsed, never negative.
    """
    try:
        question_date = _from_epoch_ms(question_ms, tz)
        response_date = _from_epoch_ms(response_ms, tz)
    except (OverflowError, OSError, ValueError):
        return 0.0

    total_hours = (response_ms - question_ms) / MS_PER_HOUR
    days = math.floor((response_ms - question_ms) / MS_PER_DAY)

    weekends = (days // 7) * 2 + count_weekend_days_between(question_date, response_date)
    weekend_hours = weekends * 24

    weekdays_count = days - weekends
    after_hours_total = weekdays_count * AFTER_HOURS_PER_WEEKDAY

    partial_day_adjustment = _partial_day_adjustment(question_date.hour, response_date.hour)

    return max(0.0, total_hours - weekend_hours - after_hours_total - partial_day_adjustment)


def _calendar_date(value: Any, tz: Optional[tzinfo]) -> Optional[date]:
    parsed = parse_jira_datetime(value)
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz)
    return parsed.date()


def calculate_business_days(start: Any, end: Any, tz: Optional[tzinfo] = None) -> int:
    """
    Counts Monday-Friday dates from ``start`` to ``end`` inclusive, ignoring time of day.

    Args:
        start (Any): Start timestamp (ISO string or datetime).
        end (Any): End timestamp (ISO string or datetime).
        tz (Optional[tzinfo]): Timezone used to resolve calendar dates. Defaults to host local time.

    Returns:
        int: Number of business days; 0 when start is after end or either value is unparseable.
    """
    start_day = _calendar_date(start, tz)
    end_day = _calendar_date(end, tz)
    if start_day is None or end_day is None or start_day > end_day:
        return 0

    total_days = (end_day - start_day).days + 1
    full_weeks, remainder = divmod(total_days, 7)
    business_days = full_weeks * 5

    current = start_day + timedelta(days=full_weeks * 7)
    for _ in range(remainder):
        if not _is_weekend(current):
            business_days += 1
        current += timedelta(days=1)

    return business_days
