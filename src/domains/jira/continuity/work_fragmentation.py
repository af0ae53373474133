"""
Work fragmentation analysis.

Walks the status transitions of an issue to find the periods it spent in
active statuses, then scores how fragmented that work was. A single
uninterrupted period scores 100; every extra period, idle time between
periods and uneven period lengths subtract from it.
"""

from datetime import datetime
from typing import Any, List, Optional, Sequence

import numpy as np

from domains.jira.continuity.changelog import current_field_value, field_value_at, get_issue_window, hours_between
from domains.jira.continuity.models import ActiveWorkPeriod, PeriodStatistics, WorkFragmentation
from domains.jira.continuity.status_activity import extract_status_changes, is_active_status, status_at
from domains.jira.continuity.timestamps import parse_jira_datetime, to_iso_string

MIN_ACTIVE_PERIOD_HOURS = 1

MAX_FRAGMENTATION_SCORE = 100.0
EXTRA_PERIOD_PENALTY = 10
IDLE_RATIO_WEIGHT = 40
UNIFORMITY_WEIGHT = 30


def create_work_period(
    start: datetime, end: datetime, status: Optional[str], assignee: Optional[str]
) -> ActiveWorkPeriod:
    return ActiveWorkPeriod(
        start_date=to_iso_string(start),
        end_date=to_iso_string(end),
        duration_hours=hours_between(start, end),
        status=status or "Unknown",
        assignee=assignee,
    )


def create_active_period(
    start: datetime, end: datetime, status: Optional[str], assignee: Optional[str]
) -> Optional[ActiveWorkPeriod]:
    """A work period, or None when it lasted under an hour."""
    if hours_between(start, end) < MIN_ACTIVE_PERIOD_HOURS:
        return None
    return create_work_period(start, end, status, assignee)


def identify_active_periods(issue: Any, now: Optional[datetime] = None) -> List[ActiveWorkPeriod]:
    """
    Finds the periods an issue spent in active statuses.

    Without status transitions the whole lifecycle is one period when the
    current status is active. Otherwise a period opens on a transition into an
    active status and closes on a transition out of it; a period still open at
    the end runs to resolution (or ``now``).

    Args:
        issue (Any): JIRA issue payload with an expanded changelog.
        now (Optional[datetime]): Lifecycle end for unresolved issues.

    Returns:
        List[ActiveWorkPeriod]: Periods in chronological order.
    """
    window = get_issue_window(issue, now)
    if window is None:
        return []
    start, end = window

    changes = extract_status_changes(issue)
    if not changes:
        status = current_field_value(issue, "status")
        if not is_active_status(status):
            return []
        return [create_work_period(start, end, status, current_field_value(issue, "assignee"))]

    status = status_at(issue, start)
    assignee = field_value_at(issue, "assignee", start)
    period_start = start if is_active_status(status) else None
    periods: List[ActiveWorkPeriod] = []

    for change in changes:
        if period_start is None and is_active_status(change.to_status):
            period_start = change.moment
        elif period_start is not None and change.to_status and not is_active_status(change.to_status):
            period = create_active_period(period_start, change.moment, status, assignee)
            if period is not None:
                periods.append(period)
            period_start = None

        status = change.to_status or status
        assignee = change.assignee or assignee

    if period_start is not None:
        period = create_active_period(period_start, end, status, assignee)
        if period is not None:
            periods.append(period)

    return periods


def calculate_period_statistics(periods: Sequence[ActiveWorkPeriod]) -> PeriodStatistics:
    """Mean, population standard deviation and coefficient of variation of period lengths in hours."""
    if not periods:
        return PeriodStatistics(average_period_hours=0.0, std_dev=0.0, coeff_of_variation=0.0)

    durations = np.asarray([period.duration_hours for period in periods], dtype=float)
    average = float(np.mean(durations))
    std_dev = float(np.std(durations))
    return PeriodStatistics(
        average_period_hours=average,
        std_dev=std_dev,
        coeff_of_variation=std_dev / average if average > 0 else 0.0,
    )


def calculate_active_ratio(periods: Sequence[ActiveWorkPeriod], total_active_hours: float) -> float:
    """Active hours over the time from the first period's start to the last period's end."""
    if not periods or total_active_hours <= 0:
        return 0.0

    first_start = min(parse_jira_datetime(period.start_date).timestamp() for period in periods)
    last_end = max(parse_jira_datetime(period.end_date).timestamp() for period in periods)
    elapsed_hours = (last_end - first_start) / 3600
    if elapsed_hours <= 0:
        return 0.0
    return total_active_hours / elapsed_hours


def calculate_final_fragmentation_score(period_count: int, active_ratio: float, coeff_of_variation: float) -> float:
    """
    Combines the fragmentation penalties into a 0-100 score.

    Args:
        period_count (int): Number of active work periods.
        active_ratio (float): Share (0-1) of the active span actually spent working.
        coeff_of_variation (float): Variation of period lengths.

    Returns:
        float: 100 minus 10 per extra period, 40 times the idle share and 30 times the variation, bounded to [0, 100].
    """
    score = (
        MAX_FRAGMENTATION_SCORE
        - EXTRA_PERIOD_PENALTY * (period_count - 1)
        - (1 - active_ratio) * IDLE_RATIO_WEIGHT
        - coeff_of_variation * UNIFORMITY_WEIGHT
    )
    return round(max(0.0, min(MAX_FRAGMENTATION_SCORE, score)), 2)


def calculate_fragmentation_score(periods: Sequence[ActiveWorkPeriod]) -> float:
    if not periods:
        return MAX_FRAGMENTATION_SCORE

    total_active_hours = sum(period.duration_hours for period in periods)
    statistics = calculate_period_statistics(periods)
    active_ratio = calculate_active_ratio(periods, total_active_hours)
    return calculate_final_fragmentation_score(len(periods), active_ratio, statistics.coeff_of_variation)


def analyze_work_fragmentation(issue: Any, now: Optional[datetime] = None) -> WorkFragmentation:
    periods = identify_active_periods(issue, now)
    return WorkFragmentation(fragmentation_score=calculate_fragmentation_score(periods), periods=periods)
