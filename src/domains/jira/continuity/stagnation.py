"""
Stagnation detection and stagnation impact scoring.

Stagnation is a gap between consecutive issue activity events that spans at
least ``threshold_days`` business days. The impact score starts from 10 and
subtracts penalties for total stagnation, the longest single period and how
often the issue stalled.
"""

from datetime import tzinfo
from typing import Iterable, List, Optional, Sequence

from domains.jira.continuity.business_hours import calculate_business_days
from domains.jira.continuity.models import ActivityEvent, CommunicationGap, StagnationPeriod
from domains.jira.continuity.penalty_tables import (
    BASE_SCORE,
    clamp_score,
    longest_period_penalty,
    stagnation_frequency_penalty,
    total_days_penalty,
)
from domains.jira.continuity.timestamps import parse_jira_datetime, to_iso_string

DEFAULT_STAGNATION_THRESHOLD_DAYS = 3
DEFAULT_COMMUNICATION_GAP_THRESHOLD_DAYS = 5


def calculate_total_stagnation_days(periods: Sequence[StagnationPeriod]) -> float:
    return sum(period.duration_days for period in periods)


def find_longest_stagnation_period(periods: Sequence[StagnationPeriod]) -> float:
    return max((period.duration_days for period in periods), default=0)


def calculate_stagnation_impact_score(periods: Optional[Sequence[StagnationPeriod]]) -> int:
    """
    Scores how little an issue stalled (1-10, higher is better).

    Args:
        periods (Optional[Sequence[StagnationPeriod]]): Detected stagnation periods.

    Returns:
        int: 10 without stagnation, otherwise 10 minus the summed penalties, clamped to [1, 10].
    """
    if not periods:
        return BASE_SCORE

    penalty = (
        total_days_penalty(calculate_total_stagnation_days(periods))
        + longest_period_penalty(find_longest_stagnation_period(periods))
        + stagnation_frequency_penalty(len(periods))
    )
    return clamp_score(BASE_SCORE - penalty)


def _sorted_events(events: Iterable[ActivityEvent]):
    parsed = []
    for event in events:
        moment = parse_jira_datetime(event.timestamp)
        if moment is not None:
            parsed.append((moment.timestamp(), moment, event))
    parsed.sort(key=lambda entry: entry[0])
    return [(moment, event) for _, moment, event in parsed]


def identify_stagnation_periods(
    events: Iterable[ActivityEvent],
    threshold_days: int = DEFAULT_STAGNATION_THRESHOLD_DAYS,
    tz: Optional[tzinfo] = None,
) -> List[StagnationPeriod]:
    """
    Finds gaps between consecutive activity events of at least ``threshold_days`` business days.

    Args:
        events (Iterable[ActivityEvent]): Issue activity (creation, changelog, comments, resolution).
        threshold_days (int): Business days that constitute stagnation.
        tz (Optional[tzinfo]): Timezone used to resolve calendar dates.

    Returns:
        List[StagnationPeriod]: Periods in chronological order.
    """
    timeline = _sorted_events(events)
    periods: List[StagnationPeriod] = []

    for (start, current), (end, _) in zip(timeline, timeline[1:]):
        business_days = calculate_business_days(start, end, tz)
        if business_days >= threshold_days:
            periods.append(
                StagnationPeriod(
                    duration_days=business_days,
                    start_date=to_iso_string(start),
                    end_date=to_iso_string(end),
                    status=current.status or "Unknown",
                    assignee=current.assignee,
                )
            )

    return periods


def identify_communication_gaps(
    timestamps: Iterable[str],
    threshold_days: int = DEFAULT_COMMUNICATION_GAP_THRESHOLD_DAYS,
    tz: Optional[tzinfo] = None,
) -> List[CommunicationGap]:
    """Finds stretches of at least ``threshold_days`` business days without communication."""
    timeline = _sorted_events(ActivityEvent(timestamp=timestamp) for timestamp in timestamps)
    gaps: List[CommunicationGap] = []

    for (start, _), (end, _) in zip(timeline, timeline[1:]):
        business_days = calculate_business_days(start, end, tz)
        if business_days >= threshold_days:
            gaps.append(
                CommunicationGap(
                    start_date=to_iso_string(start),
                    end_date=to_iso_string(end),
                    duration_days=business_days,
                )
            )

    return gaps
