"""
Late-stage change detection.

A change is late when it lands after a fixed share of the issue lifecycle
(70% by default). Late scope, priority or ownership changes usually mean
rework close to delivery.
"""

from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any, List, Optional

from domains.jira.continuity.changelog import get_issue_histories, get_issue_window
from domains.jira.continuity.models import LateStageChange
from domains.jira.continuity.timestamps import parse_jira_datetime

LATE_STAGE_THRESHOLD = 0.7

SIGNIFICANT_FIELDS = frozenset(
    {
        "status",
        "assignee",
        "priority",
        "summary",
        "description",
        "issuetype",
        "resolution",
        "fix version",
        "fixversions",
        "sprint",
        "story points",
    }
)


def calculate_threshold_date(start: datetime, end: datetime, threshold: float = LATE_STAGE_THRESHOLD) -> datetime:
    """The moment ``threshold`` (0-1) of the way from ``start`` to ``end``."""
    return start + timedelta(seconds=(end.timestamp() - start.timestamp()) * threshold)


def calculate_completion_percentage(start: datetime, end: datetime, moment: datetime) -> float:
    """
    How far into the lifecycle ``moment`` falls, as a percentage rounded to two decimals.

    Values above 100 mean the change happened after resolution.
    """
    total = end.timestamp() - start.timestamp()
    if total <= 0:
        return 100.0
    return round((moment.timestamp() - start.timestamp()) / total * 100, 2)


def is_significant_field(field_name: Any) -> bool:
    return isinstance(field_name, str) and field_name.lower() in SIGNIFICANT_FIELDS


def describe_change(item: Mapping) -> str:
    return f"Changed {item.get('field')} from {item.get('fromString') or 'None'} to {item.get('toString') or 'None'}"


def identify_late_stage_changes(
    issue: Any, now: Optional[datetime] = None, threshold: float = LATE_STAGE_THRESHOLD
) -> List[LateStageChange]:
    """
    Finds significant field changes made after ``threshold`` of the issue lifecycle.

    Args:
        issue (Any): JIRA issue payload with an expanded changelog.
        now (Optional[datetime]): Lifecycle end for unresolved issues.
        threshold (float): Share of the lifecycle after which a change is late.

    Returns:
        List[LateStageChange]: Late changes in chronological order.
    """
    histories = get_issue_histories(issue)
    window = get_issue_window(issue, now)
    if not histories or window is None:
        return []

    start, end = window
    threshold_date = calculate_threshold_date(start, end, threshold)

    dated = []
    for history in histories:
        moment = parse_jira_datetime(history.get("created"))
        if moment is not None and moment.timestamp() > threshold_date.timestamp():
            dated.append((moment, history))
    dated.sort(key=lambda entry: entry[0].timestamp())

    changes = []
    for moment, history in dated:
        items = history.get("items")
        for item in items if isinstance(items, list) else []:
            if not isinstance(item, Mapping) or not is_significant_field(item.get("field")):
                continue
            changes.append(
                LateStageChange(
                    date=history.get("created"),
                    field=item.get("field"),
                    description=describe_change(item),
                    percent_complete=calculate_completion_percentage(start, end, moment),
                )
            )

    return changes
