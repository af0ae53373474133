"""
Flow efficiency: the share of an issue's lifecycle spent in active statuses.

Time in waiting statuses (backlog, blocked, review, QA) counts against the
issue. An issue without status transitions is either active for its whole
life or not at all, depending on its current status.
"""

from datetime import datetime
from typing import Any, Optional

from domains.jira.continuity.changelog import current_field_value, get_issue_window
from domains.jira.continuity.status_activity import extract_status_changes, is_active_status, status_at


def calculate_active_work_time(issue: Any, now: Optional[datetime] = None) -> float:
    """
    Seconds the issue spent in active statuses between creation and resolution (or ``now``).

    Args:
        issue (Any): JIRA issue payload with an expanded changelog.
        now (Optional[datetime]): Lifecycle end for unresolved issues.

    Returns:
        float: Active time in seconds.
    """
    window = get_issue_window(issue, now)
    if window is None:
        return 0.0
    start, end = window

    changes = extract_status_changes(issue)
    if not changes:
        if is_active_status(current_field_value(issue, "status")):
            return end.timestamp() - start.timestamp()
        return 0.0

    active_time = 0.0
    in_active_status = is_active_status(status_at(issue, start))
    current = start.timestamp()
    for change in changes:
        if in_active_status:
            active_time += change.moment.timestamp() - current
        current = change.moment.timestamp()
        in_active_status = is_active_status(change.to_status)

    if in_active_status:
        active_time += end.timestamp() - current

    return active_time


def calculate_flow_efficiency(issue: Any, now: Optional[datetime] = None) -> float:
    """
    Active time as a percentage (0-100, two decimals) of the issue lifecycle.

    Returns 0 when the lifecycle is empty, negative or unknown.
    """
    window = get_issue_window(issue, now)
    if window is None:
        return 0.0
    start, end = window

    total_time = end.timestamp() - start.timestamp()
    if total_time <= 0:
        return 0.0

    efficiency = calculate_active_work_time(issue, now) / total_time * 100
    return round(min(100.0, max(0.0, efficiency)), 2)
