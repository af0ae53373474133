"""Classifies workflow statuses as active work and lists status transitions."""

from datetime import datetime
from typing import Any, List, Optional

from domains.jira.continuity.changelog import field_value_at, get_field_changes
from domains.jira.continuity.models import StatusChange

ACTIVE_STATUS_KEYWORDS = ("progress", "develop", "implement", "coding", "working", "active")

# Checked first: "In Progress - Blocked" is waiting, not working
INACTIVE_STATUS_KEYWORDS = (
    "blocked",
    "waiting",
    "hold",
    "pending",
    "review",
    "test",
    "qa",
    "done",
    "resolved",
    "closed",
)


def is_active_status(status: Optional[str]) -> bool:
    if not status:
        return False
    name = status.lower()
    if any(keyword in name for keyword in INACTIVE_STATUS_KEYWORDS):
        return False
    return any(keyword in name for keyword in ACTIVE_STATUS_KEYWORDS)


def extract_status_changes(issue: Any) -> List[StatusChange]:
    """
    Status transitions in chronological order, each with the assignee at that moment.

    Args:
        issue (Any): JIRA issue payload with an expanded changelog.

    Returns:
        List[StatusChange]: One entry per changelog history that changed the status.
    """
    assignee_changes = get_field_changes(issue, "assignee")
    return [
        StatusChange(
            timestamp=change.timestamp,
            moment=change.moment,
            from_status=change.from_value,
            to_status=change.to_value,
            assignee=field_value_at(issue, "assignee", change.moment, assignee_changes),
        )
        for change in get_field_changes(issue, "status")
    ]


def status_at(issue: Any, moment: datetime) -> Optional[str]:
    return field_value_at(issue, "status", moment)
