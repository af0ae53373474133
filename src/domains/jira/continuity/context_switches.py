"""
Context switch analysis: when an issue changed hands and what that cost.

Each reassignment is reported with the status the issue was in and how many
business days into its life it happened. The velocity impact verdict picks
the first matching rule: a single assignee, late handoffs, many people
trading the issue, handoffs mid-development, or clean handoffs.
"""

from datetime import datetime, tzinfo
from typing import Any, List, Optional, Sequence

from domains.jira.continuity.business_hours import calculate_business_days
from domains.jira.continuity.changelog import field_value_at, get_field_changes, get_issue_fields, get_issue_window
from domains.jira.continuity.late_stage import LATE_STAGE_THRESHOLD, calculate_threshold_date
from domains.jira.continuity.models import AssigneeChange, ContextSwitchAnalysis
from domains.jira.continuity.timestamps import parse_jira_datetime

NO_CHANGES_IMPACT = "None - no assignee changes"
MINIMAL_IMPACT = "Minimal - single assignee throughout"
SIGNIFICANT_IMPACT = "Significant - late stage assignee changes"
HIGH_IMPACT = "High - multiple assignees with frequent changes"
MODERATE_IMPACT = "Moderate - assignee changes during active development"
LOW_IMPACT = "Low - assignee changes at logical handoff points"

ACTIVE_DEVELOPMENT_MARKERS = ("progress", "developing")


def extract_assignee_changes(issue: Any, tz: Optional[tzinfo] = None) -> List[AssigneeChange]:
    """
    Lists the reassignments of an issue in chronological order.

    Args:
        issue (Any): JIRA issue payload with an expanded changelog.
        tz (Optional[tzinfo]): Timezone used to count business days since creation.

    Returns:
        List[AssigneeChange]: One entry per changelog history that changed the assignee.
    """
    created = get_issue_fields(issue).get("created")
    status_changes = get_field_changes(issue, "status")

    return [
        AssigneeChange(
            date=change.timestamp,
            from_assignee=change.from_value,
            to_assignee=change.to_value,
            status=field_value_at(issue, "status", change.moment, status_changes) or "Unknown",
            days_from_start=calculate_business_days(created, change.moment, tz),
        )
        for change in get_field_changes(issue, "assignee")
    ]


def identify_late_stage_switches(
    issue: Any, changes: Sequence[AssigneeChange], now: Optional[datetime] = None
) -> List[AssigneeChange]:
    """Reassignments made after the late-stage share of the issue lifecycle."""
    window = get_issue_window(issue, now)
    if window is None:
        return []

    threshold = calculate_threshold_date(*window, LATE_STAGE_THRESHOLD).timestamp()
    late = []
    for change in changes:
        moment = parse_jira_datetime(change.date)
        if moment is not None and moment.timestamp() > threshold:
            late.append(change)
    return late


def assess_velocity_impact(issue: Any, changes: Sequence[AssigneeChange], now: Optional[datetime] = None) -> str:
    if len(changes) <= 1:
        return MINIMAL_IMPACT

    if identify_late_stage_switches(issue, changes, now):
        return SIGNIFICANT_IMPACT

    unique_assignees = {change.to_assignee for change in changes if change.to_assignee}
    if len(unique_assignees) > 2 and len(changes) > 3:
        return HIGH_IMPACT

    if any(marker in change.status.lower() for change in changes for marker in ACTIVE_DEVELOPMENT_MARKERS):
        return MODERATE_IMPACT

    return LOW_IMPACT


def analyze_context_switches(
    issue: Any, now: Optional[datetime] = None, tz: Optional[tzinfo] = None
) -> ContextSwitchAnalysis:
    """
    Summarizes reassignments of an issue.

    Args:
        issue (Any): JIRA issue payload with an expanded changelog.
        now (Optional[datetime]): Lifecycle end for unresolved issues.
        tz (Optional[tzinfo]): Timezone used to count business days.

    Returns:
        ContextSwitchAnalysis: Switch count, per-switch timing and the velocity impact verdict.
    """
    changes = extract_assignee_changes(issue, tz)
    if not changes:
        return ContextSwitchAnalysis()

    return ContextSwitchAnalysis(
        count=len(changes),
        timing=changes,
        impact=assess_velocity_impact(issue, changes, now),
    )
