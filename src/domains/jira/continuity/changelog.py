"""
Changelog lookups shared by the continuity analyses.

Every helper tolerates malformed payloads: missing ``fields``, a non-list
``histories`` or unparseable timestamps simply yield no changes.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

from domains.jira.continuity.models import FieldChange
from domains.jira.continuity.timestamps import parse_jira_datetime


def as_mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def get_issue_fields(issue: Any) -> Mapping:
    return as_mapping(as_mapping(issue).get("fields"))


def get_issue_histories(issue: Any) -> List[Mapping]:
    histories = as_mapping(as_mapping(issue).get("changelog")).get("histories")
    return [history for history in histories if isinstance(history, Mapping)] if isinstance(histories, list) else []


def find_field_change(history: Any, field_name: str) -> Optional[Mapping]:
    """Returns the changelog item of ``history`` that touched ``field_name``."""
    items = history.get("items") if isinstance(history, Mapping) else None
    if not isinstance(items, list):
        return None
    for item in items:
        if isinstance(item, Mapping) and item.get("field") == field_name:
            return item
    return None


def get_field_changes(issue: Any, field_name: str) -> List[FieldChange]:
    """
    Collects the changes of one field in chronological order.

    Args:
        issue (Any): JIRA issue payload with an expanded changelog.
        field_name (str): Changelog field, e.g. ``status`` or ``assignee``.

    Returns:
        List[FieldChange]: Changes with a parseable date, oldest first.
    """
    changes = []
    for history in get_issue_histories(issue):
        item = find_field_change(history, field_name)
        moment = parse_jira_datetime(history.get("created"))
        if item is None or moment is None:
            continue
        changes.append(
            FieldChange(
                timestamp=history.get("created"),
                moment=moment,
                from_value=item.get("fromString") or None,
                to_value=item.get("toString") or None,
            )
        )
    changes.sort(key=lambda change: change.moment.timestamp())
    return changes


def current_field_value(issue: Any, field_name: str) -> Optional[str]:
    """The value shown on the issue today: ``status.name``, ``assignee.displayName`` or a plain string."""
    value = get_issue_fields(issue).get(field_name)
    if isinstance(value, Mapping):
        return value.get("displayName") or value.get("name") or None
    return value if isinstance(value, str) and value else None


def field_value_at(
    issue: Any, field_name: str, moment: datetime, changes: Optional[List[FieldChange]] = None
) -> Optional[str]:
    """
    Reconstructs the value a field held at ``moment``.

    The most recent change at or before ``moment`` wins. Before the first
    change the field held that change's previous value; without any change
    it has always held its current value.

    Args:
        issue (Any): JIRA issue payload.
        field_name (str): Changelog field name.
        moment (datetime): Point in time to inspect.
        changes (Optional[List[FieldChange]]): Pre-computed changes of the field.

    Returns:
        Optional[str]: The field value, or None when it was empty.
    """
    if changes is None:
        changes = get_field_changes(issue, field_name)

    target = moment.timestamp()
    previous = [change for change in changes if change.moment.timestamp() <= target]
    if previous:
        return previous[-1].to_value
    if changes:
        return changes[0].from_value
    return current_field_value(issue, field_name)


def get_issue_window(issue: Any, now: Optional[datetime] = None) -> Optional[Tuple[datetime, datetime]]:
    """
    The lifecycle of an issue: creation to resolution, or to ``now`` while it is open.

    Returns:
        Optional[Tuple[datetime, datetime]]: ``(start, end)``, or None without a parseable creation date.
    """
    fields = get_issue_fields(issue)
    start = parse_jira_datetime(fields.get("created"))
    if start is None:
        return None
    end = parse_jira_datetime(fields.get("resolutiondate")) or now or datetime.now(timezone.utc)
    return start, end


def hours_between(start: datetime, end: datetime) -> float:
    return (end.timestamp() - start.timestamp()) / 3600
