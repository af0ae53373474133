from collections.abc import Mapping
from datetime import datetime
from typing import Any, List, Optional

from domains.jira.continuity.models import Comment
from domains.jira.continuity.timestamps import to_iso_string


def _author_display_name(record: Mapping) -> Optional[str]:
    author = record.get("author")
    if isinstance(author, Mapping):
        return author.get("displayName")
    return None


def adapt_issue_comment(record: Any) -> Comment:
    """
    Adapts a JIRA comment record into the engine's Comment.

    Args:
        record (Any): Comment as returned by the JIRA REST API
            (``created``, ``body``, ``author.displayName``).

    Returns:
        Comment: Normalized comment; missing fields become None.
    """
    if not isinstance(record, Mapping):
        return Comment(created=str(record), body=None, author_name=None)

    created = record.get("created")
    created_iso = to_iso_string(created) if isinstance(created, datetime) else str(created)

    return Comment(
        created=created_iso,
        body=record.get("body"),
        author_name=_author_display_name(record),
    )


def extract_comment_records(comments_response: Any) -> List[Any]:
    """Returns the raw comment list from a comment response, a bare list, or nothing."""
    if isinstance(comments_response, Mapping):
        comments = comments_response.get("comments")
        return list(comments) if isinstance(comments, list) else []
    if isinstance(comments_response, list):
        return list(comments_response)
    return []
