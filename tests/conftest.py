"""
Shared pytest setup and fixtures.

The logging singleton and Config read the environment at import time, so the
log and report directories are redirected before any project module loads.
"""

import os
import tempfile
from datetime import timezone
from typing import Any, Dict, Optional

import pytest

_TEST_ROOT = tempfile.mkdtemp(prefix="continuity-tests-")

os.environ["LOG_DIR"] = os.path.join(_TEST_ROOT, "logs")
os.environ["LOG_OUTPUT"] = "file"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["OUTPUT_DIR"] = os.path.join(_TEST_ROOT, "output")
os.environ["CONTINUITY_TIMEZONE"] = ""
os.environ["STAGNATION_THRESHOLD_DAYS"] = "3"
os.environ["COMMUNICATION_GAP_THRESHOLD_DAYS"] = "5"


def make_comment(created: str, author: Optional[str], body: Any) -> Dict[str, Any]:
    """Builds a JIRA REST comment record."""
    record: Dict[str, Any] = {"created": created, "body": body}
    if author is not None:
        record["author"] = {"displayName": author}
    return record


def adf(*paragraphs: str) -> Dict[str, Any]:
    """Builds an ADF document with one text item per paragraph."""
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": paragraph}]} for paragraph in paragraphs
        ],
    }


@pytest.fixture
def utc():
    return timezone.utc


@pytest.fixture
def sample_issue() -> Dict[str, Any]:
    """
    Resolved issue worked on for two weeks in July 2025 (all timestamps UTC).

    A question on Tuesday 10:00 is answered at 13:00 the same day, then the
    issue sits in progress until Thursday of the following week.
    """
    return {
        "key": "PROJ-101",
        "fields": {
            "created": "2025-07-07T09:00:00.000+0000",
            "resolutiondate": "2025-07-18T17:00:00.000+0000",
            "comment": {
                "comments": [
                    make_comment(
                        "2025-07-08T10:00:00.000+0000",
                        "Ana Souza",
                        adf("Can you review the API contract before we start?"),
                    ),
                    make_comment("2025-07-08T13:00:00.000+0000", "Bruno Lima", adf("Looks good to me")),
                    make_comment("2025-07-08T14:00:00.000+0000", "Carla Dias", "Thanks, starting now"),
                ]
            },
        },
        "changelog": {
            "histories": [
                {
                    "created": "2025-07-08T09:30:00.000+0000",
                    "items": [
                        {"field": "status", "fromString": "To Do", "toString": "In Progress"},
                        {"field": "assignee", "fromString": None, "toString": "Ana Souza"},
                    ],
                },
                {
                    "created": "2025-07-17T15:00:00.000+0000",
                    "items": [{"field": "status", "fromString": "In Progress", "toString": "Done"}],
                },
            ]
        },
    }
