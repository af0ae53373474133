from datetime import datetime, timezone

import pytest

from domains.jira.continuity.late_stage import (
    calculate_completion_percentage,
    calculate_threshold_date,
    describe_change,
    identify_late_stage_changes,
)

START = datetime(2025, 7, 1, tzinfo=timezone.utc)
END = datetime(2025, 7, 11, tzinfo=timezone.utc)


def history(created, *items):
    return {"created": created, "items": list(items)}


@pytest.fixture
def reworked_issue():
    return {
        "key": "LATE-1",
        "fields": {"created": "2025-07-01T00:00:00.000+0000", "resolutiondate": "2025-07-11T00:00:00.000+0000"},
        "changelog": {
            "histories": [
                history(
                    "2025-07-09T00:00:00.000+0000",
                    {"field": "priority", "fromString": "High", "toString": "Highest"},
                    {"field": "labels", "fromString": "", "toString": "hotfix"},
                    {"field": "Fix Version", "fromString": None, "toString": "2.4.0"},
                ),
                history("2025-07-05T12:00:00.000+0000", {"field": "summary", "fromString": "A", "toString": "B"}),
                history("2025-07-08T00:00:00.000+0000", {"field": "status", "fromString": "To Do", "toString": "Done"}),
            ]
        },
    }


def test_threshold_date():
    late = datetime(2025, 7, 8, tzinfo=timezone.utc)
    halfway = datetime(2025, 7, 6, tzinfo=timezone.utc)

    assert calculate_threshold_date(START, END).timestamp() == pytest.approx(late.timestamp())
    assert calculate_threshold_date(START, END, 0.5) == halfway


@pytest.mark.parametrize(
    "moment, expected",
    [
        (datetime(2025, 7, 6, tzinfo=timezone.utc), 50.0),
        (datetime(2025, 7, 12, tzinfo=timezone.utc), 110.0),
        (datetime(2025, 7, 1, 8, tzinfo=timezone.utc), 3.33),
    ],
)
def test_completion_percentage(moment, expected):
    assert calculate_completion_percentage(START, END, moment) == expected


def test_completion_percentage_of_empty_lifecycle():
    assert calculate_completion_percentage(START, START, END) == 100.0


def test_describe_change_names_missing_values():
    assert describe_change({"field": "assignee", "fromString": None, "toString": "Ana"}) == (
        "Changed assignee from None to Ana"
    )


def test_only_significant_changes_after_threshold(reworked_issue):
    changes = identify_late_stage_changes(reworked_issue)

    assert [change.to_dict() for change in changes] == [
        {
            "date": "2025-07-09T00:00:00.000+0000",
            "field": "priority",
            "description": "Changed priority from High to Highest",
            "percentComplete": 80.0,
        },
        {
            "date": "2025-07-09T00:00:00.000+0000",
            "field": "Fix Version",
            "description": "Changed Fix Version from None to 2.4.0",
            "percentComplete": 80.0,
        },
    ]


def test_custom_threshold(reworked_issue):
    changes = identify_late_stage_changes(reworked_issue, threshold=0.4)

    assert [(change.field, change.percent_complete) for change in changes] == [
        ("summary", 45.0),
        ("status", 70.0),
        ("priority", 80.0),
        ("Fix Version", 80.0),
    ]


def test_open_issue_uses_now(reworked_issue):
    del reworked_issue["fields"]["resolutiondate"]

    changes = identify_late_stage_changes(reworked_issue, now=datetime(2025, 7, 9, 12, tzinfo=timezone.utc))

    assert [change.field for change in changes] == ["status", "priority", "Fix Version"]


@pytest.mark.parametrize("issue", [None, {}, {"fields": {"created": "2025-07-01T00:00:00.000+0000"}}])
def test_nothing_to_report(issue):
    assert identify_late_stage_changes(issue) == []
