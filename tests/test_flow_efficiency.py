from datetime import datetime

import pytest

from domains.jira.continuity.flow_efficiency import calculate_active_work_time, calculate_flow_efficiency
from domains.jira.continuity.status_activity import extract_status_changes, is_active_status, status_at
from domains.jira.continuity.timestamps import parse_jira_datetime


def status_change(created, from_status, to_status):
    return {"created": created, "items": [{"field": "status", "fromString": from_status, "toString": to_status}]}


def issue_with(created, resolved, *histories, status=None):
    fields = {"created": created, "resolutiondate": resolved}
    if status is not None:
        fields["status"] = {"name": status}
    return {"key": "FLOW-1", "fields": fields, "changelog": {"histories": list(histories)}}


class TestIsActiveStatus:
    @pytest.mark.parametrize("status", ["In Progress", "Developing", "Implementation", "Coding", "Active"])
    def test_active(self, status):
        assert is_active_status(status)

    @pytest.mark.parametrize(
        "status",
        ["To Do", "Code Review", "Ready for QA", "Testing", "Done", "On Hold", "Closed", "Backlog", "", None],
    )
    def test_inactive(self, status):
        assert not is_active_status(status)

    def test_inactive_keywords_win(self):
        assert not is_active_status("In Progress - Blocked")
        assert not is_active_status("Working - Waiting for customer")


class TestStatusChanges:
    def test_chronological_with_assignee(self):
        issue = issue_with(
            "2025-07-01T09:00:00.000Z",
            None,
            status_change("2025-07-03T09:00:00.000Z", "In Progress", "Done"),
            {
                "created": "2025-07-02T09:00:00.000Z",
                "items": [
                    {"field": "status", "fromString": "To Do", "toString": "In Progress"},
                    {"field": "assignee", "fromString": None, "toString": "Ana Souza"},
                ],
            },
        )

        changes = extract_status_changes(issue)

        assert [(change.from_status, change.to_status) for change in changes] == [
            ("To Do", "In Progress"),
            ("In Progress", "Done"),
        ]
        assert [change.assignee for change in changes] == ["Ana Souza", "Ana Souza"]

    def test_status_before_first_change_is_its_previous_value(self):
        issue = issue_with(
            "2025-07-01T09:00:00.000Z",
            None,
            status_change("2025-07-02T09:00:00.000Z", "Backlog", "In Progress"),
            status="In Progress",
        )

        assert status_at(issue, parse_jira_datetime("2025-07-01T12:00:00.000Z")) == "Backlog"
        assert status_at(issue, parse_jira_datetime("2025-07-02T09:00:00.000Z")) == "In Progress"


class TestFlowEfficiency:
    def test_half_of_lifecycle_in_progress(self):
        issue = issue_with(
            "2023-01-01T10:00:00.000Z",
            "2023-01-05T10:00:00.000Z",
            status_change("2023-01-02T10:00:00.000Z", "To Do", "In Progress"),
            status_change("2023-01-04T10:00:00.000Z", "In Progress", "Done"),
        )

        assert calculate_active_work_time(issue) == pytest.approx(48 * 3600)
        assert calculate_flow_efficiency(issue) == 50.0

    def test_blocked_time_is_not_active(self):
        issue = issue_with(
            "2023-01-01T00:00:00.000Z",
            "2023-01-10T00:00:00.000Z",
            status_change("2023-01-02T00:00:00.000Z", "To Do", "In Progress"),
            status_change("2023-01-04T00:00:00.000Z", "In Progress", "Blocked"),
            status_change("2023-01-06T00:00:00.000Z", "Blocked", "In Progress"),
            status_change("2023-01-08T00:00:00.000Z", "In Progress", "Done"),
        )

        # 96 of 216 hours
        assert calculate_flow_efficiency(issue) == 44.44

    def test_issue_created_in_an_active_status(self):
        issue = issue_with(
            "2023-01-01T00:00:00.000Z",
            "2023-01-03T00:00:00.000Z",
            status_change("2023-01-02T00:00:00.000Z", "In Progress", "Done"),
        )

        assert calculate_flow_efficiency(issue) == 50.0

    def test_no_transitions_depends_on_current_status(self):
        active = issue_with("2023-01-01T00:00:00.000Z", "2023-01-03T00:00:00.000Z", status="In Progress")
        waiting = issue_with("2023-01-01T00:00:00.000Z", "2023-01-03T00:00:00.000Z", status="To Do")

        assert calculate_flow_efficiency(active) == 100.0
        assert calculate_flow_efficiency(waiting) == 0.0

    def test_open_issue_runs_to_now(self, utc):
        issue = issue_with(
            "2023-01-01T00:00:00.000Z",
            None,
            status_change("2023-01-03T00:00:00.000Z", "To Do", "In Progress"),
        )

        assert calculate_flow_efficiency(issue, datetime(2023, 1, 5, tzinfo=utc)) == 50.0

    @pytest.mark.parametrize(
        "created, resolved",
        [
            ("2023-01-01T00:00:00.000Z", "2023-01-01T00:00:00.000Z"),
            ("2023-01-05T00:00:00.000Z", "2023-01-01T00:00:00.000Z"),
        ],
    )
    def test_empty_or_negative_lifecycle(self, created, resolved):
        assert calculate_flow_efficiency(issue_with(created, resolved, status="In Progress")) == 0.0

    @pytest.mark.parametrize("issue", [None, {}, {"fields": {"created": "not a date"}}])
    def test_malformed_issue(self, issue):
        assert calculate_active_work_time(issue) == 0.0
        assert calculate_flow_efficiency(issue) == 0.0
