import pytest

from domains.jira.continuity.context_switches import (
    HIGH_IMPACT,
    LOW_IMPACT,
    MINIMAL_IMPACT,
    MODERATE_IMPACT,
    NO_CHANGES_IMPACT,
    SIGNIFICANT_IMPACT,
    analyze_context_switches,
    assess_velocity_impact,
    extract_assignee_changes,
    identify_late_stage_switches,
)


def reassignment(created, to_assignee, from_assignee=None):
    return {"created": created, "items": [{"field": "assignee", "fromString": from_assignee, "toString": to_assignee}]}


def status_change(created, from_status, to_status):
    return {"created": created, "items": [{"field": "status", "fromString": from_status, "toString": to_status}]}


def issue_with(*histories):
    # 248h lifecycle: the late stage starts on 2025-07-08 at 14:36
    return {
        "key": "CTX-1",
        "fields": {"created": "2025-07-01T09:00:00.000+0000", "resolutiondate": "2025-07-11T17:00:00.000+0000"},
        "changelog": {"histories": list(histories)},
    }


class TestAssigneeChanges:
    def test_timing_includes_status_and_business_days(self, utc):
        issue = issue_with(
            status_change("2025-07-01T12:00:00.000+0000", "To Do", "In Progress"),
            reassignment("2025-07-03T10:00:00.000+0000", "Bruno Lima", "Ana Souza"),
            reassignment("2025-07-02T10:00:00.000+0000", "Ana Souza"),
        )

        changes = extract_assignee_changes(issue, utc)

        assert [change.to_dict() for change in changes] == [
            {
                "date": "2025-07-02T10:00:00.000+0000",
                "fromAssignee": None,
                "toAssignee": "Ana Souza",
                "status": "In Progress",
                "daysFromStart": 2,
            },
            {
                "date": "2025-07-03T10:00:00.000+0000",
                "fromAssignee": "Ana Souza",
                "toAssignee": "Bruno Lima",
                "status": "In Progress",
                "daysFromStart": 3,
            },
        ]

    def test_unknown_status_without_status_history(self, utc):
        changes = extract_assignee_changes(issue_with(reassignment("2025-07-02T10:00:00.000+0000", "Ana Souza")), utc)

        assert changes[0].status == "Unknown"

    def test_late_stage_switches(self, utc):
        issue = issue_with(
            reassignment("2025-07-02T10:00:00.000+0000", "Ana Souza"),
            reassignment("2025-07-08T14:00:00.000+0000", "Bruno Lima"),
            reassignment("2025-07-10T10:00:00.000+0000", "Carla Dias"),
        )
        changes = extract_assignee_changes(issue, utc)

        late = identify_late_stage_switches(issue, changes)

        assert [change.to_assignee for change in late] == ["Carla Dias"]


class TestVelocityImpact:
    def test_single_change_is_minimal(self, utc):
        issue = issue_with(reassignment("2025-07-10T10:00:00.000+0000", "Ana Souza"))

        assert assess_velocity_impact(issue, extract_assignee_changes(issue, utc)) == MINIMAL_IMPACT

    def test_late_switch_is_significant(self, utc):
        issue = issue_with(
            reassignment("2025-07-02T10:00:00.000+0000", "Ana Souza"),
            reassignment("2025-07-10T10:00:00.000+0000", "Bruno Lima"),
        )

        assert assess_velocity_impact(issue, extract_assignee_changes(issue, utc)) == SIGNIFICANT_IMPACT

    def test_many_assignees_is_high(self, utc):
        issue = issue_with(
            reassignment("2025-07-02T10:00:00.000+0000", "Ana Souza"),
            reassignment("2025-07-03T10:00:00.000+0000", "Bruno Lima"),
            reassignment("2025-07-04T10:00:00.000+0000", "Carla Dias"),
            reassignment("2025-07-07T10:00:00.000+0000", "Ana Souza"),
        )

        assert assess_velocity_impact(issue, extract_assignee_changes(issue, utc)) == HIGH_IMPACT

    def test_handoff_during_development_is_moderate(self, utc):
        issue = issue_with(
            status_change("2025-07-01T12:00:00.000+0000", "To Do", "In Progress"),
            reassignment("2025-07-02T10:00:00.000+0000", "Ana Souza"),
            reassignment("2025-07-03T10:00:00.000+0000", "Bruno Lima"),
        )

        assert assess_velocity_impact(issue, extract_assignee_changes(issue, utc)) == MODERATE_IMPACT

    def test_handoff_between_stages_is_low(self, utc):
        issue = issue_with(
            status_change("2025-07-01T12:00:00.000+0000", "Open", "Ready for QA"),
            reassignment("2025-07-02T10:00:00.000+0000", "Ana Souza"),
            reassignment("2025-07-03T10:00:00.000+0000", "Bruno Lima"),
        )

        assert assess_velocity_impact(issue, extract_assignee_changes(issue, utc)) == LOW_IMPACT


class TestAnalyzeContextSwitches:
    def test_sample_issue(self, sample_issue, utc):
        analysis = analyze_context_switches(sample_issue, tz=utc)

        assert analysis.to_dict() == {
            "count": 1,
            "timing": [
                {
                    "date": "2025-07-08T09:30:00.000+0000",
                    "fromAssignee": None,
                    "toAssignee": "Ana Souza",
                    "status": "In Progress",
                    "daysFromStart": 2,
                }
            ],
            "impact": MINIMAL_IMPACT,
        }

    @pytest.mark.parametrize("issue", [None, {}, issue_with(status_change("2025-07-02T10:00:00.000+0000", "A", "B"))])
    def test_no_reassignments(self, issue, utc):
        assert analyze_context_switches(issue, tz=utc).to_dict() == {
            "count": 0,
            "timing": [],
            "impact": NO_CHANGES_IMPACT,
        }
