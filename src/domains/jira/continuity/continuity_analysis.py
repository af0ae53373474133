"""
Continuity analysis orchestration for a single JIRA issue.

Works on an already-fetched issue payload (``fields`` plus an expanded
``changelog``) and its comments, combining stagnation detection,
communication gaps, question/response latency, momentum, flow efficiency,
context switches, work fragmentation and late-stage changes into one
ContinuityReport.
"""

from collections.abc import Mapping
from datetime import datetime, timezone, tzinfo
from typing import Any, Dict, List, Optional

from domains.jira.continuity.changelog import as_mapping, find_field_change, get_issue_fields, get_issue_histories
from domains.jira.continuity.comment_adapter import extract_comment_records
from domains.jira.continuity.comment_pairing import average_response_time, identify_question_response_pairs
from domains.jira.continuity.consistency import calculate_progress_consistency_score
from domains.jira.continuity.context_switches import analyze_context_switches
from domains.jira.continuity.flow_efficiency import calculate_flow_efficiency
from domains.jira.continuity.late_stage import identify_late_stage_changes
from domains.jira.continuity.models import ActivityEvent, ContinuityReport
from domains.jira.continuity.momentum import analyze_momentum_indicators
from domains.jira.continuity.stagnation import (
    DEFAULT_COMMUNICATION_GAP_THRESHOLD_DAYS,
    DEFAULT_STAGNATION_THRESHOLD_DAYS,
    find_longest_stagnation_period,
    identify_communication_gaps,
    identify_stagnation_periods,
)
from domains.jira.continuity.timestamps import parse_jira_datetime, to_iso_string
from domains.jira.continuity.work_fragmentation import analyze_work_fragmentation
from log_config import log_manager

logger = log_manager.get_logger("ContinuityAnalysis")


def get_issue_comments(issue: Any, comments_response: Any = None) -> List[Any]:
    """Comments from an explicit comment response, falling back to ``fields.comment``."""
    if comments_response is not None:
        return extract_comment_records(comments_response)
    return extract_comment_records(get_issue_fields(issue).get("comment"))


def collect_activity_events(issue: Any, comments: List[Any]) -> List[ActivityEvent]:
    """
    Builds the issue timeline with the status and assignee in effect after each event.

    Args:
        issue (Any): JIRA issue payload.
        comments (List[Any]): Raw comment records.

    Returns:
        List[ActivityEvent]: Creation, changelog, comment and resolution events, chronologically.
    """
    fields = get_issue_fields(issue)
    entries = []

    for timestamp in (fields.get("created"), fields.get("resolutiondate")):
        if parse_jira_datetime(timestamp) is not None:
            entries.append((timestamp, None))
    for history in get_issue_histories(issue):
        if parse_jira_datetime(history.get("created")) is not None:
            entries.append((history.get("created"), history))
    for comment in comments:
        created = comment.get("created") if isinstance(comment, Mapping) else None
        if parse_jira_datetime(created) is not None:
            entries.append((created, None))

    entries.sort(key=lambda entry: parse_jira_datetime(entry[0]).timestamp())

    events = []
    status: Optional[str] = None
    assignee: Optional[str] = None
    for timestamp, history in entries:
        if history is not None:
            status_change = find_field_change(history, "status")
            if status_change is not None:
                status = status_change.get("toString")
            assignee_change = find_field_change(history, "assignee")
            if assignee_change is not None:
                assignee = assignee_change.get("toString")
        moment = parse_jira_datetime(timestamp)
        events.append(ActivityEvent(timestamp=to_iso_string(moment), status=status, assignee=assignee))

    return events


def get_communication_timestamps(issue: Any, comments: List[Any]) -> List[Any]:
    fields = get_issue_fields(issue)
    timestamps = [fields.get("created"), fields.get("resolutiondate")]
    timestamps.extend(comment.get("created") for comment in comments if isinstance(comment, Mapping))
    return [timestamp for timestamp in timestamps if timestamp]


def get_continuity_analysis(
    issue: Any,
    comments_response: Any = None,
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
    stagnation_threshold_days: int = DEFAULT_STAGNATION_THRESHOLD_DAYS,
    communication_gap_threshold_days: int = DEFAULT_COMMUNICATION_GAP_THRESHOLD_DAYS,
) -> ContinuityReport:
    """
    Analyzes the continuity of work on a JIRA issue.

    Args:
        issue (Any): Issue payload with ``key``, ``fields`` and ``changelog``.
        comments_response (Any): Optional comment response overriding ``fields.comment``.
        now (Optional[datetime]): End of the analysis window for unresolved issues. Defaults to now (UTC).
        tz (Optional[tzinfo]): Timezone defining business days and hours. Defaults to host local time.
        stagnation_threshold_days (int): Business days without activity that count as stagnation.
        communication_gap_threshold_days (int): Business days without communication that count as a gap.

    Returns:
        ContinuityReport: The continuity analysis for the issue.
    """
    issue_key = as_mapping(issue).get("key")
    fields = get_issue_fields(issue)
    comments = get_issue_comments(issue, comments_response)
    histories = get_issue_histories(issue)
    now = now or datetime.now(timezone.utc)
    end = fields.get("resolutiondate") or now

    logger.debug(f"Analyzing continuity for {issue_key}: {len(comments)} comments, {len(histories)} histories")

    stagnation_periods = identify_stagnation_periods(
        collect_activity_events(issue, comments), stagnation_threshold_days, tz
    )
    communication_gaps = identify_communication_gaps(
        get_communication_timestamps(issue, comments), communication_gap_threshold_days, tz
    )
    pairs = identify_question_response_pairs(comments, tz)
    feedback_response_time = average_response_time(pairs)

    progress_consistency = calculate_progress_consistency_score(
        fields.get("created"), [history.get("created") for history in histories], end
    )
    momentum = analyze_momentum_indicators(progress_consistency, comments, stagnation_periods, histories)

    return ContinuityReport(
        issue_key=issue_key,
        stagnation_periods=stagnation_periods,
        longest_stagnation_period=find_longest_stagnation_period(stagnation_periods),
        communication_gaps=communication_gaps,
        question_response_pairs=pairs,
        feedback_response_time=feedback_response_time,
        momentum=momentum,
        flow_efficiency=calculate_flow_efficiency(issue, now),
        context_switches=analyze_context_switches(issue, now, tz),
        work_fragmentation=analyze_work_fragmentation(issue, now),
        late_stage_changes=identify_late_stage_changes(issue, now),
    )


def summarize_reports(reports: List[ContinuityReport]) -> Dict[str, Any]:
    """Aggregates a batch of continuity reports."""
    response_times = [r.feedback_response_time for r in reports if r.feedback_response_time is not None]
    momentum_scores = [r.momentum_score for r in reports if r.momentum_score is not None]
    flow_efficiencies = [r.flow_efficiency for r in reports]

    return {
        "total_issues": len(reports),
        "issues_with_stagnation": sum(1 for r in reports if r.stagnation_periods),
        "issues_with_communication_gaps": sum(1 for r in reports if r.communication_gaps),
        "answered_questions": sum(len(r.question_response_pairs) for r in reports),
        "average_feedback_response_time": (
            round(sum(response_times) / len(response_times), 2) if response_times else None
        ),
        "average_momentum_score": (
            round(sum(momentum_scores) / len(momentum_scores), 2) if momentum_scores else None
        ),
        "average_flow_efficiency": (
            round(sum(flow_efficiencies) / len(flow_efficiencies), 2) if flow_efficiencies else None
        ),
    }
