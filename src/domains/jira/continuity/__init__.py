"""Continuity analysis engine - pure functions over already-fetched JIRA issue history."""

from .business_hours import adjust_for_business_hours, calculate_business_days, count_weekend_days_between
from .comment_adapter import adapt_issue_comment
from .comment_pairing import (
    calculate_feedback_response_time,
    identify_question_response_pairs,
    process_comments,
)
from .consistency import (
    calculate_final_consistency_score,
    calculate_progress_consistency_score,
    calculate_update_statistics,
)
from .context_switches import analyze_context_switches, assess_velocity_impact, extract_assignee_changes
from .continuity_analysis import get_continuity_analysis, summarize_reports
from .flow_efficiency import calculate_active_work_time, calculate_flow_efficiency
from .late_stage import identify_late_stage_changes
from .models import (
    ActiveWorkPeriod,
    ActivityEvent,
    AssigneeChange,
    Comment,
    CommunicationGap,
    ContextSwitchAnalysis,
    ContinuityReport,
    LateStageChange,
    MomentumBreakdown,
    QuestionResponsePair,
    StagnationPeriod,
    UpdateStatistics,
    WorkFragmentation,
)
from .momentum import (
    analyze_momentum_indicators,
    calculate_communication_frequency_score,
    calculate_context_switching_score,
)
from .question_detection import QUESTION_PHRASES, is_question
from .status_activity import is_active_status
from .stagnation import (
    calculate_stagnation_impact_score,
    identify_communication_gaps,
    identify_stagnation_periods,
)
from .text_extraction import extract_text
from .work_fragmentation import analyze_work_fragmentation, identify_active_periods

__all__ = [
    # Models
    "ActiveWorkPeriod",
    "ActivityEvent",
    "AssigneeChange",
    "Comment",
    "CommunicationGap",
    "ContextSwitchAnalysis",
    "ContinuityReport",
    "LateStageChange",
    "MomentumBreakdown",
    "QuestionResponsePair",
    "StagnationPeriod",
    "UpdateStatistics",
    "WorkFragmentation",
    # Comment pipeline
    "extract_text",
    "adapt_issue_comment",
    "QUESTION_PHRASES",
    "is_question",
    "adjust_for_business_hours",
    "count_weekend_days_between",
    "calculate_business_days",
    "process_comments",
    "identify_question_response_pairs",
    "calculate_feedback_response_time",
    # Scores
    "calculate_stagnation_impact_score",
    "calculate_final_consistency_score",
    "calculate_update_statistics",
    "calculate_progress_consistency_score",
    "calculate_communication_frequency_score",
    "calculate_context_switching_score",
    "analyze_momentum_indicators",
    # Workflow
    "is_active_status",
    "calculate_active_work_time",
    "calculate_flow_efficiency",
    "identify_active_periods",
    "analyze_work_fragmentation",
    "extract_assignee_changes",
    "assess_velocity_impact",
    "analyze_context_switches",
    "identify_late_stage_changes",
    # Detection and orchestration
    "identify_stagnation_periods",
    "identify_communication_gaps",
    "get_continuity_analysis",
    "summarize_reports",
]
