"""Data classes shared by the continuity analysis engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class Comment:
    """Normalized issue comment consumed by the question/response pairer."""

    created: str
    body: Union[str, Dict[str, Any], None]
    author_name: Optional[str]


@dataclass(frozen=True)
class QuestionResponsePair:
    """A question asked in a comment and the first reply from someone else."""

    question_timestamp: str
    response_timestamp: str
    response_time_hours: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "questionTimestamp": self.question_timestamp,
            "responseTimestamp": self.response_timestamp,
            "responseTimeHours": self.response_time_hours,
        }


@dataclass(frozen=True)
class StagnationPeriod:
    """A contiguous span without activity on an issue."""

    duration_days: float
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    status: str = "Unknown"
    assignee: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startDate": self.start_date,
            "endDate": self.end_date,
            "durationDays": self.duration_days,
            "status": self.status,
            "assignee": self.assignee,
        }


@dataclass(frozen=True)
class CommunicationGap:
    start_date: str
    end_date: str
    duration_days: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startDate": self.start_date,
            "endDate": self.end_date,
            "durationDays": self.duration_days,
        }


@dataclass(frozen=True)
class ActivityEvent:
    """A point in an issue's timeline with the context known at that moment."""

    timestamp: str
    status: Optional[str] = None
    assignee: Optional[str] = None


@dataclass(frozen=True)
class UpdateStatistics:
    coeff_of_variation: float
    updates_per_day: float


@dataclass(frozen=True)
class FieldChange:
    """One changelog item for a field, with its parsed history date."""

    timestamp: str
    moment: datetime
    from_value: Optional[str]
    to_value: Optional[str]


@dataclass(frozen=True)
class StatusChange:
    timestamp: str
    moment: datetime
    from_status: Optional[str]
    to_status: Optional[str]
    assignee: Optional[str] = None


@dataclass(frozen=True)
class AssigneeChange:
    """A handoff of the issue and the status it was in at that moment."""

    date: str
    from_assignee: Optional[str]
    to_assignee: Optional[str]
    status: str = "Unknown"
    days_from_start: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "fromAssignee": self.from_assignee,
            "toAssignee": self.to_assignee,
            "status": self.status,
            "daysFromStart": self.days_from_start,
        }


@dataclass
class ContextSwitchAnalysis:
    count: int = 0
    timing: List[AssigneeChange] = field(default_factory=list)
    impact: str = "None - no assignee changes"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "timing": [change.to_dict() for change in self.timing],
            "impact": self.impact,
        }


@dataclass(frozen=True)
class ActiveWorkPeriod:
    """A stretch of time the issue spent in an active status."""

    start_date: str
    end_date: str
    duration_hours: float
    status: str = "Unknown"
    assignee: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startDate": self.start_date,
            "endDate": self.end_date,
            "durationHours": self.duration_hours,
            "status": self.status,
            "assignee": self.assignee,
        }


@dataclass(frozen=True)
class PeriodStatistics:
    average_period_hours: float
    std_dev: float
    coeff_of_variation: float


@dataclass
class WorkFragmentation:
    """Fragmentation score (0-100, 100 is one uninterrupted period) and the periods behind it."""

    fragmentation_score: float = 100.0
    periods: List[ActiveWorkPeriod] = field(default_factory=list)

    @property
    def active_work_periods(self) -> int:
        return len(self.periods)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fragmentationScore": self.fragmentation_score,
            "activeWorkPeriods": self.active_work_periods,
            "periods": [period.to_dict() for period in self.periods],
        }


@dataclass(frozen=True)
class LateStageChange:
    date: str
    field: str
    description: str
    percent_complete: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "field": self.field,
            "description": self.description,
            "percentComplete": self.percent_complete,
        }


@dataclass
class MomentumBreakdown:
    """Factor scores (1-10) and the weighted momentum score."""

    progress_consistency: int
    communication_frequency: int
    stagnation_impact: int
    context_switching: int
    momentum_score: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ContinuityReport:
    """Continuity analysis result for a single issue."""

    issue_key: Optional[str]
    stagnation_periods: List[StagnationPeriod] = field(default_factory=list)
    longest_stagnation_period: float = 0
    communication_gaps: List[CommunicationGap] = field(default_factory=list)
    question_response_pairs: List[QuestionResponsePair] = field(default_factory=list)
    feedback_response_time: Optional[float] = None
    momentum: Optional[MomentumBreakdown] = None
    flow_efficiency: float = 0.0
    context_switches: ContextSwitchAnalysis = field(default_factory=ContextSwitchAnalysis)
    work_fragmentation: WorkFragmentation = field(default_factory=WorkFragmentation)
    late_stage_changes: List[LateStageChange] = field(default_factory=list)

    @property
    def momentum_score(self) -> Optional[int]:
        return self.momentum.momentum_score if self.momentum else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "issue_key": self.issue_key,
            "stagnation_periods": [p.to_dict() for p in self.stagnation_periods],
            "longest_stagnation_period": self.longest_stagnation_period,
            "communication_gaps": [g.to_dict() for g in self.communication_gaps],
            "question_response_pairs": [p.to_dict() for p in self.question_response_pairs],
            "feedback_response_time": self.feedback_response_time,
            "momentum_score": self.momentum_score,
            "momentum": self.momentum.to_dict() if self.momentum else None,
            "flow_efficiency": self.flow_efficiency,
            "context_switches": self.context_switches.to_dict(),
            "work_fragmentation": self.work_fragmentation.to_dict(),
            "late_stage_changes": [c.to_dict() for c in self.late_stage_changes],
        }
