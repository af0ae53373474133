"""
Momentum indicators for issue progression.

Momentum is a weighted blend of four 1-10 factor scores: progress
consistency, communication frequency, stagnation impact and context
switching (assignee handoffs).
"""

from collections.abc import Mapping
from typing import Any, List, Optional, Sequence

from domains.jira.continuity.changelog import find_field_change
from domains.jira.continuity.comment_adapter import extract_comment_records
from domains.jira.continuity.models import MomentumBreakdown, StagnationPeriod
from domains.jira.continuity.penalty_tables import (
    BASE_SCORE,
    MAX_SCORE,
    assignee_change_penalty,
    clamp_score,
    round_half_up,
)
from domains.jira.continuity.stagnation import calculate_stagnation_impact_score

MOMENTUM_FACTOR_WEIGHTS = {
    "progress_consistency": 0.35,
    "communication_frequency": 0.25,
    "stagnation_impact": 0.30,
    "context_switching": 0.10,
}

# (minimum comment count, base score), highest first
COMMENT_COUNT_BASE_SCORES = ((15, 10), (10, 9), (8, 8), (6, 7), (4, 6), (3, 5), (2, 4))
MIN_COMMUNICATION_SCORE = 3

NO_CHANGELOG_CONTEXT_SCORE = 7
BACK_AND_FORTH_PENALTY = 2


def calculate_communication_frequency_score(comments_response: Any) -> int:
    """
    Scores how actively an issue was discussed.

    Args:
        comments_response (Any): ``{"comments": [...]}`` or a bare comment list.

    Returns:
        int: Base score by comment count plus a bonus for distinct commenters, capped at 10.
    """
    comments = extract_comment_records(comments_response)
    count = len(comments)

    base_score = next(
        (score for minimum, score in COMMENT_COUNT_BASE_SCORES if count >= minimum),
        MIN_COMMUNICATION_SCORE,
    )

    commenters = set()
    for comment in comments:
        author = comment.get("author") if isinstance(comment, Mapping) else None
        name = author.get("displayName") if isinstance(author, Mapping) else None
        if name:
            commenters.add(name)

    diversity_bonus = 2 if len(commenters) >= 4 else 1 if len(commenters) >= 3 else 0
    return min(MAX_SCORE, base_score + diversity_bonus)


def get_assignee_changes(histories: Sequence[Any]) -> List[Mapping]:
    """Returns the assignee items of histories that reassigned the issue."""
    changes = []
    for history in histories:
        item = find_field_change(history, "assignee")
        if item is not None:
            changes.append(item)
    return changes


def calculate_back_and_forth_penalty(assignee_changes: Sequence[Mapping]) -> int:
    unique_assignees = {change.get("toString") for change in assignee_changes if change.get("toString")}
    if len(assignee_changes) > 1 and len(unique_assignees) < len(assignee_changes):
        return BACK_AND_FORTH_PENALTY
    return 0


def calculate_context_switching_score(histories: Optional[Sequence[Any]]) -> int:
    """
    Scores the impact of assignee handoffs.

    Args:
        histories (Optional[Sequence[Any]]): Changelog histories.

    Returns:
        int: 7 without changelog, otherwise 10 minus frequency and back-and-forth penalties.
    """
    if not histories:
        return NO_CHANGELOG_CONTEXT_SCORE

    changes = get_assignee_changes(histories)
    penalty = assignee_change_penalty(len(changes)) + calculate_back_and_forth_penalty(changes)
    return clamp_score(BASE_SCORE - penalty)


def analyze_momentum_indicators(
    progress_consistency: int,
    comments_response: Any,
    stagnation_periods: Sequence[StagnationPeriod],
    histories: Optional[Sequence[Any]],
) -> MomentumBreakdown:
    """
    Combines the momentum factors into a weighted 1-10 score.

    Args:
        progress_consistency (int): Progress consistency score.
        comments_response (Any): The issue's comments.
        stagnation_periods (Sequence[StagnationPeriod]): Detected stagnation periods.
        histories (Optional[Sequence[Any]]): Changelog histories.

    Returns:
        MomentumBreakdown: Factor scores and the rounded momentum score.
    """
    breakdown = {
        "progress_consistency": progress_consistency,
        "communication_frequency": calculate_communication_frequency_score(comments_response),
        "stagnation_impact": calculate_stagnation_impact_score(stagnation_periods),
        "context_switching": calculate_context_switching_score(histories),
    }
    weighted = sum(score * MOMENTUM_FACTOR_WEIGHTS[name] for name, score in breakdown.items())

    return MomentumBreakdown(**breakdown, momentum_score=round_half_up(weighted))
