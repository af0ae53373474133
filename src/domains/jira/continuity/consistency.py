"""
Progress consistency scoring.

Measures how steadily an issue was updated: the coefficient of variation of
the gaps between updates captures erratic progress, updates per day captures
neglect. High scores indicate regular, predictable work.
"""

from datetime import datetime
from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np

from domains.jira.continuity.models import UpdateStatistics
from domains.jira.continuity.penalty_tables import (
    BASE_SCORE,
    clamp_score,
    coeff_of_variation_penalty,
    update_frequency_penalty,
)
from domains.jira.continuity.timestamps import parse_jira_datetime

SECONDS_PER_DAY = 60 * 60 * 24

NO_HISTORY_SCORE = 3
SHORT_LIVED_ISSUE_DAYS = 3


def calculate_final_consistency_score(coeff_of_variation: float, updates_per_day: float) -> int:
    """
    Converts update statistics into a 1-10 consistency score.

    Args:
        coeff_of_variation (float): Coefficient of variation of the gaps between updates.
        updates_per_day (float): Average number of updates per day.

    Returns:
        int: 10 minus the variation and frequency penalties, clamped to [1, 10].
    """
    penalty = coeff_of_variation_penalty(coeff_of_variation) + update_frequency_penalty(updates_per_day)
    return clamp_score(BASE_SCORE - penalty)


def calculate_update_statistics(
    update_gaps: Sequence[float], updates: Sequence[Any], total_duration_days: float
) -> UpdateStatistics:
    """
    Computes the coefficient of variation of update gaps and the update rate.

    Args:
        update_gaps (Sequence[float]): Days between consecutive timeline points.
        updates (Sequence[Any]): The update events.
        total_duration_days (float): Issue lifetime in days.

    Returns:
        UpdateStatistics: Zero variation for no gaps or a zero mean gap; zero rate for a non-positive duration.
    """
    coeff_of_variation = 0.0
    if len(update_gaps) > 0:
        gaps = np.asarray(update_gaps, dtype=float)
        mean_gap = float(np.mean(gaps))
        if mean_gap > 0:
            coeff_of_variation = float(np.std(gaps)) / mean_gap

    updates_per_day = len(updates) / total_duration_days if total_duration_days > 0 else 0.0
    return UpdateStatistics(coeff_of_variation=coeff_of_variation, updates_per_day=updates_per_day)


def _parse_all(timestamps: Iterable[Any]) -> List[datetime]:
    parsed = (parse_jira_datetime(timestamp) for timestamp in timestamps)
    return [moment for moment in parsed if moment is not None]


def calculate_update_gaps(
    creation_date: datetime, update_dates: Sequence[datetime], end_date: datetime
) -> Tuple[List[float], List[datetime]]:
    """
    Builds the update timeline and the gaps (in days) between its points.

    Args:
        creation_date (datetime): Issue creation.
        update_dates (Sequence[datetime]): Changelog update moments.
        end_date (datetime): Resolution date, or the analysis moment for open issues.

    Returns:
        Tuple[List[float], List[datetime]]: Gaps in days, and the update events
        (creation plus updates) counted for the update rate.
    """
    updates = sorted([creation_date, *update_dates], key=lambda moment: moment.timestamp())
    timeline = [*updates, end_date]
    gaps = [
        max(0.0, (later.timestamp() - earlier.timestamp()) / SECONDS_PER_DAY)
        for earlier, later in zip(timeline, timeline[1:])
    ]
    return gaps, updates


def calculate_progress_consistency_score(created: Any, update_timestamps: Sequence[Any], end: Any) -> int:
    """
    Scores how consistently progress was made on an issue.

    Args:
        created (Any): Issue creation timestamp.
        update_timestamps (Sequence[Any]): Changelog history timestamps.
        end (Any): Resolution timestamp, or the analysis moment for open issues.

    Returns:
        int: 3 without history, 10 for issues younger than three days, otherwise the consistency score.
    """
    update_dates = _parse_all(update_timestamps or [])
    creation_date = parse_jira_datetime(created)
    end_date = parse_jira_datetime(end)
    if not update_dates or creation_date is None or end_date is None:
        return NO_HISTORY_SCORE

    total_duration_days = (end_date.timestamp() - creation_date.timestamp()) / SECONDS_PER_DAY
    if total_duration_days < SHORT_LIVED_ISSUE_DAYS:
        return BASE_SCORE

    gaps, updates = calculate_update_gaps(creation_date, update_dates, end_date)
    statistics = calculate_update_statistics(gaps, updates, total_duration_days)
    return calculate_final_consistency_score(statistics.coeff_of_variation, statistics.updates_per_day)
