"""
Threshold tables for the continuity scores.

Each table is an ordered tuple of ``(bound, penalty)`` rows evaluated top-down;
the first row whose bound is crossed wins. The comparison used for a table is
part of its definition, so band edges stay explicit.
"""

import operator
from typing import Callable, Sequence, Tuple

PenaltyTable = Sequence[Tuple[float, int]]

BASE_SCORE = 10
MIN_SCORE = 1
MAX_SCORE = 10

# Stagnation impact
TOTAL_STAGNATION_DAYS_PENALTIES: PenaltyTable = ((30, 5), (20, 4), (15, 3), (10, 2), (5, 1))
LONGEST_STAGNATION_PENALTIES: PenaltyTable = ((15, 3), (10, 2), (7, 1))
STAGNATION_FREQUENCY_PENALTIES: PenaltyTable = ((4, 2), (2, 1))

# Progress consistency; band edges belong to the higher band
COEFF_OF_VARIATION_PENALTIES: PenaltyTable = ((2.0, 5), (1.5, 4), (1.0, 3), (0.75, 2), (0.5, 1))
UPDATE_FREQUENCY_PENALTIES: PenaltyTable = ((0.1, 3), (0.2, 2), (0.3, 1))

# Context switching
ASSIGNEE_CHANGE_PENALTIES: PenaltyTable = ((5, 5), (3, 3), (2, 2), (1, 1))


def lookup_penalty(value: float, table: PenaltyTable, crosses: Callable[[float, float], bool] = operator.gt) -> int:
    """
    Returns the penalty of the first row whose bound ``value`` crosses.

    Args:
        value (float): Measured value.
        table (PenaltyTable): Ordered ``(bound, penalty)`` rows.
        crosses (Callable): Comparison ``crosses(value, bound)``; strictly greater by default.

    Returns:
        int: Matching penalty, or 0 when no row matches.
    """
    for bound, penalty in table:
        if crosses(value, bound):
            return penalty
    return 0


def clamp_score(score: float) -> int:
    return int(max(MIN_SCORE, min(MAX_SCORE, score)))


def round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def total_days_penalty(total_days: float) -> int:
    return lookup_penalty(total_days, TOTAL_STAGNATION_DAYS_PENALTIES)


def longest_period_penalty(longest_days: float) -> int:
    return lookup_penalty(longest_days, LONGEST_STAGNATION_PENALTIES)


def stagnation_frequency_penalty(period_count: int) -> int:
    return lookup_penalty(period_count, STAGNATION_FREQUENCY_PENALTIES, operator.ge)


def coeff_of_variation_penalty(coeff_of_variation: float) -> int:
    return lookup_penalty(coeff_of_variation, COEFF_OF_VARIATION_PENALTIES, operator.ge)


def update_frequency_penalty(updates_per_day: float) -> int:
    return lookup_penalty(updates_per_day, UPDATE_FREQUENCY_PENALTIES, operator.lt)


def assignee_change_penalty(change_count: int) -> int:
    return lookup_penalty(change_count, ASSIGNEE_CHANGE_PENALTIES)
