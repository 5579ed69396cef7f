# core/grading.py

"""
Pure grade calculations: letter grades, weighted averages, and class averages.

Nothing in this module touches gradebook state. Callers pass in snapshots (lists of entries,
a `WeightConfig`) and get plain values back.

Notes:
- Grade values are free text. Anything that does not parse as a finite number is left out of
  every average instead of being treated as zero.
- "No average" is reported as None, never as 0.0.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from models.grade_entry import GradeEntry, GradeType
from models.weights import WeightConfig

T = TypeVar("T")

NO_GRADE = "—"

# closed ranges over the raw score, highest band first
LETTER_BANDS: tuple[tuple[float, float, str], ...] = (
    (100, 100, "A+"),
    (96, 99, "A"),
    (94, 95, "A−"),
    (92, 93, "B+"),
    (88, 91, "B"),
    (86, 87, "B−"),
    (84, 85, "C+"),
    (79, 83, "C"),
    (76, 78, "C−"),
    (70, 75, "D"),
    (63, 69, "E"),
)

FAILING_GRADE = "F"


def parse_score(value: Any) -> float | None:
    """
    Reads a grade value as a number.

    Args:
        value (Any): A number or the raw text of a grade entry.

    Returns:
        The value as a float, or None if it is not numeric or not finite. Underscore digit
        separators ("1_0") are not numeric.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, str) and "_" in value:
        return None

    try:
        score = float(value)

    except (TypeError, ValueError):
        return None

    return score if math.isfinite(score) else None


def letter_grade(score: float | str) -> str:
    """
    Maps a score to its letter grade band.

    Args:
        score (float | str): A numeric score or the raw text of a grade entry.

    Returns:
        The letter for the band containing the score, "F" for anything outside every band
        (including negative scores and scores above 100), or `NO_GRADE` if the input is not numeric.
    """
    value = parse_score(score)

    if value is None:
        return NO_GRADE

    for low, high, letter in LETTER_BANDS:
        if low <= value <= high:
            return letter

    return FAILING_GRADE


def type_means(entries: Iterable[GradeEntry]) -> dict[GradeType, float]:
    """
    Computes the mean parsable score for each grade type present in `entries`.

    Types with no parsable values are omitted from the result.
    """
    scores: dict[GradeType, list[float]] = {}

    for entry in entries:
        score = parse_score(entry.value)
        if score is not None:
            scores.setdefault(entry.grade_type, []).append(score)

    return {
        grade_type: sum(values) / len(values)
        for grade_type, values in scores.items()
    }


def weighted_average(
    entries: Iterable[GradeEntry], weights: WeightConfig
) -> float | None:
    """
    Computes a weighted percentage average over a set of grade entries.

    Entries are grouped by `GradeType` and averaged within each type. Only the types that have
    at least one parsable value contribute, and their weights are renormalized over the sum of
    the contributing weights. A student with only homework grades therefore gets 100% of their
    average from homework, regardless of the test and quiz weights.

    Args:
        entries (Iterable[GradeEntry]): The grade entries to average.
        weights (WeightConfig): The per-type weights.

    Returns:
        The weighted average, or None if no entry has a parsable value or if the
        contributing weights sum to zero.
    """
    means = type_means(entries)

    used_weight = sum(weights.weight_for(grade_type) for grade_type in means)

    if not means or used_weight <= 0:
        return None

    return sum(
        mean * (weights.weight_for(grade_type) / used_weight)
        for grade_type, mean in means.items()
    )


def class_average(
    students: Iterable[T], average_fn: Callable[[T], float | None]
) -> float | None:
    """
    Averages the defined per-student averages of a group of students.

    Args:
        students (Iterable[T]): The students in the class.
        average_fn (Callable[[T], float | None]): Returns one student's average, or None.

    Returns:
        The mean of every defined student average, or None if there are no students
        or no student has an average.
    """
    averages = [
        average for average in map(average_fn, students) if average is not None
    ]

    if not averages:
        return None

    return sum(averages) / len(averages)
