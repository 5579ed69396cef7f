# models/weights.py

"""
Holds the three per-type weights used for weighted averages.

Each weight is a float between 0 and 100 (inclusive) and is adjusted independently of the others.
No rule requires the three to sum to 100: the total is exposed for display only, and the
grading engine renormalizes over whichever types a student actually has grades for.

Key behaviors:
- `weight_for()` / `set_weight()`: Access a weight by `GradeType`.
- `to_list()` / `from_list()`: The fixed-order [test, quiz, homework] form used for local storage.
- `to_dict()` / `from_dict()`: The named-field form used inside backup files.
"""

from __future__ import annotations

import math
from typing import Any

from core.utils import clamp
from models.grade_entry import GradeType

MIN_WEIGHT = 0.0
MAX_WEIGHT = 100.0

DEFAULT_TEST_WEIGHT = 50.0
DEFAULT_QUIZ_WEIGHT = 17.0
DEFAULT_HOMEWORK_WEIGHT = 33.0


class WeightConfig:

    def __init__(
        self,
        test_weight: float = DEFAULT_TEST_WEIGHT,
        quiz_weight: float = DEFAULT_QUIZ_WEIGHT,
        homework_weight: float = DEFAULT_HOMEWORK_WEIGHT,
    ):
        self._weights: dict[GradeType, float] = {}
        self.set_weight(GradeType.TEST, test_weight)
        self.set_weight(GradeType.QUIZ, quiz_weight)
        self.set_weight(GradeType.HOMEWORK, homework_weight)

    # === properties ===

    @property
    def test_weight(self) -> float:
        return self._weights[GradeType.TEST]

    @property
    def quiz_weight(self) -> float:
        return self._weights[GradeType.QUIZ]

    @property
    def homework_weight(self) -> float:
        return self._weights[GradeType.HOMEWORK]

    @property
    def total(self) -> float:
        return sum(self._weights.values())

    @property
    def sums_to_100(self) -> bool:
        return math.isclose(self.total, MAX_WEIGHT)

    def weight_for(self, grade_type: GradeType) -> float:
        return self._weights[grade_type]

    def set_weight(self, grade_type: GradeType, weight: Any) -> None:
        self._weights[GradeType(grade_type)] = WeightConfig.validate_weight_input(weight)

    def copy(self) -> WeightConfig:
        return WeightConfig(self.test_weight, self.quiz_weight, self.homework_weight)

    # === persistence and import ===

    def to_list(self) -> list[float]:
        return [self.test_weight, self.quiz_weight, self.homework_weight]

    @classmethod
    def from_list(cls, data: list) -> WeightConfig:
        if not isinstance(data, list) or len(data) != 3:
            raise ValueError("Stored weights must be a list of exactly three numbers.")

        return cls(*data)

    def to_dict(self) -> dict:
        return {
            "testWeight": self.test_weight,
            "quizWeight": self.quiz_weight,
            "homeworkWeight": self.homework_weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> WeightConfig:
        return cls(
            test_weight=data["testWeight"],
            quiz_weight=data["quizWeight"],
            homework_weight=data["homeworkWeight"],
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightConfig):
            return NotImplemented
        return self.to_list() == other.to_list()

    def __repr__(self) -> str:
        return f"WeightConfig({self.test_weight}, {self.quiz_weight}, {self.homework_weight})"

    def __str__(self) -> str:
        return f"WEIGHTS: test: {self.test_weight}, quiz: {self.quiz_weight}, homework: {self.homework_weight}"

    # === data validators ===

    @staticmethod
    def validate_weight_input(weight: Any) -> float:
        """
        Validates and normalizes input for a single weight.

        Accepts any input, and then:
            - Casts to float.
            - Ensures the number is finite.
            - Clamps it to the 0-100 range.

        Args:
            weight (Any): The input value to validate.

        Returns:
            The normalized weight value (float).

        Raises:
            TypeError: If the input cannot be cast to float.
            ValueError: If the input is non-finite.
        """
        if isinstance(weight, bool):
            raise TypeError("Weight must be a number.")

        try:
            weight = float(weight)

        except (TypeError, ValueError, OverflowError):
            raise TypeError("Weight must be a number.") from None

        if not math.isfinite(weight):
            raise ValueError("Weight must be a finite number.")

        return clamp(weight, MIN_WEIGHT, MAX_WEIGHT)
