# models/grade_entry.py

"""
Represents a single grade recorded for a student.

Each `GradeEntry` links to a student by ID, names the subject and period it was recorded in,
and carries a `GradeType` tag (Test, Quiz, or Homework) that selects which weight applies.

Notes:
- `value` is kept as text exactly as entered. It is parsed lazily by the grading engine,
  which excludes non-numeric values from averages rather than counting them as zero.
- `student_id` is a non-owning reference. An entry whose student no longer exists is simply
  left out of every aggregate view.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from models.subjects import is_known_subject

MIN_PERIOD = 1
MAX_PERIOD = 6


class GradeType(str, Enum):
    TEST = "Test"
    QUIZ = "Quiz"
    HOMEWORK = "Homework"


class GradeEntry:

    def __init__(
        self,
        id: str,
        student_id: str,
        subject: str,
        period: int,
        value: str,
        grade_type: GradeType,
    ):
        self._id = id
        self._student_id = student_id
        # subject, period, value and grade_type use setter methods for validation
        self.subject = subject
        self.period = period
        self.value = value
        self.grade_type = grade_type

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def subject(self) -> str:
        return self._subject

    @subject.setter
    def subject(self, subject: str) -> None:
        self._subject = GradeEntry.validate_subject_input(subject)

    @property
    def period(self) -> int:
        return self._period

    @period.setter
    def period(self, period: int) -> None:
        self._period = GradeEntry.validate_period_input(period)

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("Invalid input. Grade value must be a string.")
        self._value = value

    @property
    def grade_type(self) -> GradeType:
        return self._grade_type

    @grade_type.setter
    def grade_type(self, grade_type: GradeType | str) -> None:
        self._grade_type = GradeEntry.validate_grade_type_input(grade_type)

    @property
    def is_blank(self) -> bool:
        return not self._value.strip()

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "studentId": self._student_id,
            "subject": self._subject,
            "period": self._period,
            "value": self._value,
            "type": self._grade_type.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GradeEntry:
        if not isinstance(data["id"], str) or not isinstance(data["studentId"], str):
            raise TypeError("Grade entry ids must be strings.")

        return cls(
            id=data["id"],
            student_id=data["studentId"],
            subject=data["subject"],
            period=data["period"],
            value=data["value"],
            grade_type=data["type"],
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GradeEntry):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"GradeEntry({self._id}, {self._student_id}, {self._subject}, {self._period}, {self._value!r}, {self._grade_type.value})"

    def __str__(self) -> str:
        return f"GRADE: {self._grade_type.value} {self._value} in {self._subject} (period {self._period}), id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_subject_input(subject: Any) -> str:
        if not isinstance(subject, str) or not is_known_subject(subject):
            raise ValueError(f"Invalid input. Unknown subject: {subject!r}.")
        return subject

    @staticmethod
    def validate_period_input(period: Any) -> int:
        """
        Validates input for a `GradeEntry` period.

        Raises:
            TypeError: If the input is not an integer.
            ValueError: If the period is not between 1 and 6, inclusive.
        """
        if isinstance(period, bool) or not isinstance(period, int):
            raise TypeError("Invalid input. Period must be a whole number.")

        if period < MIN_PERIOD or period > MAX_PERIOD:
            raise ValueError(
                f"Invalid input. Period must be between {MIN_PERIOD} and {MAX_PERIOD}."
            )

        return period

    @staticmethod
    def validate_grade_type_input(grade_type: Any) -> GradeType:
        try:
            return GradeType(grade_type)

        except (TypeError, ValueError):
            raise ValueError(
                f"Invalid input. Grade type must be one of: {', '.join(t.value for t in GradeType)}."
            ) from None
