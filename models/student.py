# models/student.py

"""
Represents a student tracked by the gradebook.

Stores the identifying information for a student: a unique ID, a display name, and the
grade level (1-10) used to group students into classes.

Includes functionality for:
- Validating and normalizing name and grade level input
- Serializing to and from JSON-compatible dictionaries
- Value equality, so restored snapshots can be compared with live state

Grade entries reference a student by ID only. Removing a student is handled by the
Gradebook, which cascades the removal to every linked grade entry.
"""

from __future__ import annotations

from typing import Any

MIN_GRADE_LEVEL = 1
MAX_GRADE_LEVEL = 10


class Student:

    def __init__(self, id: str, name: str, grade_level: int):
        self._id: str = id
        # name and grade_level use setter methods for validation
        self.name = name
        self.grade_level = grade_level

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = Student.validate_name_input(name)

    @property
    def grade_level(self) -> int:
        return self._grade_level

    @grade_level.setter
    def grade_level(self, grade_level: int) -> None:
        self._grade_level = Student.validate_grade_level_input(grade_level)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "gradeLevel": self._grade_level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        if not isinstance(data["id"], str):
            raise TypeError("Student id must be a string.")

        return cls(
            id=data["id"],
            name=data["name"],
            grade_level=data["gradeLevel"],
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._name}, {self._grade_level})"

    def __str__(self) -> str:
        return f"STUDENT: name: {self._name}, grade: {self._grade_level}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_name_input(name: Any) -> str:
        """
        Validates and normalizes a Student name.

        Args:
            name: The input name to validate.

        Returns:
            The name with surrounding whitespace removed.

        Raises:
            TypeError: If the name is not a string.
            ValueError: If the name is blank after trimming.
        """
        if not isinstance(name, str):
            raise TypeError("Invalid input. Student name must be a string.")

        name = name.strip()
        if not name:
            raise ValueError("Invalid input. Student name cannot be blank.")

        return name

    @staticmethod
    def validate_grade_level_input(grade_level: Any) -> int:
        """
        Validates input for a Student grade level.

        Accepts integers (and integral strings such as "4"), and then ensures the value
        is between 1 and 10, inclusive. Booleans are rejected even though they are ints.

        Raises:
            TypeError: If the input cannot be read as an integer.
            ValueError: If the grade level is out of bounds.
        """
        if isinstance(grade_level, bool):
            raise TypeError("Invalid input. Grade level must be a whole number.")

        try:
            level = int(grade_level)

        except (TypeError, ValueError, OverflowError):
            raise TypeError("Invalid input. Grade level must be a whole number.") from None

        if isinstance(grade_level, float) and level != grade_level:
            raise TypeError("Invalid input. Grade level must be a whole number.")

        if level < MIN_GRADE_LEVEL or level > MAX_GRADE_LEVEL:
            raise ValueError(
                f"Invalid input. Grade level must be between {MIN_GRADE_LEVEL} and {MAX_GRADE_LEVEL}."
            )

        return level
