# models/backup.py

"""
A full snapshot of gradebook state, used for backup files.

`BackupPayload` bundles the ordered student list, the three weights, and the ordered grade list.
Its dictionary form is the backup file format:

    {
        "students": [{"id": ..., "name": ..., "gradeLevel": ...}],
        "testWeight": ..., "quizWeight": ..., "homeworkWeight": ...,
        "grades": [{"id": ..., "studentId": ..., "subject": ..., "period": ..., "value": ..., "type": ...}]
    }
"""

from __future__ import annotations

from models.grade_entry import GradeEntry
from models.student import Student
from models.types import RecordType
from models.weights import WeightConfig


class BackupPayload:

    def __init__(
        self,
        students: list[Student],
        weights: WeightConfig,
        grades: list[GradeEntry],
    ):
        self._students = list(students)
        self._weights = weights
        self._grades = list(grades)

    # === properties ===

    @property
    def students(self) -> list[Student]:
        return self._students

    @property
    def weights(self) -> WeightConfig:
        return self._weights

    @property
    def grades(self) -> list[GradeEntry]:
        return self._grades

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "students": [s.to_dict() for s in self._students],
            **self._weights.to_dict(),
            "grades": [g.to_dict() for g in self._grades],
        }

    @classmethod
    def from_dict(cls, data: dict) -> BackupPayload:
        """
        Builds a snapshot from a decoded backup file.

        Raises:
            KeyError: If a required field is missing.
            TypeError: If a field has the wrong structure.
            ValueError: If a field value is invalid or a student or grade id appears twice.
        """
        if not isinstance(data, dict):
            raise TypeError("Backup data must be a JSON object.")

        students_raw = data["students"]
        grades_raw = data["grades"]
        if not isinstance(students_raw, list) or not isinstance(grades_raw, list):
            raise TypeError("Backup 'students' and 'grades' must be lists.")

        students = [Student.from_dict(s) for s in students_raw]
        grades = [GradeEntry.from_dict(g) for g in grades_raw]

        BackupPayload.require_unique_ids(students, "student")
        BackupPayload.require_unique_ids(grades, "grade")

        return cls(
            students=students,
            weights=WeightConfig.from_dict(data),
            grades=grades,
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BackupPayload):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"BackupPayload({len(self._students)} students, {self._weights!r}, {len(self._grades)} grades)"

    # === data validators ===

    @staticmethod
    def require_unique_ids(records: list[RecordType], record_name: str) -> None:
        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                raise ValueError(f"Duplicate {record_name} id in backup: {record.id}")
            seen.add(record.id)
