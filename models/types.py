# models/types.py

"""
Holds TypeVar definition for simplifying type checks.
"""

from typing import TypeVar

from .grade_entry import GradeEntry
from .student import Student

RecordType = TypeVar("RecordType", GradeEntry, Student)
