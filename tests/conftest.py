# tests/conftest.py

import pytest

from core.storage import MemoryStore
from models.grade_entry import GradeEntry, GradeType
from models.gradebook import Gradebook
from models.student import Student
from models.weights import WeightConfig


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sample_gradebook(memory_store):
    gradebook_response = Gradebook.load(memory_store)
    return gradebook_response.data["gradebook"]


@pytest.fixture
def sample_student():
    return Student("s001", "Ada Lovelace", 4)


@pytest.fixture
def sample_grade():
    return GradeEntry(
        id="g001",
        student_id="s001",
        subject="Math",
        period=1,
        value="90",
        grade_type=GradeType.TEST,
    )


@pytest.fixture
def default_weights():
    return WeightConfig()


@pytest.fixture
def populated_gradebook(sample_gradebook):
    gb = sample_gradebook

    ada = gb.add_student("Ada Lovelace", 4).data["record"]
    alan = gb.add_student("Alan Turing", 4).data["record"]
    gb.add_student("Grace Hopper", 5)

    gb.record_grade(ada.id, "Math", 1, "90", GradeType.TEST)
    gb.record_grade(ada.id, "Math", 1, "80", GradeType.QUIZ)
    gb.record_grade(alan.id, "Math", 1, "80", GradeType.HOMEWORK)
    gb.record_grade(alan.id, "Math", 1, "90", GradeType.HOMEWORK)
    gb.record_grade(alan.id, "Science", 2, "70", GradeType.TEST)

    return gb


@pytest.fixture
def make_grade():
    counter = iter(range(1, 10_000))

    def factory(value: str, grade_type: GradeType, student_id: str = "s001") -> GradeEntry:
        return GradeEntry(
            id=f"g{next(counter):03d}",
            student_id=student_id,
            subject="Math",
            period=1,
            value=value,
            grade_type=grade_type,
        )

    return factory


@pytest.fixture
def second_store():
    return MemoryStore()


@pytest.fixture
def second_gradebook(second_store):
    return Gradebook.load(second_store).data["gradebook"]
