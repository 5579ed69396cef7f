# tests/test_grade_entry.py

import pytest

from models.grade_entry import GradeEntry, GradeType


def test_grade_entry_to_dict(sample_grade):
    assert sample_grade.to_dict() == {
        "id": "g001",
        "studentId": "s001",
        "subject": "Math",
        "period": 1,
        "value": "90",
        "type": "Test",
    }


def test_grade_entry_from_dict():
    grade = GradeEntry.from_dict(
        {
            "id": "g001",
            "studentId": "s001",
            "subject": "Social Studies",
            "period": 6,
            "value": "A",
            "type": "Homework",
        }
    )

    assert grade.id == "g001"
    assert grade.student_id == "s001"
    assert grade.subject == "Social Studies"
    assert grade.period == 6
    assert grade.value == "A"
    assert grade.grade_type is GradeType.HOMEWORK


def test_grade_type_values():
    assert [t.value for t in GradeType] == ["Test", "Quiz", "Homework"]


def test_grade_entry_keeps_non_numeric_value():
    grade = GradeEntry("g001", "s001", "Math", 1, "abc", GradeType.QUIZ)
    assert grade.value == "abc"
    assert not grade.is_blank


def test_blank_value_is_blank():
    assert GradeEntry("g001", "s001", "Math", 1, "  ", GradeType.QUIZ).is_blank


def test_unknown_subject_is_rejected():
    with pytest.raises(ValueError):
        GradeEntry("g001", "s001", "Astronomy", 1, "90", GradeType.TEST)


@pytest.mark.parametrize("period", [0, 7])
def test_period_out_of_range(period):
    with pytest.raises(ValueError):
        GradeEntry("g001", "s001", "Math", period, "90", GradeType.TEST)


def test_period_must_be_int():
    with pytest.raises(TypeError):
        GradeEntry("g001", "s001", "Math", "1", "90", GradeType.TEST)


def test_unknown_grade_type_is_rejected():
    with pytest.raises(ValueError):
        GradeEntry.from_dict(
            {
                "id": "g001",
                "studentId": "s001",
                "subject": "Math",
                "period": 1,
                "value": "90",
                "type": "Exam",
            }
        )


def test_grade_entry_equality(sample_grade):
    same = GradeEntry("g001", "s001", "Math", 1, "90", GradeType.TEST)
    other = GradeEntry("g001", "s001", "Math", 1, "91", GradeType.TEST)

    assert sample_grade == same
    assert sample_grade != other
