# cli/model_formatters.py

# anything that renders domain objects or performs Gradebook read-only operations
from textwrap import dedent

import core.formatters as formatters
from core import grading
from models.grade_entry import GradeEntry, GradeType
from models.gradebook import Gradebook
from models.student import Student
from models.weights import WeightConfig

# === student formatters ===


def format_student_oneline(student: Student) -> str:
    return f"{student.name:<20} | Grade {student.grade_level}"


def format_student_multiline(student: Student) -> str:
    return dedent(
        f"""\
        Student:
        ... Name: {student.name}
        ... Grade Level: {student.grade_level}"""
    )


# === grade formatters ===


def format_grade_chip(grade: GradeEntry) -> str:
    letter = grading.letter_grade(grade.value)
    return f"[{grade.grade_type.value[0]}] {grade.value} ({letter})"


def format_grade_oneline(grade: GradeEntry) -> str:
    letter = grading.letter_grade(grade.value)
    return f"{grade.grade_type.value:<10} | {grade.value:>3} | {letter}"


def format_average(average: float | None) -> str:
    if average is None:
        return "[NO AVERAGE]"

    return formatters.format_score_with_letter(average, grading.letter_grade(average))


def format_student_row(
    student: Student, gradebook: Gradebook, subject: str, period: int
) -> str:
    grades = gradebook.grades_for(student.id, subject, period)
    chips = "  ".join(format_grade_chip(g) for g in grades) or "[NO GRADES]"
    average = gradebook.student_average(student.id, subject, period)

    return f"{student.name:<20} | {chips}\n{'':<20} | Average: {format_average(average)}"


# === weight formatters ===


def format_weights_multiline(weights: WeightConfig) -> str:
    lines = [
        f"... {grade_type.value + ' Weight':<16} {formatters.format_weight(weights.weight_for(grade_type))}"
        for grade_type in GradeType
    ]
    lines.append(f"... {formatters.format_weight_total(weights.total)}")

    return "\n".join(lines)
