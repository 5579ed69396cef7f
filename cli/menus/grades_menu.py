# cli/menus/grades_menu.py

"""
Grades menu for the Gradebook CLI.

Shows the students of one grade level with their grades for the selected subject and period,
each student's weighted average, and the class average. Grades are added and deleted from here.

The current grade level, period, subject, and grade type are held in a `GradesView` for the
lifetime of the menu. All state changes are routed through the `Gradebook` API.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from models.grade_entry import MAX_PERIOD, MIN_PERIOD, GradeEntry, GradeType
from models.gradebook import Gradebook
from models.student import MAX_GRADE_LEVEL, MIN_GRADE_LEVEL, Student
from models.subjects import DEFAULT_SUBJECT, SUBJECTS

# grade entry input is capped at three characters, e.g. "100" or "9.5"
MAX_GRADE_INPUT_LENGTH = 3


class GradesView:

    def __init__(self, gradebook: Gradebook):
        self.gradebook = gradebook
        self.grade_level = MIN_GRADE_LEVEL
        self.period = MIN_PERIOD
        self.subject = DEFAULT_SUBJECT
        self.grade_type = GradeType.TEST

    @property
    def title(self) -> str:
        return formatters.format_banner_text(
            f"Grade {self.grade_level} - Period {self.period} - {self.subject}"
        )

    def students(self) -> list[Student]:
        return self.gradebook.students_in_grade_level(self.grade_level)

    def grades_for(self, student: Student) -> list[GradeEntry]:
        return self.gradebook.grades_for(student.id, self.subject, self.period)

    def class_average(self) -> float | None:
        return self.gradebook.class_average(self.grade_level, self.subject, self.period)


def run(gradebook: Gradebook) -> None:
    """
    Top-level loop with dispatch for the Grades menu.

    Args:
        gradebook (Gradebook): The active `Gradebook`.
    """
    view = GradesView(gradebook)

    options = [
        ("Add Grade", lambda: add_grade(view)),
        ("Delete Grade", lambda: delete_grade(view)),
        ("Change Grade Level", lambda: change_grade_level(view)),
        ("Change Period", lambda: change_period(view)),
        ("Change Subject", lambda: change_subject(view)),
        ("Change Grade Type", lambda: change_grade_type(view)),
    ]

    while True:
        view_class(view)

        menu_response = helpers.display_menu(view.title, options, "Return to Main Menu")

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Main Menu")


# === view class ===


def view_class(view: GradesView) -> None:
    students = view.students()

    print(f"\n{view.title}")
    print(f"Entering: {view.grade_type.value} grades")

    if not students:
        print(f"\nThere are no students in grade {view.grade_level}.")
        return

    for student in students:
        print(
            model_formatters.format_student_row(
                student, view.gradebook, view.subject, view.period
            )
        )

    class_average = view.class_average()

    if class_average is not None:
        print(f"\nClass Average: {model_formatters.format_average(class_average)}")


# === add and delete grades ===


def add_grade(view: GradesView) -> None:
    """
    Prompts for a student and a grade value, and records it with the current type, subject, and period.

    Notes:
        - Input longer than three characters is truncated.
        - Blank input is ignored by the `Gradebook`.
    """
    student = helpers.prompt_selection_from_list(
        view.students(), "Students", model_formatters.format_student_oneline
    )

    if student is None:
        return

    value = helpers.prompt_user_input(
        f"Enter a {view.grade_type.value.lower()} grade for {student.name} (max {MAX_GRADE_INPUT_LENGTH} characters):"
    )[:MAX_GRADE_INPUT_LENGTH]

    gradebook_response = view.gradebook.record_grade(
        student.id, view.subject, view.period, value, view.grade_type
    )

    helpers.display_response(gradebook_response)


def delete_grade(view: GradesView) -> None:
    student = helpers.prompt_selection_from_list(
        view.students(), "Students", model_formatters.format_student_oneline
    )

    if student is None:
        return

    grade = helpers.prompt_selection_from_list(
        view.grades_for(student),
        f"Grades for {student.name}",
        model_formatters.format_grade_oneline,
    )

    if grade is None:
        return

    gradebook_response = view.gradebook.remove_grade(grade.id)

    helpers.display_response(gradebook_response)


# === change view filters ===


def change_grade_level(view: GradesView) -> None:
    level = helpers.prompt_int_in_range("Enter grade level", MIN_GRADE_LEVEL, MAX_GRADE_LEVEL)

    if level is not MenuSignal.CANCEL:
        view.grade_level = cast(int, level)


def change_period(view: GradesView) -> None:
    period = helpers.prompt_int_in_range("Enter period", MIN_PERIOD, MAX_PERIOD)

    if period is not MenuSignal.CANCEL:
        view.period = cast(int, period)


def change_subject(view: GradesView) -> None:
    subject = helpers.prompt_selection_from_list(list(SUBJECTS), "Subjects")

    if subject is not None:
        view.subject = subject


def change_grade_type(view: GradesView) -> None:
    grade_type = helpers.prompt_selection_from_list(
        list(GradeType), "Grade Types", lambda t: t.value
    )

    if grade_type is not None:
        view.grade_type = grade_type
