# cli/menus/settings_menu.py

"""
Settings menu for the Gradebook CLI.

This module defines the interface for:
- Adding students to a grade level
- Removing students (and, with them, all of their grades)
- Adjusting the Test, Quiz, and Homework weights
- Creating a backup file and restoring from one

All operations are routed through the `Gradebook` API; this module only collects input and reports results.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.path_utils import normalize_backup_path
from models.grade_entry import GradeType
from models.gradebook import Gradebook
from models.student import MAX_GRADE_LEVEL, MIN_GRADE_LEVEL


def run(gradebook: Gradebook) -> None:
    """
    Top-level loop with dispatch for the Settings menu.

    Args:
        gradebook (Gradebook): The active `Gradebook`.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("Settings")
    options = [
        ("Add Student", lambda: add_student(gradebook)),
        ("Remove Student", lambda: remove_student(gradebook)),
        ("View Students", lambda: view_students(gradebook)),
        ("Adjust Weights", lambda: adjust_weights(gradebook)),
        ("Create Backup", lambda: create_backup(gradebook)),
        ("Restore Backup", lambda: restore_backup(gradebook)),
    ]

    helpers.run_menu_loop(title, options, "Return to Main Menu")

    helpers.returning_to("Main Menu")


# === students ===


def add_student(gradebook: Gradebook) -> None:
    name = helpers.prompt_user_input_or_cancel("Enter student name (leave blank to cancel):")

    if name is MenuSignal.CANCEL:
        return
    name = cast(str, name)

    grade_level = helpers.prompt_int_in_range("Enter grade level", MIN_GRADE_LEVEL, MAX_GRADE_LEVEL)

    if grade_level is MenuSignal.CANCEL:
        return

    gradebook_response = gradebook.add_student(name, cast(int, grade_level))

    helpers.display_response(gradebook_response)


def remove_student(gradebook: Gradebook) -> None:
    """
    Prompts for a student and removes them after confirmation.

    Notes:
        - Removal cascades to every grade entry recorded for the student.
    """
    student = helpers.prompt_selection_from_list(
        list(gradebook.students.values()),
        "Students",
        model_formatters.format_student_oneline,
    )

    if student is None:
        return

    print(f"\n{model_formatters.format_student_multiline(student)}")

    if not helpers.confirm_action(
        f"Remove {student.name} and all of their grades? This cannot be undone."
    ):
        print(f"\n{student.name} was not removed.")
        return

    gradebook_response = gradebook.remove_students([student.id])

    helpers.display_response(gradebook_response)


def view_students(gradebook: Gradebook) -> None:
    students = list(gradebook.students.values())

    if not students:
        print("\nNo students added yet.")
        return

    print(f"\n{formatters.format_banner_text('Students')}")
    helpers.display_results(students, True, model_formatters.format_student_oneline)


# === weights ===


def adjust_weights(gradebook: Gradebook) -> None:
    print(f"\n{formatters.format_banner_text('Assignment Weights')}")
    print(model_formatters.format_weights_multiline(gradebook.weights))

    grade_type = helpers.prompt_selection_from_list(
        list(GradeType), "Grade Types", lambda t: t.value
    )

    if grade_type is None:
        return

    weight = helpers.prompt_int_in_range(f"Enter {grade_type.value} weight", 0, 100)

    if weight is MenuSignal.CANCEL:
        return

    gradebook_response = gradebook.set_weight(grade_type, cast(int, weight))

    helpers.display_response(gradebook_response)
    print(model_formatters.format_weights_multiline(gradebook.weights))


# === backup and restore ===


def create_backup(gradebook: Gradebook) -> None:
    export_dir = helpers.prompt_user_input_or_none(
        "Enter a directory for the backup (leave blank to use the temporary directory):"
    )

    if export_dir is not None:
        export_dir = normalize_backup_path(export_dir)

    gradebook_response = gradebook.create_backup(export_dir)

    if not gradebook_response.success:
        helpers.display_response_failure(gradebook_response)
        return

    print(f"\nBackup written to: {gradebook_response.data['path']}")


def restore_backup(gradebook: Gradebook) -> None:
    path = helpers.prompt_user_input_or_cancel(
        "Enter the path of the backup file (leave blank to cancel):"
    )

    if path is MenuSignal.CANCEL:
        return
    path = normalize_backup_path(cast(str, path))

    if not helpers.confirm_action(
        "Restoring replaces all students, weights, and grades. Do you wish to continue?"
    ):
        return

    gradebook_response = gradebook.restore_backup_file(path)

    helpers.display_response(gradebook_response)
