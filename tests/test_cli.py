# tests/test_cli.py

import os
import tempfile

import pytest

from cli import model_formatters
from cli.main import load_gradebook
from cli.menus import grades_menu, settings_menu
from models.grade_entry import GradeType


def feed_input(monkeypatch, responses):
    answers = iter(responses)
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))


def test_add_student_from_settings(monkeypatch, sample_gradebook):
    feed_input(monkeypatch, ["Ada Lovelace", "4"])

    settings_menu.add_student(sample_gradebook)

    assert [s.name for s in sample_gradebook.students.values()] == ["Ada Lovelace"]


def test_grade_level_prompt_retries_until_valid(monkeypatch, sample_gradebook):
    feed_input(monkeypatch, ["Ada", "12", "zero", "3"])

    settings_menu.add_student(sample_gradebook)

    assert list(sample_gradebook.students.values())[0].grade_level == 3


def test_remove_student_from_settings(monkeypatch, populated_gradebook):
    feed_input(monkeypatch, ["2", "y"])

    settings_menu.remove_student(populated_gradebook)

    names = [s.name for s in populated_gradebook.students.values()]
    assert names == ["Ada Lovelace", "Grace Hopper"]


def test_adjust_weight_from_settings(monkeypatch, sample_gradebook):
    feed_input(monkeypatch, ["3", "40"])

    settings_menu.adjust_weights(sample_gradebook)

    assert sample_gradebook.weight_for(GradeType.HOMEWORK) == 40.0


def test_add_grade_truncates_input(monkeypatch, populated_gradebook):
    view = grades_menu.GradesView(populated_gradebook)
    view.grade_level = 5
    feed_input(monkeypatch, ["1", "1000"])

    grades_menu.add_grade(view)

    grace = populated_gradebook.students_in_grade_level(5)[0]
    assert [g.value for g in view.grades_for(grace)] == ["100"]


def test_add_blank_grade_is_ignored(monkeypatch, populated_gradebook):
    view = grades_menu.GradesView(populated_gradebook)
    view.grade_level = 5
    before = len(populated_gradebook.grades)
    feed_input(monkeypatch, ["1", ""])

    grades_menu.add_grade(view)

    assert len(populated_gradebook.grades) == before


def test_delete_grade_from_grades_menu(monkeypatch, populated_gradebook):
    view = grades_menu.GradesView(populated_gradebook)
    ada = populated_gradebook.students_in_grade_level(4)[0]
    feed_input(monkeypatch, ["1", "2"])

    grades_menu.delete_grade(view)

    assert [g.grade_type for g in view.grades_for(ada)] == [GradeType.TEST]


def test_view_class_prints_averages(capsys, populated_gradebook):
    view = grades_menu.GradesView(populated_gradebook)
    view.grade_level = 4

    grades_menu.view_class(view)

    output = capsys.readouterr().out
    assert "Ada Lovelace" in output
    assert "85.0" in output
    assert "Class Average:" in output


def test_backup_and_restore_from_settings(monkeypatch, populated_gradebook, second_gradebook):
    with tempfile.TemporaryDirectory() as temp_dir:
        feed_input(monkeypatch, [temp_dir])
        settings_menu.create_backup(populated_gradebook)

        feed_input(monkeypatch, [os.path.join(temp_dir, "backup.json"), "y"])
        settings_menu.restore_backup(second_gradebook)

    assert len(second_gradebook.students) == 3


def test_load_gradebook_from_data_dir():
    with tempfile.TemporaryDirectory() as temp_dir:
        data_dir = os.path.join(temp_dir, "gradebook")

        gradebook = load_gradebook(data_dir)

        assert gradebook is not None
        assert os.path.isdir(data_dir)


@pytest.mark.parametrize(
    "average, expected",
    [(None, "[NO AVERAGE]"), (85.0, "85.0 C+"), (100.0, "100.0 A+")],
)
def test_format_average(average, expected):
    assert model_formatters.format_average(average) == expected
