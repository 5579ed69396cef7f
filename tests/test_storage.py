# tests/test_storage.py

import json
import os
import tempfile

from core import storage
from core.storage import (
    GRADES_KEY,
    STUDENTS_KEY,
    WEIGHTS_KEY,
    JsonFileStore,
    MemoryStore,
)
from models.gradebook import Gradebook
from models.grade_entry import GradeType


def test_json_file_store_round_trip():
    with tempfile.TemporaryDirectory() as temp_dir:
        store = JsonFileStore(os.path.join(temp_dir, "data"))

        assert store.get(STUDENTS_KEY) is None

        store.set(STUDENTS_KEY, "[]")

        assert store.get(STUDENTS_KEY) == "[]"
        assert os.path.exists(os.path.join(temp_dir, "data", "students.json"))


def test_gradebook_persists_to_json_files():
    with tempfile.TemporaryDirectory() as temp_dir:
        gb = Gradebook.load(JsonFileStore(temp_dir)).data["gradebook"]
        ada = gb.add_student("Ada", 2).data["record"]
        gb.record_grade(ada.id, "Reading", 4, "88", GradeType.HOMEWORK)
        gb.set_weight(GradeType.HOMEWORK, 40)

        with open(os.path.join(temp_dir, "weights.json")) as f:
            assert json.load(f) == [50.0, 17.0, 40.0]

        reloaded = Gradebook.load(JsonFileStore(temp_dir)).data["gradebook"]

        assert list(reloaded.students.values()) == [ada]
        assert list(reloaded.grades.values()) == list(gb.grades.values())
        assert reloaded.weights == gb.weights


def test_missing_keys_fall_back_to_defaults():
    store = MemoryStore()

    assert storage.load_students(store) == []
    assert storage.load_grades(store) == []
    assert storage.load_weights(store).to_list() == [50.0, 17.0, 33.0]


def test_corrupt_data_falls_back_to_defaults(caplog):
    store = MemoryStore(
        {
            STUDENTS_KEY: "{not json",
            GRADES_KEY: json.dumps([{"id": "g1"}]),
            WEIGHTS_KEY: json.dumps([10, 20]),
        }
    )

    gb = Gradebook.load(store).data["gradebook"]

    assert gb.students == {}
    assert gb.grades == {}
    assert gb.weights.to_list() == [50.0, 17.0, 33.0]
    assert "Discarding unreadable 'students' data" in caplog.text


def test_overflowing_stored_key_falls_back_alone(caplog):
    grade = {
        "id": "g1",
        "studentId": "s2",
        "subject": "Math",
        "period": 1,
        "value": "90",
        "type": "Test",
    }
    store = MemoryStore(
        {
            STUDENTS_KEY: '[{"id": "s1", "name": "Ada", "gradeLevel": Infinity}]',
            GRADES_KEY: json.dumps([grade]),
            WEIGHTS_KEY: "[1" + "0" * 400 + ", 20, 30]",
        }
    )

    response = Gradebook.load(store)

    assert response.success
    gb = response.data["gradebook"]
    assert gb.students == {}
    assert list(gb.grades) == ["g1"]
    assert gb.weights.to_list() == [50.0, 17.0, 33.0]
    assert "Discarding unreadable 'students' data" in caplog.text
    assert "Discarding unreadable 'weights' data" in caplog.text


def test_deeply_nested_stored_key_falls_back():
    store = MemoryStore({STUDENTS_KEY: "[" * 100000})

    assert storage.load_students(store) == []


def test_wrong_json_shape_falls_back(caplog):
    store = MemoryStore({STUDENTS_KEY: json.dumps({"id": "s1"})})

    assert storage.load_students(store) == []


def test_duplicate_stored_ids_fall_back():
    record = {"id": "s1", "name": "Ada", "gradeLevel": 1}
    store = MemoryStore({STUDENTS_KEY: json.dumps([record, record])})

    assert storage.load_students(store) == []


def test_one_corrupt_key_does_not_affect_others():
    store = MemoryStore(
        {
            STUDENTS_KEY: json.dumps([{"id": "s1", "name": "Ada", "gradeLevel": 1}]),
            WEIGHTS_KEY: "garbage",
        }
    )

    gb = Gradebook.load(store).data["gradebook"]

    assert [s.name for s in gb.students.values()] == ["Ada"]
    assert gb.weights.to_list() == [50.0, 17.0, 33.0]


def test_weights_are_stored_as_fixed_order_list(default_weights):
    assert json.loads(storage.encode_weights(default_weights)) == [50.0, 17.0, 33.0]
