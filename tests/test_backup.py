# tests/test_backup.py

import json
import os
import tempfile

import pytest

from core import storage
from core.response import ErrorCode
from models.backup import BackupPayload
from models.grade_entry import GradeType
from models.gradebook import Gradebook


def test_backup_format(populated_gradebook):
    with tempfile.TemporaryDirectory() as temp_dir:
        response = populated_gradebook.create_backup(temp_dir)

        assert response.success
        assert response.data["path"] == os.path.join(temp_dir, "backup.json")

        with open(response.data["path"], "rb") as f:
            assert f.read() == response.data["backup"]

    document = json.loads(response.data["backup"])

    assert set(document) == {
        "students",
        "testWeight",
        "quizWeight",
        "homeworkWeight",
        "grades",
    }
    assert document["testWeight"] == 50.0
    assert set(document["students"][0]) == {"id", "name", "gradeLevel"}
    assert set(document["grades"][0]) == {
        "id",
        "studentId",
        "subject",
        "period",
        "value",
        "type",
    }
    assert document["grades"][0]["type"] == "Test"


def test_backup_defaults_to_temporary_directory(sample_gradebook):
    response = sample_gradebook.create_backup()

    assert response.success
    assert os.path.dirname(response.data["path"]) == tempfile.gettempdir()


def test_backup_write_failure_is_reported(sample_gradebook, caplog):
    with tempfile.TemporaryDirectory() as temp_dir:
        missing_dir = os.path.join(temp_dir, "missing")

        response = sample_gradebook.create_backup(missing_dir)

    assert not response.success
    assert response.error is ErrorCode.INTERNAL_ERROR
    assert "backup" not in response.data
    assert "Failed to create backup file" in caplog.text


def test_restore_round_trip_is_byte_identical(populated_gradebook, second_gradebook):
    original = populated_gradebook
    with tempfile.TemporaryDirectory() as temp_dir:
        backup = original.create_backup(temp_dir).data["backup"]

        response = second_gradebook.restore_backup(backup)
        assert response.success

        restored_backup = second_gradebook.create_backup(temp_dir).data["backup"]

    assert restored_backup == backup
    assert list(second_gradebook.students.values()) == list(original.students.values())
    assert list(second_gradebook.grades.values()) == list(original.grades.values())
    assert second_gradebook.weights == original.weights


def test_restore_replaces_all_state(populated_gradebook, second_gradebook, second_store):
    second_gradebook.add_student("Someone Else", 9)
    second_gradebook.set_weight(GradeType.TEST, 10)

    backup = storage.encode_backup(populated_gradebook.snapshot())
    second_gradebook.restore_backup(backup)

    assert [s.name for s in second_gradebook.students.values()] == [
        "Ada Lovelace",
        "Alan Turing",
        "Grace Hopper",
    ]
    assert second_gradebook.weight_for(GradeType.TEST) == 50.0
    assert len(second_gradebook.grades) == 5

    # restored state is written back to local storage
    assert storage.load_students(second_store) == list(second_gradebook.students.values())
    assert storage.load_weights(second_store) == second_gradebook.weights
    assert storage.load_grades(second_store) == list(second_gradebook.grades.values())


def test_restore_notifies_every_collection(populated_gradebook, second_gradebook):
    events = []
    second_gradebook.subscribe(events.append)

    second_gradebook.restore_backup(storage.encode_backup(populated_gradebook.snapshot()))

    assert [e.value for e in events] == ["students", "weights", "grades"]


@pytest.mark.parametrize(
    "data, error",
    [
        (b"{not json", ErrorCode.INVALID_INPUT),
        (b"\xff\xfe\x00", ErrorCode.INVALID_INPUT),
        (b"[]", ErrorCode.INVALID_FIELD_VALUE),
        (b'{"students": []}', ErrorCode.INVALID_FIELD_VALUE),
        (
            b'{"students": [], "grades": [], "testWeight": "x", "quizWeight": 1, "homeworkWeight": 1}',
            ErrorCode.INVALID_FIELD_VALUE,
        ),
        (
            b'{"students": [{"id": "s1", "name": "", "gradeLevel": 1}], "grades": [], '
            b'"testWeight": 1, "quizWeight": 1, "homeworkWeight": 1}',
            ErrorCode.INVALID_FIELD_VALUE,
        ),
        (
            b'{"students": [{"id": "s1", "name": "Ada", "gradeLevel": Infinity}], "grades": [], '
            b'"testWeight": 1, "quizWeight": 1, "homeworkWeight": 1}',
            ErrorCode.INVALID_FIELD_VALUE,
        ),
        (
            b'{"students": [], "grades": [], "testWeight": 1' + b"0" * 400
            + b', "quizWeight": 1, "homeworkWeight": 1}',
            ErrorCode.INVALID_FIELD_VALUE,
        ),
        (b"[" * 100000, ErrorCode.INVALID_INPUT),
    ],
)
def test_restore_malformed_backup_leaves_state_unchanged(
    populated_gradebook, data, error, caplog
):
    gb = populated_gradebook
    before = storage.encode_backup(gb.snapshot())
    events = []
    gb.subscribe(events.append)

    response = gb.restore_backup(data)

    assert not response.success
    assert response.error is error
    assert storage.encode_backup(gb.snapshot()) == before
    assert events == []
    assert "Failed to restore backup" in caplog.text


def test_restore_rejects_duplicate_ids(populated_gradebook, second_gradebook):
    document = populated_gradebook.snapshot().to_dict()
    document["grades"].append(document["grades"][0])

    response = second_gradebook.restore_backup(json.dumps(document))

    assert not response.success
    assert second_gradebook.grades == {}


def test_restore_uses_dispatcher(populated_gradebook, second_store):
    pending = []
    gb = Gradebook.load(second_store, dispatcher=pending.append).data["gradebook"]

    response = gb.restore_backup(storage.encode_backup(populated_gradebook.snapshot()))

    assert response.success
    assert gb.students == {}
    assert len(pending) == 1

    pending[0]()

    assert len(gb.students) == 3
    assert len(gb.grades) == 5


def test_restore_backup_file(populated_gradebook, second_gradebook):
    with tempfile.TemporaryDirectory() as temp_dir:
        path = populated_gradebook.create_backup(temp_dir).data["path"]

        response = second_gradebook.restore_backup_file(path)

    assert response.success
    assert len(second_gradebook.students) == 3


def test_restore_missing_backup_file(populated_gradebook, caplog):
    response = populated_gradebook.restore_backup_file("/no/such/backup.json")

    assert not response.success
    assert response.error is ErrorCode.INTERNAL_ERROR
    assert len(populated_gradebook.students) == 3


def test_backup_payload_equality(populated_gradebook):
    snapshot = populated_gradebook.snapshot()

    assert BackupPayload.from_dict(snapshot.to_dict()) == snapshot
