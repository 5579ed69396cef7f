# core/storage.py

"""
Persistence for gradebook state: a small key-value store plus the backup file format.

Local state is kept under three keys:
- "students": a JSON list of serialized `Student` records
- "weights": a JSON list of exactly three numbers, [test, quiz, homework]
- "grades": a JSON list of serialized `GradeEntry` records

Each key is rewritten whenever its collection changes. Reading is forgiving: a missing key,
malformed JSON, or records that fail validation are logged and treated as "no data", falling back
to an empty collection or the default weights.

Backups are a single JSON document (see `models.backup.BackupPayload`) encoded to UTF-8 bytes.
Unlike local state, backup decoding is strict and raises, so that a bad file never replaces
good in-memory data.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Callable, TypeVar

from models.backup import BackupPayload
from models.grade_entry import GradeEntry
from models.student import Student
from models.weights import WeightConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

STUDENTS_KEY = "students"
WEIGHTS_KEY = "weights"
GRADES_KEY = "grades"

BACKUP_FILENAME = "backup.json"


def dumps(data: Any) -> str:
    return json.dumps(data, indent=2, sort_keys=True)


# === key-value stores ===


class KeyValueStore:
    """
    Minimal string key-value store interface.

    Notes:
        - `get()` returns None when the key has never been written.
        - `set()` overwrites any existing value.
    """

    def get(self, key: str) -> str | None:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStore(KeyValueStore):
    """
    Stores each key as `<key>.json` inside a directory.

    Args:
        dir_path (str): The directory holding the key files. Created on first write if missing.
    """

    def __init__(self, dir_path: str):
        self._dir_path = dir_path

    def path_for(self, key: str) -> str:
        return os.path.join(self._dir_path, f"{key}.json")

    def get(self, key: str) -> str | None:
        try:
            with open(self.path_for(key), "r", encoding="utf-8") as f:
                return f.read()

        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        os.makedirs(self._dir_path, exist_ok=True)

        with open(self.path_for(key), "w", encoding="utf-8") as f:
            f.write(value)

        logger.debug(f"Wrote {key} to {self.path_for(key)}")


# === local state encoding ===


def encode_students(students: list[Student]) -> str:
    return dumps([s.to_dict() for s in students])


def encode_grades(grades: list[GradeEntry]) -> str:
    return dumps([g.to_dict() for g in grades])


def encode_weights(weights: WeightConfig) -> str:
    return dumps(weights.to_list())


def decode_students(raw: str) -> list[Student]:
    students = _decode_record_list(raw, Student.from_dict)
    BackupPayload.require_unique_ids(students, "student")
    return students


def decode_grades(raw: str) -> list[GradeEntry]:
    grades = _decode_record_list(raw, GradeEntry.from_dict)
    BackupPayload.require_unique_ids(grades, "grade")
    return grades


def decode_weights(raw: str) -> WeightConfig:
    return WeightConfig.from_list(json.loads(raw))


def _decode_record_list(raw: str, from_dict_fn: Callable[[dict], T]) -> list[T]:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("Expected a JSON list of records.")
    return [from_dict_fn(record) for record in data]


def _load_key(
    store: KeyValueStore,
    key: str,
    decode_fn: Callable[[str], T],
    fallback: Callable[[], T],
) -> T:
    """
    Reads and decodes one key, falling back to a default on any failure.

    Notes:
        - Missing keys fall back silently; unreadable or undecodable data is logged as a warning.
        - This method never raises for bad stored data.
    """
    try:
        raw = store.get(key)
        if raw is None:
            return fallback()
        return decode_fn(raw)

    except (
        OSError,
        ValueError,
        TypeError,
        KeyError,
        OverflowError,
        RecursionError,
    ) as e:
        logger.warning(f"Discarding unreadable '{key}' data: {e}")
        return fallback()


def load_students(store: KeyValueStore) -> list[Student]:
    return _load_key(store, STUDENTS_KEY, decode_students, list)


def load_grades(store: KeyValueStore) -> list[GradeEntry]:
    return _load_key(store, GRADES_KEY, decode_grades, list)


def load_weights(store: KeyValueStore) -> WeightConfig:
    return _load_key(store, WEIGHTS_KEY, decode_weights, WeightConfig)


# === backup encoding ===


def encode_backup(payload: BackupPayload) -> bytes:
    return dumps(payload.to_dict()).encode("utf-8")


def decode_backup(data: bytes | str) -> BackupPayload:
    """
    Decodes backup bytes into a `BackupPayload`.

    Raises:
        json.JSONDecodeError: If the data is not valid JSON (a subclass of ValueError).
        UnicodeDecodeError: If the bytes are not UTF-8 (a subclass of ValueError).
        KeyError, TypeError, ValueError: If the document does not match the backup format.
    """
    if isinstance(data, (bytes, bytearray)):
        data = data.decode("utf-8")

    return BackupPayload.from_dict(json.loads(data))


def default_export_dir() -> str:
    return tempfile.gettempdir()


def write_backup_file(data: bytes, export_dir: str | None = None) -> str:
    """
    Writes encoded backup bytes to `backup.json` in the export directory.

    Args:
        data (bytes): The encoded backup.
        export_dir (str | None): Target directory. Defaults to the system temporary directory.

    Returns:
        The path of the written file.

    Raises:
        OSError: If the file cannot be written.
    """
    path = os.path.join(export_dir or default_export_dir(), BACKUP_FILENAME)

    with open(path, "wb") as f:
        f.write(data)

    return path


def read_backup_file(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()
