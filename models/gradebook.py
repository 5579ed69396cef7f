# models/gradebook.py

"""
The Gradebook model is the central data object of the program and represents the "source of truth" for all data records.

Students and grade entries are stored in insertion-ordered dictionaries keyed by id, alongside the three
per-type weights. Every successful mutation ends with an explicit commit step that writes each affected
collection to the backing key-value store and then notifies subscribers that the collection changed.

Provides functions for loading a Gradebook from a key-value store, mutating and querying students, grades,
and weights, computing weighted averages for a filtered view, and creating or restoring backup snapshots.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable

from core import grading, storage
from core.events import ChangeNotifier, Collection, Subscriber
from core.file_access import scoped_file_access
from core.response import ErrorCode, Response
from core.utils import generate_uuid
from models.backup import BackupPayload
from models.grade_entry import GradeEntry, GradeType
from models.student import Student
from models.weights import WeightConfig

logger = logging.getLogger(__name__)

Dispatcher = Callable[[Callable[[], None]], None]


def immediate_dispatch(fn: Callable[[], None]) -> None:
    fn()


class Gradebook:

    def __init__(
        self,
        store: storage.KeyValueStore,
        dispatcher: Dispatcher | None = None,
    ):
        self._store = store
        self._students: dict[str, Student] = {}
        self._grades: dict[str, GradeEntry] = {}
        self._weights: WeightConfig = WeightConfig()
        self._notifier = ChangeNotifier()
        self._dispatch: Dispatcher = dispatcher or immediate_dispatch

    # === properties ===

    # --- core data structures ---

    @property
    def students(self) -> dict[str, Student]:
        return self._students

    @property
    def grades(self) -> dict[str, GradeEntry]:
        return self._grades

    @property
    def weights(self) -> WeightConfig:
        # returns a copy; mutate through set_weight()
        return self._weights.copy()

    @property
    def store(self) -> storage.KeyValueStore:
        return self._store

    # === public classmethods ===

    @classmethod
    def load(
        cls,
        store: storage.KeyValueStore,
        dispatcher: Dispatcher | None = None,
    ) -> Response:
        """
        Loads previously persisted state from a key-value store and returns a `Gradebook` instance.

        Args:
            store (KeyValueStore): The backing store holding the "students", "weights", and "grades" keys.
            dispatcher (Dispatcher | None): Optional hook used to re-enter the main update context before a restore.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True in all normal cases, including empty or corrupt stored data.
                    - False only for unexpected errors.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "gradebook" (Gradebook): The loaded `Gradebook` object.

        Notes:
            - Missing or undecodable keys fall back to empty collections or the default weights {50, 17, 33}.
            - Loading does not write anything back to the store.
        """
        try:
            gradebook = cls(store, dispatcher)

            gradebook._students = {s.id: s for s in storage.load_students(store)}
            gradebook._weights = storage.load_weights(store)
            gradebook._grades = {g.id: g for g in storage.load_grades(store)}

        except Exception as e:
            logger.error(f"Failed to load gradebook: {e}")
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            return Response.succeed(
                data={
                    "gradebook": gradebook,
                },
            )

    # === change notification and commit ===

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Registers a callback that receives the `Collection` affected by each committed mutation.

        Returns:
            A function that cancels the subscription.
        """
        return self._notifier.subscribe(callback)

    def _commit(self, *collections: Collection) -> None:
        """
        Persists each affected collection, then notifies subscribers once per collection.

        Notes:
            - A failed write is logged and does not undo the in-memory mutation.
        """
        for collection in collections:
            self._persist(collection)

        for collection in collections:
            self._notifier.notify(collection)

    def _persist(self, collection: Collection) -> bool:
        try:
            match collection:
                case Collection.STUDENTS:
                    self._store.set(
                        storage.STUDENTS_KEY,
                        storage.encode_students(list(self._students.values())),
                    )
                case Collection.WEIGHTS:
                    self._store.set(
                        storage.WEIGHTS_KEY, storage.encode_weights(self._weights)
                    )
                case Collection.GRADES:
                    self._store.set(
                        storage.GRADES_KEY,
                        storage.encode_grades(list(self._grades.values())),
                    )

        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to persist {collection.value}: {e}")
            return False

        return True

    # === data accessors ===

    def find_student_by_uuid(self, uuid: str) -> Response:
        """
        Looks up a student by id.

        Returns:
            Response: On success, data["record"] holds the `Student`. On failure, `ErrorCode.NOT_FOUND` with status 404.
        """
        student = self._students.get(uuid)

        if student is None:
            return Response.fail(
                detail=f"No student found with id: {uuid}",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(data={"record": student})

    def weight_for(self, grade_type: GradeType) -> float:
        return self._weights.weight_for(grade_type)

    def students_in_grade_level(self, grade_level: int) -> list[Student]:
        return [s for s in self._students.values() if s.grade_level == grade_level]

    def grades_for(
        self,
        student_id: str,
        subject: str | None = None,
        period: int | None = None,
    ) -> list[GradeEntry]:
        """
        Returns a student's grade entries in insertion order, optionally narrowed to one subject and/or period.
        """
        return [
            g
            for g in self._grades.values()
            if g.student_id == student_id
            and (subject is None or g.subject == subject)
            and (period is None or g.period == period)
        ]

    def student_average(
        self,
        student_id: str,
        subject: str | None = None,
        period: int | None = None,
    ) -> float | None:
        """
        Computes a student's weighted average over the filtered entries.

        Returns:
            The weighted average, or None if the student does not exist or has no parsable grades in the view.

        Notes:
            - Entries referencing a removed student are never averaged.
        """
        if student_id not in self._students:
            return None

        return grading.weighted_average(
            self.grades_for(student_id, subject, period), self._weights
        )

    def class_average(
        self,
        grade_level: int,
        subject: str | None = None,
        period: int | None = None,
    ) -> float | None:
        return grading.class_average(
            self.students_in_grade_level(grade_level),
            lambda s: self.student_average(s.id, subject, period),
        )

    def snapshot(self) -> BackupPayload:
        return BackupPayload(
            students=list(self._students.values()),
            weights=self._weights.copy(),
            grades=list(self._grades.values()),
        )

    # === data manipulators ===

    # --- student manipulation ---

    def add_student(self, name: str, grade_level: int) -> Response:
        """
        Creates a new `Student` with a fresh id and appends it to the gradebook.

        Args:
            name (str): The student's name. Surrounding whitespace is trimmed.
            grade_level (int): The student's grade level, 1 through 10.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the student was added, or if the name was blank (no-op).
                    - False if the grade level is invalid or unexpected errors occur.
                - detail (str | None):
                    - A human-readable description of the result.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if the grade level fails validation.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - data (dict | None): Payload with the following keys:
                    - On success (when a student was added):
                        - "record" (Student): The new `Student` object.

        Notes:
            - This method mutates `Gradebook` state and commits the students collection if successful.
            - A blank name is silently ignored rather than reported as an error.
        """
        if isinstance(name, str) and not name.strip():
            return Response.no_change("Student name is blank.")

        try:
            student = Student(generate_uuid(), name, grade_level)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            self._students[student.id] = student
            self._commit(Collection.STUDENTS)

            return Response.succeed(
                detail="Student successfully added to the gradebook.",
                data={
                    "record": student,
                },
            )

    def remove_students(self, student_ids: Iterable[str]) -> Response:
        """
        Removes the given students and every `GradeEntry` linked to them.

        Args:
            student_ids (Iterable[str]): Ids of the students to remove. Unknown ids are ignored.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True; removing unknown ids is a no-op.
                - detail (str | None): A simple confirmation message.
                - data (dict | None): Payload with the following keys:
                    - "removed" (list[str]): Ids of the students actually removed.
                    - "grades_removed" (int): Number of linked grade entries removed.

        Notes:
            - Linked grade entries are removed in the same commit as the students.
            - Both the students and grades collections are committed when anything is removed.
        """
        removed = [sid for sid in dict.fromkeys(student_ids) if sid in self._students]

        if not removed:
            return Response.no_change(
                "No matching students found.",
                data={"removed": [], "grades_removed": 0},
            )

        removed_ids = set(removed)

        for student_id in removed:
            del self._students[student_id]

        linked = [g.id for g in self._grades.values() if g.student_id in removed_ids]
        for grade_id in linked:
            del self._grades[grade_id]

        self._commit(Collection.STUDENTS, Collection.GRADES)

        return Response.succeed(
            detail=f"{len(removed)} student(s) successfully removed from the gradebook.",
            data={
                "removed": removed,
                "grades_removed": len(linked),
            },
        )

    def remove_students_at(self, positions: Iterable[int]) -> Response:
        """
        Removes students by their position in display (insertion) order.

        Notes:
            - Out-of-range positions are ignored.
            - Delegates to `remove_students()`.
        """
        ordered_ids = list(self._students)

        return self.remove_students(
            ordered_ids[i] for i in positions if 0 <= i < len(ordered_ids)
        )

    # --- grade manipulation ---

    def add_grade(self, entry: GradeEntry) -> Response:
        """
        Appends a `GradeEntry` to the gradebook as-is.

        Args:
            entry (GradeEntry): The entry to add. The caller supplies the student id, subject, period, type, and value.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the entry was added, or if its value was blank (no-op).
                    - False if an entry with the same id already exists.
                - detail (str | None):
                    - A human-readable description of the result.
                - error (ErrorCode | str | None):
                    - `ErrorCode.VALIDATION_FAILED` if the id is not unique.
                    - `ErrorCode.INVALID_INPUT` if the argument is not a `GradeEntry`.
                - data (dict | None): Payload with the following keys:
                    - On success (when an entry was added):
                        - "record" (GradeEntry): The added entry.

        Notes:
            - This method mutates `Gradebook` state and commits the grades collection if successful.
            - The student id is not checked; entries without a matching student are excluded from averages.
        """
        if not isinstance(entry, GradeEntry):
            return Response.fail(
                detail=f"Expected a GradeEntry, got: {type(entry).__name__}",
                error=ErrorCode.INVALID_INPUT,
            )

        if entry.is_blank:
            return Response.no_change("Grade value is blank.")

        if entry.id in self._grades:
            return Response.fail(
                detail=f"A grade entry with the id '{entry.id}' already exists.",
                error=ErrorCode.VALIDATION_FAILED,
            )

        self._grades[entry.id] = entry
        self._commit(Collection.GRADES)

        return Response.succeed(
            detail="Grade successfully added to the gradebook.",
            data={
                "record": entry,
            },
        )

    def record_grade(
        self,
        student_id: str,
        subject: str,
        period: int,
        value: str,
        grade_type: GradeType,
    ) -> Response:
        """
        Builds a new `GradeEntry` with a fresh id from the given fields and adds it.

        Notes:
            - The value is trimmed first; blank values are a no-op.
            - Invalid subject, period, or type values produce `ErrorCode.INVALID_FIELD_VALUE`.
        """
        value = value.strip() if isinstance(value, str) else value

        if value == "":
            return Response.no_change("Grade value is blank.")

        try:
            entry = GradeEntry(
                id=generate_uuid(),
                student_id=student_id,
                subject=subject,
                period=period,
                value=value,
                grade_type=grade_type,
            )

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        return self.add_grade(entry)

    def remove_grade(self, grade_id: str) -> Response:
        if grade_id not in self._grades:
            return Response.no_change("No matching grade entry found.")

        del self._grades[grade_id]
        self._commit(Collection.GRADES)

        return Response.succeed(detail="Grade successfully removed from the gradebook.")

    # --- weight manipulation ---

    def set_weight(self, grade_type: GradeType, weight: float | str) -> Response:
        """
        Updates the weight for one grade type.

        Args:
            grade_type (GradeType): The type whose weight is updated.
            weight (float | str): The new weight. Values outside 0-100 are clamped.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the weight was updated or already had that value.
                    - False if the weight is not a finite number or the type is unknown.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if validation fails.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "weight" (float): The stored (clamped) weight.

        Notes:
            - Weights are independent; no rule forces the three to sum to 100.
            - This method commits the weights collection only if the stored value changes.
        """
        try:
            grade_type = GradeEntry.validate_grade_type_input(grade_type)
            new_weight = WeightConfig.validate_weight_input(weight)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Weight validation failed: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        if self._weights.weight_for(grade_type) == new_weight:
            return Response.no_change(
                "The weight provided matches the current one.",
                data={"weight": new_weight},
            )

        self._weights.set_weight(grade_type, new_weight)
        self._commit(Collection.WEIGHTS)

        return Response.succeed(
            detail=f"{grade_type.value} weight successfully updated to: {new_weight}.",
            data={
                "weight": new_weight,
            },
        )

    # === backup and restore ===

    def create_backup(self, export_dir: str | None = None) -> Response:
        """
        Serializes a snapshot of the gradebook and writes it to `backup.json`.

        Args:
            export_dir (str | None): Directory for the backup file. Defaults to the system temporary directory.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the snapshot was serialized and written.
                    - False for serialization or disk errors.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if serialization fails.
                    - `ErrorCode.INTERNAL_ERROR` if the file cannot be written.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "backup" (bytes): The serialized snapshot.
                        - "path" (str): The path of the written file.

        Notes:
            - This method is read-only with respect to gradebook state.
        """
        try:
            data = storage.encode_backup(self.snapshot())
            path = storage.write_backup_file(data, export_dir)

        except (TypeError, ValueError) as e:
            logger.error(f"Failed to create backup file: {e}")
            return Response.fail(
                detail=f"Object not JSON serializable: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except OSError as e:
            logger.error(f"Failed to create backup file: {e}")
            return Response.fail(
                detail=f"Failed to write backup to disk: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        logger.info(f"Backup written to {path}")

        return Response.succeed(
            detail="Backup successfully created.",
            data={
                "backup": data,
                "path": path,
            },
        )

    def restore_backup(self, data: bytes | str) -> Response:
        """
        Replaces all gradebook state with a serialized backup snapshot.

        Args:
            data (bytes | str): The contents of a backup file.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the snapshot was decoded and applied.
                    - False if the data could not be decoded; state is left untouched.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_INPUT` if the data is not valid UTF-8 JSON or nests too deeply to parse.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the document does not match the backup format.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "backup" (BackupPayload): The decoded snapshot.

        Notes:
            - Students, all three weights, and grades are swapped together inside a single dispatched call,
              then all three collections are committed.
            - Failures are logged and reported, never raised.
        """
        try:
            payload = storage.decode_backup(data)

        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
            logger.error(f"Failed to restore backup: {e}")
            return Response.fail(
                detail=f"Failed to parse backup data: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Failed to restore backup: {e!r}")
            return Response.fail(
                detail=f"Invalid backup contents: {e!r}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        self._dispatch(lambda: self._apply_backup(payload))

        return Response.succeed(
            detail="Backup successfully restored.",
            data={
                "backup": payload,
            },
        )

    def restore_backup_file(self, path: str) -> Response:
        """
        Reads a backup file under scoped file access and restores it.

        Notes:
            - The access token is released whether or not the read succeeds.
            - Access and read failures return `ErrorCode.INTERNAL_ERROR`, leaving state untouched.
        """
        try:
            with scoped_file_access(path):
                data = storage.read_backup_file(path)

        except OSError as e:
            logger.error(f"Couldn't access file at: {path}: {e}")
            return Response.fail(
                detail=f"Failed to read backup file: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        return self.restore_backup(data)

    def _apply_backup(self, payload: BackupPayload) -> None:
        self._students = {s.id: s for s in payload.students}
        self._weights = payload.weights.copy()
        self._grades = {g.id: g for g in payload.grades}

        self._commit(Collection.STUDENTS, Collection.WEIGHTS, Collection.GRADES)

        logger.info(
            f"Restored backup: {len(self._students)} students, {len(self._grades)} grades"
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Gradebook({len(self._students)} students, {len(self._grades)} grades, {self._weights!r})"
