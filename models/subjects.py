# models/subjects.py

"""
The fixed catalog of subjects a grade entry can be recorded against.

The catalog is closed: it is not user-extensible and `GradeEntry` rejects anything outside it.
"""

SUBJECTS: tuple[str, ...] = (
    "Algebra",
    "Art",
    "Bible",
    "English",
    "Health",
    "History",
    "Literature",
    "Math",
    "Memory",
    "Music",
    "Penmanship",
    "Phonics",
    "Reading",
    "Recordkeeping",
    "Science",
    "Social Studies",
    "Spanish",
    "Spelling",
    "Typing",
    "Writing",
)

DEFAULT_SUBJECT = "Math"


def is_known_subject(subject: str) -> bool:
    return subject in SUBJECTS
