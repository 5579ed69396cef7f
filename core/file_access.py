# core/file_access.py

"""
Scoped read access to files chosen by the user for import.

A `FileAccessToken` is acquired before a backup file is read and released afterwards, whether
or not the read succeeded. `scoped_file_access()` wraps that pairing in a context manager.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class FileAccessToken:

    def __init__(self, path: str):
        self._path = path
        self._held = False

    @property
    def is_held(self) -> bool:
        return self._held

    def acquire(self) -> None:
        """
        Acquires read access to the file.

        Raises:
            FileNotFoundError: If the path is not an existing file.
            PermissionError: If the file exists but is not readable.
        """
        if not os.path.isfile(self._path):
            raise FileNotFoundError(f"No such file: {self._path}")

        if not os.access(self._path, os.R_OK):
            raise PermissionError(f"Couldn't access file at: {self._path}")

        self._held = True
        logger.debug(f"Acquired file access: {self._path}")

    def release(self) -> None:
        if self._held:
            self._held = False
            logger.debug(f"Released file access: {self._path}")


@contextmanager
def scoped_file_access(path: str) -> Iterator[FileAccessToken]:
    token = FileAccessToken(path)
    token.acquire()

    try:
        yield token

    finally:
        token.release()
