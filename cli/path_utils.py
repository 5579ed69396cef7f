# cli/path_utils.py

import os

DEFAULT_DATA_DIR_NAME = "Gradebook"


def get_data_dir(user_input: str | None) -> str:
    """
    Resolves the directory holding the gradebook's key files.

    Args:
        user_input (str | None): An optional user-specified directory path. If None or blank, the default path is used.

    Returns:
        A resolved path string. If user input is provided, it is expanded and returned directly.
        Otherwise, defaults to: `~/Documents/Gradebook`.
    """
    if user_input is not None and user_input.strip():
        return os.path.abspath(os.path.expanduser(user_input.strip()))

    documents = os.path.join(os.path.expanduser("~"), "Documents")
    return os.path.join(documents, DEFAULT_DATA_DIR_NAME)


def resolve_data_dir(user_input: str | None) -> str:
    """
    Produces and ensures a valid data directory path.

    Notes:
        - Creates the directory path on disk (including parent directories) if it does not exist.
    """
    data_dir = get_data_dir(user_input)

    os.makedirs(data_dir, exist_ok=True)

    return data_dir


def normalize_backup_path(path_input: str) -> str:
    return os.path.abspath(os.path.expanduser(path_input.strip()))
