# cli/main.py

"""
Main Menu for the Gradebook CLI.

Loads the Gradebook from its data directory and dispatches to the Grades and Settings menus.
"""

import logging

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import grades_menu, settings_menu
from cli.path_utils import resolve_data_dir
from core.storage import JsonFileStore
from models.gradebook import Gradebook

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int = logging.WARNING) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def load_gradebook(data_dir: str | None = None) -> Gradebook | None:
    """
    Loads the `Gradebook` stored in the data directory.

    Args:
        data_dir (str | None): Optional directory path. Defaults to `~/Documents/Gradebook`.

    Returns:
        The loaded `Gradebook`, or None if loading failed.

    Notes:
        - Missing or corrupt data files load as an empty gradebook with default weights.
    """
    store = JsonFileStore(resolve_data_dir(data_dir))

    gradebook_response = Gradebook.load(store)

    if not gradebook_response.success:
        helpers.display_response_failure(gradebook_response)
        return None

    return gradebook_response.data["gradebook"]


def run_cli(data_dir: str | None = None) -> None:
    """
    Top-level loop with dispatch for the Main menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    configure_logging()

    gradebook = load_gradebook(data_dir)

    if gradebook is None:
        exit_program()

    title = formatters.format_banner_text("GRADEBOOK")
    options = [
        ("Grades", lambda: grades_menu.run(gradebook)),
        ("Settings", lambda: settings_menu.run(gradebook)),
    ]

    while True:
        menu_response = helpers.display_menu(title, options, "Exit Program")

        if menu_response is MenuSignal.EXIT:
            exit_program()

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.

    Notes:
        - Every mutation is already persisted, so there is nothing to save on exit.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
