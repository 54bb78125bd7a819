"""Command-line options of the terminal interface."""

from __future__ import annotations

import argparse

APP_NAME = "taskwarrior-tui"
APP_VERSION = "0.26.4"


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the ``taskwarrior-tui`` command."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="A taskwarrior terminal user interface",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"{APP_NAME} {APP_VERSION}",
    )
    parser.add_argument(
        "-d",
        "--data",
        metavar="FOLDER",
        help="Sets the data folder for taskwarrior-tui",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="FOLDER",
        help="Sets the config folder for taskwarrior-tui (currently not used)",
    )
    parser.add_argument(
        "--taskdata",
        metavar="FOLDER",
        help="Sets the .task folder using the TASKDATA environment variable for taskwarrior",
    )
    parser.add_argument(
        "--taskrc",
        metavar="FILE",
        help="Sets the .taskrc file using the TASKRC environment variable for taskwarrior",
    )
    parser.add_argument(
        "-r",
        "--report",
        metavar="STRING",
        help="Sets default report",
    )
    return parser