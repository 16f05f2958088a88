"""Coloured, tagged console logging."""

from __future__ import annotations

import enum

_RESET = "\u001b[0m"


class Level(enum.Enum):
    """Log levels, each shown with its own colour."""

    INFO = "I"
    DEBUG = "D"
    WARN = "W"
    ERROR = "E"
    VERBOSE = "V"


_COLOURS = {
    Level.INFO: "\u001b[34m",
    Level.DEBUG: "\u001b[35m",
    Level.WARN: "\u001b[33m",
    Level.ERROR: "\u001b[31m",
    Level.VERBOSE: "",
}


class ApkcError(Exception):
    """A failure that ends the current command."""

    def __init__(self, message: str, tag: str | None = None) -> None:
        super().__init__(message)
        self.tag = tag


def format_line(level: Level | str, tag: str, *args: object) -> str:
    """Return the text of one log line, operands separated by spaces."""
    level = Level(level)
    parts = [f"{_COLOURS[level]}[{tag}]", *map(str, args), _RESET]
    return " ".join(parts)


def log(level: Level | str, tag: str, *args: object) -> None:
    """Print one log line at the given level."""
    print(format_line(level, tag, *args))


def info(tag: str, *args: object) -> None:
    log(Level.INFO, tag, *args)


def debug(tag: str, *args: object) -> None:
    log(Level.DEBUG, tag, *args)


def warn(tag: str, *args: object) -> None:
    log(Level.WARN, tag, *args)


def error(tag: str, *args: object) -> None:
    log(Level.ERROR, tag, *args)


def verbose(tag: str, *args: object) -> None:
    log(Level.VERBOSE, tag, *args)


def fatal(tag: str, *args: object) -> None:
    """Log an error line and raise ApkcError carrying the same message."""
    log(Level.ERROR, tag, *args)
    raise ApkcError(" ".join(map(str, args)), tag)