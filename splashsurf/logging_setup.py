"""Logging configuration and error reporting for the command line tool."""

from __future__ import annotations

import enum
import logging
import os
import sys
from datetime import datetime
from typing import Iterator, Mapping, Sequence

TRACE = 5
OFF = logging.CRITICAL + 10
LOG_ENV_VAR = "SPLASHSURF_LOG"
LOGGER_NAME = "splashsurf"

logging.addLevelName(TRACE, "TRACE")

_ENV_LEVELS = {
    "off": OFF,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

_LEVEL_LABELS = {
    TRACE: "TRACE",
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "ERROR",
}


class VerbosityLevel(enum.Enum):
    """Verbosity requested by the number of ``-v`` flags."""

    NONE = 0
    VERBOSE = 1
    VERY_VERBOSE = 2

    @classmethod
    def from_count(cls, count: int) -> "VerbosityLevel":
        """Maps the number of occurrences of the flag to a verbosity level."""
        if count <= 0:
            return cls.NONE
        if count == 1:
            return cls.VERBOSE
        return cls.VERY_VERBOSE

    def to_level(self) -> int | None:
        """The log level for this verbosity, or None if it does not pick one."""
        return {
            VerbosityLevel.NONE: None,
            VerbosityLevel.VERBOSE: logging.DEBUG,
            VerbosityLevel.VERY_VERBOSE: TRACE,
        }[self]


def resolve_log_level(
    verbosity: VerbosityLevel,
    quiet: bool,
    env: Mapping[str, str] | None = None,
) -> tuple[int, str | None]:
    """Chooses the log level; also returns an unrecognised level name from the environment."""
    if quiet:
        return OFF, None
    level = verbosity.to_level()
    if level is not None:
        return level, None
    environment = os.environ if env is None else env
    requested = environment.get(LOG_ENV_VAR)
    if requested is None:
        return logging.INFO, None
    requested = requested.lower()
    if requested in _ENV_LEVELS:
        return _ENV_LEVELS[requested], None
    return logging.INFO, requested


class _Formatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().astimezone().isoformat()
        label = _LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"[{timestamp}][{record.name}][{label}] {record.getMessage()}"


def initialize_logging(verbosity: VerbosityLevel, quiet: bool) -> logging.Logger:
    """Configures the package logger to write to standard output."""
    level, unknown = resolve_log_level(verbosity, quiet)
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_Formatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    if unknown is not None:
        logger.error(
            "Unknown log filter level '%s' defined in '%s' env variable, using INFO instead.",
            unknown,
            LOG_ENV_VAR,
        )
    return logger


def _error_chain(err: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


def log_error(err: BaseException, logger: logging.Logger | None = None) -> None:
    """Logs an error together with the chain of errors that caused it."""
    target = logger if logger is not None else logging.getLogger(LOGGER_NAME)
    chain = _error_chain(err)
    target.error("Error occurred: %s", next(chain))
    for cause in chain:
        target.error("  caused by: %s", cause)


def format_command_line(argv: Sequence[str] | None = None) -> str:
    """The command line as a single space separated string."""
    return " ".join(sys.argv if argv is None else argv)