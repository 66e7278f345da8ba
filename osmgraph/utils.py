"""General utility functions, mostly for logging."""

from __future__ import annotations

import datetime as dt
import logging as lg
import sys
import unicodedata as ud
from pathlib import Path

from . import settings


def ts(style: str = "datetime", template: str | None = None) -> str:
    """
    Return current local timestamp as a string.

    Parameters
    ----------
    style
        {"datetime", "iso8601", "date", "time"}
        Format the timestamp with this built-in style.
    template
        If not None, format the timestamp with this format string instead of
        one of the built-in styles.

    Returns
    -------
    timestamp
    """
    templates = {
        "datetime": "{:%Y-%m-%d %H:%M:%S}",
        "iso8601": "{:%Y-%m-%dT%H:%M:%SZ}",
        "date": "{:%Y-%m-%d}",
        "time": "{:%H:%M:%S}",
    }
    if template is None:
        if style not in templates:
            msg = f"Invalid timestamp style {style!r}."
            raise ValueError(msg)
        template = templates[style]

    return template.format(dt.datetime.now().astimezone())


def log(
    message: str,
    level: int | None = None,
    name: str | None = None,
    filename: str | None = None,
) -> None:
    """
    Write a message to the logger.

    This logs to file and/or prints to the console (terminal), depending on
    the current configuration of `settings.log_file` and
    `settings.log_console`. Console output is filtered by `settings.log_level`
    so that per-element DEBUG messages stay quiet unless requested.

    Parameters
    ----------
    message
        The message to log.
    level
        One of the Python `logger.level` constants. If None, set to
        `settings.log_level` value.
    name
        The name of the logger. If None, set to `settings.log_name` value.
    filename
        The name of the log file, without file extension. If None, set to
        `settings.log_filename` value.

    Returns
    -------
    None
    """
    if level is None:
        level = settings.log_level
    if name is None:
        name = settings.log_name
    if filename is None:
        filename = settings.log_filename

    # if logging to file is turned on, get the current logger (or create a
    # new one, if none) then log message at requested level
    if settings.log_file:
        logger = _get_logger(name=name, filename=filename)
        logger.log(level, message)

    # if logging to console (terminal window) is turned on, prepend timestamp
    # then convert to ASCII for Windows command prompts
    if settings.log_console and level >= settings.log_level:
        message = f"{ts()} {message}"
        message = ud.normalize("NFKD", message).encode("ascii", errors="replace").decode()
        print(message, file=sys.stdout, flush=True)  # noqa: T201


def _get_logger(name: str, filename: str) -> lg.Logger:
    """
    Create a logger or return the current one if already instantiated.

    Parameters
    ----------
    name
        Name of the logger.
    filename
        Name of the log file, without file extension.

    Returns
    -------
    logger
    """
    logger = lg.getLogger(name)

    # if a logger with this name is not already set up with a handler
    if len(logger.handlers) == 0:
        # make log filepath and create parent folder if it doesn't exist
        filepath = Path(settings.logs_folder) / f"{filename}_{ts(style='date')}.log"
        filepath.parent.mkdir(parents=True, exist_ok=True)

        # create file handler and log formatter and set them up
        handler = lg.FileHandler(filepath, encoding="utf-8")
        handler.setLevel(lg.DEBUG)
        handler.setFormatter(lg.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(lg.DEBUG)

    return logger
