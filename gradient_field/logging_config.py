"""
Logging for the ``gradient_field`` logger tree.

Only handlers installed here are replaced on a repeated call, so the UI can
call :func:`setup_logging` on every Streamlit rerun without stacking output
and without touching handlers that a host application attached itself.
"""
import logging
import sys
from typing import IO, Optional, Union
from .config import LOG_DATEFMT, LOG_FORMAT

PACKAGE_LOGGER = "gradient_field"

_OWNED = "_gradient_field_handler"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level {level!r}")
        return resolved
    return level


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None,
                  stream: Optional[IO[str]] = None) -> logging.Logger:
    """
    Route package log records to ``stream`` (stdout by default) and, when
    ``log_file`` is given, to that file as well.

    Args:
        level: Level number or name, e.g. ``logging.DEBUG`` or ``"debug"``.
        log_file: Optional path; the file is truncated.
        stream: Text stream for console output.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_resolve_level(level))

    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    handlers = [logging.StreamHandler(stream or sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)

    logger.debug("Logging to %s", "console and " + log_file if log_file else "console")
    return logger
