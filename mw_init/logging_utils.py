"""Logging for mw-init.

Every line carries the ``[MediaWiki Init]`` tag so init output can be told
apart from Apache/PHP output in ``docker logs``. Messages are written with
their own indentation (two spaces per nesting level); for warnings and
errors the formatter puts the level word after that indentation::

    2024-05-01T10:00:00+0000 [MediaWiki Init]   Cite: Updating...
    2024-05-01T10:00:01+0000 [MediaWiki Init]     WARNING: Failed to fetch updates for Cite

Callers therefore never type "WARNING:" or "ERROR:" themselves.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

DEFAULT_LOG_PATH = "/var/log/mediawiki-init.log"
FALLBACK_LOG_NAME = "mediawiki-init.log"

LOG_PREFIX = "[MediaWiki Init]"


class InitFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(fmt=f"%(asctime)s {LOG_PREFIX} %(message)s", datefmt="%Y-%m-%dT%H:%M:%S%z")

    def formatMessage(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            body = record.message.lstrip(" ")
            indent = record.message[: len(record.message) - len(body)]
            # format() recomputes record.message on every call, so this does
            # not leak into the next handler.
            record.message = f"{indent}{record.levelname}: {body}"
        return super().formatMessage(record)


def _file_handler(log_path: str) -> logging.FileHandler:
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path)
    except OSError:
        # /var/log is not writable when the image runs as www-data.
        return logging.FileHandler(str(Path.cwd() / FALLBACK_LOG_NAME))


def configure_logging(log_path: str = DEFAULT_LOG_PATH, level: int = logging.INFO) -> str:
    """Attach the init log file and stdout to the root logger, once.

    Returns the file path actually used.
    """
    root = logging.getLogger()
    root.setLevel(level)

    if getattr(root, "_mw_init_configured", False):
        return getattr(root, "_mw_init_log_path", log_path)

    fmt = InitFormatter()
    file_handler = _file_handler(log_path)
    console = logging.StreamHandler(sys.stdout)
    for h in (file_handler, console):
        h.setFormatter(fmt)
        root.addHandler(h)

    chosen_path = file_handler.baseFilename
    setattr(root, "_mw_init_configured", True)
    setattr(root, "_mw_init_log_path", chosen_path)

    if chosen_path != os.path.abspath(log_path):
        logging.getLogger(__name__).warning("Cannot write %s, logging to %s", log_path, chosen_path)
    return chosen_path
