"""
Logging configuration for the application.

``setup_logging`` installs the API's own console handler, plus a file
handler when ``LOG_FILE`` is set, on the root logger.  The handlers
are named so a second call (for example another ``create_app()`` in
the same process) replaces them instead of stacking duplicates, while
handlers installed by anything else (uvicorn, pytest) are left alone.
"""

import logging
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER = "mithril-console"
FILE_HANDLER = "mithril-file"


def _remove_own_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if handler.get_name() in (CONSOLE_HANDLER, FILE_HANDLER):
            logger.removeHandler(handler)
            handler.close()


def setup_logging(
    level: str = "INFO", logfile: Optional[str] = None, fmt: Optional[str] = None
) -> logging.Logger:
    """Configure the root logger and return it.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file that receives the same records as the console.
        Relative paths are resolved against the working directory and
        missing parent directories are created.
    fmt : Optional[str]
        ``logging.Formatter`` format string; ``DEFAULT_FORMAT`` if empty.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _remove_own_handlers(root)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root
