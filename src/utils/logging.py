"""
Logging setup for the tracker.

Modules log through ``logging.getLogger(__name__)``, so every record lands
under one of the package roots below. ``setup_logging`` attaches one shared
set of handlers to those roots and turns down the per-request chatter of the
ASGI server.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Iterable, Optional

PACKAGE_ROOTS = ("src", "api")
NOISY_LOGGERS = ("uvicorn.access", "httpx")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: Optional[str] = None) -> int:
    """Numeric level for a name like "debug"; LOG_LEVEL then INFO when unset or unknown."""
    name = level or os.getenv("LOG_LEVEL", "INFO")
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def build_handlers(level_num: int, log_file: Optional[str] = None) -> list[logging.Handler]:
    """A stdout handler, plus a file handler when ``log_file`` is given."""
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))
    
    for handler in handlers:
        handler.setLevel(level_num)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> list[logging.Logger]:
    """
    Configure the package loggers.
    
    Calling it again replaces the handlers from the previous call.
    
    Args:
        level: Level name; falls back to LOG_LEVEL, then INFO
        log_file: Optional file to append records to
        quiet: Third-party loggers held at WARNING or above
    
    Returns:
        The configured package root loggers
    """
    level_num = resolve_level(level)
    handlers = build_handlers(level_num, log_file)
    
    roots = []
    for name in PACKAGE_ROOTS:
        root = logging.getLogger(name)
        for old in root.handlers:
            if old not in handlers:
                old.close()
        root.setLevel(level_num)
        root.handlers = list(handlers)
        roots.append(root)
    
    for name in quiet:
        logging.getLogger(name).setLevel(max(level_num, logging.WARNING))
    
    roots[0].debug(f"Logging configured at {logging.getLevelName(level_num)}")
    return roots
