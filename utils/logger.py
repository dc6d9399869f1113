"""
Logging for RECOOK BOOK.

Every logger lives under the ``recook_book`` namespace. Account, session and
catalog events go through ``log_event`` as a single line of the form
``event key=value ...`` so a log file can be grepped by event name.
"""

import logging
import sys
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from .config import Config, get_config

ROOT_LOGGER = "recook_book"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(config: Optional[Config] = None) -> logging.Logger:
    """
    Attach a console handler and, if a log file is configured, a rotating
    file handler to the app's root logger. Safe to call on every rerun.
    """
    config = config or get_config()
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        log_file = RotatingFileHandler(config.log_file, maxBytes=1_000_000, backupCount=2, encoding="utf-8")
        log_file.setFormatter(formatter)
        root.addHandler(log_file)

    # Streamlit's own INFO chatter drowns out site events
    logging.getLogger("streamlit").setLevel(logging.WARNING)

    log_event(root, "logging.ready", log_level=config.log_level, log_file=config.log_file or None)
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, e.g. get_logger(__name__)"""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def format_fields(fields: Dict[str, Any]) -> str:
    """Render event fields as ``key=value`` pairs; strings are quoted"""
    return " ".join(
        f"{key}={value!r}" if isinstance(value, str) else f"{key}={value}"
        for key, value in fields.items()
    )


def log_event(logger: logging.Logger, event: str, severity: int = logging.INFO, **fields: Any):
    """Log a named site event, e.g. log_event(logger, "recipe.added", recipe_id=7)"""
    details = format_fields(fields)
    logger.log(severity, f"{event} {details}" if details else event)


@contextmanager
def log_operation(logger: logging.Logger, event: str, **fields: Any) -> Iterator[None]:
    """
    Log `event` with its duration once the block completes.
    A failing block is logged as ``<event>.failed`` and the error re-raised.
    """
    started = time.perf_counter()
    try:
        yield
    except Exception as e:
        log_event(logger, f"{event}.failed", logging.ERROR, error=str(e), **fields)
        raise
    elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
    log_event(logger, event, elapsed_ms=elapsed_ms, **fields)
