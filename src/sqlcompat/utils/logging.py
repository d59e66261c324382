"""Logging helpers: one ``sqlcompat`` handler and a run id on every record."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

LOGGER_NAME = "sqlcompat"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(run_id)s | %(name)s | %(message)s"

_run_id: ContextVar[str | None] = ContextVar("run_id", default=None)


class RunIdFilter(logging.Filter):
    """Stamps ``record.run_id`` so the format string can always use it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = get_run_id()
        return True


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RunIdFilter())
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def set_run_id(value: Optional[str] = None) -> str:
    """
    Bind ``value`` (or a fresh 12-character id) to the current context.

    Worker threads see it when their tasks run in a copied context.
    """

    run_id = value or uuid.uuid4().hex[:12]
    _run_id.set(run_id)
    return run_id


def get_run_id() -> str:
    run_id = _run_id.get()
    return run_id if run_id is not None else set_run_id()


@contextmanager
def time_call(
    name: str,
    logger: logging.Logger,
    *,
    statements: int | None = None,
    threshold_ms: float = 500,
) -> Iterator[None]:
    """
    Log how long the block took; WARNING at or above ``threshold_ms``.
    """

    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        level = logging.WARNING if elapsed_ms >= threshold_ms else logging.DEBUG
        logger.log(
            level,
            "%s took %.2fms",
            name,
            elapsed_ms,
            extra={"statements": statements, "elapsed_ms": elapsed_ms},
        )
