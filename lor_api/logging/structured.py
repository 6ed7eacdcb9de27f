"""Structured JSON logging for `cdk synth` runs.

Every line carries the run id and, once known, the stack being synthesized,
so the output of one synth can be pulled out of a shared CI log. Handlers
are configured from plain values rather than Settings: a run whose settings
fail to load must still be able to log that failure.
"""

import json
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import datetime, timezone

LOGGER_NAME = "lor.infra"
DEFAULT_LEVEL = "INFO"

run_id_var: ContextVar[str] = ContextVar("run_id", default="")
stack_var: ContextVar[str] = ContextVar("stack", default="")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, tagged with the current run and stack."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "run_id": run_id_var.get(""),
        }
        stack = stack_var.get("")
        if stack:
            log_entry["stack"] = stack
        # Fields passed via `extra={"log_data": {...}}` win over the context tags
        if hasattr(record, "log_data"):
            log_entry.update(record.log_data)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def configure_logging(level: str = DEFAULT_LEVEL, log_file: str = "") -> logging.Logger:
    """Point the infra logger at stdout (and log_file, if given).

    Safe to call more than once; earlier handlers are replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = JSONFormatter()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def start_run(stack_name: str = "") -> str:
    """Tag subsequent log lines with a fresh run id (and the stack name)."""
    run_id = uuid.uuid4().hex[:12]
    run_id_var.set(run_id)
    stack_var.set(stack_name)
    return run_id


@dataclass
class SynthTiming:
    elapsed_ms: float = 0.0


@contextmanager
def timed_synth():
    """Measure the wrapped block; elapsed_ms is filled in even if it raises."""
    timing = SynthTiming()
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
