"""Structured logging for the ordering core.

Uses structlog with JSON or console output.  Lines emitted while one
command is handled share a ``trace_id`` plus the command name and
order id, bound through ``command_context``.
"""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from cqrs_order.core.config import ObservabilityConfig
from cqrs_order.core.enums import LogFormat


def new_trace_id() -> str:
    return str(uuid.uuid4())


def current_context() -> dict[str, Any]:
    """Return the key/values currently bound for log lines."""
    return dict(structlog.contextvars.get_contextvars())


@contextmanager
def command_context(command: str, order_id: str | None) -> Iterator[str]:
    """Bind ``trace_id``, ``command`` and ``order_id`` for the enclosed block.

    Yields the trace id.  Previous bindings are restored on exit.
    """
    trace_id = new_trace_id()
    with structlog.contextvars.bound_contextvars(
        trace_id=trace_id, command=command, order_id=order_id,
    ):
        yield trace_id


def setup_logging(config: ObservabilityConfig | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        config: Level and renderer; defaults to ``ObservabilityConfig()``.
    """
    config = config or ObservabilityConfig()
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.log_format == LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
