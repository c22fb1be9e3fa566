"""Structured logging and OpenTelemetry spans for snforge-scarb.

This module provides:
- Structured logging setup via structlog
- A span helper wrapping resolution operations
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer
    from structlog.stdlib import BoundLogger

TRACER_NAME = "snforge.scarb"


def get_logger() -> BoundLogger:
    """Get the package logger.

    Example:
        >>> logger = get_logger()
        >>> logger.info("contracts_loaded", count=2)
    """
    logger: BoundLogger = structlog.get_logger(TRACER_NAME)
    return logger


def get_tracer() -> Tracer:
    """Get the OpenTelemetry tracer for snforge-scarb."""
    return trace.get_tracer(TRACER_NAME)


def configure_logging(
    *,
    log_level: str = "INFO",
    json_format: bool = True,
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for snforge-scarb.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format. If False, output human-readable.
        add_timestamp: If True, add ISO timestamp to log entries.

    Example:
        >>> configure_logging(log_level="DEBUG", json_format=False)
    """
    processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
    )


@contextmanager
def span(
    name: str,
    *,
    attributes: dict[str, Any] | None = None,
) -> Iterator[Span]:
    """Run a resolution operation inside an OpenTelemetry span.

    Logs ``<name>_started`` at debug level and ``<name>_failed`` with the
    error if the body raises. The exception is re-raised unchanged.

    Args:
        name: Span name (e.g., "get_contracts_map").
        attributes: Optional span attributes, also bound to log events.

    Example:
        >>> with span("get_contracts_map", attributes={"scarb.index_path": str(path)}):
        ...     ...
    """
    tracer = get_tracer()
    logger = get_logger()
    attrs = attributes or {}
    log_attrs = {key.replace(".", "_"): value for key, value in attrs.items()}

    with tracer.start_as_current_span(
        name,
        kind=SpanKind.INTERNAL,
        attributes=attrs,
        record_exception=False,
        set_status_on_exception=False,
    ) as s:
        logger.debug(f"{name}_started", **log_attrs)
        try:
            yield s
            s.set_status(Status(StatusCode.OK))
        except Exception as exc:
            s.set_status(Status(StatusCode.ERROR, str(exc)))
            s.record_exception(exc)
            logger.error(f"{name}_failed", error=str(exc), **log_attrs)
            raise
