"""Telemetry utilities for logging and metrics.

This module provides the observability infrastructure for the game:
- Structured logging through structlog
- Prometheus metrics for upstream fetches and battle outcomes
- An async timer that logs and records operation latency
"""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from prometheus_client import Counter, Histogram
from structlog.processors import JSONRenderer

# Prometheus metrics
FETCH_COUNTER = Counter(
    "pokeduel_fetch_total",
    "Total number of upstream PokeAPI requests",
    ["endpoint", "status"],
)

FETCH_LATENCY = Histogram(
    "pokeduel_fetch_duration_seconds",
    "Upstream PokeAPI request latency in seconds",
    ["endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0, 10.0],
)

BATTLE_OUTCOMES = Counter(
    "pokeduel_battles_total",
    "Total number of resolved battles",
    ["outcome"],
)


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Initialize structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Output format, ``json`` or ``text``
    """
    logging.basicConfig(format="%(message)s", level=log_level.upper())
    logging.getLogger().setLevel(log_level.upper())

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "text":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, **context: Any) -> Any:
    """Get a structured logger with optional context.

    Args:
        name: Logger name
        **context: Additional context to bind to logger

    Returns:
        Bound logger with context
    """
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger


def log_operation(
    logger: Any,
    operation: str,
    status: str = "success",
    latency_ms: float | None = None,
    **extra_context: Any,
) -> None:
    """Log an operation with standardized fields.

    Args:
        logger: Structured logger instance
        operation: Operation name
        status: Operation status (success, error, warning)
        latency_ms: Operation latency in milliseconds
        **extra_context: Additional context fields
    """
    log_data = {
        "operation": operation,
        "status": status,
        **extra_context,
    }
    if latency_ms is not None:
        log_data["latency_ms"] = latency_ms

    if status == "error":
        logger.error("Operation completed", **log_data)
    elif status == "warning":
        logger.warning("Operation completed", **log_data)
    else:
        logger.info("Operation completed", **log_data)


class OperationTimer:
    """Timing record yielded by :func:`async_performance_timer`."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        self.start_time: float | None = None
        self.end_time: float | None = None
        self.status = "success"

    @property
    def duration(self) -> float | None:
        """Get operation duration in seconds."""
        if self.start_time is not None and self.end_time is not None:
            return self.end_time - self.start_time
        return None


@asynccontextmanager
async def async_performance_timer(
    operation: str,
    endpoint: str | None = None,
    logger: structlog.BoundLogger | None = None,
    record_metrics: bool = True,
    **context: Any,
) -> AsyncGenerator[OperationTimer, None]:
    """Async context manager for measuring upstream operation performance.

    The body may set ``timer.status`` to report a non-exception outcome
    (e.g. an HTTP status) in metrics and logs.

    Args:
        operation: Operation name for logging
        endpoint: Endpoint label for the fetch metrics (defaults to operation)
        logger: Logger instance (optional)
        record_metrics: Whether to record Prometheus metrics
        **context: Additional context logged with the operation

    Yields:
        OperationTimer instance
    """
    timer = OperationTimer(operation)
    endpoint = endpoint or operation
    log = logger or get_logger("pokeduel.performance")
    timer.start_time = time.perf_counter()

    try:
        yield timer
    except Exception as e:
        timer.end_time = time.perf_counter()
        timer.status = "error"
        duration = timer.end_time - timer.start_time

        if record_metrics:
            FETCH_COUNTER.labels(endpoint=endpoint, status="error").inc()
            FETCH_LATENCY.labels(endpoint=endpoint).observe(duration)

        log_operation(
            log,
            operation,
            status="error",
            latency_ms=duration * 1000,
            error=str(e),
            error_type=type(e).__name__,
            **context,
        )
        raise
    else:
        timer.end_time = time.perf_counter()
        duration = timer.end_time - timer.start_time

        if record_metrics:
            FETCH_COUNTER.labels(endpoint=endpoint, status=timer.status).inc()
            FETCH_LATENCY.labels(endpoint=endpoint).observe(duration)

        log_operation(
            log,
            operation,
            status="success" if timer.status == "success" else "warning",
            latency_ms=duration * 1000,
            result=timer.status,
            **context,
        )


def record_battle_outcome(outcome: str) -> None:
    """Record a resolved battle.

    Args:
        outcome: ``tie`` or ``win``
    """
    BATTLE_OUTCOMES.labels(outcome=outcome).inc()
