"""
Observability module for the IAM policy library.

Provides:
- Structured logging with JSON format
- Prometheus counters for encode, decode and comparison outcomes

The library never configures logging on import; applications call
configure_structured_logging() (or their own setup) explicitly.

Usage:
    from iampolicy.core.observability import (
        configure_structured_logging,
        get_logger,
        record_comparison,
    )
"""

import json
import logging
from datetime import UTC, datetime

from prometheus_client import CollectorRegistry, Counter, generate_latest

from iampolicy.core.config import settings

# ============================================================================
# Structured Logging Configuration
# ============================================================================

# Attributes every LogRecord carries; anything else came from logging.extra
_RESERVED_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
        "asctime",
    }
)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs as JSON with standard fields:
    - timestamp: ISO 8601 format
    - level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - logger: Logger name
    - message: Log message
    - app: Configured application name
    - extra: Any additional context from logging.extra
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Python logging LogRecord

        Returns:
            JSON-formatted log string
        """
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "app": settings.app_name,
        }

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
            }

        log_entry["file"] = record.pathname
        log_entry["line"] = record.lineno
        log_entry["function"] = record.funcName

        extra_keys = {
            k: v for k, v in record.__dict__.items() if k not in _RESERVED_RECORD_KEYS
        }
        if extra_keys:
            log_entry["extra"] = extra_keys

        return json.dumps(log_entry, default=str)


def configure_structured_logging(level: str | None = None) -> None:
    """
    Configure root logger for the library's log output.

    Uses StructuredFormatter when ``settings.structured_logs`` is enabled,
    otherwise the stdlib default format.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
               defaults to ``settings.log_level``
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, (level or settings.log_level).upper(), logging.INFO))

    handler = logging.StreamHandler()
    if settings.structured_logs:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))

    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a library module.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


# ============================================================================
# Prometheus Metrics
# ============================================================================

# Use a custom registry to avoid conflicts with the host application's metrics
_registry = CollectorRegistry()


class Metrics:
    """
    Counters for the library's public operations.

    Metrics groups:
    - Codec: encode/decode outcomes
    - Comparator: equal/different/error outcomes
    """

    def __init__(self, registry: CollectorRegistry) -> None:
        """Initialize all metrics with proper labels."""
        self.registry = registry

        self.encodes_total = Counter(
            "iampolicy_encodes_total",
            "Total encode operations",
            ["status"],
            registry=self.registry,
        )

        # status: ok, syntax_error, type_mismatch
        self.decodes_total = Counter(
            "iampolicy_decodes_total",
            "Total decode operations",
            ["status"],
            registry=self.registry,
        )

        # result: equal, different, error
        self.comparisons_total = Counter(
            "iampolicy_comparisons_total",
            "Total semantic JSON comparisons",
            ["result"],
            registry=self.registry,
        )


# Global metrics instance
metrics = Metrics(_registry)


def record_encode(status: str) -> None:
    if settings.metrics_enabled:
        metrics.encodes_total.labels(status=status).inc()


def record_decode(status: str) -> None:
    if settings.metrics_enabled:
        metrics.decodes_total.labels(status=status).inc()


def record_comparison(result: str) -> None:
    if settings.metrics_enabled:
        metrics.comparisons_total.labels(result=result).inc()


def render_metrics() -> bytes:
    """Return the library's metrics in Prometheus text exposition format."""
    return generate_latest(_registry)
