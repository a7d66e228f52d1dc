"""
Logging configuration for the CirrusDB client.

Provides centralized structured logging setup with JSON output for production
and human-readable output for development. Supports correlation IDs so that
request traces can be tied back to the caller's own unit of work.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from structlog.types import EventDict


# Context variable for correlation ID
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add correlation ID to log events if present in context.

    Args:
        logger: Logger instance
        method_name: Name of the logging method
        event_dict: Event dictionary to modify

    Returns:
        Modified event dictionary with correlation_id if available
    """
    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Set correlation ID for the current context.

    Args:
        correlation_id: Optional correlation ID. If None, generates a new UUID.

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    """Clear correlation ID from the current context."""
    correlation_id_var.set(None)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from context."""
    return correlation_id_var.get()


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = True,
) -> None:
    """
    Configure structured logging for the CirrusDB client.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs only to stderr.
        json_format: If True, use JSON format. If False, use human-readable format.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(file_handler)
    else:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(numeric_level)
        stderr_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(stderr_handler)

    processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance for a specific module.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Structured logger instance.
    """
    if not name.startswith("cirrusdb"):
        name = f"cirrusdb.{name}"
    return structlog.get_logger(name)


# Convenience functions for request tracing

def log_request(
    logger: structlog.stdlib.BoundLogger,
    request_seq: int,
    method: str,
    path: str,
    has_body: bool = False,
    **kwargs: Any,
) -> None:
    """
    Log an outbound request.

    Header values are never logged since they carry the bearer token.

    Args:
        logger: Logger instance
        request_seq: Per-client sequence number of the request
        method: HTTP method
        path: Resolved request path
        has_body: Whether the request carries a JSON body
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "request_dispatched",
        "request_seq": request_seq,
        "method": method,
        "path": path,
        "has_body": has_body,
    }

    log_data.update(kwargs)

    logger.debug("request_dispatched", **log_data)


def log_response(
    logger: structlog.stdlib.BoundLogger,
    request_seq: int,
    status_code: Optional[int],
    success: bool,
    duration_ms: Optional[float] = None,
    reason: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log the outcome of a request.

    Args:
        logger: Logger instance
        request_seq: Per-client sequence number of the request
        status_code: HTTP status code if a reply was received
        success: Whether the call resolved successfully
        duration_ms: Transport round trip in milliseconds
        reason: Failure reason if not successful
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "response_received" if success else "request_failed",
        "request_seq": request_seq,
        "status_code": status_code,
        "success": success,
    }

    if duration_ms is not None:
        log_data["duration_ms"] = duration_ms
    if reason is not None:
        log_data["reason"] = reason

    log_data.update(kwargs)

    if success:
        logger.debug("response_received", **log_data)
    else:
        logger.warning("request_failed", **log_data)
