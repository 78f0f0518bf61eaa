"""Structured logging helpers shared by middleware, store and validation."""

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import Request

from .request_utils import get_client_ip, is_api_request

SENSITIVE_MARKERS = frozenset(
    {"password", "secret", "token", "credential", "auth", "cookie", "key"}
)


def _level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def log_api_request(
    request: Request,
    response_status: int,
    process_time_ms: float | None = None,
    logger_name: str = "api",
) -> None:
    """Log one handled request; the level follows the response status class.

    Args:
        request: FastAPI request object
        response_status: HTTP response status code
        process_time_ms: Request processing time in milliseconds
        logger_name: Name of the logger to use
    """
    extra: dict[str, Any] = {
        "method": request.method,
        "path": request.url.path,
        "status_code": response_status,
        "client_ip": get_client_ip(request),
        "internal_api": is_api_request(request),
        "user_agent": request.headers.get("user-agent", "Unknown")[:100],
    }

    message = f"{request.method} {request.url.path} - {response_status}"
    if process_time_ms is not None:
        extra["process_time_ms"] = round(process_time_ms, 2)
        message = f"{message} ({process_time_ms:.1f}ms)"

    logging.getLogger(logger_name).log(
        _level_for_status(response_status), message, extra=extra
    )


def log_store_operation(
    operation: str,
    entity: str,
    success: bool = True,
    logger_name: str = "store",
    **kwargs: Any,
) -> None:
    """Log a mutation of the in-memory store.

    Args:
        operation: create, replace, update, add, remove, moderate or expire
        entity: Sorveteria, Photo, Testimonial or Promotion
        success: False when the target record was missing
        logger_name: Name of the logger to use
        **kwargs: Ids and other context for the entry
    """
    outcome = "succeeded" if success else "failed"
    logging.getLogger(logger_name).log(
        logging.INFO if success else logging.WARNING,
        f"Store {operation} on {entity} {outcome}",
        extra={"operation": operation, "entity": entity, "success": success, **kwargs},
    )


def log_system_info(hostname: str, ip_address: str, debug_mode: bool) -> None:
    """Log host details once at startup."""
    logging.getLogger("system").info(
        "Application startup",
        extra={
            "hostname": hostname,
            "ip_address": ip_address,
            "debug_mode": debug_mode,
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )


def log_validation_error(
    field: str, value: Any, error_message: str, logger_name: str = "validation"
) -> None:
    """Log a rejected input field, truncating and redacting its value."""
    if _is_sensitive_field(field):
        shown = "[REDACTED]"
    else:
        shown = str(value)[:100]

    logging.getLogger(logger_name).warning(
        f"Validation failed for field '{field}': {error_message}",
        extra={"field": field, "value": shown, "error": error_message},
    )


def _is_sensitive_field(field_name: str) -> bool:
    lowered = field_name.lower()
    return any(marker in lowered for marker in SENSITIVE_MARKERS)
