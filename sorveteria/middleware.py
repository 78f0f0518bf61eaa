import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response

from .logging_utils import log_api_request
from .metrics import record_http_request


async def log_requests_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log every request with its timing and feed the HTTP metrics."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - started

    log_api_request(
        request=request,
        response_status=response.status_code,
        process_time_ms=elapsed * 1000,
    )
    record_http_request(
        method=request.method,
        endpoint=request.url.path,
        status_code=response.status_code,
        duration=elapsed,
    )
    return response
