import socket
from contextlib import asynccontextmanager
from typing import Final

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles

from .config import settings
from .domain.exceptions import DomainError
from .infrastructure.store import SorveteriaStore
from .logging_config import get_logger, setup_logging
from .logging_utils import log_system_info
from .middleware import log_requests_middleware
from .presentation.api_routes import api_router
from .presentation.error_handlers import (
    handle_domain_error,
    handle_request_validation_error,
    handle_unexpected_error,
)
from .presentation.routes import router
from .presentation.templating import STATIC_DIR
from .telemetry import setup_telemetry


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging()
    logger = get_logger(__name__)

    hostname = socket.gethostname()
    try:
        ip_addr = socket.gethostbyname(hostname)
    except OSError:
        ip_addr = "unknown"
    log_system_info(hostname, ip_addr, settings.debug)

    if not settings.auth_enabled:
        logger.warning("INTERNAL_API_TOKEN is not set; the internal API is open")

    yield

    logger.info("Application shutdown completed")


app: Final = FastAPI(
    title=settings.app_name,
    version=settings.version,
    lifespan=lifespan,
    description="""
**Sorveteria** - public profile of a single ice-cream shop.

## Content

- **Profile**: name, logo, slogan, history, founders and differentiators
- **Opening hours**: weekly schedule, special dates and a live operating status
- **Environment photos**: up to 12, shown in display order
- **Testimonials**: moderated before they count toward the average rating
- **Promotions**: up to 3 active at once, one of them with top priority

## Envelope

Every internal API response is `{"success": true, "data": ...}` or
`{"success": false, "error": {"code": ..., "message": ..., "details": ...}}`.

## Authentication

When `INTERNAL_API_TOKEN` is configured, internal API calls must send
`Authorization: Bearer <token>`.
    """.strip(),
    openapi_tags=[
        {
            "name": "sorveteria",
            "description": "Manage the shop profile, photos, testimonials and "
            + "promotions",
        },
        {"name": "health", "description": "Service liveness"},
    ],
)

# The single in-memory record store; routes reach it through get_store
app.state.store = SorveteriaStore()

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

setup_telemetry(app)

app.middleware("http")(log_requests_middleware)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Global handler for domain-specific errors."""
    logger = get_logger(__name__)
    logger.warning(
        "Domain error occurred",
        error_type=type(exc).__name__,
        error_code=exc.code,
        error_message=exc.message,
        path=request.url.path,
        method=request.method,
    )
    return handle_domain_error(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Global handler for malformed requests."""
    logger = get_logger(__name__)
    logger.warning(
        "Request validation error occurred",
        errors=exc.errors(),
        path=request.url.path,
        method=request.method,
    )
    return handle_request_validation_error(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Global handler for unexpected errors."""
    logger = get_logger(__name__)
    logger.error(
        "Unexpected error occurred",
        error_type=type(exc).__name__,
        error_message=str(exc),
        path=request.url.path,
        method=request.method,
        exc_info=True,
    )
    return handle_unexpected_error(request)


app.include_router(api_router)
app.include_router(router)
