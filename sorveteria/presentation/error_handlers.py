"""Centralized error handling for the presentation layer."""

from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse

from ..domain.exceptions import DomainError, NotFoundError
from ..request_utils import is_api_request
from .responses import ErrorBody, ErrorCodes, ErrorResponse
from .templating import templates


def error_response(
    code: str,
    message: str,
    status_code: int,
    details: list[dict[str, Any]] | None = None,
) -> JSONResponse:
    """Build the failure envelope."""
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


def render_error_response(
    request: Request, message: str, status_code: int = 400
) -> HTMLResponse:
    """Render a friendly HTML error page."""
    return templates.TemplateResponse(
        request,
        "error.html",
        {"message": message, "status_code": status_code},
        status_code=status_code,
    )


def _user_friendly_message(error: DomainError) -> str:
    if isinstance(error, NotFoundError):
        return "As informações da sorveteria ainda não foram cadastradas."
    return error.message


def handle_domain_error(
    error: DomainError, request: Request
) -> JSONResponse | HTMLResponse:
    """Convert domain errors to the envelope (API) or an error page (HTML)."""
    if is_api_request(request):
        return error_response(
            error.code, error.message, error.status_code, error.details
        )
    return render_error_response(
        request, _user_friendly_message(error), status_code=error.status_code
    )


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    field_errors = []
    for error in exc.errors():
        field_name = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        field_errors.append(
            {
                "field": field_name or "body",
                "code": error["type"],
                "message": error["msg"],
            }
        )
    return field_errors


def handle_request_validation_error(
    exc: RequestValidationError, request: Request
) -> JSONResponse | HTMLResponse:
    """Malformed requests (e.g. invalid JSON) are reported as validation errors."""
    if is_api_request(request):
        return error_response(
            ErrorCodes.VALIDATION_ERROR,
            "Validation failed",
            status.HTTP_400_BAD_REQUEST,
            _field_errors(exc),
        )
    return render_error_response(
        request,
        "Verifique os dados enviados e tente novamente.",
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def handle_unexpected_error(request: Request) -> JSONResponse | HTMLResponse:
    if is_api_request(request):
        return error_response(
            ErrorCodes.INTERNAL_ERROR,
            "An unexpected error occurred. Please try again.",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return render_error_response(
        request,
        "Algo deu errado. Por favor, tente novamente mais tarde.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
