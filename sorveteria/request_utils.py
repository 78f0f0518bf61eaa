"""Helpers for inspecting incoming requests."""

from fastapi import Request

from .config import settings


def get_client_ip(request: Request) -> str:
    """Best guess at the caller's address behind proxies.

    ``X-Forwarded-For`` (first hop) wins over ``X-Real-IP``, which wins over
    the socket peer. Returns ``"unknown"`` when none is available.
    """
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop

    real_ip = request.headers.get("X-Real-IP", "").strip()
    if real_ip:
        return real_ip

    if request.client and request.client.host:
        return str(request.client.host)
    return "unknown"


def is_api_request(request: Request) -> bool:
    """True when the path lies under the configured internal API prefix."""
    path = str(request.url.path)
    return path == settings.api_prefix or path.startswith(settings.api_prefix + "/")
