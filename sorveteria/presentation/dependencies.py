"""FastAPI dependencies wiring the store and service into routes."""

from fastapi import Depends, Request

from ..application.sorveteria_service import SorveteriaService
from ..infrastructure.store import SorveteriaStore


def get_store(request: Request) -> SorveteriaStore:
    """The application-owned store (overridden in tests for isolation)."""
    return request.app.state.store


def get_service(store: SorveteriaStore = Depends(get_store)) -> SorveteriaService:
    return SorveteriaService(store)
