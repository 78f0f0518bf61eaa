from collections.abc import Callable
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from sorveteria.application.sorveteria_service import SorveteriaService
from sorveteria.config import settings
from sorveteria.infrastructure.store import SorveteriaStore
from sorveteria.main import app
from sorveteria.presentation.dependencies import get_store

SAO_PAULO = ZoneInfo("America/Sao_Paulo")

API_BASE = f"{settings.api_prefix}/sorveteria"

# 2025-06-18 is a Wednesday (quarta)
WEDNESDAY_AFTERNOON = datetime(2025, 6, 18, 15, 0, tzinfo=SAO_PAULO)

HISTORY = (
    "Nossa origem remonta a 1985, quando a família Tommasi trouxe da Itália a "
    "tradição do gelato artesanal. Desde então mantemos a mesma qualidade nos "
    "ingredientes, com frutas frescas da estação, leite da região e receitas "
    "passadas de geração em geração para cada sabor servido no balcão."
)

DIFFERENTIATORS = [
    "Sorvetes de qualidade artesanal",
    "Receitas de tradição italiana",
    "Atendimento acolhedor",
]


class FixedClock:
    """Callable clock whose time tests can move by hand."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def __call__(self) -> datetime:
        return self.moment


def day_hours(
    open: str = "10:00", close: str = "22:00", closed: bool = False
) -> dict[str, Any]:
    return {"abertura": open, "fechamento": close, "fechado": closed}


def weekly_hours(**overrides: dict[str, Any]) -> dict[str, dict[str, Any]]:
    days = ["segunda", "terca", "quarta", "quinta", "sexta", "sabado", "domingo"]
    hours = {day: day_hours() for day in days}
    hours.update(overrides)
    return hours


def make_payload(**overrides: Any) -> dict[str, Any]:
    """Valid create-or-update payload; keyword overrides use wire names."""
    payload: dict[str, Any] = {
        "nomeSorveteria": "Tommasi Sorvetes",
        "logotipo": "https://cdn.example.com/logo.png",
        "slogan": "O sabor da Itália",
        "historiaSorveteria": HISTORY,
        "anoFundacao": 1985,
        "diferenciais": list(DIFFERENTIATORS),
        "fundadores": "Giulia e Marco Tommasi",
        "horariosSemana": weekly_hours(),
        "missao": "Adoçar o dia dos nossos clientes",
        "visao": "Ser a sorveteria preferida do bairro",
        "valores": ["Respeito", "Frescor"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture(autouse=True)
def open_internal_api(monkeypatch: pytest.MonkeyPatch):
    """Tests run without a token unless they set one themselves."""
    monkeypatch.setattr(settings, "internal_api_token", None)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(WEDNESDAY_AFTERNOON)


@pytest.fixture
def store(clock: FixedClock) -> SorveteriaStore:
    return SorveteriaStore(clock=clock)


@pytest.fixture
def service(store: SorveteriaStore) -> SorveteriaService:
    return SorveteriaService(store)


@pytest.fixture
def valid_payload() -> Callable[..., dict[str, Any]]:
    return make_payload


@pytest.fixture(name="client")
def client_fixture(store: SorveteriaStore):
    def get_store_override():
        return store

    app.dependency_overrides[get_store] = get_store_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def configured_client(client: TestClient) -> TestClient:
    """Client whose store already holds a valid profile."""
    response = client.post(API_BASE, json=make_payload())
    assert response.status_code == 201
    return client
