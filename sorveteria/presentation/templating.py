"""Jinja2 environment shared by the page and error renderers."""

from datetime import date, datetime
from pathlib import Path
from typing import Final

from fastapi.templating import Jinja2Templates

from ..domain.constants import MAX_RATING, WEEKDAY_KEYS

PACKAGE_DIR: Final = Path(__file__).resolve().parent.parent
TEMPLATES_DIR: Final = PACKAGE_DIR / "templates"
STATIC_DIR: Final = PACKAGE_DIR / "static"

DAY_LABELS: Final = {
    "segunda": "Segunda-feira",
    "terca": "Terça-feira",
    "quarta": "Quarta-feira",
    "quinta": "Quinta-feira",
    "sexta": "Sexta-feira",
    "sabado": "Sábado",
    "domingo": "Domingo",
}

STATUS_LABELS: Final = {
    "aberto": "Aberto Agora",
    "fechado": "Fechado",
    "abrindo_em_breve": "Abrindo em Breve",
}

templates: Final = Jinja2Templates(directory=str(TEMPLATES_DIR))


def format_date_br(value: str | date | datetime) -> str:
    """Render ``YYYY-MM-DD`` strings, dates and datetimes as ``DD/MM/YYYY``.

    Stored dates are only shape-checked, so a string that is not a real
    calendar date (``2099-02-30``) is shown as given.
    """
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value)
        except ValueError:
            return value
    return value.strftime("%d/%m/%Y")


def stars(rating: int) -> str:
    return "★" * rating + "☆" * (MAX_RATING - rating)


templates.env.filters["date_br"] = format_date_br
templates.env.filters["stars"] = stars
templates.env.globals["weekdays"] = [(key, DAY_LABELS[key]) for key in WEEKDAY_KEYS]
templates.env.globals["status_labels"] = STATUS_LABELS
