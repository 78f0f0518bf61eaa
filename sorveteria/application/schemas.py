"""Request schemas for the sorveteria API.

Wire names are the camelCase Portuguese names the shop's front end already
speaks (``nomeSorveteria``, ``horariosSemana`` ...); Python attributes use the
domain names.
"""

from datetime import datetime
from typing import Annotated, Any
from zoneinfo import ZoneInfo

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
)

from ..config import settings
from ..domain.constants import (
    CUSTOMER_NAME_MAX_LENGTH,
    DATE_PATTERN,
    DIFFERENTIATOR_MAX_LENGTH,
    FOUNDERS_MAX_LENGTH,
    HISTORY_MAX_LENGTH,
    HISTORY_MIN_LENGTH,
    MAX_DIFFERENTIATORS,
    MAX_PRIORITY,
    MAX_RATING,
    MAX_VALUES,
    MIN_DIFFERENTIATORS,
    MIN_FOUNDING_YEAR,
    MIN_PRIORITY,
    MIN_RATING,
    MISSION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PHOTO_DESCRIPTION_MAX_LENGTH,
    PROMOTION_DESCRIPTION_MAX_LENGTH,
    PROMOTION_TITLE_MAX_LENGTH,
    SLOGAN_MAX_LENGTH,
    SPECIAL_HOURS_DESCRIPTION_MAX_LENGTH,
    TESTIMONIAL_MAX_LENGTH,
    TIME_PATTERN,
    VALUE_MAX_LENGTH,
    VISION_MAX_LENGTH,
    ModerationStatus,
    PhotoCategory,
    PromotionType,
)
from ..domain.entities import DayHours, SpecialHours

_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    # Validate only; keep the caller's spelling instead of the normalized URL
    _url_adapter.validate_python(value)
    return value


def current_shop_year() -> int:
    """Calendar year in the shop's configured time zone."""
    return datetime.now(ZoneInfo(settings.timezone)).year


def _check_founding_year(value: int) -> int:
    current_year = current_shop_year()
    if value > current_year:
        raise ValueError(f"Founding year cannot be later than {current_year}")
    return value


UrlStr = Annotated[str, AfterValidator(_check_url)]
TimeStr = Annotated[str, Field(pattern=TIME_PATTERN)]
DateStr = Annotated[str, Field(pattern=DATE_PATTERN)]
FoundingYear = Annotated[
    int,
    Field(strict=True, ge=MIN_FOUNDING_YEAR),
    AfterValidator(_check_founding_year),
]
Differentiators = Annotated[
    list[Annotated[str, Field(max_length=DIFFERENTIATOR_MAX_LENGTH)]],
    Field(min_length=MIN_DIFFERENTIATORS, max_length=MAX_DIFFERENTIATORS),
]
Values = Annotated[
    list[Annotated[str, Field(max_length=VALUE_MAX_LENGTH)]],
    Field(max_length=MAX_VALUES),
]


class RequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class DayHoursSchema(RequestSchema):
    open: TimeStr = Field(alias="abertura", examples=["10:00"])
    close: TimeStr = Field(alias="fechamento", examples=["22:00"])
    closed: bool = Field(alias="fechado", strict=True)

    def to_domain(self) -> DayHours:
        return DayHours(open=self.open, close=self.close, closed=self.closed)


class WeeklyHoursSchema(RequestSchema):
    """One entry per day; every day key is required."""

    segunda: DayHoursSchema
    terca: DayHoursSchema
    quarta: DayHoursSchema
    quinta: DayHoursSchema
    sexta: DayHoursSchema
    sabado: DayHoursSchema
    domingo: DayHoursSchema

    def to_domain(self) -> dict[str, DayHours]:
        return {
            day: getattr(self, day).to_domain()
            for day in type(self).model_fields
        }


class SpecialHoursSchema(RequestSchema):
    date: DateStr = Field(alias="data", examples=["2026-12-25"])
    description: str = Field(
        alias="descricao",
        min_length=1,
        max_length=SPECIAL_HOURS_DESCRIPTION_MAX_LENGTH,
        examples=["Natal"],
    )
    open: TimeStr | None = Field(alias="abertura")
    close: TimeStr | None = Field(alias="fechamento")
    closed: bool = Field(alias="fechado", strict=True)

    def to_domain(self) -> SpecialHours:
        return SpecialHours(
            date=self.date,
            description=self.description,
            open=self.open,
            close=self.close,
            closed=self.closed,
        )


class SorveteriaCreate(RequestSchema):
    """Full profile payload for create-or-update."""

    name: str = Field(
        alias="nomeSorveteria",
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        examples=["Tommasi Sorvetes"],
    )
    logo: UrlStr = Field(alias="logotipo")
    slogan: str | None = Field(default=None, max_length=SLOGAN_MAX_LENGTH)
    history: str = Field(
        alias="historiaSorveteria",
        min_length=HISTORY_MIN_LENGTH,
        max_length=HISTORY_MAX_LENGTH,
    )
    founding_year: FoundingYear = Field(alias="anoFundacao")
    differentiators: Differentiators = Field(alias="diferenciais")
    founders: str = Field(alias="fundadores", max_length=FOUNDERS_MAX_LENGTH)
    weekly_hours: WeeklyHoursSchema = Field(alias="horariosSemana")
    special_hours: list[SpecialHoursSchema] | None = Field(
        default=None, alias="horariosEspeciais"
    )
    mission: str | None = Field(
        default=None, alias="missao", max_length=MISSION_MAX_LENGTH
    )
    vision: str | None = Field(
        default=None, alias="visao", max_length=VISION_MAX_LENGTH
    )
    values: Values | None = Field(default=None, alias="valores")

    def to_fields(self) -> dict[str, Any]:
        """Domain fields for the stored profile, optional ones defaulted."""
        return {
            "name": self.name,
            "logo": self.logo,
            "slogan": self.slogan or None,
            "history": self.history,
            "founding_year": self.founding_year,
            "differentiators": list(self.differentiators),
            "founders": self.founders,
            "weekly_hours": self.weekly_hours.to_domain(),
            "special_hours": [s.to_domain() for s in self.special_hours or []],
            "mission": self.mission or None,
            "vision": self.vision or None,
            "values": list(self.values or []),
        }


_NON_NULLABLE_UPDATE_FIELDS = (
    "name",
    "logo",
    "history",
    "founding_year",
    "differentiators",
    "founders",
    "weekly_hours",
    "special_hours",
    "values",
)


class SorveteriaUpdate(RequestSchema):
    """Partial profile payload; only the fields sent are merged."""

    name: str | None = Field(
        default=None,
        alias="nomeSorveteria",
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
    )
    logo: UrlStr | None = Field(default=None, alias="logotipo")
    slogan: str | None = Field(default=None, max_length=SLOGAN_MAX_LENGTH)
    history: str | None = Field(
        default=None,
        alias="historiaSorveteria",
        min_length=HISTORY_MIN_LENGTH,
        max_length=HISTORY_MAX_LENGTH,
    )
    founding_year: FoundingYear | None = Field(default=None, alias="anoFundacao")
    differentiators: Differentiators | None = Field(default=None, alias="diferenciais")
    founders: str | None = Field(
        default=None, alias="fundadores", max_length=FOUNDERS_MAX_LENGTH
    )
    weekly_hours: WeeklyHoursSchema | None = Field(default=None, alias="horariosSemana")
    special_hours: list[SpecialHoursSchema] | None = Field(
        default=None, alias="horariosEspeciais"
    )
    mission: str | None = Field(
        default=None, alias="missao", max_length=MISSION_MAX_LENGTH
    )
    vision: str | None = Field(
        default=None, alias="visao", max_length=VISION_MAX_LENGTH
    )
    values: Values | None = Field(default=None, alias="valores")

    @field_validator(*_NON_NULLABLE_UPDATE_FIELDS, mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    def to_fields(self) -> dict[str, Any]:
        """Domain fields for exactly the attributes present in the request."""
        fields: dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if name == "weekly_hours":
                value = value.to_domain()
            elif name == "special_hours":
                value = [s.to_domain() for s in value]
            elif isinstance(value, list):
                value = list(value)
            fields[name] = value
        return fields


class PhotoCreate(RequestSchema):
    url: UrlStr = Field(examples=["https://cdn.example.com/balcao.jpg"])
    description: str | None = Field(
        default=None, alias="descricao", max_length=PHOTO_DESCRIPTION_MAX_LENGTH
    )
    category: PhotoCategory = Field(alias="categoria")


class TestimonialCreate(RequestSchema):
    customer_name: str = Field(
        alias="nomeCliente", min_length=1, max_length=CUSTOMER_NAME_MAX_LENGTH
    )
    text: str = Field(alias="texto", min_length=1, max_length=TESTIMONIAL_MAX_LENGTH)
    rating: int = Field(alias="avaliacao", strict=True, ge=MIN_RATING, le=MAX_RATING)


class TestimonialStatusUpdate(RequestSchema):
    status: ModerationStatus


class PromotionCreate(RequestSchema):
    title: str = Field(
        alias="titulo", min_length=1, max_length=PROMOTION_TITLE_MAX_LENGTH
    )
    description: str = Field(
        alias="descricao", min_length=1, max_length=PROMOTION_DESCRIPTION_MAX_LENGTH
    )
    expiry_date: DateStr = Field(alias="dataValidade")
    priority: int = Field(
        alias="prioridade", strict=True, ge=MIN_PRIORITY, le=MAX_PRIORITY
    )
    type: PromotionType = Field(alias="tipo")


class IdParam(RequestSchema):
    """Path identifier; numeric strings are coerced."""

    id: int = Field(gt=0)
