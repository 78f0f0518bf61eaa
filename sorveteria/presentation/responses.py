"""Response models and the uniform API envelope.

Successful calls answer ``{"success": true, "data": ...}``; failures answer
``{"success": false, "error": {"code", "message", "details"?}}``.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..domain.constants import (
    ModerationStatus,
    OperatingStatus,
    PhotoCategory,
    PromotionType,
)

DataT = TypeVar("DataT")


class ErrorCodes:
    """Client-facing error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
    PRIORITY_CONFLICT = "PRIORITY_CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class DayHoursRead(ReadSchema):
    open: str = Field(alias="abertura")
    close: str = Field(alias="fechamento")
    closed: bool = Field(alias="fechado")


class SpecialHoursRead(ReadSchema):
    date: str = Field(alias="data")
    description: str = Field(alias="descricao")
    open: str | None = Field(alias="abertura")
    close: str | None = Field(alias="fechamento")
    closed: bool = Field(alias="fechado")


class PhotoRead(ReadSchema):
    id: int = Field(description="Photo identifier, never reused")
    url: str
    description: str | None = Field(alias="descricao")
    category: PhotoCategory = Field(alias="categoria")
    order: int = Field(alias="ordem", description="Display order")


class TestimonialRead(ReadSchema):
    id: int
    customer_name: str = Field(alias="nomeCliente")
    text: str = Field(alias="texto")
    rating: int = Field(alias="avaliacao")
    status: ModerationStatus = Field(alias="statusModeracao")
    created_at: datetime = Field(alias="dataCriacao")


class PromotionRead(ReadSchema):
    id: int
    title: str = Field(alias="titulo")
    description: str = Field(alias="descricao")
    expiry_date: str = Field(alias="dataValidade")
    priority: int = Field(alias="prioridade")
    type: PromotionType = Field(alias="tipo")
    active: bool = Field(alias="ativa")


class SorveteriaRead(ReadSchema):
    """Complete shop profile as returned by the API."""

    id: int
    name: str = Field(alias="nomeSorveteria")
    logo: str = Field(alias="logotipo")
    slogan: str | None
    history: str = Field(alias="historiaSorveteria")
    founding_year: int = Field(alias="anoFundacao")
    differentiators: list[str] = Field(alias="diferenciais")
    founders: str = Field(alias="fundadores")
    weekly_hours: dict[str, DayHoursRead] = Field(alias="horariosSemana")
    special_hours: list[SpecialHoursRead] = Field(alias="horariosEspeciais")
    operating_status: OperatingStatus = Field(alias="statusFuncionamento")
    photos: list[PhotoRead] = Field(alias="fotosAmbiente")
    testimonials: list[TestimonialRead] = Field(alias="depoimentos")
    average_rating: float | None = Field(alias="avaliacaoMedia")
    rating_count: int = Field(alias="totalAvaliacoes")
    active_promotions: list[PromotionRead] = Field(alias="promocoesAtivas")
    mission: str | None = Field(alias="missao")
    vision: str | None = Field(alias="visao")
    values: list[str] = Field(alias="valores")
    created_at: datetime = Field(alias="dateCreated")
    modified_at: datetime = Field(alias="dateModified")


class MessageRead(BaseModel):
    message: str


class PromotionSweepRead(BaseModel):
    message: str
    removed: int = Field(description="Number of promotions removed")


class StatusRead(BaseModel):
    message: str
    status: str = Field(description="aberto | fechado | abrindo_em_breve | unknown")


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    data: DataT


class ErrorBody(BaseModel):
    code: str
    message: str
    details: list[dict[str, Any]] | None = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorBody
