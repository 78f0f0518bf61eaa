"""Shared validation utilities for the application layer.

Schemas are run through ``validate_payload``, which never raises: it hands
back either the parsed model or a list of field-level violations so the
service can inspect every outcome the same way.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..domain.constants import REQUIRED_DIFFERENTIATOR_TERMS, REQUIRED_HISTORY_TERMS
from ..logging_utils import log_validation_error

SchemaT = TypeVar("SchemaT", bound=BaseModel)

FieldViolation = dict[str, str]


@dataclass
class ValidationResult(Generic[SchemaT]):
    """Outcome of validating raw input against a schema."""

    value: SchemaT | None = None
    errors: list[FieldViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _field_path(loc: Sequence[int | str]) -> str:
    return ".".join(str(part) for part in loc) or "body"


def validate_payload(schema: type[SchemaT], data: Any) -> ValidationResult[SchemaT]:
    """Validate ``data`` against ``schema`` without raising.

    Args:
        schema: Pydantic model describing the request shape
        data: Raw decoded input (request body or path parameters)

    Returns:
        ValidationResult holding the model, or one violation per failing field
    """
    try:
        return ValidationResult(value=schema.model_validate(data))
    except PydanticValidationError as e:
        errors: list[FieldViolation] = []
        for error in e.errors():
            violation = {
                "field": _field_path(error["loc"]),
                "code": error["type"],
                "message": error["msg"],
            }
            log_validation_error(
                field=violation["field"],
                value=error.get("input"),
                error_message=violation["message"],
            )
            errors.append(violation)
        return ValidationResult(errors=errors)


def find_missing_terms(text: str, terms: Iterable[str]) -> list[str]:
    """Terms that do not occur in ``text`` (case-insensitive)."""
    lowered = text.lower()
    return [term for term in terms if term not in lowered]


def find_missing_collective_terms(
    items: Iterable[str], terms: Iterable[str]
) -> list[str]:
    """Terms that do not occur in any of ``items`` (case-insensitive)."""
    lowered = [item.lower() for item in items]
    return [term for term in terms if not any(term in item for item in lowered)]


def missing_history_terms(history: str) -> list[str]:
    return find_missing_terms(history, REQUIRED_HISTORY_TERMS)


def missing_differentiator_terms(differentiators: Iterable[str]) -> list[str]:
    return find_missing_collective_terms(differentiators, REQUIRED_DIFFERENTIATOR_TERMS)
