"""Application service - use cases for the shop profile.

Each operation validates its raw input, enforces the business rules the
store does not enforce itself, calls the store and turns a missing record
into a categorized domain error.
"""

from typing import Any, Final

from ..domain.constants import (
    MAX_ACTIVE_PROMOTIONS,
    MAX_PHOTOS,
    TOP_PRIORITY,
    OperatingStatus,
)
from ..domain.entities import Photo, Promotion, Sorveteria, Testimonial
from ..domain.exceptions import (
    LimitExceededError,
    NotFoundError,
    PriorityConflictError,
    ValidationError,
)
from ..infrastructure.store import SorveteriaStore
from ..logging_config import get_logger
from ..metrics import (
    record_photo_added,
    record_promotion_created,
    record_promotions_expired,
    record_testimonial_moderated,
    record_testimonial_submitted,
)
from .schemas import (
    IdParam,
    PhotoCreate,
    PromotionCreate,
    SorveteriaCreate,
    SorveteriaUpdate,
    TestimonialCreate,
    TestimonialStatusUpdate,
)
from .validation import (
    SchemaT,
    missing_differentiator_terms,
    missing_history_terms,
    validate_payload,
)

logger: Final = get_logger(__name__)

SORVETERIA_NOT_FOUND: Final = "Sorveteria not found"


def _validated(
    schema: type[SchemaT], data: Any, message: str = "Validation failed"
) -> SchemaT:
    result = validate_payload(schema, data)
    if not result.ok or result.value is None:
        raise ValidationError(message, details=result.errors)
    return result.value


def _missing_terms_details(field: str, terms: list[str]) -> list[dict[str, str]]:
    return [
        {
            "field": field,
            "code": "missing_term",
            "message": f"Missing required term: {term}",
        }
        for term in terms
    ]


class SorveteriaService:
    """Use cases over a single ``SorveteriaStore``."""

    def __init__(self, store: SorveteriaStore):
        self.store = store

    def _require_sorveteria(self) -> Sorveteria:
        sorveteria = self.store.get()
        if sorveteria is None:
            raise NotFoundError(SORVETERIA_NOT_FOUND)
        return sorveteria

    def get_sorveteria(self) -> Sorveteria:
        """Return the profile with a freshly computed operating status."""
        self._require_sorveteria()
        self.store.update_operating_status()
        return self._require_sorveteria()

    def create_or_update(self, body: Any) -> Sorveteria:
        """Create the profile or replace it wholesale.

        Besides the schema, the history must mention every required term and
        the differentiators must cover every required term between them.
        Photos, testimonials and promotions start empty again.
        """
        params = _validated(SorveteriaCreate, body)

        missing = missing_history_terms(params.history)
        if missing:
            logger.warning("History is missing required terms", missing=missing)
            raise ValidationError(
                f"História deve incluir: {', '.join(missing)}",
                details=_missing_terms_details("historiaSorveteria", missing),
            )

        missing = missing_differentiator_terms(params.differentiators)
        if missing:
            logger.warning(
                "Differentiators are missing required terms", missing=missing
            )
            raise ValidationError(
                f"Diferenciais devem incluir: {', '.join(missing)}",
                details=_missing_terms_details("diferenciais", missing),
            )

        sorveteria = self.store.set_full(
            {
                **params.to_fields(),
                "operating_status": OperatingStatus.CLOSED,
                "photos": [],
                "testimonials": [],
                "average_rating": None,
                "rating_count": 0,
                "active_promotions": [],
            }
        )
        self.store.update_operating_status()

        logger.info("Sorveteria saved", name=sorveteria.name)
        return sorveteria

    def update(self, body: Any) -> Sorveteria:
        """Merge the provided fields; content keyword rules are not re-checked."""
        params = _validated(SorveteriaUpdate, body)

        self._require_sorveteria()
        updated = self.store.update_partial(params.to_fields())
        if updated is None:
            raise NotFoundError(SORVETERIA_NOT_FOUND)

        self.store.update_operating_status()
        logger.info("Sorveteria updated", fields=sorted(params.model_fields_set))
        return updated

    def add_photo(self, body: Any) -> Photo:
        params = _validated(PhotoCreate, body)

        sorveteria = self._require_sorveteria()
        if len(sorveteria.photos) >= MAX_PHOTOS:
            raise LimitExceededError(f"Maximum of {MAX_PHOTOS} photos allowed")

        photo = self.store.add_photo(
            url=params.url, category=params.category, description=params.description
        )
        if photo is None:
            raise NotFoundError(SORVETERIA_NOT_FOUND)

        record_photo_added(str(photo.category))
        logger.info("Photo added", photo_id=photo.id, order=photo.order)
        return photo

    def remove_photo(self, photo_id: Any) -> dict[str, str]:
        params = _validated(IdParam, {"id": photo_id}, message="Invalid ID")

        if not self.store.remove_photo(params.id):
            raise NotFoundError("Photo not found")

        logger.info("Photo removed", photo_id=params.id)
        return {"message": "Photo removed successfully"}

    def add_testimonial(self, body: Any) -> Testimonial:
        params = _validated(TestimonialCreate, body)

        testimonial = self.store.add_testimonial(
            customer_name=params.customer_name, text=params.text, rating=params.rating
        )
        if testimonial is None:
            raise NotFoundError(SORVETERIA_NOT_FOUND)

        record_testimonial_submitted(testimonial.rating)
        logger.info("Testimonial submitted", testimonial_id=testimonial.id)
        return testimonial

    def update_testimonial_status(self, testimonial_id: Any, body: Any) -> Testimonial:
        id_param = _validated(IdParam, {"id": testimonial_id}, message="Invalid ID")
        params = _validated(TestimonialStatusUpdate, body, message="Invalid status")

        testimonial = self.store.update_testimonial_status(id_param.id, params.status)
        if testimonial is None:
            raise NotFoundError("Testimonial not found")

        record_testimonial_moderated(str(params.status))
        logger.info(
            "Testimonial moderated",
            testimonial_id=testimonial.id,
            status=str(testimonial.status),
        )
        return testimonial

    def add_promotion(self, body: Any) -> Promotion:
        params = _validated(PromotionCreate, body)

        sorveteria = self._require_sorveteria()
        if sorveteria.active_promotion_count() >= MAX_ACTIVE_PROMOTIONS:
            raise LimitExceededError(
                f"Maximum of {MAX_ACTIVE_PROMOTIONS} active promotions allowed"
            )

        if params.priority == TOP_PRIORITY and sorveteria.has_top_priority_promotion():
            raise PriorityConflictError(
                f"Only one promotion can have priority {TOP_PRIORITY}"
            )

        promotion = self.store.add_promotion(
            title=params.title,
            description=params.description,
            expiry_date=params.expiry_date,
            priority=params.priority,
            type=params.type,
        )
        if promotion is None:
            raise NotFoundError(SORVETERIA_NOT_FOUND)

        record_promotion_created(str(promotion.type), promotion.priority)
        logger.info(
            "Promotion created", promotion_id=promotion.id, priority=promotion.priority
        )
        return promotion

    def remove_expired_promotions(self) -> dict[str, Any]:
        """Maintenance sweep; always succeeds."""
        removed = self.store.remove_expired_promotions()

        record_promotions_expired(removed)
        logger.info("Expired promotions swept", removed=removed)
        return {"message": "Expired promotions removed", "removed": removed}

    def update_status(self) -> dict[str, str]:
        """Maintenance recompute; reports ``unknown`` when there is no profile."""
        status = self.store.update_operating_status()

        return {
            "message": "Status updated",
            "status": str(status) if status is not None else "unknown",
        }
