"""Infrastructure layer - in-memory record store for the shop profile."""

import threading
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from ..config import settings
from ..domain.constants import (
    ModerationStatus,
    OperatingStatus,
    PhotoCategory,
    PromotionType,
)
from ..domain.entities import Photo, Promotion, Sorveteria, Testimonial
from ..domain.operating_status import compute_operating_status
from ..logging_config import get_logger
from ..logging_utils import log_store_operation

logger = get_logger(__name__)

PROFILE_ID = 1

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Current wall-clock time in the shop's configured time zone."""
    return datetime.now(ZoneInfo(settings.timezone))


class SorveteriaStore:
    """Single-record, non-persistent holder for the shop profile.

    Sub-entity ids come from three counters scoped to the instance; they only
    grow and are reset by ``clear()``. Every operation runs under one lock so
    derived fields are always recomputed against the mutation just applied.
    """

    def __init__(self, clock: Clock | None = None):
        self._clock: Clock = clock or local_now
        self._lock = threading.RLock()
        self._sorveteria: Sorveteria | None = None
        self._photo_counter = 0
        self._testimonial_counter = 0
        self._promotion_counter = 0

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> str:
        return self.now().strftime("%Y-%m-%d")

    def get(self) -> Sorveteria | None:
        with self._lock:
            return self._sorveteria

    def set_full(self, fields: Mapping[str, Any]) -> Sorveteria:
        """Create the profile, or overwrite every supplied field of it."""
        with self._lock:
            now = self.now()
            if self._sorveteria is None:
                self._sorveteria = Sorveteria(
                    id=PROFILE_ID, created_at=now, modified_at=now, **fields
                )
                operation = "create"
            else:
                self._sorveteria = replace(self._sorveteria, **fields, modified_at=now)
                operation = "replace"

            log_store_operation(operation, "Sorveteria", sorveteria_id=PROFILE_ID)
            return self._sorveteria

    def update_partial(self, fields: Mapping[str, Any]) -> Sorveteria | None:
        """Merge the supplied fields over the existing profile."""
        with self._lock:
            if self._sorveteria is None:
                log_store_operation("update", "Sorveteria", success=False)
                return None

            self._sorveteria = replace(
                self._sorveteria, **fields, modified_at=self.now()
            )
            log_store_operation(
                "update", "Sorveteria", sorveteria_id=PROFILE_ID, fields=sorted(fields)
            )
            return self._sorveteria

    def add_photo(
        self, url: str, category: PhotoCategory, description: str | None = None
    ) -> Photo | None:
        with self._lock:
            if self._sorveteria is None:
                return None

            self._photo_counter += 1
            photo = Photo(
                id=self._photo_counter,
                url=url,
                category=category,
                description=description,
                # Gaps left by removals are kept
                order=len(self._sorveteria.photos) + 1,
            )
            self._sorveteria.photos.append(photo)
            self._sorveteria.touch(self.now())

            log_store_operation("add", "Photo", photo_id=photo.id, order=photo.order)
            return photo

    def remove_photo(self, photo_id: int) -> bool:
        with self._lock:
            if self._sorveteria is None:
                return False

            photo = self._sorveteria.find_photo(photo_id)
            if photo is None:
                log_store_operation("remove", "Photo", success=False, photo_id=photo_id)
                return False

            self._sorveteria.photos.remove(photo)
            self._sorveteria.touch(self.now())

            log_store_operation("remove", "Photo", photo_id=photo_id)
            return True

    def add_testimonial(
        self, customer_name: str, text: str, rating: int
    ) -> Testimonial | None:
        """Append a pending testimonial.

        Testimonial changes only move the rating fields; the profile's
        modified timestamp stays as it was.
        """
        with self._lock:
            if self._sorveteria is None:
                return None

            self._testimonial_counter += 1
            testimonial = Testimonial(
                id=self._testimonial_counter,
                customer_name=customer_name,
                text=text,
                rating=rating,
                status=ModerationStatus.PENDING,
                created_at=self.now(),
            )
            self._sorveteria.testimonials.append(testimonial)
            self._sorveteria.recalculate_rating()

            log_store_operation("add", "Testimonial", testimonial_id=testimonial.id)
            return testimonial

    def update_testimonial_status(
        self, testimonial_id: int, status: ModerationStatus
    ) -> Testimonial | None:
        with self._lock:
            if self._sorveteria is None:
                return None

            testimonial = self._sorveteria.find_testimonial(testimonial_id)
            if testimonial is None:
                log_store_operation(
                    "moderate",
                    "Testimonial",
                    success=False,
                    testimonial_id=testimonial_id,
                )
                return None

            testimonial.status = status
            self._sorveteria.recalculate_rating()

            log_store_operation(
                "moderate",
                "Testimonial",
                testimonial_id=testimonial_id,
                status=str(status),
                average_rating=self._sorveteria.average_rating,
            )
            return testimonial

    def add_promotion(
        self,
        title: str,
        description: str,
        expiry_date: str,
        priority: int,
        type: PromotionType,
    ) -> Promotion | None:
        with self._lock:
            if self._sorveteria is None:
                return None

            self._promotion_counter += 1
            promotion = Promotion(
                id=self._promotion_counter,
                title=title,
                description=description,
                expiry_date=expiry_date,
                priority=priority,
                type=type,
                active=True,
            )
            self._sorveteria.active_promotions.append(promotion)
            self._sorveteria.touch(self.now())

            log_store_operation(
                "add", "Promotion", promotion_id=promotion.id, priority=priority
            )
            return promotion

    def remove_expired_promotions(self) -> int:
        with self._lock:
            if self._sorveteria is None:
                return 0

            removed = self._sorveteria.remove_expired_promotions(self.today())
            if removed > 0:
                self._sorveteria.touch(self.now())
                log_store_operation("expire", "Promotion", removed=removed)

            return removed

    def update_operating_status(self) -> OperatingStatus | None:
        """Recompute the operating status from the current time.

        Returns:
            The new status, or None when no profile exists
        """
        with self._lock:
            if self._sorveteria is None:
                return None

            status = compute_operating_status(
                self._sorveteria.weekly_hours,
                self._sorveteria.special_hours,
                self.now(),
            )
            self._sorveteria.operating_status = status
            logger.debug("Operating status recomputed", status=str(status))
            return status

    def clear(self) -> None:
        """Drop the profile and reset all id counters."""
        with self._lock:
            self._sorveteria = None
            self._photo_counter = 0
            self._testimonial_counter = 0
            self._promotion_counter = 0
            logger.debug("Store cleared")
