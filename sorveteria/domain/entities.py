"""Pure domain entities without infrastructure dependencies."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from .constants import (
    TOP_PRIORITY,
    ModerationStatus,
    OperatingStatus,
    PhotoCategory,
    PromotionType,
)


@dataclass
class DayHours:
    """Regular opening hours for one day of the week (``HH:MM`` strings)."""

    open: str
    close: str
    closed: bool = False


@dataclass
class SpecialHours:
    """Override of the regular hours for a single calendar date."""

    date: str
    description: str
    open: str | None = None
    close: str | None = None
    closed: bool = False


@dataclass
class Photo:
    id: int
    url: str
    category: PhotoCategory
    order: int
    description: str | None = None


@dataclass
class Testimonial:
    id: int
    customer_name: str
    text: str
    rating: int
    created_at: datetime
    status: ModerationStatus = ModerationStatus.PENDING

    def is_approved(self) -> bool:
        return self.status == ModerationStatus.APPROVED


@dataclass
class Promotion:
    id: int
    title: str
    description: str
    expiry_date: str
    priority: int
    type: PromotionType
    active: bool = True

    def is_expired(self, today: str) -> bool:
        """Check expiry against a ``YYYY-MM-DD`` date; the expiry day itself counts."""
        # Fixed-width ISO dates compare correctly as strings
        return self.expiry_date < today


@dataclass
class Sorveteria:
    """Core business entity: the shop's public profile (singleton)."""

    id: int
    name: str
    logo: str
    history: str
    founding_year: int
    differentiators: list[str]
    founders: str
    weekly_hours: dict[str, DayHours]
    created_at: datetime
    modified_at: datetime
    slogan: str | None = None
    special_hours: list[SpecialHours] = field(default_factory=list)
    operating_status: OperatingStatus = OperatingStatus.CLOSED
    photos: list[Photo] = field(default_factory=list)
    testimonials: list[Testimonial] = field(default_factory=list)
    average_rating: float | None = None
    rating_count: int = 0
    active_promotions: list[Promotion] = field(default_factory=list)
    mission: str | None = None
    vision: str | None = None
    values: list[str] = field(default_factory=list)

    def touch(self, now: datetime) -> None:
        """Refresh the last-modified timestamp."""
        self.modified_at = now

    def find_photo(self, photo_id: int) -> Photo | None:
        return next((p for p in self.photos if p.id == photo_id), None)

    def find_testimonial(self, testimonial_id: int) -> Testimonial | None:
        return next((t for t in self.testimonials if t.id == testimonial_id), None)

    def approved_testimonials(self) -> list[Testimonial]:
        return [t for t in self.testimonials if t.is_approved()]

    def recalculate_rating(self) -> None:
        """Recompute average and count from approved testimonials only."""
        approved = self.approved_testimonials()
        if not approved:
            self.average_rating = None
            self.rating_count = 0
            return

        mean = Decimal(sum(t.rating for t in approved)) / Decimal(len(approved))
        self.average_rating = float(mean.quantize(Decimal("0.1"), ROUND_HALF_UP))
        self.rating_count = len(approved)

    def active_promotion_count(self) -> int:
        return sum(1 for p in self.active_promotions if p.active)

    def has_top_priority_promotion(self) -> bool:
        return any(
            p.active and p.priority == TOP_PRIORITY for p in self.active_promotions
        )

    def remove_expired_promotions(self, today: str) -> int:
        """Drop promotions that expired before ``today``.

        Returns:
            Number of promotions removed
        """
        before = len(self.active_promotions)
        self.active_promotions = [
            p for p in self.active_promotions if not p.is_expired(today)
        ]
        return before - len(self.active_promotions)
