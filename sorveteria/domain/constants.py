"""Domain business rules and constants."""

from enum import StrEnum
from typing import Final

# Profile field bounds
NAME_MIN_LENGTH: Final = 1
NAME_MAX_LENGTH: Final = 200
SLOGAN_MAX_LENGTH: Final = 50
HISTORY_MIN_LENGTH: Final = 200
HISTORY_MAX_LENGTH: Final = 800
FOUNDERS_MAX_LENGTH: Final = 200
DIFFERENTIATOR_MAX_LENGTH: Final = 100
MIN_DIFFERENTIATORS: Final = 3
MAX_DIFFERENTIATORS: Final = 6
MISSION_MAX_LENGTH: Final = 200
VISION_MAX_LENGTH: Final = 200
MAX_VALUES: Final = 5
VALUE_MAX_LENGTH: Final = 50
MIN_FOUNDING_YEAR: Final = 1900
SPECIAL_HOURS_DESCRIPTION_MAX_LENGTH: Final = 200

# Sub-entity bounds
MAX_PHOTOS: Final = 12
PHOTO_DESCRIPTION_MAX_LENGTH: Final = 150
CUSTOMER_NAME_MAX_LENGTH: Final = 100
TESTIMONIAL_MAX_LENGTH: Final = 300
MIN_RATING: Final = 1
MAX_RATING: Final = 5
MAX_ACTIVE_PROMOTIONS: Final = 3
PROMOTION_TITLE_MAX_LENGTH: Final = 200
PROMOTION_DESCRIPTION_MAX_LENGTH: Final = 500
MIN_PRIORITY: Final = 1
MAX_PRIORITY: Final = 5
TOP_PRIORITY: Final = 1

# Content rules: every term must appear somewhere (lowercase substring match)
REQUIRED_HISTORY_TERMS: Final = ("origem", "tradição", "qualidade")
REQUIRED_DIFFERENTIATOR_TERMS: Final = ("qualidade", "tradição", "atendimento")

# Day keys indexed by datetime.weekday() (Monday == 0)
WEEKDAY_KEYS: Final = (
    "segunda",
    "terca",
    "quarta",
    "quinta",
    "sexta",
    "sabado",
    "domingo",
)

TIME_PATTERN: Final = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"
DATE_PATTERN: Final = r"^\d{4}-\d{2}-\d{2}$"


class OperatingStatus(StrEnum):
    OPEN = "aberto"
    CLOSED = "fechado"
    # Only reachable by direct assignment, never by recomputation
    OPENING_SOON = "abrindo_em_breve"


class PhotoCategory(StrEnum):
    COUNTER = "balcao"
    SERVICE = "atendimento"
    OUTDOOR = "externo"
    GENERAL = "geral"


class ModerationStatus(StrEnum):
    PENDING = "pendente"
    APPROVED = "aprovado"
    REJECTED = "rejeitado"


class PromotionType(StrEnum):
    DISCOUNT = "desconto"
    COMBO = "combo"
    GIFT = "brinde"
    SPECIAL = "especial"
