"""Infrastructure and technical constants."""

from typing import Final

# Technical configuration constants
MIN_API_TOKEN_LENGTH: Final = 16
DEFAULT_PORT: Final = 8000
DEFAULT_API_PREFIX: Final = "/api/internal"
DEFAULT_TIMEZONE: Final = "America/Sao_Paulo"
