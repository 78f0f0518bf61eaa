"""Bearer-token check for the internal API."""

import secrets

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import settings
from ..domain.exceptions import AuthenticationError

bearer_scheme = HTTPBearer(auto_error=False)


async def require_internal_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> None:
    """Reject requests without the configured token; open when none is set."""
    expected = settings.internal_api_token
    if expected is None:
        return

    if credentials is None or not secrets.compare_digest(
        credentials.credentials.encode(), expected.encode()
    ):
        raise AuthenticationError("Missing or invalid API token")
