"""Auth gate: resolves the caller identity from the bearer token.

The gate only verifies the token signature and expiry. It never opens a
database session, so an unauthenticated request is rejected before any
store access.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskboard.core.errors import Unauthorized
from taskboard.core.security import verify_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(
    scheme_name="Bearer Token",
    description="JWT returned by /auth/register or /auth/login",
    auto_error=False,
)


@dataclass(frozen=True)
class CurrentUser:
    """Identity of the authenticated caller, passed explicitly to the stores."""

    user_id: int


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    # Header absent, schéma autre que Bearer ou token vide
    if credentials is None or not credentials.credentials.strip():
        logger.debug("Missing or malformed Authorization header")
        raise Unauthorized()

    user_id = verify_token(credentials.credentials.strip())
    return CurrentUser(user_id=user_id)
