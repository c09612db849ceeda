"""Bearer-token authentication for catalog and booking routes.

Token checks are switched on with the REQUIRE_AUTH setting; with it off the
dependency lets every request through and returns no claims.
"""
from typing import Any, Dict, Optional

from fastapi import Header, HTTPException, status

from movie_booking.core.config import settings
from movie_booking.core.exceptions import AuthError
from movie_booking.services.auth_service import decode_access_token
import logging

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an `Authorization: Bearer <token>` header.

    Raises:
        AuthError: (403) if the header is absent or not a bearer credential
    """
    if not authorization:
        raise AuthError("Missing bearer token", status_code=403)

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthError("Malformed authorization header", status_code=403)

    return token.strip()


async def verify_token(
    authorization: Optional[str] = Header(None),
) -> Optional[Dict[str, Any]]:
    """FastAPI dependency guarding protected routes.

    Returns:
        The token claims (`user_id`, `email`, `exp`), or None when
        authentication is not enforced.

    Raises:
        HTTPException: 403 when enforcement is on and the token is
            missing, malformed, tampered with or expired
    """
    if not settings.REQUIRE_AUTH:
        return None

    try:
        token = extract_bearer_token(authorization)
        return decode_access_token(token)
    except AuthError as e:
        logger.warning(f"Rejected request: {e.message}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
