"""FastAPI dependency guarding routes with bearer token verification."""

import logging
from typing import Annotated

from fastapi import Header, Request
from jose import JWTError

from feed_api.auth.security import parse_authorization_header, verify_token
from feed_api.errors import AuthVerificationFailed

logger = logging.getLogger(__name__)


async def require_auth(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> None:
    """
    FastAPI dependency that requires a verifiable bearer token.

    Args:
        request: Incoming request, used to reach application settings
        authorization: The Authorization header value

    Raises:
        Unauthenticated: 401 if the header is missing or malformed
        AuthVerificationFailed: 500 if the token does not verify
    """
    token = parse_authorization_header(authorization)

    settings = request.app.state.settings
    try:
        verify_token(token, settings.jwt_secret, settings.jwt_algorithms)
    except JWTError as e:
        ip_address = request.client.host if request.client else "unknown"
        logger.info(f"Token verification failed from ip={ip_address}: {e}")
        raise AuthVerificationFailed() from e
