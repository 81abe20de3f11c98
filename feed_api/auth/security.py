"""Bearer token parsing and verification."""

from typing import Any

from jose import jwt

from feed_api.errors import Unauthenticated, UnauthenticatedReason


def parse_authorization_header(authorization: str | None) -> str:
    """
    Extract the token from an ``Authorization: <scheme> <token>`` header.

    The header must split on single spaces into exactly two parts. The
    scheme word is not checked.

    Raises:
        Unauthenticated: If the header is missing, empty or malformed
    """
    if not authorization:
        raise Unauthenticated(UnauthenticatedReason.NO_HEADER)

    token_bearer = authorization.split(" ")
    if len(token_bearer) != 2:
        raise Unauthenticated(UnauthenticatedReason.MALFORMED)

    return token_bearer[1]


def verify_token(token: str, secret: str, algorithms: list[str]) -> dict[str, Any]:
    """
    Verify a signed JWT and return its claims.

    Raises:
        jose.JWTError: If the signature, expiry or encoding is invalid
    """
    return jwt.decode(token, secret, algorithms=algorithms)
