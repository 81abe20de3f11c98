"""Error taxonomy for the Feed API and its HTTP rendering.

Every error raised on purpose by a route or dependency derives from
``FeedAPIError`` and knows its own status code and JSON body. Errors that are
not ``FeedAPIError`` instances are left to Starlette's server-error handling.
"""

import logging
from enum import Enum

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


class FeedAPIError(Exception):
    """Base class for errors rendered as structured JSON responses."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class UnauthenticatedReason(str, Enum):
    NO_HEADER = "No authorization headers."
    MALFORMED = "Malformed token."


class Unauthenticated(FeedAPIError):
    """The request carries no usable authorization header."""

    status_code = 401

    def __init__(self, reason: UnauthenticatedReason):
        super().__init__(reason.value)
        self.reason = reason


class AuthVerificationFailed(FeedAPIError):
    """The bearer token did not verify against the shared secret.

    Rendered as a 500 for compatibility with existing clients.
    """

    status_code = 500

    def __init__(self):
        super().__init__("Failed to authenticate.")

    def to_dict(self) -> dict:
        return {"auth": False, "message": self.message}


class ValidationReason(str, Enum):
    MISSING_CAPTION = "Caption is required or malformed."
    MISSING_URL = "File url is required."


class FeedValidationError(FeedAPIError):
    """A required request field is missing or empty."""

    status_code = 400

    def __init__(self, reason: ValidationReason):
        super().__init__(reason.value)
        self.reason = reason


class UpstreamFailure(FeedAPIError):
    """The feed store or signing provider failed while serving a request."""

    status_code = 500

    def to_dict(self) -> dict:
        return {"error": self.message}


async def feed_api_error_handler(request: Request, exc: FeedAPIError) -> JSONResponse:
    """Render a FeedAPIError as its JSON body and status code."""
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the Feed API exception handlers on an application."""
    app.add_exception_handler(FeedAPIError, feed_api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]
