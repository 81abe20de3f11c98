"""Bearer token authentication for the Feed API."""

from feed_api.auth.dependencies import require_auth

__all__ = ["require_auth"]
