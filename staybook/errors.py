"""
Error taxonomy.

Every failure a request can end in is a StaybookError subclass carrying a
machine-readable ``kind`` and the HTTP status it maps to. The API renders
them as ``{"kind": ..., "message": ...}``.
"""

from __future__ import annotations


class StaybookError(Exception):
    """Base exception for all application errors."""

    kind = "error"
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "message": self.message}


# =============================================================================
# Authentication
# =============================================================================


class Unauthorized(StaybookError):
    """Caller is not authenticated."""

    kind = "unauthorized"
    status_code = 401
    default_message = "Authentication required"


class TokenError(Unauthorized):
    """Base exception for session token failures."""

    kind = "token_error"
    default_message = "Invalid session"


class NoCredential(TokenError):
    """No session cookie on the request (anonymous)."""

    kind = "no_credential"
    default_message = "No session credential"


class Malformed(TokenError):
    """Token could not be decoded or is missing claims."""

    kind = "malformed"
    default_message = "Malformed session token"


class InvalidSignature(TokenError):
    """Token signature does not match the signing secret."""

    kind = "invalid_signature"
    default_message = "Invalid session token signature"


class Expired(TokenError):
    """Token is past its exp claim."""

    kind = "expired"
    default_message = "Session has expired"


# =============================================================================
# Authorization / lookup
# =============================================================================


class Forbidden(StaybookError):
    """Authenticated, but not allowed to touch this resource."""

    kind = "forbidden"
    status_code = 403
    default_message = "Permission denied"


class NotFound(StaybookError):
    kind = "not_found"
    status_code = 404
    default_message = "Not found"


# =============================================================================
# Input
# =============================================================================


class ValidationFailure(StaybookError):
    """Client input could not be accepted."""

    kind = "validation_failure"
    status_code = 422
    default_message = "Invalid input"


class Conflict(ValidationFailure):
    """Input clashes with existing state (duplicate email, overlapping stay)."""

    kind = "conflict"
    status_code = 409
    default_message = "Conflict"


# =============================================================================
# Infrastructure
# =============================================================================


class StoreUnavailable(StaybookError):
    """Backing store failed or timed out. Safe to retry."""

    kind = "store_unavailable"
    status_code = 503
    default_message = "Storage temporarily unavailable, please retry"
