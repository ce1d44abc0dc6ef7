"""
Session resolution - who is making this request.

The resolver reads the session cookie, verifies it, and produces an
Identity. Routes never decode tokens themselves; they depend on
``require_identity`` (401 when not logged in) or ``optional_identity``
(None when not logged in).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Depends, Request, Response

from staybook.auth.tokens import SessionClaim, issue_token, verify_token
from staybook.config import Settings, get_settings
from staybook.errors import NoCredential, TokenError, Unauthorized

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """The verified caller of a request."""

    user_id: str
    email: str

    @classmethod
    def from_claim(cls, claim: SessionClaim) -> Identity:
        return cls(user_id=claim.id, email=claim.email)


# =============================================================================
# Resolver
# =============================================================================


def resolve_identity(token: str | None, settings: Settings) -> Identity:
    """
    Turn a raw session token into an Identity.

    Raises:
        NoCredential: no token at all (anonymous request)
        Malformed / InvalidSignature / Expired: token failed verification
    """
    if not token:
        raise NoCredential()

    claim = verify_token(
        token,
        settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )
    return Identity.from_claim(claim)


def session_token(request: Request, settings: Settings = Depends(get_settings)) -> str | None:
    """Read the session credential off the request."""
    return request.cookies.get(settings.session_cookie_name)


# =============================================================================
# FastAPI dependencies
# =============================================================================


async def optional_identity(
    token: str | None = Depends(session_token),
    settings: Settings = Depends(get_settings),
) -> Identity | None:
    """
    Identity of the caller, or None when there is no session at all.

    A credential that is present but fails verification is still a 401;
    only a missing one counts as anonymous.
    """
    try:
        return resolve_identity(token, settings)
    except NoCredential:
        return None
    except TokenError as e:
        logger.info(f"Rejected session credential: {e.kind}")
        raise Unauthorized()


async def require_identity(
    token: str | None = Depends(session_token),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """Identity of the caller; any failure becomes a plain 401."""
    try:
        return resolve_identity(token, settings)
    except NoCredential:
        raise Unauthorized()
    except TokenError as e:
        # Verification details stay server-side
        logger.info(f"Rejected session credential: {e.kind}")
        raise Unauthorized()


# =============================================================================
# Cookie handling
# =============================================================================


def start_session(response: Response, identity: Identity, settings: Settings) -> str:
    """Issue a token for the identity and attach it as the session cookie."""
    ttl = settings.session_ttl_seconds
    token = issue_token(
        SessionClaim(id=identity.user_id, email=identity.email),
        settings.jwt_secret_key.get_secret_value(),
        expires_in=ttl,
        algorithm=settings.jwt_algorithm,
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=ttl,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="strict",
    )
    return token


def end_session(response: Response, settings: Settings) -> None:
    """Overwrite the session cookie with an empty, already-expired value."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value="",
        max_age=0,
        expires=0,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="strict",
    )
