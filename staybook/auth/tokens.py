# =============================================================================
# Session Token Codec
# =============================================================================
#
# Signed JWT carrying the session claim {id, email}:
#   - issue_token()  -> compact HS256 token, optional exp
#   - verify_token() -> SessionClaim, or a TokenError subclass
#
# =============================================================================

from __future__ import annotations

from datetime import datetime, timedelta

import jwt
from pydantic import BaseModel, ValidationError

from staybook.core.utils import utc_now
from staybook.errors import Expired, InvalidSignature, Malformed

DEFAULT_ALGORITHM = "HS256"


class SessionClaim(BaseModel):
    """Identity payload embedded in the token."""

    model_config = {"frozen": True}

    id: str
    email: str


def issue_token(
    claim: SessionClaim,
    secret: str,
    *,
    expires_in: int | None = None,
    algorithm: str = DEFAULT_ALGORITHM,
    now: datetime | None = None,
) -> str:
    """
    Sign a session claim.

    Args:
        claim: Who the token speaks for
        secret: Server signing secret
        expires_in: Lifetime in seconds; None issues a token without exp

    Returns:
        The encoded token string
    """
    issued_at = now or utc_now()
    payload = {
        "id": claim.id,
        "email": claim.email,
        "iat": issued_at,
    }
    if expires_in is not None:
        payload["exp"] = issued_at + timedelta(seconds=expires_in)

    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(
    token: str,
    secret: str,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
) -> SessionClaim:
    """
    Decode and validate a session token.

    Raises:
        Expired: exp claim is in the past
        InvalidSignature: signature does not match the secret
        Malformed: anything else wrong with the token or its claims
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"verify_iat": False},
        )
    except jwt.ExpiredSignatureError:
        raise Expired()
    except jwt.InvalidSignatureError:
        raise InvalidSignature()
    except jwt.InvalidTokenError as e:
        raise Malformed(f"Malformed session token: {type(e).__name__}")

    try:
        return SessionClaim(id=str(payload["id"]), email=payload["email"])
    except (KeyError, TypeError, ValidationError):
        raise Malformed("Session token is missing identity claims")
