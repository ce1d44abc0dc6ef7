"""
Authentication and authorization.

- passwords: salted PBKDF2 hashing
- tokens:    signed session token codec
- session:   cookie -> Identity resolution, FastAPI dependencies
- guard:     owner-only authorization
"""

from staybook.auth.passwords import hash_password, verify_password
from staybook.auth.tokens import SessionClaim, issue_token, verify_token
from staybook.auth.session import (
    Identity,
    resolve_identity,
    optional_identity,
    require_identity,
    start_session,
    end_session,
)
from staybook.auth.guard import Decision, authorize_owner, ensure_owner

__all__ = [
    # Passwords
    "hash_password",
    "verify_password",
    # Tokens
    "SessionClaim",
    "issue_token",
    "verify_token",
    # Session
    "Identity",
    "resolve_identity",
    "optional_identity",
    "require_identity",
    "start_session",
    "end_session",
    # Guard
    "Decision",
    "authorize_owner",
    "ensure_owner",
]
