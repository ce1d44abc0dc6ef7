"""
Ownership authorization.

A single rule: only the user recorded as a resource's owner may change it.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from staybook.auth.session import Identity
from staybook.errors import Forbidden

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


def authorize_owner(resource_owner_id: Any, identity: Identity) -> Decision:
    """
    Allow iff the identity is the resource owner.

    Ids are compared as exact strings, so 42 and "42" are the same owner
    while "Ann" and "ann" are not.
    """
    if resource_owner_id is None:
        return Decision.DENY
    if str(resource_owner_id) == str(identity.user_id):
        return Decision.ALLOW
    return Decision.DENY


def ensure_owner(resource_owner_id: Any, identity: Identity, resource: str = "resource") -> None:
    """Raise Forbidden unless the identity owns the resource."""
    if authorize_owner(resource_owner_id, identity) is Decision.DENY:
        logger.warning(f"User {identity.user_id} denied access to {resource}")
        raise Forbidden(f"You are not the owner of this {resource}")
