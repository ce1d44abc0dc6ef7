# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   POST /api/register  - Create account (no session is started)
#   POST /api/login     - Check credentials, set session cookie
#   POST /api/logout    - Clear session cookie
#   GET  /api/profile   - Current user, or null when anonymous
#
# =============================================================================

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from staybook.api.dependencies import get_user_service
from staybook.auth.session import Identity, end_session, optional_identity, start_session
from staybook.config import Settings, get_settings
from staybook.core.models import LoginRequest, UserCreate, UserResponse
from staybook.services import UserService

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=UserResponse)
async def register(
    data: UserCreate,
    users: UserService = Depends(get_user_service),
):
    """Create a new account."""
    user = await users.register(data)
    return UserResponse.from_user(user)


@router.post("/login", response_model=UserResponse)
async def login(
    data: LoginRequest,
    response: Response,
    users: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
):
    """Authenticate and attach the session cookie."""
    user = await users.authenticate(data.email, data.password)
    start_session(response, Identity(user_id=user.id, email=user.email), settings)
    return UserResponse.from_user(user)


@router.post("/logout")
async def logout(response: Response, settings: Settings = Depends(get_settings)):
    """Expire the session cookie."""
    end_session(response, settings)
    return True


@router.get("/profile", response_model=UserResponse | None)
async def profile(
    identity: Identity | None = Depends(optional_identity),
    users: UserService = Depends(get_user_service),
):
    """Get the current user, or null for anonymous requests."""
    if identity is None:
        return None
    user = await users.get(identity.user_id)
    return UserResponse.from_user(user)
