"""
Accounts Routers

Authentication endpoints (signup, login, current user, token refresh) and
user settings endpoints (preferences, profile).
"""

# Standard library
import logging

# Third-party
from fastapi import APIRouter, Depends

# Local application
from accounts.schemas import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    PreferencesUpdate,
    ProfileUpdate,
    RefreshTokenRequest,
    SignupRequest,
    UserPreferences,
    UserProfile,
)
from accounts.service import (
    describe_current_user,
    login_user,
    refresh_user_token,
    register_user,
    update_user_preferences,
    update_user_profile,
)
from core.auth import get_current_user

# Configure logging
logger = logging.getLogger(__name__)

auth_router = APIRouter()
users_router = APIRouter()


@auth_router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(data: SignupRequest) -> AuthResponse:
    """
    Registers a new account.

    Raises:
        AppError: 400 if the email is already registered.
    """
    logger.info(f"Signup request for {data.email}")
    return await register_user(data=data)


@auth_router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest) -> AuthResponse:
    """
    Logs a user in with email and password.

    Raises:
        AppError: 400 on invalid credentials.
    """
    return await login_user(data=data)


@auth_router.get("/me", response_model=CurrentUserResponse)
async def get_me(user: dict = Depends(get_current_user)) -> CurrentUserResponse:
    """Returns the authenticated user's profile and support-widget data."""
    return await describe_current_user(user=user)


@auth_router.post("/refresh-token", response_model=AuthResponse)
async def refresh_token(
    data: RefreshTokenRequest,
    user: dict = Depends(get_current_user),
) -> AuthResponse:
    """Exchanges the refresh token for a fresh session."""
    return await refresh_user_token(user=user, refresh_token=data.refresh_token)


@users_router.patch("/preferences", response_model=UserPreferences)
async def update_preferences(
    data: PreferencesUpdate,
    user: dict = Depends(get_current_user),
) -> UserPreferences:
    """Merges new translation defaults into the user's preferences."""
    logger.info(f"Updating preferences for user {user['id']}")
    return await update_user_preferences(user=user, data=data)


@users_router.patch("/profile", response_model=UserProfile)
async def update_profile(
    data: ProfileUpdate,
    user: dict = Depends(get_current_user),
) -> UserProfile:
    """
    Updates the user's name and/or email.

    A changed email also becomes the login email of the auth user.

    Raises:
        AppError: 400 if the email belongs to another account.
    """
    logger.info(f"Updating profile for user {user['id']}")
    return await update_user_profile(user=user, data=data)
