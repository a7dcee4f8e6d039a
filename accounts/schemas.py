"""
Account Schemas

Pydantic models for authentication and user settings.
"""

# Standard library
from datetime import datetime
from typing import Any, Optional

# Third-party
from pydantic import BaseModel, Field, field_validator

# Local application
from translation.schemas import Style, Tone, TranslationOptions


class SignupRequest(BaseModel):
    """Request model for account registration."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    """Request model for email/password login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(BaseModel):
    """Request model for exchanging a refresh token."""

    refresh_token: str = Field(..., min_length=1)


class UserPreferences(BaseModel):
    """
    Stored translation defaults of a user.

    Attributes:
        default_source_language: Preselected source language code.
        default_target_language: Preselected target language code.
        default_translation_options: Preselected tone/style/formatting.
    """

    default_source_language: str = "en"
    default_target_language: str = "es"
    default_translation_options: TranslationOptions = Field(
        default_factory=TranslationOptions
    )


class UserProfile(BaseModel):
    """Public view of a user profile."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("preferences", mode="before")
    @classmethod
    def _default_preferences(cls, value: Any) -> Any:
        return value if value is not None else {}


class AuthResponse(BaseModel):
    """Response model for signup, login and token refresh."""

    token: Optional[str] = None
    refresh_token: Optional[str] = None
    user: UserProfile
    intercom: Optional[dict[str, Any]] = None


class CurrentUserResponse(BaseModel):
    """Response model for the current-user endpoint."""

    user: UserProfile
    intercom: Optional[dict[str, Any]] = None


class TranslationOptionsUpdate(BaseModel):
    """Partial update of the default translation options."""

    tone: Optional[Tone] = None
    style: Optional[Style] = None
    preserve_formatting: Optional[bool] = None


class PreferencesUpdate(BaseModel):
    """Request model for updating translation defaults."""

    default_source_language: Optional[str] = None
    default_target_language: Optional[str] = None
    default_translation_options: Optional[TranslationOptionsUpdate] = None


class ProfileUpdate(BaseModel):
    """Request model for updating name and email."""

    name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[str] = Field(default=None, max_length=254)
