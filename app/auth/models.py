# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from uuid import UUID
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the only identity information the API keeps about a caller.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None


class Credentials(BaseModel):
    """Email/password pair forwarded to Supabase Auth."""
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class AuthSessionResponse(BaseModel):
    """Returned by login and signup."""
    user_id: Optional[str] = None
    email: Optional[str] = None
    session_active: bool = False


class VerifyResponse(BaseModel):
    valid: bool
    user_id: str
    email: Optional[str] = None
