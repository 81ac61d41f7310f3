"""Pydantic models for API request/response."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CredentialsRequest(BaseModel):
    """Request model for registration and login."""
    email: EmailStr
    # Strength rules are left to the deployment; only bound the size
    password: str = Field(..., max_length=1024)


class RegisterResponse(BaseModel):
    """Response model for registration."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userID", description="ID of the new user")


class TokenResponse(BaseModel):
    """Response model for login."""
    token: str = Field(..., description="Bearer token for the Authorization header")
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """Response model for user info (never includes the password hash)."""
    id: str
    email: str
    created_at: datetime
    updated_at: datetime
