"""Pydantic models for login, signup and logout requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.presentation.models import UserResponse


class LoginRequest(BaseModel):
    """Request model for logging in to the request's tenant.

    Fields are optional at the schema level so that a missing value is
    reported with the same 400 message as an empty one.
    """

    email: str | None = Field(None, description="Email address")
    password: str | None = Field(None, description="Password")


class SignupRequest(BaseModel):
    """Request model for registering in the request's tenant."""

    email: str | None = Field(None, description="Email address")
    password: str | None = Field(
        None, description="Password (at least 6 characters)"
    )
    name: str | None = Field(None, description="Optional display name")


class LoginResponse(BaseModel):
    """Response model for a successful login."""

    success: bool = True
    user: UserResponse


class SignupResponse(BaseModel):
    """Response model for a successful signup."""

    success: bool = True
    message: str = "User created successfully"
    user: UserResponse


class LogoutResponse(BaseModel):
    """Response model for logout."""

    success: bool = True
    message: str = "Logged out successfully"


class LogoutAllResponse(BaseModel):
    """Response model for revoking every session in the tenant."""

    success: bool = True
    revoked_sessions: int = Field(..., description="Number of sessions revoked")
