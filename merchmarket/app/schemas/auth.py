"""
Authentication Pydantic schemas.

Defines request and response schemas for the authentication endpoint.
"""

from pydantic import BaseModel, Field


class AuthRequest(BaseModel):
    """
    Schema for login.

    Used by POST /api/auth. An unseen username is registered on the spot.
    """
    username: str = Field(..., min_length=1, max_length=100, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class AuthResponse(BaseModel):
    """Schema for JWT token response."""
    token: str = Field(..., description="JWT access token")
