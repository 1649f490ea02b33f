"""Request/response schemas for login and the signed token payload."""

from pydantic import BaseModel, Field


class Claims(BaseModel):
    """Signed token payload: subject (user email) and expiry (unix timestamp). Never persisted."""

    sub: str = Field(..., min_length=1, description="Subject: the user's email")
    exp: int = Field(..., gt=0, description="Expiry as a unix timestamp")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email")
    password: str = Field(..., min_length=1, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
