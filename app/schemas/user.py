"""Request/response schemas for the user endpoints."""

from pydantic import BaseModel, Field


class NewUser(BaseModel):
    """
    User fields accepted on create and update.

    password_hash carries the plain-text password on input; it is hashed
    before it reaches the database. On update, omitted (or null) fields are
    left unchanged.
    """

    model_config = {"extra": "ignore"}

    pseudo: str | None = Field(default=None, max_length=255, description="Display name")
    email: str | None = Field(default=None, max_length=255, description="Email, used as login")
    password_hash: str | None = Field(
        default=None,
        description="Plain-text password; stored only as a bcrypt hash.",
    )
    role: str | None = Field(default=None, max_length=32, description="Role label, e.g. user or admin")


class UserRead(BaseModel):
    """Stored user record as returned by the API."""

    model_config = {"from_attributes": True}

    id: int
    pseudo: str | None = None
    email: str | None = None
    password_hash: str | None = None
    role: str | None = None


class DeleteResponse(BaseModel):
    """Response for DELETE /user/delete/{user_id}."""

    deleted: int = Field(..., ge=0, description="Number of rows deleted (0 if no user matched).")
