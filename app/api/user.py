"""User endpoints: create, get, list, update, delete, and login."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.security import PasswordHashingError, TokenSigningError
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.user import DeleteResponse, NewUser, UserRead
from app.services.user_repository import (
    AuthenticationError,
    MissingPasswordError,
    SqlAlchemyUserRepository,
    UserNotFoundError,
    UserRepositoryError,
)
from app.services.users import UserService

router = APIRouter()

# Errors that mean "something broke on our side" rather than "bad request".
INTERNAL_ERRORS = (UserRepositoryError, PasswordHashingError, TokenSigningError)


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserService:
    """Dependency: a UserService over the request's database session."""
    return UserService(SqlAlchemyUserRepository(db, settings))


UserServiceDep = Annotated[UserService, Depends(get_user_service)]


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found!")


def _missing_password(e: MissingPasswordError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=e.message,
    )


@router.post("/create", response_model=UserRead)
def create_user(body: NewUser, service: UserServiceDep) -> UserRead:
    """Create a user. The password (sent as password_hash) is stored hashed."""
    try:
        user = service.create_user(body)
    except MissingPasswordError as e:
        raise _missing_password(e) from e
    except INTERNAL_ERRORS as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user!",
        ) from e
    return UserRead.model_validate(user)


@router.get("/get/{user_id}", response_model=UserRead)
def get_user(user_id: int, service: UserServiceDep) -> UserRead:
    """Return one user by id, or 404."""
    try:
        user = service.get_user_by_id(user_id)
    except UserNotFoundError as e:
        raise _not_found() from e
    except INTERNAL_ERRORS as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get user!",
        ) from e
    return UserRead.model_validate(user)


@router.get("/list", response_model=list[UserRead])
def list_users(service: UserServiceDep) -> list[UserRead]:
    """Return every user, unpaginated."""
    try:
        users = service.get_all_users()
    except INTERNAL_ERRORS as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get users!",
        ) from e
    return [UserRead.model_validate(u) for u in users]


@router.delete("/delete/{user_id}", response_model=DeleteResponse)
def delete_user(user_id: int, service: UserServiceDep) -> DeleteResponse:
    """Delete a user by id. Deleting a missing id is not an error (deleted=0)."""
    try:
        deleted = service.delete_user(user_id)
    except INTERNAL_ERRORS as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete user!",
        ) from e
    return DeleteResponse(deleted=deleted)


@router.put("/update/{user_id}", response_model=UserRead)
def update_user(user_id: int, body: NewUser, service: UserServiceDep) -> UserRead:
    """
    Patch a user: only the fields present (and not null) in the body are changed.
    A new password in password_hash is hashed before it is stored; an empty one is a 422.
    """
    try:
        user = service.update_user(user_id, body)
    except UserNotFoundError as e:
        raise _not_found() from e
    except MissingPasswordError as e:
        raise _missing_password(e) from e
    except INTERNAL_ERRORS as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user!",
        ) from e
    return UserRead.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, service: UserServiceDep) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    try:
        token = service.login(body.email, body.password)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        ) from e
    except INTERNAL_ERRORS as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to log in!",
        ) from e
    return TokenResponse(access_token=token, token_type="bearer")
