"""SQLAlchemy-backed persistence for users: CRUD plus login (lookup, verify, issue token)."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.security import create_access_token, hash_password, verify_password
from app.models import User
from app.schemas.auth import Claims
from app.schemas.user import NewUser

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Columns a caller may write; id is always generated.
EDITABLE_FIELDS = ("pseudo", "email", "password_hash", "role")


class UserRepositoryError(Exception):
    """Base class for failures of user persistence operations."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class DatabaseError(UserRepositoryError):
    """Raised for any database-layer failure (connection, constraint violation, query)."""


class UserNotFoundError(UserRepositoryError):
    """Raised when no user row matches the requested id."""


class AuthenticationError(UserRepositoryError):
    """Raised when login fails. Same error whether the email is unknown or the password is wrong."""


class MissingPasswordError(UserRepositoryError):
    """Raised when a user is created, or a password is changed, without a non-empty password."""


class SqlAlchemyUserRepository:
    """User repository over a single SQLAlchemy session (one per request)."""

    def __init__(self, session: Session, settings: "Settings") -> None:
        self.session = session
        self.settings = settings

    def _hash(self, plain_password: str) -> str:
        return hash_password(plain_password, rounds=self.settings.BCRYPT_ROUNDS)

    def _rollback(self, action: str, error: SQLAlchemyError) -> DatabaseError:
        self.session.rollback()
        logger.exception("User %s failed: %s", action, error)
        return DatabaseError(f"Failed to {action} user", cause=error)

    def create(self, new_user: NewUser) -> User:
        """Hash the supplied password, insert the row and return it with its generated id."""
        if not new_user.password_hash:
            raise MissingPasswordError("A password is required to create a user")

        user = User(
            pseudo=new_user.pseudo,
            email=new_user.email,
            password_hash=self._hash(new_user.password_hash),
            role=new_user.role,
        )
        try:
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        except SQLAlchemyError as e:
            raise self._rollback("create", e) from e

        logger.info("Created user id=%s", user.id)
        return user

    def get_by_id(self, user_id: int) -> User:
        try:
            user = self.session.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            raise self._rollback("load", e) from e
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user

    def get_all(self) -> list[User]:
        """All users ordered by id; no filtering or pagination."""
        try:
            return self.session.query(User).order_by(User.id).all()
        except SQLAlchemyError as e:
            raise self._rollback("list", e) from e

    def delete(self, user_id: int) -> int:
        """Delete by id and return the number of rows removed (0 when nothing matched)."""
        try:
            deleted_count = (
                self.session.query(User)
                .filter(User.id == user_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._rollback("delete", e) from e

        if deleted_count > 0:
            logger.info("Deleted user id=%s", user_id)
        return deleted_count

    def update(self, user_id: int, changes: NewUser) -> User:
        """
        Patch only the supplied (non-null) fields of an existing user.

        A supplied password_hash is a new plain-text password and is hashed;
        when omitted the stored hash is left as is. An empty one raises
        MissingPasswordError, as on create.
        Raises UserNotFoundError if no row has this id.
        """
        values = {
            field: value
            for field, value in changes.model_dump(include=set(EDITABLE_FIELDS)).items()
            if value is not None
        }
        if not values:
            return self.get_by_id(user_id)
        if "password_hash" in values:
            if not values["password_hash"]:
                raise MissingPasswordError("A new password must be non-empty")
            values["password_hash"] = self._hash(values["password_hash"])

        try:
            updated_count = (
                self.session.query(User)
                .filter(User.id == user_id)
                .update(values, synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._rollback("update", e) from e

        if updated_count == 0:
            raise UserNotFoundError(f"User {user_id} not found")
        logger.info("Updated user id=%s fields=%s", user_id, sorted(values))
        return self.get_by_id(user_id)

    def login(self, email: str, password: str) -> str:
        """
        Check credentials and return a signed JWT with the email as subject.

        Raises AuthenticationError for an unknown email or a wrong password alike.
        """
        try:
            user = self.session.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            raise self._rollback("load", e) from e

        if user is None or not user.password_hash:
            logger.warning("Failed login attempt")
            raise AuthenticationError("Invalid email or password")
        if not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise AuthenticationError("Invalid email or password")

        secret = self.settings.JWT_SECRET
        claims = Claims(sub=user.email, exp=self.settings.JWT_EXPIRES_AT)
        return create_access_token(
            claims,
            secret.get_secret_value() if secret is not None else None,
            algorithm=self.settings.JWT_ALGORITHM,
        )
