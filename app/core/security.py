"""Password hashing (bcrypt) and JWT issuance/verification."""

from typing import Any

import bcrypt
import jwt

from app.schemas.auth import Claims

# Default bcrypt cost; overridden per call from Settings.BCRYPT_ROUNDS.
BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72

DEFAULT_JWT_ALGORITHM = "HS256"


class PasswordHashingError(Exception):
    """Raised when bcrypt cannot hash a password or the stored hash is malformed."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class TokenSigningError(Exception):
    """Raised when a token cannot be issued (missing secret or encoding failure)."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


def _to_bcrypt_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    try:
        hashed = bcrypt.hashpw(_to_bcrypt_bytes(plain_password), bcrypt.gensalt(rounds=rounds))
    except (ValueError, TypeError) as e:
        raise PasswordHashingError("Failed to hash password", cause=e) from e
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Raises PasswordHashingError when the stored value is not a bcrypt hash.
    """
    try:
        return bcrypt.checkpw(_to_bcrypt_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError) as e:
        raise PasswordHashingError("Failed to verify password", cause=e) from e


def create_access_token(
    claims: Claims,
    secret: str | None,
    algorithm: str = DEFAULT_JWT_ALGORITHM,
) -> str:
    """Sign claims (sub, exp) into a JWT with a shared secret."""
    if not secret:
        raise TokenSigningError("JWT_SECRET must be set")
    payload: dict[str, Any] = {"sub": claims.sub, "exp": claims.exp}
    try:
        return jwt.encode(payload, secret, algorithm=algorithm)
    except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
        raise TokenSigningError("Failed to sign access token", cause=e) from e


def decode_access_token(
    token: str,
    secret: str,
    algorithm: str = DEFAULT_JWT_ALGORITHM,
) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, exp).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    return jwt.decode(token, secret, algorithms=[algorithm])
