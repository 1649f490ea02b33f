"""
Create a user (e.g. first admin) without going through the HTTP API. Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD [--pseudo NAME] [--role ROLE]
Example:
  python -m app.scripts.create_user admin@example.com your-secure-password --role admin
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.security import PasswordHashingError
from app.schemas.user import NewUser
from app.services.user_repository import SqlAlchemyUserRepository, UserRepositoryError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account.")
    parser.add_argument("email", help="Email, used to log in")
    parser.add_argument("password", help="Plain-text password (stored hashed)")
    parser.add_argument("--pseudo", default=None, help="Display name")
    parser.add_argument("--role", default="user", help="Role label (default: user)")
    args = parser.parse_args(argv)

    email = args.email.strip()
    if not email:
        print("Email must be non-empty.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        repository = SqlAlchemyUserRepository(db, get_settings())
        user = repository.create(
            NewUser(pseudo=args.pseudo, email=email, password_hash=args.password, role=args.role)
        )
        logger.info("Created user id=%s email=%s role=%s", user.id, user.email, user.role)
        return 0
    except (UserRepositoryError, PasswordHashingError) as e:
        logger.error("Could not create user %s: %s", email, e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
