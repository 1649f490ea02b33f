"""User service: the capability contract handlers depend on, and a pass-through implementation."""

from typing import Protocol

from app.models import User
from app.schemas.user import NewUser


class UserRepository(Protocol):
    """Persistence operations the user endpoints need. Any storage can implement it."""

    def create(self, new_user: NewUser) -> User: ...

    def get_by_id(self, user_id: int) -> User: ...

    def get_all(self) -> list[User]: ...

    def delete(self, user_id: int) -> int: ...

    def update(self, user_id: int, changes: NewUser) -> User: ...

    def login(self, email: str, password: str) -> str: ...


class UserService:
    """Delegates every call to the repository; no validation or authorization here."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    def create_user(self, new_user: NewUser) -> User:
        return self.repository.create(new_user)

    def get_user_by_id(self, user_id: int) -> User:
        return self.repository.get_by_id(user_id)

    def get_all_users(self) -> list[User]:
        return self.repository.get_all()

    def delete_user(self, user_id: int) -> int:
        return self.repository.delete(user_id)

    def update_user(self, user_id: int, changes: NewUser) -> User:
        return self.repository.update(user_id, changes)

    def login(self, email: str, password: str) -> str:
        return self.repository.login(email, password)
