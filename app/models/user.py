"""ORM model for the user relation."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base


class User(Base):
    """
    One user account. Every column except id is nullable.

    password_hash always holds a bcrypt hash, never plain text.
    """

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pseudo = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True, unique=True, index=True)
    password_hash = Column(String(255), nullable=True)
    role = Column(String(32), nullable=True)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
