"""SQLAlchemy declarative Base shared by every ORM model and Alembic."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
