"""Declarative base for the client's local persistence tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Registry shared by every ORM model in the local database."""

    pass
