"""Domain entity for authenticated users."""

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass
class User:
    """Identity stored in the session after login or registration."""

    id: str
    name: str
    email: str
    role: UserRole
    token: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
