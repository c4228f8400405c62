"""Pydantic DTOs for login, registration and demo accounts."""

from pydantic import BaseModel, Field

from cms_client.domain.entities import User, UserRole

from ._base import CamelModel


class LoginCredentials(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class RegisterCredentials(LoginCredentials):
    name: str = Field(..., min_length=1)
    role: UserRole = UserRole.USER


class UserRecord(CamelModel):
    """User identity as sent by the API and stored in the ``user`` cookie."""

    id: str
    name: str
    email: str
    role: UserRole
    token: str | None = None

    def to_entity(self) -> User:
        return User(
            id=self.id,
            name=self.name,
            email=self.email,
            role=self.role,
            token=self.token,
        )

    @classmethod
    def from_entity(cls, user: User) -> "UserRecord":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            token=user.token,
        )


class AuthPayload(BaseModel):
    """``data`` member of login/register responses."""

    user: UserRecord
    token: str


class DemoAccountRecord(BaseModel):
    """Per-email record remembering which role a demo account was registered with."""

    email: str
    role: UserRole
    name: str | None = None
