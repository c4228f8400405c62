"""Abstract session storage (port): bearer token and user identity."""

from abc import ABC, abstractmethod

from cms_client.domain.entities import User


class SessionStore(ABC):
    """Holds the credentials the gateway injects into outbound requests."""

    @abstractmethod
    def get_token(self) -> str | None:
        ...

    @abstractmethod
    def get_user_json(self) -> str | None:
        """Raw serialized user record, exactly as stored."""
        ...

    @abstractmethod
    def save(self, token: str, user: User) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        """Forget both the token and the user identity."""
        ...
