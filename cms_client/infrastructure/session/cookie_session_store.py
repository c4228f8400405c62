"""Session store kept in an httpx cookie jar (``token`` and ``user`` cookies)."""

from urllib.parse import quote, unquote

import httpx

from cms_client.application.interfaces import SessionStore
from cms_client.application.schemas import UserRecord
from cms_client.domain.entities import User

TOKEN_COOKIE = "token"
USER_COOKIE = "user"


class CookieSessionStore(SessionStore):
    """Stores the bearer token and the URL-encoded user JSON as cookies."""

    def __init__(self, cookies: httpx.Cookies | None = None):
        self._cookies = cookies if cookies is not None else httpx.Cookies()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._cookies

    def get_token(self) -> str | None:
        return self._cookies.get(TOKEN_COOKIE)

    def get_user_json(self) -> str | None:
        raw = self._cookies.get(USER_COOKIE)
        return unquote(raw) if raw else None

    def save(self, token: str, user: User) -> None:
        user_json = UserRecord.from_entity(user).model_dump_json(by_alias=True)
        self._cookies.set(TOKEN_COOKIE, token)
        self._cookies.set(USER_COOKIE, quote(user_json))

    def clear(self) -> None:
        self._cookies.delete(TOKEN_COOKIE)
        self._cookies.delete(USER_COOKIE)
