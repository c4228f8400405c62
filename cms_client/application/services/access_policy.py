"""Route access contract: who may open which page, and where others are sent."""

from dataclasses import dataclass

from pydantic import ValidationError

from cms_client.application.schemas import UserRecord
from cms_client.domain.entities import UserRole

LOGIN_PATH = "/auth/login"
PUBLIC_PATHS = frozenset({LOGIN_PATH, "/auth/register", "/"})
ADMIN_HOME = "/admin/articles"
USER_HOME = "/user/articles"


@dataclass(frozen=True)
class AccessDecision:
    """``redirect_to`` is None when the request may proceed."""

    redirect_to: str | None = None
    clear_session: bool = False

    @property
    def allowed(self) -> bool:
        return self.redirect_to is None


class _UnreadableUser(Exception):
    pass


def _parse_user(user_json: str | None) -> UserRecord | None:
    if not user_json:
        return None
    try:
        return UserRecord.model_validate_json(user_json)
    except ValidationError as exc:
        raise _UnreadableUser() from exc


def decide_access(path: str, token: str | None, user_json: str | None) -> AccessDecision:
    """Apply the access rules for ``path`` given the session cookies.

    ``user_json`` is the decoded user JSON, as returned by
    ``SessionStore.get_user_json()``, not the raw URL-encoded cookie value.
    """
    is_public = path in PUBLIC_PATHS

    if not token:
        return AccessDecision() if is_public else AccessDecision(redirect_to=LOGIN_PATH)

    try:
        user = _parse_user(user_json)
    except _UnreadableUser:
        return AccessDecision(redirect_to=LOGIN_PATH, clear_session=True)

    if is_public:
        if user is not None and user.role == UserRole.ADMIN:
            return AccessDecision(redirect_to=ADMIN_HOME)
        return AccessDecision(redirect_to=USER_HOME)

    if user is not None:
        if "/admin" in path and user.role != UserRole.ADMIN:
            return AccessDecision(redirect_to=USER_HOME)
        if "/user" in path and user.role != UserRole.USER:
            return AccessDecision(redirect_to=ADMIN_HOME)

    return AccessDecision()
