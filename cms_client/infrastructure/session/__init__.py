from .cookie_session_store import CookieSessionStore, TOKEN_COOKIE, USER_COOKIE

__all__ = ["CookieSessionStore", "TOKEN_COOKIE", "USER_COOKIE"]
