"""Unit tests for the AuthService and its demo-login fallback."""

import json

import httpx
import pytest

from cms_client.application.schemas import LoginCredentials, RegisterCredentials
from cms_client.application.services import AuthService, FallbackResolver
from cms_client.application.services.auth_service import demo_account_key
from cms_client.domain.entities import DataSource, UserRole
from cms_client.infrastructure.http import RestGateway
from cms_client.infrastructure.session import CookieSessionStore
from cms_client.infrastructure.session.cookie_session_store import USER_COOKIE
from cms_client.infrastructure.storage import InMemoryKeyValueStore


class Harness:
    def __init__(self, handler):
        self.session = CookieSessionStore()
        self.backend = InMemoryKeyValueStore()
        gateway = RestGateway(
            "http://api.test/api",
            self.session,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        self.auth = AuthService(gateway, self.session, self.backend, FallbackResolver())


def _offline(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


@pytest.mark.asyncio
async def test_login_against_api_stores_session():
    def handler(request):
        assert request.url.path == "/api/auth/login"
        assert json.loads(request.content) == {"email": "real@x.com", "password": "secret"}
        return httpx.Response(
            200,
            json={
                "status": True,
                "message": "ok",
                "data": {
                    "user": {"id": 7, "name": "Real", "email": "real@x.com", "role": "admin"},
                    "token": "real-token",
                },
            },
        )

    h = Harness(handler)
    result = await h.auth.login(LoginCredentials(email="real@x.com", password="secret"))

    assert result.status is True
    assert result.source == DataSource.REMOTE
    assert h.session.get_token() == "real-token"
    assert h.auth.current_user().id == "7"
    assert h.auth.current_user().is_admin
    assert h.auth.is_authenticated()
    assert not h.auth.is_demo_session()


@pytest.mark.asyncio
async def test_demo_login_picks_role_from_email():
    h = Harness(_offline)

    user_result = await h.auth.login(LoginCredentials(email="someone@x.com", password="pw"))
    user_token = h.session.get_token()
    admin_result = await h.auth.login(LoginCredentials(email="the.admin@x.com", password="pw"))

    assert user_result.source == DataSource.LOCAL
    assert user_result.message == "Demo login successful as user"
    assert user_token == "dummy-user-token"
    assert admin_result.message == "Demo login successful as admin"
    assert h.session.get_token() == "dummy-admin-token"
    assert h.auth.current_user().email == "the.admin@x.com"
    assert h.auth.is_demo_session()


@pytest.mark.asyncio
async def test_demo_registration_role_is_remembered():
    h = Harness(_offline)

    registered = await h.auth.register(
        RegisterCredentials(name="Plain", email="plain@x.com", password="pw", role=UserRole.ADMIN)
    )
    h.auth.logout()
    assert not h.auth.is_authenticated()

    result = await h.auth.login(LoginCredentials(email="plain@x.com", password="pw"))

    assert registered.message == "Demo account created with admin role"
    assert registered.data.name == "Plain"
    assert result.data.role == UserRole.ADMIN
    stored = json.loads(await h.backend.get(demo_account_key("plain@x.com")))
    assert stored["role"] == "admin"


@pytest.mark.asyncio
async def test_unreadable_demo_record_falls_back_to_email_rule():
    h = Harness(_offline)
    await h.backend.set(demo_account_key("a@x.com"), "{broken")

    result = await h.auth.login(LoginCredentials(email="a@x.com", password="pw"))

    assert result.data.role == UserRole.USER


@pytest.mark.asyncio
async def test_rejected_login_falls_back_to_demo():
    def handler(request):
        return httpx.Response(401, json={"message": "Invalid credentials"})

    h = Harness(handler)
    result = await h.auth.login(LoginCredentials(email="user@example.com", password="bad"))

    assert result.status is True
    assert result.source == DataSource.LOCAL
    assert h.session.get_token() == "dummy-user-token"


def test_current_user_ignores_unreadable_cookie():
    h = Harness(_offline)
    h.session.cookies.set(USER_COOKIE, "not-json")

    assert h.auth.current_user() is None
