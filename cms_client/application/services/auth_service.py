"""Application service for login, registration and the session.

When the API is unreachable, login and registration fall back to a demo
simulator: the bundled demo account for the wanted role is put in the
session, and the role chosen for each email is remembered in the local
key-value store so the next demo login gets the same role back.
"""

import dataclasses
import logging

from pydantic import ValidationError

from cms_client.application.interfaces import KeyValueStore, RemoteGateway, SessionStore
from cms_client.application.schemas import (
    AuthPayload,
    DemoAccountRecord,
    LoginCredentials,
    RegisterCredentials,
    UserRecord,
)
from cms_client.domain.default_dataset import demo_users
from cms_client.domain.entities import ServiceResult, User, UserRole

from .fallback_resolver import FallbackResolver
from .remote_payloads import unwrap

logger = logging.getLogger(__name__)

DEMO_ACCOUNT_KEY_PREFIX = "demo_user_"
DEMO_TOKEN_MARKER = "dummy"


def demo_account_key(email: str) -> str:
    return f"{DEMO_ACCOUNT_KEY_PREFIX}{email}"


class AuthService:
    """Authenticates against the API, or simulates it in demo mode."""

    def __init__(
        self,
        gateway: RemoteGateway,
        session: SessionStore,
        backend: KeyValueStore,
        resolver: FallbackResolver,
    ):
        self._gateway = gateway
        self._session = session
        self._backend = backend
        self._resolver = resolver

    async def login(self, credentials: LoginCredentials) -> ServiceResult[User]:
        async def remote() -> User:
            raw = await self._gateway.post("/auth/login", body=credentials.model_dump())
            return self._start_session(unwrap(raw, AuthPayload))

        async def local() -> User:
            role = await self._remembered_role(credentials.email)
            return await self._start_demo_session(credentials.email, role)

        return await self._resolver.resolve(
            "login",
            remote=remote,
            local=local,
            remote_message="You have been logged in successfully",
            local_message=lambda user: f"Demo login successful as {user.role.value}",
            fallback_on_session_expiry=True,
        )

    async def register(self, credentials: RegisterCredentials) -> ServiceResult[User]:
        async def remote() -> User:
            raw = await self._gateway.post(
                "/auth/register", body=credentials.model_dump(mode="json")
            )
            return self._start_session(unwrap(raw, AuthPayload))

        async def local() -> User:
            return await self._start_demo_session(
                credentials.email, credentials.role, name=credentials.name
            )

        return await self._resolver.resolve(
            "register",
            remote=remote,
            local=local,
            remote_message="Your account has been created successfully",
            local_message=lambda user: f"Demo account created with {user.role.value} role",
            fallback_on_session_expiry=True,
        )

    def logout(self) -> None:
        self._session.clear()

    def current_user(self) -> User | None:
        raw = self._session.get_user_json()
        if not raw:
            return None
        try:
            return UserRecord.model_validate_json(raw).to_entity()
        except ValidationError:
            logger.warning("Ignoring unreadable user record in session")
            return None

    def is_authenticated(self) -> bool:
        return bool(self._session.get_token())

    def is_demo_session(self) -> bool:
        """True when the session holds a simulated token (drives the demo-mode banner)."""
        token = self._session.get_token()
        return bool(token) and DEMO_TOKEN_MARKER in token

    def _start_session(self, payload: AuthPayload) -> User:
        user = payload.user.to_entity()
        self._session.save(payload.token, user)
        return user

    async def _remembered_role(self, email: str) -> UserRole:
        raw = await self._backend.get(demo_account_key(email))
        if raw is not None:
            try:
                return DemoAccountRecord.model_validate_json(raw).role
            except ValidationError:
                logger.warning("Unreadable demo account record for %s", email)
        return UserRole.ADMIN if "admin" in email else UserRole.USER

    async def _start_demo_session(
        self, email: str, role: UserRole, *, name: str | None = None
    ) -> User:
        template = next(user for user in demo_users() if user.role == role)
        changes = {"email": email}
        if name:
            changes["name"] = name
        user = dataclasses.replace(template, **changes)
        token = user.token or f"{DEMO_TOKEN_MARKER}-{role.value}-token"
        self._session.save(token, user)

        record = DemoAccountRecord(email=email, role=role, name=name)
        await self._backend.set(
            demo_account_key(email), record.model_dump_json(exclude_none=True)
        )
        logger.info("Started demo session for %s as %s", email, role.value)
        return user
