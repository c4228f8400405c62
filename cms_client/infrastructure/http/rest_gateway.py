"""REST gateway: implements the RemoteGateway port over httpx.

Adds the bearer token from the session to every request. A 401 tears the
session down and notifies the registered listeners (the UI redirects to
the login page) before ``SessionExpiredError`` is raised. Everything else
that goes wrong becomes ``RemoteFailureError``.
"""

import logging
from collections.abc import Callable
from typing import Any

import httpx

from cms_client.application.interfaces import RemoteGateway, SessionStore
from cms_client.domain.exceptions import RemoteFailureError, SessionExpiredError

logger = logging.getLogger(__name__)

SessionExpiredListener = Callable[[str], None]


class RestGateway(RemoteGateway):
    """Infrastructure adapter: talks to the content API with httpx.

    Uses an injected ``httpx.AsyncClient`` when given (connection pooling,
    tests with ``MockTransport``); otherwise opens a short-lived client per
    request.
    """

    def __init__(
        self,
        base_url: str,
        session: SessionStore,
        *,
        timeout: float = 15.0,
        login_path: str = "/auth/login",
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._timeout = timeout
        self._login_path = login_path
        self._http_client = http_client
        self._listeners: list[SessionExpiredListener] = []

    def on_session_expired(self, listener: SessionExpiredListener) -> None:
        """Register a callback receiving the login path after a 401."""
        self._listeners.append(listener)

    def _get_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        token = self._session.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def get(self, path: str, query: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, query=query)

    async def post(self, path: str, body: Any = None, query: dict[str, Any] | None = None) -> Any:
        return await self.request("POST", path, body=body, query=query)

    async def put(self, path: str, body: Any = None, query: dict[str, Any] | None = None) -> Any:
        return await self.request("PUT", path, body=body, query=query)

    async def delete(self, path: str, query: dict[str, Any] | None = None) -> Any:
        return await self.request("DELETE", path, query=query)

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (None when empty)."""
        url = f"{self._base_url}/{path.lstrip('/')}"

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            try:
                response = await client.request(
                    method, url, headers=self._get_headers(), params=query, json=body
                )
            except httpx.HTTPError as exc:
                raise RemoteFailureError(None, str(exc) or type(exc).__name__) from exc

            if response.status_code == 401:
                self._expire_session()
                raise SessionExpiredError()
            if not response.is_success:
                self._raise_remote_failure(response)

            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise RemoteFailureError(
                    response.status_code, "Response body is not valid JSON"
                ) from exc

        finally:
            if should_close:
                await client.aclose()

    def _expire_session(self) -> None:
        logger.warning("API rejected the session token; clearing session")
        self._session.clear()
        for listener in self._listeners:
            try:
                listener(self._login_path)
            except Exception:
                logger.exception("Session-expired listener failed")

    def _raise_remote_failure(self, response: httpx.Response) -> None:
        """Raise RemoteFailureError from a non-2xx response."""
        try:
            data = response.json()
            message = data.get("message") or response.text
        except Exception:
            message = response.text

        raise RemoteFailureError(
            status_code=response.status_code,
            message=message or response.reason_phrase,
        )
