"""Fallback resolver: chooses between the remote API and the local snapshot.

Every entity service operation is expressed as a pair of thunks:

* ``remote`` calls the gateway and raises ``RemoteFailureError`` when the
  API cannot answer (``SessionExpiredError`` after a 401).
* ``local`` works against a snapshot store and raises
  ``EntityNotFoundError`` when the record it needs is missing.

The resolver runs them in the order the policy dictates and folds the
outcome into a ``ServiceResult`` that records which side answered.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TypeVar

from cms_client.domain.entities import DataSource, ServiceResult
from cms_client.domain.exceptions import (
    EntityNotFoundError,
    RemoteFailureError,
    SessionExpiredError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

SESSION_EXPIRED_MESSAGE = "Your session has expired. Please log in again."


class ResolutionPolicy(str, Enum):
    """Order in which the two sources are consulted."""

    # Remote answers; the snapshot is only read when the remote fails.
    REMOTE_FIRST = "remote_first"
    # Snapshot hit returns immediately; the remote is asked on a miss.
    LOCAL_FIRST = "local_first"
    # Local mutation is applied unconditionally, then the remote is called.
    WRITE_THROUGH = "write_through"


class FallbackResolver:
    """Runs one operation against the remote and/or local source."""

    async def resolve(
        self,
        operation: str,
        *,
        remote: Callable[[], Awaitable[T]],
        local: Callable[[], Awaitable[T]],
        policy: ResolutionPolicy = ResolutionPolicy.REMOTE_FIRST,
        remote_message: str | Callable[[T], str] = "",
        local_message: str | Callable[[T], str] = "",
        fallback_on_session_expiry: bool = False,
    ) -> ServiceResult[T]:
        """Resolve ``operation`` under ``policy``.

        A 401 normally short-circuits to a failed result without touching
        the snapshot (the session has already been torn down). Operations
        that are themselves the way back in, like login, pass
        ``fallback_on_session_expiry=True`` to treat it as any other
        remote failure.
        """
        if policy is ResolutionPolicy.LOCAL_FIRST:
            return await self._local_first(operation, remote, local, remote_message, local_message)
        if policy is ResolutionPolicy.WRITE_THROUGH:
            return await self._write_through(operation, remote, local, remote_message, local_message)
        return await self._remote_first(
            operation, remote, local, remote_message, local_message, fallback_on_session_expiry
        )

    async def _remote_first(
        self,
        operation: str,
        remote: Callable[[], Awaitable[T]],
        local: Callable[[], Awaitable[T]],
        remote_message: str | Callable[[T], str],
        local_message: str | Callable[[T], str],
        fallback_on_session_expiry: bool,
    ) -> ServiceResult[T]:
        try:
            data = await remote()
            return ServiceResult.ok(data, _render(remote_message, data), DataSource.REMOTE)
        except SessionExpiredError:
            if not fallback_on_session_expiry:
                return ServiceResult.failure(SESSION_EXPIRED_MESSAGE)
            logger.warning("%s: remote rejected credentials; using local store", operation)
        except RemoteFailureError as exc:
            logger.warning("%s: remote failed (%s); using local store", operation, exc)

        try:
            data = await local()
        except EntityNotFoundError as exc:
            logger.info("%s: not found locally either", operation)
            return ServiceResult.failure(str(exc))
        return ServiceResult.ok(data, _render(local_message, data), DataSource.LOCAL)

    async def _local_first(
        self,
        operation: str,
        remote: Callable[[], Awaitable[T]],
        local: Callable[[], Awaitable[T]],
        remote_message: str | Callable[[T], str],
        local_message: str | Callable[[T], str],
    ) -> ServiceResult[T]:
        try:
            data = await local()
            return ServiceResult.ok(data, _render(local_message, data), DataSource.LOCAL)
        except EntityNotFoundError as exc:
            missing = exc

        try:
            data = await remote()
        except SessionExpiredError:
            return ServiceResult.failure(SESSION_EXPIRED_MESSAGE)
        except RemoteFailureError as exc:
            logger.warning("%s: remote failed (%s) after local miss", operation, exc)
            return ServiceResult.failure(str(missing))
        return ServiceResult.ok(data, _render(remote_message, data), DataSource.REMOTE)

    async def _write_through(
        self,
        operation: str,
        remote: Callable[[], Awaitable[T]],
        local: Callable[[], Awaitable[T]],
        remote_message: str | Callable[[T], str],
        local_message: str | Callable[[T], str],
    ) -> ServiceResult[T]:
        missing: EntityNotFoundError | None = None
        local_data: T | None = None
        try:
            local_data = await local()
        except EntityNotFoundError as exc:
            missing = exc

        try:
            data = await remote()
        except SessionExpiredError:
            return ServiceResult.failure(SESSION_EXPIRED_MESSAGE)
        except RemoteFailureError as exc:
            if missing is not None:
                logger.warning("%s: remote failed (%s) and no local record", operation, exc)
                return ServiceResult.failure(str(missing))
            logger.warning("%s: remote failed (%s); keeping local change", operation, exc)
            return ServiceResult.ok(local_data, _render(local_message, local_data), DataSource.LOCAL)
        return ServiceResult.ok(data, _render(remote_message, data), DataSource.REMOTE)


def _render(message: str | Callable[[T], str], data) -> str:
    return message(data) if callable(message) else message
