"""Abstract remote API gateway (port)."""

from abc import ABC, abstractmethod
from typing import Any


class RemoteGateway(ABC):
    """Issues authenticated requests against the content API.

    Implementations raise ``RemoteFailureError`` for every unsuccessful
    call and ``SessionExpiredError`` on 401 after tearing the session down.
    They never consult local state.
    """

    @abstractmethod
    async def get(self, path: str, query: dict[str, Any] | None = None) -> Any:
        ...

    @abstractmethod
    async def post(
        self, path: str, body: Any = None, query: dict[str, Any] | None = None
    ) -> Any:
        ...

    @abstractmethod
    async def put(
        self, path: str, body: Any = None, query: dict[str, Any] | None = None
    ) -> Any:
        ...

    @abstractmethod
    async def delete(self, path: str, query: dict[str, Any] | None = None) -> Any:
        ...
