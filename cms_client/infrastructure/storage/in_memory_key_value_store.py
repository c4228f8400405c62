"""In-process KeyValueStore: nothing survives the process."""

from cms_client.application.interfaces import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)
