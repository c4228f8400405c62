from .key_value_store import KeyValueStore
from .remote_gateway import RemoteGateway
from .session_store import SessionStore

__all__ = [
    "KeyValueStore",
    "RemoteGateway",
    "SessionStore",
]
