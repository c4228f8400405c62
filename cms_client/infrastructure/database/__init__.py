from .base import Base
from .session import create_engine_for, create_session_factory
from .models import LocalStorageEntryModel

__all__ = [
    "Base",
    "create_engine_for",
    "create_session_factory",
    "LocalStorageEntryModel",
]
