"""SQLAlchemy ORM model for one client-side key-value entry."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cms_client.infrastructure.database.base import Base


class LocalStorageEntryModel(Base):
    """ORM model: maps to the 'local_storage' table."""

    __tablename__ = "local_storage"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<LocalStorageEntryModel(key='{self.key}', size={len(self.value)})>"
