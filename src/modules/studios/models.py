"""Studio ORM models: one row per tenant plus one JSON blob per collection."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.core.database import Base
from src.shared.ulid import ULID_LENGTH, generate_ulid


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class Studio(Base, TimestampMixin):
    """Tenant row; ``version`` is bumped on every accepted save."""

    __tablename__ = "studios"

    studio_id: Mapped[str] = mapped_column(String(ULID_LENGTH), primary_key=True, default=generate_ulid)
    slug: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    version: Mapped[int] = mapped_column(default=0, nullable=False)

    collections: Mapped[list["StudioCollection"]] = relationship(
        back_populates="studio",
        cascade="all,delete-orphan",
    )


class StudioCollection(Base, TimestampMixin):
    __tablename__ = "studio_collections"
    __table_args__ = (UniqueConstraint("studio_id", "name", name="uq_studio_collection_name"),)

    collection_id: Mapped[str] = mapped_column(String(ULID_LENGTH), primary_key=True, default=generate_ulid)
    studio_id: Mapped[str] = mapped_column(
        String(ULID_LENGTH),
        ForeignKey("studios.studio_id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(32), nullable=False)
    payload: Mapped[Any] = mapped_column(JSON, nullable=False)

    studio: Mapped[Studio] = relationship(back_populates="collections")
