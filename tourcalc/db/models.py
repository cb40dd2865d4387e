"""SQLAlchemy ORM models for the cloud trip store."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class SavedTripRow(Base):
    """Saved trip table - one named snapshot per row."""

    __tablename__ = "tour_calc"
    __table_args__ = (Index("idx_tour_calc_created", "created_at"),)

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    trip_data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)


class AutosaveRow(Base):
    """Autosave slot - a single row keyed by AUTOSAVE_SLOT."""

    __tablename__ = "tour_calc_autosave"

    slot: Mapped[int] = mapped_column(Integer, primary_key=True)
    trip_data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    saved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


AUTOSAVE_SLOT = 1
