"""SQLAlchemy models for partners and their photos."""
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Partner(Base):
    """Partner record owned by a user."""

    __tablename__ = "partners"
    __table_args__ = (
        Index("idx_partners_user_id", "user_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        comment="Owning user, managed by the auth provider"
    )
    first_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    profile_picture_storage_path: Mapped[Optional[str]] = mapped_column(
        String(1024),
        nullable=True
    )
    black_flag: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow
    )

    # Relationships
    photos: Mapped[List["PartnerPhoto"]] = relationship(
        back_populates="partner",
        cascade="all, delete-orphan"
    )


class PartnerPhoto(Base):
    """Photo of a partner with the face descriptor extracted at upload time."""

    __tablename__ = "partner_photos"
    __table_args__ = (
        Index("idx_partner_photos_partner_id", "partner_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    partner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("partners.id", ondelete="CASCADE"),
        nullable=False
    )
    storage_path: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="Path of the photo file in blob storage"
    )
    face_descriptor: Mapped[Optional[Any]] = mapped_column(
        JSON(none_as_null=True),
        nullable=True,
        comment="Face descriptor vector stored as a JSON array of numbers"
    )
    face_detection_attempted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="False if no face was found or detection failed"
    )
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow
    )

    # Relationships
    partner: Mapped[Partner] = relationship(
        back_populates="photos"
    )
