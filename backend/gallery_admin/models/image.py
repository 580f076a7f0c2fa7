"""Image metadata; the bytes live in object storage under ``s3_key``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gallery_admin.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .like import Like
    from .user import User


class Image(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """Uploaded image record pointing at its stored object."""

    __tablename__ = "images"

    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    s3_key: Mapped[str] = mapped_column(String(512), nullable=False)
    s3_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    mimetype: Mapped[str] = mapped_column(String(100), nullable=False)
    uploaded_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("s3_key", name="uq_images_s3_key"),
        Index("ix_images_created_at", "created_at"),
    )

    uploader: Mapped[User | None] = relationship("User", lazy="selectin")
    likes: Mapped[list[Like]] = relationship(
        "Like", back_populates="image", cascade="all, delete-orphan"
    )
