"""Like linking a user to an image they marked."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gallery_admin.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .image import Image
    from .user import User


class Like(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """A user's like on an image. At most one per (user, image)."""

    __tablename__ = "likes"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    image_id: Mapped[int] = mapped_column(
        ForeignKey("images.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "image_id", name="uq_likes_user_image"),
        Index("ix_likes_image_id", "image_id"),
    )

    user: Mapped[User] = relationship("User", back_populates="likes")
    image: Mapped[Image] = relationship("Image", back_populates="likes", lazy="selectin")
