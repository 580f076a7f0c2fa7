"""Social media link shown in the public gallery footer."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Boolean, String, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from gallery_admin.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Platform(str, Enum):
    YOUTUBE = "youtube"
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    THREADS = "threads"


class SocialMediaLink(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """One row per platform; ``url`` may be empty until configured."""

    __tablename__ = "social_media_links"

    platform: Mapped[Platform] = mapped_column(
        SAEnum(
            Platform,
            name="enum_social_platform",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        nullable=False,
    )
    url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (UniqueConstraint("platform", name="uq_social_media_links_platform"),)
