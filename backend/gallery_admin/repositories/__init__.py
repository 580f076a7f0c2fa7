"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from gallery_admin.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    paginate_select,
)
from gallery_admin.repositories.image import ImageRepository
from gallery_admin.repositories.like import LikeRepository
from gallery_admin.repositories.social_media import SocialMediaRepository
from gallery_admin.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "paginate_select",
    # Domain
    "ImageRepository",
    "LikeRepository",
    "SocialMediaRepository",
    "UserRepository",
]
