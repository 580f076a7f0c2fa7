"""Service layer public API.

This package exposes the application services so that callers can import
from :mod:`gallery_admin.services` without knowing internal structure.

Re-exports
----------
- Base primitive (from ``gallery_admin.services._shared.base``)
    * :class:`BaseService`

- Session service (from ``gallery_admin.services.auth``)
    * :class:`SessionService`
    * DTOs: :class:`RegisterIn`, :class:`LoginIn`, :class:`LogoutIn`,
      :class:`TokenPairOut`, :class:`SessionOut`

- Catalogue services
    * :class:`UserService`, :class:`ImageService`, :class:`LikeService`,
      :class:`SocialMediaService`, :class:`DashboardService`
"""

from __future__ import annotations

from ._shared.base import BaseService
from .auth.dto import LoginIn, LogoutIn, RegisterIn, SessionOut, TokenPairOut
from .auth.service import SessionService
from .dashboard.service import DashboardService
from .images.service import ImageService
from .likes.service import LikeService
from .social_media.service import SocialMediaService
from .users.service import UserService

__all__ = [
    # Base
    "BaseService",
    # Sessions
    "SessionService",
    "RegisterIn",
    "LoginIn",
    "LogoutIn",
    "TokenPairOut",
    "SessionOut",
    # Catalogue
    "UserService",
    "ImageService",
    "LikeService",
    "SocialMediaService",
    "DashboardService",
]
