"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, RegisterSchema
from .common import PaginationMetaSchema, PaginationQuerySchema, build_pagination
from .image import ImageSchema, ImageSummarySchema, RandomImageSchema, RandomImagesQuerySchema
from .like import LikeSchema, LikeToggleSchema
from .social_media import SocialMediaLinkSchema, SocialMediaUpdateSchema
from .user import (
    PasswordChangeSchema,
    UserBriefSchema,
    UserListQuerySchema,
    UserSchema,
    UserStatusSchema,
    UserUpdateSchema,
)

__all__ = [
    "LoginSchema",
    "RegisterSchema",
    "PaginationMetaSchema",
    "PaginationQuerySchema",
    "build_pagination",
    "ImageSchema",
    "ImageSummarySchema",
    "RandomImageSchema",
    "RandomImagesQuerySchema",
    "LikeSchema",
    "LikeToggleSchema",
    "SocialMediaLinkSchema",
    "SocialMediaUpdateSchema",
    "PasswordChangeSchema",
    "UserBriefSchema",
    "UserListQuerySchema",
    "UserSchema",
    "UserStatusSchema",
    "UserUpdateSchema",
]
