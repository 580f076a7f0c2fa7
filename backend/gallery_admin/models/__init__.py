from gallery_admin.models.image import Image
from gallery_admin.models.like import Like
from gallery_admin.models.social_media import Platform, SocialMediaLink
from gallery_admin.models.user import Role, User, UserStatus

__all__ = [
    "Image",
    "Like",
    "Platform",
    "Role",
    "SocialMediaLink",
    "User",
    "UserStatus",
]
