"""Social media link repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from gallery_admin.models.social_media import Platform, SocialMediaLink
from gallery_admin.repositories.base import BaseRepository


class SocialMediaRepository(BaseRepository[SocialMediaLink]):
    model = SocialMediaLink

    def _filterable_fields(self):
        return {"platform": SocialMediaLink.platform}

    def _updatable_fields(self):
        return {"url", "is_active"}

    def list_all(self) -> list[SocialMediaLink]:
        """All links ordered by platform name."""
        stmt = select(SocialMediaLink).order_by(SocialMediaLink.platform.asc())
        return cast(list[SocialMediaLink], list(self.session.execute(stmt).scalars().all()))

    def get_by_platform(self, platform: Platform) -> SocialMediaLink | None:
        return self.find_one(platform=platform)
