"""Like repository."""

from __future__ import annotations

from collections.abc import Iterable
from typing import cast

from sqlalchemy import select

from gallery_admin.models.like import Like
from gallery_admin.repositories.base import BaseRepository, Page, Pagination


class LikeRepository(BaseRepository[Like]):
    model = Like

    def _sortable_fields(self):
        return {"created_at": Like.created_at}

    def _filterable_fields(self):
        return {"user_id": Like.user_id, "image_id": Like.image_id}

    def get_for(self, user_id: int, image_id: int) -> Like | None:
        return self.find_one(user_id=user_id, image_id=image_id)

    def liked_image_ids(self, user_id: int, image_ids: Iterable[int]) -> set[int]:
        """Subset of ``image_ids`` the user has liked."""
        ids = list(image_ids)
        if not ids:
            return set()
        stmt = select(Like.image_id).where(Like.user_id == user_id, Like.image_id.in_(ids))
        return set(cast(list[int], self.session.execute(stmt).scalars().all()))

    def for_user(self, user_id: int, pagination: Pagination) -> Page[Like]:
        return self.paginate(pagination, filters={"user_id": user_id})
