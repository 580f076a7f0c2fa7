"""Image metadata repository."""

from __future__ import annotations

from collections.abc import Iterable
from typing import cast

from sqlalchemy import func, select

from gallery_admin.models.image import Image
from gallery_admin.repositories.base import BaseRepository


class ImageRepository(BaseRepository[Image]):
    model = Image

    def _sortable_fields(self):
        return {
            "id": Image.id,
            "created_at": Image.created_at,
            "size": Image.size,
            "original_name": Image.original_name,
        }

    def _filterable_fields(self):
        return {"uploaded_by": Image.uploaded_by, "s3_key": Image.s3_key}

    def get_by_key(self, s3_key: str) -> Image | None:
        return self.find_one(s3_key=s3_key)

    def random_sample(self, *, size: int, exclude_ids: Iterable[int] = ()) -> list[Image]:
        """Return up to ``size`` images in random order, skipping ``exclude_ids``."""
        stmt = select(Image)
        excluded = list(exclude_ids)
        if excluded:
            stmt = stmt.where(Image.id.not_in(excluded))
        stmt = stmt.order_by(func.random()).limit(size)
        return cast(list[Image], list(self.session.execute(stmt).scalars().all()))
