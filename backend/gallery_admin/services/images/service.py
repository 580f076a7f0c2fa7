"""
ImageService
============

Image library management. Bytes go to a :class:`BlobStorage`; the
database keeps one metadata row per stored object.

Notes
-----
- Object keys are ``images/<epoch-ms>-<name>`` with whitespace in the
  name collapsed to ``-``.
- Upload stores the object first, then the row. If the row cannot be
  written the object is removed again.
- Delete removes the object first, then the row.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import datetime

from gallery_admin.models.image import Image
from gallery_admin.repositories.base import Page
from gallery_admin.services._shared.base import BaseService
from gallery_admin.services._shared.errors import BadRequestError, NotFoundError
from gallery_admin.services._shared.ports.blob_storage import BlobStorage
from gallery_admin.services.images.dto import ImageUploadIn, RandomImageOut, RandomImagesIn

logger = logging.getLogger(__name__)

RANDOM_SAMPLE_SIZE = 10
DEFAULT_MAX_BYTES = 5 * 1024 * 1024
_WHITESPACE = re.compile(r"\s+")


def build_object_key(filename: str, now: datetime) -> str:
    """Return the storage key for ``filename`` uploaded at ``now``."""
    millis = int(now.timestamp() * 1000)
    return f"images/{millis}-{_WHITESPACE.sub('-', filename.strip())}"


class ImageService(BaseService):
    """
    Application service for the ``Image`` aggregate.

    :param storage: Object store receiving the bytes. Only uploads and
        deletes need it.
    :param max_bytes: Largest accepted upload.
    """

    def __init__(
        self,
        *,
        storage: BlobStorage | None = None,
        max_bytes: int = DEFAULT_MAX_BYTES,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(clock=clock)
        self.storage = storage
        self.max_bytes = max_bytes

    def _require_storage(self) -> BlobStorage:
        if self.storage is None:
            raise RuntimeError("ImageService was built without blob storage")
        return self.storage

    # ----------------------------------------------------------------- #
    # Commands
    # ----------------------------------------------------------------- #

    def upload(self, dto: ImageUploadIn) -> Image:
        """
        Store an image and record its metadata.

        :raises BadRequestError: Empty file, non-image type or oversize.
        """
        if not dto.filename or not dto.data:
            raise BadRequestError("No file uploaded")
        if not (dto.mimetype or "").startswith("image/"):
            raise BadRequestError("Only image files are allowed!")
        if len(dto.data) > self.max_bytes:
            raise BadRequestError(f"File too large. Maximum size is {self.max_bytes} bytes")

        key = build_object_key(dto.filename, self.now_utc())
        storage = self._require_storage()
        url = storage.put(dto.data, key, dto.mimetype)
        try:
            with self.rw_uow() as uow:
                image = Image(
                    original_name=dto.filename,
                    s3_key=key,
                    s3_url=url,
                    size=len(dto.data),
                    mimetype=dto.mimetype,
                    uploaded_by=dto.uploaded_by,
                )
                uow.images.add(image)
        except Exception:
            logger.warning("images.upload.rollback", extra={"path": key})
            storage.delete(key)
            raise

        logger.info("images.uploaded", extra={"user_id": dto.uploaded_by, "path": key})
        return image

    def delete_image(self, image_id: int) -> None:
        """
        :raises NotFoundError: If the image does not exist.
        """
        with self.rw_uow() as uow:
            image = uow.images.get(image_id)
            if image is None:
                raise NotFoundError("Image", image_id)
            self._require_storage().delete(image.s3_key)
            uow.images.delete(image)
        logger.info("images.deleted", extra={"path": image.s3_key})

    # ----------------------------------------------------------------- #
    # Queries
    # ----------------------------------------------------------------- #

    def get_image(self, image_id: int) -> Image:
        with self.ro_uow() as uow:
            image = uow.images.get(image_id)
            if image is None:
                raise NotFoundError("Image", image_id)
            return image

    def list_images(self, *, page: int = 1, limit: int = 20) -> Page[Image]:
        """Newest first."""
        pagination = self.ensure_pagination(page=page, limit=limit, sort=["-created_at"])
        with self.ro_uow() as uow:
            return uow.images.paginate(pagination)

    def random_images(self, dto: RandomImagesIn) -> list[RandomImageOut]:
        """
        Sample up to ten images the viewer has not seen yet.

        ``is_liked`` is only ever true for an authenticated viewer.
        """
        with self.ro_uow() as uow:
            images = uow.images.random_sample(size=RANDOM_SAMPLE_SIZE, exclude_ids=dto.seen_ids)
            liked: set[int] = set()
            if dto.viewer_id is not None:
                liked = uow.likes.liked_image_ids(dto.viewer_id, (i.id for i in images))
        return [RandomImageOut(image=i, is_liked=i.id in liked) for i in images]
