# gallery_admin/services/images/dto.py
from __future__ import annotations

from dataclasses import dataclass, field

from gallery_admin.models.image import Image


@dataclass(frozen=True, slots=True)
class ImageUploadIn:
    """
    One uploaded file as received by the HTTP layer.

    :param filename: Client-side file name.
    :param data: Raw bytes.
    :param mimetype: Declared content type; must be ``image/*``.
    :param uploaded_by: Id of the admin performing the upload.
    """

    filename: str
    data: bytes
    mimetype: str
    uploaded_by: int | None = None


@dataclass(frozen=True, slots=True)
class RandomImagesIn:
    """
    :param seen_ids: Images already shown to the viewer.
    :param viewer_id: Authenticated viewer, or ``None`` for anonymous requests.
    """

    seen_ids: tuple[int, ...] = field(default_factory=tuple)
    viewer_id: int | None = None


@dataclass(frozen=True, slots=True)
class RandomImageOut:
    image: Image
    is_liked: bool
