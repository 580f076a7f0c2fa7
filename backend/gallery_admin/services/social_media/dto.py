# gallery_admin/services/social_media/dto.py
from __future__ import annotations

from dataclasses import dataclass

from gallery_admin.models.social_media import Platform


@dataclass(frozen=True, slots=True)
class LinkUpdateIn:
    """
    Desired state of one platform link.

    ``is_active`` of ``None`` leaves the current flag untouched.
    """

    platform: Platform
    url: str
    is_active: bool | None = None
