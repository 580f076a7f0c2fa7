# gallery_admin/services/likes/dto.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LikeOutcome(str, Enum):
    LIKED = "liked"
    UNLIKED = "unliked"
    UNCHANGED = "unchanged"


@dataclass(frozen=True, slots=True)
class LikeToggleIn:
    """
    :param user_id: Viewer marking the image.
    :param image_id: Target image.
    :param liked: Desired state; ``None`` flips the current one.
    """

    user_id: int
    image_id: int
    liked: bool | None = None


@dataclass(frozen=True, slots=True)
class LikeStateOut:
    outcome: LikeOutcome
    is_liked: bool
