# gallery_admin/services/likes/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from gallery_admin.models.like import Like
from gallery_admin.repositories.base import Page
from gallery_admin.services._shared.base import BaseService
from gallery_admin.services._shared.errors import NotFoundError, violates
from gallery_admin.services.likes.dto import LikeOutcome, LikeStateOut, LikeToggleIn

logger = logging.getLogger(__name__)


class LikeService(BaseService):
    """
    Like bookkeeping for viewers.

    Setting an explicit state is idempotent: liking twice or unliking an image
    that was never liked reports :attr:`LikeOutcome.UNCHANGED` instead of
    failing. Without an explicit state the like is flipped.
    """

    def set_like(self, dto: LikeToggleIn) -> LikeStateOut:
        """
        :raises NotFoundError: If the image does not exist.
        """
        try:
            with self.rw_uow() as uow:
                if uow.images.get(dto.image_id) is None:
                    raise NotFoundError("Image", dto.image_id)
                existing = uow.likes.get_for(dto.user_id, dto.image_id)
                wanted = existing is None if dto.liked is None else dto.liked

                if wanted and existing is None:
                    uow.likes.add(Like(user_id=dto.user_id, image_id=dto.image_id))
                    outcome = LikeOutcome.LIKED
                elif not wanted and existing is not None:
                    uow.likes.delete(existing)
                    outcome = LikeOutcome.UNLIKED
                else:
                    outcome = LikeOutcome.UNCHANGED
                is_liked = wanted
        except IntegrityError as exc:
            # A concurrent request inserted the same pair first
            if not violates(exc, "uq_likes_user_image"):
                raise
            outcome, is_liked = LikeOutcome.UNCHANGED, True

        logger.info("likes.%s", outcome.value, extra={"user_id": dto.user_id})
        return LikeStateOut(outcome=outcome, is_liked=is_liked)

    def list_likes(self, user_id: int, *, page: int = 1, limit: int = 20) -> Page[Like]:
        """The viewer's likes, most recent first."""
        pagination = self.ensure_pagination(page=page, limit=limit, sort=["-created_at"])
        with self.ro_uow() as uow:
            return uow.likes.for_user(user_id, pagination)
