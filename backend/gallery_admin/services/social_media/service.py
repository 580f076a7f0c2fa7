"""
SocialMediaService
==================

Maintains the fixed set of footer links, one row per :class:`Platform`.

Notes
-----
- Listing seeds a row for each platform that has none yet, so clients
  always receive the full set.
- Bulk update accepts either a bare URL or ``{"url", "isActive"}`` per
  platform and upserts each row.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from gallery_admin.models.social_media import Platform, SocialMediaLink
from gallery_admin.services._shared.base import BaseService
from gallery_admin.services._shared.errors import BadRequestError, NotFoundError
from gallery_admin.services.social_media.dto import LinkUpdateIn

logger = logging.getLogger(__name__)

INVALID_LINKS_BODY = (
    "Invalid request body. Expected { links: { platform: { url, isActive } } }"
)


def parse_platform(raw: str | None, *, message: str | None = None) -> Platform:
    try:
        return Platform(str(raw).strip().lower())
    except ValueError as exc:
        raise BadRequestError(message or f"Invalid platform: {raw}") from exc


def parse_links(links: Any) -> list[LinkUpdateIn]:
    """
    Normalise a ``{platform: url | {url, isActive}}`` mapping.

    :raises BadRequestError: Not a mapping, unknown platform or malformed entry.
    """
    if not isinstance(links, Mapping) or not links:
        raise BadRequestError(INVALID_LINKS_BODY)

    updates: list[LinkUpdateIn] = []
    for raw_platform, value in links.items():
        platform = parse_platform(raw_platform)
        if isinstance(value, str):
            updates.append(LinkUpdateIn(platform=platform, url=value.strip()))
        elif isinstance(value, Mapping):
            url = value.get("url", "")
            is_active = value.get("isActive")
            if not isinstance(url, str) or (
                is_active is not None and not isinstance(is_active, bool)
            ):
                raise BadRequestError(INVALID_LINKS_BODY)
            updates.append(LinkUpdateIn(platform=platform, url=url.strip(), is_active=is_active))
        else:
            raise BadRequestError(INVALID_LINKS_BODY)
    return updates


class SocialMediaService(BaseService):
    """Application service for :class:`SocialMediaLink`."""

    def list_links(self) -> list[SocialMediaLink]:
        """Return every platform's link, creating empty ones on first use."""
        with self.rw_uow() as uow:
            existing = {link.platform for link in uow.social_media.list_all()}
            for platform in Platform:
                if platform not in existing:
                    uow.social_media.add(SocialMediaLink(platform=platform, url="", is_active=True))
            return uow.social_media.list_all()

    def update_links(self, links: Any) -> list[SocialMediaLink]:
        """
        Upsert the given platforms and return the full set.

        :raises BadRequestError: See :func:`parse_links`.
        """
        updates = parse_links(links)
        with self.rw_uow() as uow:
            for update in updates:
                link = uow.social_media.get_by_platform(update.platform)
                if link is None:
                    link = uow.social_media.add(
                        SocialMediaLink(platform=update.platform, url="", is_active=True)
                    )
                fields: dict[str, Any] = {"url": update.url}
                if update.is_active is not None:
                    fields["is_active"] = update.is_active
                uow.social_media.assign_updates(link, fields)
            result = uow.social_media.list_all()
        logger.info("social_media.updated count=%s", len(updates))
        return result

    def toggle(self, raw_platform: str | None) -> SocialMediaLink:
        """
        Flip ``is_active`` for one platform.

        :raises BadRequestError: Unknown platform.
        :raises NotFoundError: No row exists for the platform yet.
        """
        platform = parse_platform(raw_platform, message="Invalid platform")
        with self.rw_uow() as uow:
            link = uow.social_media.get_by_platform(platform)
            if link is None:
                raise NotFoundError(f"Social media link for {platform.value}", platform.value)
            uow.social_media.assign_updates(link, {"is_active": not link.is_active})
        return link
