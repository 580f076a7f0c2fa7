"""Factory Boy definition for :class:`gallery_admin.models.social_media.SocialMediaLink`."""

from __future__ import annotations

import factory

from gallery_admin.models.social_media import Platform, SocialMediaLink
from tests.factories import BaseFactory


class SocialMediaLinkFactory(BaseFactory):
    class Meta:
        model = SocialMediaLink

    id = None
    platform = Platform.YOUTUBE
    url = factory.LazyAttribute(lambda o: f"https://{o.platform.value}.com/gallery")
    is_active = True
