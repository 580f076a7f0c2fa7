"""Factory Boy definition for :class:`gallery_admin.models.image.Image`."""

from __future__ import annotations

import factory

from gallery_admin.models.image import Image
from tests.factories import BaseFactory


class ImageFactory(BaseFactory):
    class Meta:
        model = Image

    id = None
    original_name = factory.Sequence(lambda n: f"photo-{n}.jpg")
    s3_key = factory.LazyAttribute(lambda o: f"images/1700000000000-{o.original_name}")
    s3_url = factory.LazyAttribute(lambda o: f"https://blobs.test/{o.s3_key}")
    size = 1024
    mimetype = "image/jpeg"
    uploaded_by = None
