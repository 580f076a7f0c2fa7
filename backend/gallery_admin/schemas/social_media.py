"""Social media link schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from gallery_admin.models.social_media import Platform


class SocialMediaLinkSchema(Schema):
    id = fields.Integer()
    platform = fields.Enum(Platform, by_value=True)
    url = fields.String()
    is_active = fields.Boolean(data_key="isActive")
    updated_at = fields.DateTime(data_key="updatedAt")


class SocialMediaUpdateSchema(Schema):
    """Shape of each entry is checked by the service."""

    links = fields.Raw(load_default=None)
