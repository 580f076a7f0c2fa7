"""Like resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from .image import ImageSummarySchema


class LikeSchema(Schema):
    id = fields.Integer()
    image_id = fields.Integer(data_key="imageId")
    image = fields.Nested(ImageSummarySchema)
    created_at = fields.DateTime(data_key="createdAt")


class LikeToggleSchema(Schema):
    """``status`` picks the desired state; without it the like is flipped."""

    status = fields.String(load_default=None, validate=validate.OneOf(["like", "unlike"]))
