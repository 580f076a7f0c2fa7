"""Image resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from .user import UserBriefSchema


class ImageSchema(Schema):
    id = fields.Integer(required=True)
    original_name = fields.String(data_key="originalName")
    s3_key = fields.String(data_key="s3Key")
    s3_url = fields.String(data_key="s3Url")
    size = fields.Integer()
    mimetype = fields.String()
    uploaded_by = fields.Nested(UserBriefSchema, attribute="uploader", data_key="uploadedBy", allow_none=True)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


class ImageSummarySchema(Schema):
    """Fields shown next to a like."""

    id = fields.Integer()
    original_name = fields.String(data_key="originalName")
    s3_url = fields.String(data_key="s3Url")
    mimetype = fields.String()
    size = fields.Integer()
    created_at = fields.DateTime(data_key="createdAt")


class RandomImageSchema(Schema):
    """One entry of the public feed; dumps a :class:`RandomImageOut`."""

    id = fields.Integer(attribute="image.id")
    original_name = fields.String(attribute="image.original_name", data_key="originalName")
    s3_url = fields.String(attribute="image.s3_url", data_key="s3Url")
    mimetype = fields.String(attribute="image.mimetype")
    size = fields.Integer(attribute="image.size")
    created_at = fields.DateTime(attribute="image.created_at", data_key="createdAt")
    is_liked = fields.Boolean(data_key="isLiked")


class RandomImagesQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    seen_ids = fields.List(fields.Integer(), load_default=list, data_key="seenIds")
