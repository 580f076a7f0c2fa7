"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from gallery_admin.models.user import Role, UserStatus


class UserSchema(Schema):
    """Public representation of a user. The password hash is never dumped."""

    id = fields.Integer(required=True)
    name = fields.String(allow_none=True)
    email = fields.Email(required=True)
    whatsapp = fields.String(allow_none=True)
    watermark = fields.String(allow_none=True)
    status = fields.Enum(UserStatus, by_value=True)
    role = fields.Enum(Role, by_value=True)
    activated_at = fields.DateTime(allow_none=True, data_key="activatedAt")
    remarks = fields.String()
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


class UserBriefSchema(Schema):
    """Uploader summary embedded in image listings."""

    id = fields.Integer()
    name = fields.String(allow_none=True)
    email = fields.Email()


class UserListQuerySchema(Schema):
    """Supported query parameters for the admin user table."""

    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(load_default=10, validate=validate.Range(min=1, max=100))
    # Validated by the service so the error message stays the domain one
    status = fields.String(load_default=None)
    role = fields.String(load_default=None)
    search = fields.String(load_default=None, validate=validate.Length(max=100))


class UserUpdateSchema(Schema):
    """Partial admin update. Absent keys are left unchanged."""

    name = fields.String(validate=validate.Length(max=100))
    email = fields.Email(validate=validate.Length(max=254))
    whatsapp = fields.String(validate=validate.Length(max=32))
    watermark = fields.String(validate=validate.Length(max=120))
    password = fields.String(validate=validate.Length(max=128))
    activated_at = fields.DateTime(allow_none=True, data_key="activatedAt")
    remarks = fields.String()
    role = fields.String()


class UserStatusSchema(Schema):
    status = fields.String(required=True)


class PasswordChangeSchema(Schema):
    """Length is checked by the service so the message matches the other password rules."""

    password = fields.String(load_default=None)
