"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, fields, post_load, validate

from gallery_admin.models.user import Role
from gallery_admin.services.auth.dto import LoginIn, RegisterIn


class RegisterSchema(Schema):
    """Input payload for account registration. Every profile field is required."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    whatsapp = fields.String(required=True, validate=validate.Length(min=1, max=32))
    watermark = fields.String(required=True, validate=validate.Length(min=1, max=120))
    password = fields.String(required=True, validate=validate.Length(min=6, max=128))
    role = fields.Enum(Role, by_value=True, load_default=None)

    @post_load
    def make_dto(self, data: dict[str, Any], **_: Any) -> RegisterIn:
        return RegisterIn(**data)


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))
    role = fields.Enum(Role, by_value=True, load_default=None)

    @post_load
    def make_dto(self, data: dict[str, Any], **_: Any) -> LoginIn:
        return LoginIn(**data)
