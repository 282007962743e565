"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from homecooking.models.user import Role


class UserSchema(Schema):
    """Public representation of a user entity."""

    id = fields.UUID(required=True)
    email = fields.Email(required=True)
    role = fields.Enum(Role, by_value=True, required=True)
    created_at = fields.DateTime(allow_none=True)
