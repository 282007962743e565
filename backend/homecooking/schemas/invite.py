"""User invite schemas."""

from __future__ import annotations

from datetime import timezone

from marshmallow import Schema, fields, validate

from homecooking.models.user import Role


class InviteCreateSchema(Schema):
    """Payload for issuing an invite.

    ``role`` stays a free string so that unknown values reach the service
    and fail with ``invalid_role`` instead of a generic validation error.
    """

    email = fields.Email(load_default=None, allow_none=True, validate=validate.Length(max=254))
    role = fields.String(load_default=None, allow_none=True)
    expires_at = fields.AwareDateTime(
        load_default=None, allow_none=True, default_timezone=timezone.utc
    )


class InviteSchema(Schema):
    """Public representation of an invite."""

    id = fields.UUID(required=True)
    code = fields.String(required=True)
    email = fields.String(allow_none=True)
    role = fields.Enum(Role, by_value=True, required=True)
    created_by = fields.UUID(allow_none=True)
    expires_at = fields.DateTime(allow_none=True)
    used_at = fields.DateTime(allow_none=True)
    used_by = fields.UUID(allow_none=True)
    created_at = fields.DateTime(allow_none=True)
