"""Share code and shared recipe schemas."""

from __future__ import annotations

from datetime import timezone

from marshmallow import Schema, fields, validate


class ShareCodeCreateSchema(Schema):
    """Payload for issuing a share code."""

    recipe_id = fields.UUID(required=True)
    expires_at = fields.AwareDateTime(
        load_default=None, allow_none=True, default_timezone=timezone.utc
    )
    max_uses = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=1))


class ShareCodeSchema(Schema):
    """Public representation of a share code."""

    id = fields.UUID(required=True)
    recipe_id = fields.UUID(required=True)
    code = fields.String(required=True)
    expires_at = fields.DateTime(allow_none=True)
    max_uses = fields.Integer(allow_none=True)
    use_count = fields.Integer(required=True)
    created_at = fields.DateTime(allow_none=True)


class ShareCodeWithRecipeSchema(ShareCodeSchema):
    """Share code plus the summary of the recipe it unlocks."""

    recipe_title = fields.String(required=True)
    recipe_slug = fields.String(required=True)


class SharedRecipeSchema(Schema):
    """Recipe payload returned to anonymous share-code holders."""

    id = fields.UUID(required=True)
    title = fields.String(required=True)
    slug = fields.String(required=True)
    description = fields.String(allow_none=True)
    published_at = fields.DateTime(allow_none=True)
