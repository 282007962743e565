"""Recipe share code endpoints."""

from __future__ import annotations

from uuid import UUID

from flask import Blueprint

from homecooking.api.deps import (
    json_body,
    json_response,
    require_auth,
    share_code_service,
    timing,
)
from homecooking.schemas import (
    ShareCodeCreateSchema,
    ShareCodeSchema,
    ShareCodeWithRecipeSchema,
    SharedRecipeSchema,
)
from homecooking.services.share_codes import ShareCodeCreateIn

bp = Blueprint("share_codes", __name__)
recipes_bp = Blueprint("recipe_share_codes", __name__)

create_schema = ShareCodeCreateSchema()
share_code_schema = ShareCodeSchema()
share_codes_schema = ShareCodeSchema(many=True)
share_code_with_recipe_schema = ShareCodeWithRecipeSchema()
shared_recipe_schema = SharedRecipeSchema()


@bp.post("")
@require_auth
@timing
def create_share_code():
    """Issue a share code for a published recipe."""

    data = create_schema.load(json_body())
    out = share_code_service().create_share_code(
        ShareCodeCreateIn(
            recipe_id=data["recipe_id"],
            expires_at=data["expires_at"],
            max_uses=data["max_uses"],
        )
    )
    return json_response({"data": share_code_schema.dump(out)}, status=201)


@bp.get("/<string:code>")
@timing
def get_share_code(code: str):
    """Inspect a share code without consuming a use."""

    out = share_code_service().get_share_code(code)
    return json_response({"data": share_code_with_recipe_schema.dump(out)})


@bp.get("/<string:code>/recipe")
@timing
def access_recipe(code: str):
    """Redeem a share code and return the recipe it unlocks."""

    recipe = share_code_service().access_recipe(code)
    return json_response({"data": shared_recipe_schema.dump(recipe)})


@bp.delete("/<uuid:share_code_id>")
@require_auth
@timing
def delete_share_code(share_code_id: UUID):
    """Delete a share code."""

    share_code_service().delete_share_code(share_code_id)
    return "", 204


@recipes_bp.get("/<uuid:recipe_id>/share-codes")
@timing
def list_share_codes(recipe_id: UUID):
    """List the share codes of a recipe, newest first."""

    items = share_code_service().list_for_recipe(recipe_id)
    return json_response({"data": share_codes_schema.dump(items)})
