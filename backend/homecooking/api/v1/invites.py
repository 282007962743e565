"""User invite endpoints."""

from __future__ import annotations

from uuid import UUID

from flask import Blueprint

from homecooking.api.deps import (
    current_user,
    invite_service,
    json_body,
    json_response,
    require_auth,
    require_role,
    timing,
)
from homecooking.models.user import Role
from homecooking.schemas import CodeSchema, InviteCreateSchema, InviteSchema
from homecooking.services.invites import InviteCreateIn, InviteUseIn

bp = Blueprint("invites", __name__)

create_schema = InviteCreateSchema()
code_schema = CodeSchema()
invite_schema = InviteSchema()
invites_schema = InviteSchema(many=True)


@bp.post("")
@require_auth
@timing
def create_invite():
    """Issue an invite on behalf of the authenticated user."""

    data = create_schema.load(json_body())
    out = invite_service().create_invite(
        InviteCreateIn(
            created_by=current_user().id,
            email=data["email"],
            role=data["role"],
            expires_at=data["expires_at"],
        )
    )
    return json_response({"data": invite_schema.dump(out)}, status=201)


@bp.get("")
@require_role(Role.ADMIN)
@timing
def list_invites():
    """List every invite (administrators only)."""

    return json_response({"data": invites_schema.dump(invite_service().list_invites())})


@bp.post("/use")
@require_auth
@timing
def use_invite():
    """Redeem an invite as the authenticated user."""

    data = code_schema.load(json_body())
    out = invite_service().use_invite(InviteUseIn(code=data["code"], used_by=current_user().id))
    return json_response({"data": invite_schema.dump(out)})


@bp.get("/<string:code>")
@timing
def get_invite(code: str):
    """Inspect an invite without redeeming it."""

    return json_response({"data": invite_schema.dump(invite_service().get_invite(code))})


@bp.delete("/<uuid:invite_id>")
@require_role(Role.ADMIN)
@timing
def delete_invite(invite_id: UUID):
    """Delete an invite (administrators only)."""

    invite_service().delete_invite(invite_id)
    return "", 204
