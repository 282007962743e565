"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, current_app

from homecooking.api.deps import (
    auth_service,
    current_user,
    json_body,
    json_response,
    require_auth,
    timing,
)
from homecooking.core.extensions import limiter
from homecooking.schemas import (
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
    UserSchema,
)
from homecooking.services.auth import LoginIn, RefreshIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
user_schema = UserSchema()
token_schema = TokenPairSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/register")
@timing
def register():
    """Register a new ``user``-role account and return it."""

    data = register_schema.load(json_body())
    user = auth_service().register(RegisterIn(email=data["email"], password=data["password"]))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and issue an access/refresh token pair."""

    data = login_schema.load(json_body())
    pair = auth_service().login(LoginIn(email=data["email"], password=data["password"]))
    return json_response({"data": token_schema.dump(pair)})


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a refresh token for a new token pair."""

    data = refresh_schema.load(json_body())
    pair = auth_service().refresh(RefreshIn(refresh_token=data["refresh_token"]))
    return json_response({"data": token_schema.dump(pair)})


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated user profile."""

    return json_response({"data": user_schema.dump(current_user())})
