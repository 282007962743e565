"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request

from homecooking.core.errors import Forbidden, Unauthorized
from homecooking.core.logger import ensure_request_id
from homecooking.models.user import Role
from homecooking.services._shared.base import ServiceContext
from homecooking.services._shared.ports import RefreshTokenRegistry, TokenCodec
from homecooking.services.auth import AuthService, UserOut
from homecooking.services.invites import UserInviteService
from homecooking.services.share_codes import ShareCodeService

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "bearer "


# ------------------------------ Service wiring ------------------------------


def _service_context() -> ServiceContext:
    user = cast(UserOut | None, g.get("current_user"))
    return ServiceContext(
        actor_id=user.id if user is not None else None,
        request_id=ensure_request_id(),
    )


def auth_service() -> AuthService:
    """Build an :class:`AuthService` from the codec/registry wired in the factory."""

    codec = cast(TokenCodec, current_app.extensions["token_codec"])
    registry = cast(
        RefreshTokenRegistry | None, current_app.extensions.get("refresh_token_registry")
    )
    return AuthService(token_codec=codec, refresh_registry=registry, ctx=_service_context())


def share_code_service() -> ShareCodeService:
    return ShareCodeService(
        code_bytes=int(current_app.config.get("SHARE_CODE_BYTES", 8)),
        ctx=_service_context(),
    )


def invite_service() -> UserInviteService:
    return UserInviteService(
        code_bytes=int(current_app.config.get("INVITE_CODE_BYTES", 8)),
        ctx=_service_context(),
    )


# ------------------------------ Authentication ------------------------------


def bearer_token() -> str:
    """Extract the bearer token from ``Authorization``.

    :raises Unauthorized: When the header is missing or not a bearer token.
    """

    header = request.headers.get("Authorization", "")
    if not header.lower().startswith(BEARER_PREFIX):
        raise Unauthorized("Missing bearer token")
    token = header[len(BEARER_PREFIX) :].strip()
    if not token:
        raise Unauthorized("Missing bearer token")
    return token


def current_user() -> UserOut:
    """Return the user resolved by :func:`require_auth`."""

    user = g.get("current_user")
    if user is None:
        raise Unauthorized()
    return cast(UserOut, user)


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token for an existing user."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.current_user = auth_service().validate_token(bearer_token())
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(*roles: Role | str) -> Callable[[F], F]:
    """Ensure the authenticated user holds one of ``roles``."""

    allowed = frozenset(Role.parse(r) for r in roles)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if current_user().role not in allowed:
                raise Forbidden("Insufficient role")
            return func(*args, **kwargs)

        return require_auth(wrapper)  # type: ignore[return-value]

    return decorator


# -------------------------------- Responses ---------------------------------


def json_body() -> dict[str, Any]:
    """Return the JSON request body, or an empty mapping."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
