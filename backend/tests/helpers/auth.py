"""Tiny helpers for authenticated test-client requests."""

from __future__ import annotations

from flask import Flask

from homecooking.models.user import Role, User
from homecooking.services._shared.ports import TokenSubject


def auth_headers(app: Flask, user: User) -> dict[str, str]:
    """Return an ``Authorization`` header carrying a fresh access token for ``user``.

    The token is minted with the app's own codec, so it is indistinguishable
    from one returned by ``POST /auth/login``.
    """
    codec = app.extensions["token_codec"]
    subject = TokenSubject(user_id=user.id, email=user.email, role=Role.parse(user.role))
    return {"Authorization": f"Bearer {codec.issue_access_token(subject)}"}
