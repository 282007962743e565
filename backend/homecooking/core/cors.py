"""CORS policy for the JSON API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from homecooking.core.logger import REQUEST_ID_HEADER


def init_app(app: Flask) -> None:
    """Enable CORS on ``/api/*`` from ``CORS_ORIGINS``.

    A blank value or ``"*"`` allows any origin; credentials are then
    disabled because browsers reject wildcard origins with credentials.
    Bearer tokens travel in ``Authorization``, so that header is always
    allowed, and the correlation header is exposed to scripts.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = not origins or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER, "Retry-After"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
