"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from homecooking.api.deps import json_response, timing
from homecooking.core.extensions import db

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application, database and (when configured) Redis health."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"

    redis_status = "disabled"
    client = current_app.extensions.get("redis_client")
    if client is not None:
        try:
            client.ping()
            redis_status = "ok"
        except RedisError:  # pragma: no cover - depends on Redis availability
            current_app.logger.exception("healthcheck.redis_error")
            redis_status = "fail"

    status = "ok" if db_status == "ok" and redis_status != "fail" else "degraded"
    payload = {
        "status": status,
        "db": db_status,
        "redis": redis_status,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload, status=200 if status == "ok" else 503)
