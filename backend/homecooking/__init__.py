"""Expose the application factory at package level.

Provide convenient access to :func:`homecooking.factory.create_app` so callers
can ``from homecooking import create_app`` (e.g. ``gunicorn "homecooking:create_app()"``).
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
