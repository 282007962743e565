"""Reverse-proxy header handling."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Wrap the WSGI app in :class:`ProxyFix` when ``USE_PROXYFIX`` is set.

    ``PROXY_HOPS`` is the number of trusted proxies in front of the app.
    The login rate limit keys on the client address, so this must match
    the deployment: too high lets clients spoof ``X-Forwarded-For``.
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    hops = int(app.config.get("PROXY_HOPS", 1))
    if hops < 1:
        return
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops)
