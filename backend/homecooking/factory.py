"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

import logging

from flask import Flask

from homecooking.core.config import BaseConfig, get_config, validate_config
from homecooking.core.logger import configure_logging, init_app as init_logging

log = logging.getLogger(__name__)


def _init_auth(app: Flask) -> None:
    """Build the token codec and the optional refresh-token registry.

    Both are stored in ``app.extensions`` and injected into each
    ``AuthService``; nothing downstream reads secrets from config.
    """
    from homecooking.core.extensions import redis_client
    from homecooking.infra.jwt import JWTTokenCodec, TokenCodecConfig
    from homecooking.infra.redis import RedisRefreshTokenRegistry
    from homecooking.services._shared.ports import InMemoryRefreshTokenRegistry

    app.extensions["token_codec"] = JWTTokenCodec(TokenCodecConfig.from_mapping(app.config))

    if not app.config.get("REFRESH_TOKEN_SINGLE_USE"):
        app.extensions["refresh_token_registry"] = None
        return
    if redis_client is not None:
        app.extensions["refresh_token_registry"] = RedisRefreshTokenRegistry(redis_client)
    else:
        log.warning("auth.refresh_registry_in_memory")
        app.extensions["refresh_token_registry"] = InMemoryRefreshTokenRegistry()


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :raises RuntimeError: If the loaded configuration fails
        :func:`~homecooking.core.config.validate_config`.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    validate_config(app.config)
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from homecooking.core import proxy

    proxy.init_app(app)

    from homecooking.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from homecooking.core import cors

    cors.init_app(app)

    _init_auth(app)

    from homecooking.api import init_app as init_api

    init_api(app)

    from homecooking.core import errors

    errors.init_app(app)

    from homecooking import cli as app_cli

    app_cli.init_app(app)

    return app
