"""Application factory for the gallery admin API."""

from __future__ import annotations

import logging

from flask import Flask

from gallery_admin.core.config import BaseConfig, get_config
from gallery_admin.core.logger import configure_logging, init_app as init_logging

log = logging.getLogger(__name__)


def create_app(config: type[BaseConfig] | object | None = None) -> Flask:
    """
    Build the Flask application.

    ``config`` defaults to the class selected by ``APP_ENV``. An optional
    ``instance/config.py`` is applied on top for host-specific secrets.

    Wiring order matters: extensions validate the token settings and connect
    Redis/S3 before any blueprint can build a service, and the error handlers
    are registered last so they also cover the API blueprints.
    """

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(get_config() if config is None else config)
    app.config.from_pyfile("config.py", silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from gallery_admin.core import cors, errors, extensions, security

    extensions.init_app(app)
    init_logging(app)
    cors.init_app(app)
    security.init_app(app)

    from gallery_admin.api import init_app as init_api

    init_api(app)
    errors.init_app(app)

    from gallery_admin import cli as app_cli

    app_cli.init_app(app)

    log.info("app.created debug=%s testing=%s", app.debug, app.testing)
    return app
