"""Flask application factory for the overlay backend."""

from __future__ import annotations

import logging
import sys

from flask import Flask
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import Config
from .routes import api_bp
from .routes.api import plain_text
from .services import OverlayService

logger = logging.getLogger(__name__)


def create_app(config: Config | None = None, service: OverlayService | None = None) -> Flask:
    """Create and configure the Flask application."""
    if config is None:
        config = Config.load()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in config.missing_settings():
        logger.warning("%s is not set, requests that need it will fail", name)

    app = Flask(__name__)
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    if service is None:
        service = OverlayService.from_config(config)
    app.extensions["overlay_service"] = service

    app.register_blueprint(api_bp)

    @app.errorhandler(HTTPException)
    def handle_http_error(err: HTTPException):
        if err.code == 405:
            return plain_text("Method not allowed", 405)
        return plain_text(err.description or err.name, err.code or 500)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logger.info("Overlay backend initialized")
    return app
