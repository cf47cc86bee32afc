from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .common.log import configure_logging
from .config import get_settings_module
from .container import build_container
from .integrity.controller import register as register_integrity
from .reporting.controller import register as register_reporting
from .validation.controller import register as register_validation

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(settings)
    app.extensions["attendance_engine"] = container

    if app.config["DEBUG"]:
        logger.debug(
            "settings=%s authorized_origins=%d allow_any_origin=%s",
            settings_module,
            len(container.authorized_origins),
            getattr(settings, "ALLOW_ANY_ORIGIN", False),
        )

    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def api_health():
        return jsonify({"status": "ok"}), 200

    register_validation(app, container)
    register_integrity(app, container)
    register_reporting(app, container)

    return app
