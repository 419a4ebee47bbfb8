"""
project: floorgen
module: __init__.py
License: MIT

Flask application factory for the floor layout service.

The layout core (``floorgen.layout``) is a plain library with no Flask
dependency at call time; this factory only exposes it read-only over HTTP.
Configuration is sourced from environment variables (optionally from a
``.env`` file) with development-friendly defaults.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

__version__ = "0.1.0"

# Load .env if present so FLOORGEN_* defaults can be supplied without
# exporting shell variables during development.
load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else default


def create_app(overrides=None):
    """Build and return a configured Flask app.

    `overrides` is applied last so tests can pin cache/dimension settings.
    """
    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        FLOORGEN_DEFAULT_WIDTH=_env_int("FLOORGEN_DEFAULT_WIDTH", 80),
        FLOORGEN_DEFAULT_HEIGHT=_env_int("FLOORGEN_DEFAULT_HEIGHT", 60),
        FLOORGEN_DISABLE_CACHE=os.getenv("FLOORGEN_DISABLE_CACHE", "0") == "1",
        FLOORGEN_ENABLE_METRICS=os.getenv("FLOORGEN_ENABLE_METRICS", "1") == "1",
    )
    if overrides:
        app.config.update(overrides)

    from floorgen.routes.floor_api import bp_floor

    app.register_blueprint(bp_floor)

    @app.route("/healthz")
    def healthz():
        return jsonify({"status": "ok", "version": __version__})

    # Error handling: log details server-side, return an opaque id to the client
    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal", "error_id": error_id}), 500

    return app
