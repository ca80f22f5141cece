#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -U pip -e ".[test]"   # from the repository root
#setup: flask --app "app:create_app()" run --port 5000 --debug

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, request
from flask_cors import CORS

from api.routes import api_bp
from settings import Settings, configure_logging, load_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or load_settings()
    configure_logging(settings)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.json.ensure_ascii = False

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    @app.after_request
    def add_cors_headers(response):
        """Ensure API responses carry the CORS headers the frontend expects."""
        origin = request.headers.get("Origin", "")
        if origin in settings.cors_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        return response

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info("simulator API ready (origins=%s)", ", ".join(settings.cors_origins))
    return app


if __name__ == "__main__":
    create_app().run(port=5000, debug=True)
