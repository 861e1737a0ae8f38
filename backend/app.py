import logging
import os

from flask import Flask
from flask_cors import CORS

from jobsearch.shared import configure_logging

from .blueprints.jobs import jobs_bp
from .config import Config

# Configure logging
configure_logging(logging.INFO)
logger = logging.getLogger(__name__)


def create_app(config_object=Config):
    """Application factory function."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json.sort_keys = app.config.get("JSON_SORT_KEYS", False)

    # Initialize CORS
    CORS(
        app,
        origins=app.config["CORS_ORIGINS"],
        allow_headers=["Content-Type"],
        methods=["POST", "OPTIONS"],
    )

    # Register Blueprints
    app.register_blueprint(jobs_bp)

    logger.info("Job search API ready")
    return app


if __name__ == "__main__":
    debug = os.getenv("ENVIRONMENT", "development") == "development"
    create_app().run(host="0.0.0.0", port=5000, debug=debug, use_reloader=debug)
