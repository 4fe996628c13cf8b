"""
API gateway: combines the auth, AI, and predict blueprints.
This is the local entrypoint for development.

Long-lived collaborators (user store, text generator, prediction client)
are built once here and stored in app.extensions, so tests can swap them.
"""

import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from backend.ai_service.client import build_text_generator
from backend.ai_service.routes import ai_blueprint
from backend.auth_service.routes import auth_bp
from backend.database.db_connection import USERS_COLLECTION, UserStore, get_db
from backend.gateway.config import load_config
from backend.predict_service.client import PredictionClient
from backend.predict_service.routes import predict_bp


def create_app(
    config: Optional[Dict[str, Any]] = None,
    user_store: Optional[UserStore] = None,
    text_generator: Any = None,
    prediction_client: Optional[PredictionClient] = None,
) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        config (dict, optional): Overrides applied on top of the environment.
        user_store (UserStore, optional): Credential store; built from
            MONGO_URI when omitted.
        text_generator (optional): Anything with generate(prompt); built
            from the AI keys when omitted.
        prediction_client (PredictionClient, optional): Built from
            PREDICT_SERVICE_URL when omitted.

    Returns:
        Flask: The configured Flask application.
    """
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    # Basic console logging during API requests
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="[%(levelname)s] %(asctime)s - %(message)s",
    )

    origins = [o.strip() for o in app.config["CORS_ORIGINS"].split(",") if o.strip()] or "*"
    CORS(app, resources={
        r"/*": {
            "origins": origins,
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
        }
    })

    # --- COLLABORATORS ---
    if user_store is None:
        db = get_db(app.config["MONGO_URI"], app.config["MONGO_DB_NAME"])
        user_store = UserStore(db[USERS_COLLECTION])
        user_store.ensure_indexes()

    if text_generator is None:
        text_generator = build_text_generator(app.config)

    if prediction_client is None:
        prediction_client = PredictionClient(
            app.config["PREDICT_SERVICE_URL"],
            timeout=app.config["PREDICT_TIMEOUT_SECONDS"],
        )

    app.extensions["user_store"] = user_store
    app.extensions["text_generator"] = text_generator
    app.extensions["prediction_client"] = prediction_client

    # --- REGISTER BLUEPRINTS ---
    app.register_blueprint(auth_bp)
    app.register_blueprint(ai_blueprint)
    app.register_blueprint(predict_bp)
    logging.info("All blueprints registered successfully.")

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/")
    def ping():
        """
        Root URL for simple 'online' check.
        """
        return jsonify({"status": "gateway_ok"}), 200

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"}), 200

    # --- FALLBACK ERROR HANDLERS ---
    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error: Exception):
        logging.exception("Unhandled error")
        return jsonify({"error": "Internal Server Error"}), 500

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=False)
