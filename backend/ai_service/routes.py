"""
AI proxy route: forwards a free-text prompt to the configured
text-generation service and relays the reply unmodified.
"""

import logging
from typing import Dict, Any, Tuple

from flask import Blueprint, current_app, request, jsonify, Response

from backend.common.errors import ServiceError, UpstreamError, ValidationError

# --- BLUEPRINT SETUP ---
ai_blueprint = Blueprint("ai", __name__)


@ai_blueprint.before_request
def before_request() -> None:
    logging.info(f"[AI] Incoming {request.method} {request.path}")


@ai_blueprint.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[AI] Response {response.status}")
    return response


@ai_blueprint.errorhandler(ServiceError)
def handle_service_error(error: ServiceError) -> Tuple[Response, int]:
    return jsonify({"error": error.message}), error.status_code


# --- ROUTES ---

@ai_blueprint.route("/chatbot", methods=["POST"])
def ask() -> Tuple[Response, int]:
    """
    Send a prompt to the AI service.

    Expects:
    - query (str): The user's prompt.

    Returns:
        200: {"response": <model text>}
        400: Missing or empty query.
        500: AI service not configured, or the upstream call failed.
    """
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    query = data.get("query")

    if not isinstance(query, str) or not query.strip():
        raise ValidationError("Prompt required")

    generator = current_app.extensions.get("text_generator")
    if generator is None:
        raise UpstreamError("AI service is not configured.")

    reply, err = generator.generate(query)
    if err:
        logging.error(f"[AI] Chatbot error: {err}")
        raise UpstreamError("Chatbot error")

    return jsonify({"response": reply}), 200
