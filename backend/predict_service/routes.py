"""
Prediction proxy route: relays an uploaded image plus patient metadata to
the prediction microservice and returns its JSON verbatim.
"""

import logging
from typing import Tuple

from flask import Blueprint, current_app, request, jsonify, Response

from backend.common.errors import ServiceError, UpstreamError, ValidationError
from backend.predict_service.client import METADATA_FIELDS

predict_bp = Blueprint("predict", __name__)


@predict_bp.before_request
def before_request() -> None:
    logging.info(f"[Predict] Incoming {request.method} {request.path}")


@predict_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Predict] Response {response.status}")
    return response


@predict_bp.errorhandler(ServiceError)
def handle_service_error(error: ServiceError) -> Tuple[Response, int]:
    return jsonify({"error": error.message}), error.status_code


@predict_bp.route("/predict", methods=["POST"])
def predict() -> Tuple[Response, int]:
    """
    Forward an image to the prediction service.

    Expects multipart/form-data with:
    - image (file): Required.
    - age, gender, weight, lat, lon (str): Optional; sent as "" when absent.

    Returns:
        200: The upstream JSON body, unmodified.
        400: No image attached.
        500: Upstream timeout, network failure, or non-success status.
    """
    image = request.files.get("image")
    if image is None or not image.filename:
        raise ValidationError("No image uploaded")

    metadata = {field: request.form.get(field, "") for field in METADATA_FIELDS}

    client = current_app.extensions["prediction_client"]
    payload, err = client.predict(image.read(), image.filename, metadata, image.mimetype)
    if err:
        logging.error(f"[Predict] Predict proxy error: {err}")
        raise UpstreamError("Prediction service unavailable")

    return Response(payload, status=200, mimetype="application/json")
