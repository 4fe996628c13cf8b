"""
Authentication service route handlers.

Provides routes for:
- User registration
- User login

Credentials live in the UserStore injected at startup
(current_app.extensions["user_store"]). Hashing is delegated to
`auth_service.utils`. No session or token is issued; a successful
login only echoes the email back.
"""

import logging
from typing import Tuple, Dict, Any

from flask import Blueprint, current_app, request, jsonify, Response

from backend.auth_service.utils import hash_password, verify_password
from backend.common.errors import (
    AuthenticationError,
    ConflictError,
    InternalError,
    ServiceError,
    ValidationError,
)

auth_bp = Blueprint("auth", __name__)

MIN_PASSWORD_LENGTH = 6


def _user_store():
    return current_app.extensions["user_store"]


def _read_credentials() -> Tuple[str, str]:
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    email = data.get("email")
    password = data.get("password")
    email = email.strip().lower() if isinstance(email, str) else ""
    password = password if isinstance(password, str) else ""
    return email, password


# --- REQUEST LOGGING ---
@auth_bp.before_request
def before_request() -> None:
    """
    Log every incoming request to the authentication service.
    Bodies are never logged since they carry passwords.
    """
    logging.info(f"[Auth] Incoming {request.method} {request.path}")


@auth_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Auth] Response {response.status}")
    return response


@auth_bp.errorhandler(ServiceError)
def handle_service_error(error: ServiceError) -> Tuple[Response, int]:
    return jsonify({"message": error.message}), error.status_code


# --- REGISTER ---
@auth_bp.route("/register", methods=["POST"])
def register() -> Tuple[Response, int]:
    """
    Register a new user.

    Expects a JSON body with:
    - email (str): Unique email address.
    - password (str): Minimum 6 characters.

    Returns:
        201: JSON with message and the (normalized) email.
        400: Missing email/password or password too short.
        409: Email already registered.
        500: Server-side error (hashing or database).
    """
    email, password = _read_credentials()

    if not email or not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Invalid input")

    store = _user_store()

    try:
        if store.find_by_email(email):
            raise ConflictError("User already exists")

        pw_hash = hash_password(password)
        # A concurrent register can still slip past the lookup; the unique
        # index makes create() raise ConflictError in that case.
        store.create(email, pw_hash)
    except ServiceError:
        raise
    except Exception:
        logging.exception("[Auth] Registration failed")
        raise InternalError("Server error")

    logging.info(f"[Auth] Registered {email}")
    return jsonify({"message": "Registration successful", "email": email}), 201


# --- LOGIN ---
@auth_bp.route("/login", methods=["POST"])
def login() -> Tuple[Response, int]:
    """
    Verify a user's credentials.

    Expects a JSON body with:
    - email (str)
    - password (str)

    Returns:
        200: JSON with message and email.
        400: Missing credentials.
        401: Invalid credentials (wrong password or unknown email).
        500: Database error.
    """
    email, password = _read_credentials()

    if not email or not password:
        raise ValidationError("Email and password are required")

    try:
        user = _user_store().find_by_email(email)
    except Exception:
        logging.exception("[Auth] Login lookup failed")
        raise InternalError("Server error")

    if not user or not verify_password(user.get("password_hash", ""), password):
        raise AuthenticationError("Invalid credentials")

    return jsonify({"message": "Login successful", "email": email}), 200
