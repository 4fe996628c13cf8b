"""
Environment-driven configuration for the gateway.
Values come from the process environment, with .env loaded first.
"""

import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from backend.ai_service.client import DEFAULT_GEMINI_MODEL, DEFAULT_OPENAI_MODEL
from backend.predict_service.client import DEFAULT_PREDICT_URL, DEFAULT_TIMEOUT_SECONDS


def _safe_int(value: Optional[str], default: int, minimum: Optional[int] = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        if value is not None:
            logging.warning(f"Invalid integer '{value}', using default {default}")
        return default

    if minimum is not None and number < minimum:
        logging.warning(f"Value {number} is below {minimum}, using default {default}")
        return default
    return number


def load_config() -> Dict[str, Any]:
    """
    Read all settings used by the app.

    Returns:
        dict: Flask config keys, ready for app.config.update().
    """
    load_dotenv()

    return {
        "MONGO_URI": os.getenv("MONGO_URI"),
        "MONGO_DB_NAME": os.getenv("MONGO_DB_NAME", "skinscan"),
        "GEMINI_API_KEY": os.getenv("GEMINI_API_KEY"),
        "OPENAI_API_KEY": os.getenv("OPENAI_API_KEY"),
        "AI_PROVIDER": os.getenv("AI_PROVIDER", ""),
        "GEMINI_MODEL": os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        "OPENAI_MODEL": os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
        "PREDICT_SERVICE_URL": os.getenv("PREDICT_SERVICE_URL", DEFAULT_PREDICT_URL),
        "PREDICT_TIMEOUT_SECONDS": _safe_int(os.getenv("PREDICT_TIMEOUT_SECONDS"), DEFAULT_TIMEOUT_SECONDS, minimum=1),
        "CORS_ORIGINS": os.getenv("CORS_ORIGINS", "*"),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
        "PORT": _safe_int(os.getenv("PORT"), 5000),
    }
