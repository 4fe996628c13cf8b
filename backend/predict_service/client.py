"""
HTTP client for the image prediction microservice.
"""

import logging
from typing import Dict, Optional, Tuple

import requests

DEFAULT_PREDICT_URL = "https://skinscanbackend.onrender.com/predict"
DEFAULT_TIMEOUT_SECONDS = 15

METADATA_FIELDS = ("age", "gender", "weight", "lat", "lon")


class PredictionClient:
    """
    Forwards an image and its metadata as multipart form data.

    predict() returns (payload, error); exactly one is None. The payload is
    the upstream JSON body as raw bytes, checked to be JSON but untouched.
    """

    def __init__(self, url: str = DEFAULT_PREDICT_URL, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.url = url
        if not timeout or timeout <= 0:
            logging.warning(f"[Predict] Invalid timeout {timeout!r}, using {DEFAULT_TIMEOUT_SECONDS}s")
            timeout = DEFAULT_TIMEOUT_SECONDS
        self.timeout = timeout

    def predict(
        self,
        image_bytes: bytes,
        image_name: str,
        metadata: Dict[str, Optional[str]],
        content_type: Optional[str] = None,
    ) -> Tuple[Optional[bytes], Optional[str]]:
        files = {"image": (image_name, image_bytes, content_type or "application/octet-stream")}
        # Missing fields go out as empty strings so the upstream always sees all five.
        data = {field: metadata.get(field) or "" for field in METADATA_FIELDS}

        try:
            response = requests.post(self.url, files=files, data=data, timeout=self.timeout)
        except requests.Timeout:
            logging.error(f"[Predict] Upstream timed out after {self.timeout}s")
            return None, "Prediction service timed out"
        except requests.RequestException as e:
            logging.error(f"[Predict] Upstream request failed: {e}")
            return None, f"Prediction request failed: {e}"

        if not response.ok:
            body = response.text[:200] if response.text else response.reason
            logging.error(f"[Predict] Upstream returned {response.status_code}: {body}")
            return None, f"Prediction service returned {response.status_code}"

        try:
            response.json()
        except ValueError:
            logging.error("[Predict] Upstream response was not JSON")
            return None, "Prediction service response was not JSON"

        # Relay the raw bytes; re-serializing would reorder keys.
        return response.content, None
