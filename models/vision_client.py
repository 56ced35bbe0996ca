from __future__ import annotations

import threading

from google.cloud import vision

_client = None
_client_lock = threading.Lock()


class VisionServiceError(RuntimeError):
    """Raised when the Vision API reports an error for an annotated image."""


def get_vision_client() -> vision.ImageAnnotatorClient:
    """
    Returns a singleton Vision `ImageAnnotatorClient`.

    Credentials are resolved through Google application-default credentials
    (`GOOGLE_APPLICATION_CREDENTIALS`, gcloud login or the metadata server).
    Sync endpoints run in a threadpool, so creation is guarded by a lock.
    """
    global _client

    if _client is None:
        with _client_lock:
            if _client is None:
                _client = vision.ImageAnnotatorClient()

    return _client


def check_response(response: vision.AnnotateImageResponse) -> vision.AnnotateImageResponse:
    """Raises `VisionServiceError` if the response carries an error status."""
    if response.error.message:
        raise VisionServiceError(
            f"{response.error.message}\nFor more info on error messages, check: "
            "https://cloud.google.com/apis/design/errors"
        )
    return response
