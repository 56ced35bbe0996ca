from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests
from google.cloud import vision

from core.config import get_settings

log = logging.getLogger(__name__)

GCS_SCHEME = "gs://"


class ImageSourceError(Exception):
    """Raised when an image reference cannot be resolved to image data."""


class InvalidImageReference(ImageSourceError):
    """The reference itself is unusable: empty, unsupported or disallowed."""


def is_gcs_uri(image_ref: str) -> bool:
    return image_ref.startswith(GCS_SCHEME)


def _is_local(scheme: str) -> bool:
    # Single letters are Windows drive prefixes, not schemes
    return scheme in ("", "file") or len(scheme) == 1


def validate_image_ref(image_ref: str) -> str:
    """
    Checks that a reference can be resolved and returns it stripped.

    Raises:
        InvalidImageReference: for empty references, unsupported schemes,
            or local paths while local files are disabled.
    """
    image_ref = (image_ref or "").strip()
    if not image_ref:
        raise InvalidImageReference("An image reference is required")
    if is_gcs_uri(image_ref):
        return image_ref

    scheme = urlparse(image_ref).scheme.lower()
    if scheme in ("http", "https"):
        return image_ref
    if _is_local(scheme):
        if not get_settings().allow_local_files:
            raise InvalidImageReference("Local image files are disabled")
        return image_ref
    raise InvalidImageReference(f"Unsupported image reference scheme: {scheme}")


def _download(url: str) -> bytes:
    settings = get_settings()
    limit = settings.max_image_bytes

    try:
        with requests.get(url, stream=True, timeout=settings.http_timeout_seconds) as r:
            r.raise_for_status()
            content = bytearray()
            for chunk in r.iter_content(chunk_size=64 * 1024):
                if not chunk:
                    continue
                content.extend(chunk)
                if len(content) > limit:
                    raise ImageSourceError(f"Image at {url} exceeds {limit} bytes")
    except requests.RequestException as e:
        raise ImageSourceError(f"Failed to download {url}: {e}") from e

    log.info("[SOURCE] downloaded %d bytes from %s", len(content), url)
    return bytes(content)


def _read_local(image_ref: str) -> bytes:
    limit = get_settings().max_image_bytes
    path = Path(unquote(urlparse(image_ref).path)) if image_ref.startswith("file:") else Path(image_ref)

    try:
        if path.stat().st_size > limit:
            raise ImageSourceError(f"Image {path} exceeds {limit} bytes")
        return path.read_bytes()
    except OSError as e:
        raise ImageSourceError(f"Failed to read {path}: {e}") from e


def fetch_image_bytes(image_ref: str) -> bytes:
    """
    Loads the raw bytes behind an image reference.

    Supports http(s) URLs and, when enabled, `file:` URLs or plain paths.
    Cloud Storage URIs are not fetched locally.
    """
    image_ref = validate_image_ref(image_ref)
    if is_gcs_uri(image_ref):
        raise InvalidImageReference("Cloud Storage images cannot be fetched locally")

    if urlparse(image_ref).scheme.lower() in ("http", "https"):
        return _download(image_ref)
    return _read_local(image_ref)


def build_image(image_ref: str) -> vision.Image:
    """
    Resolves an image reference to a Vision `Image`.

    `gs://` URIs are passed by reference so Vision reads the object itself;
    everything else is loaded and sent as inline content.
    """
    image_ref = validate_image_ref(image_ref)
    if is_gcs_uri(image_ref):
        return vision.Image(source=vision.ImageSource(gcs_image_uri=image_ref))
    return vision.Image(content=fetch_image_bytes(image_ref))
