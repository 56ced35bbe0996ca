from __future__ import annotations

import logging
from typing import Any, Dict

from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions

from models.vision_client import VisionServiceError
from pipeline.labels import build_label_results
from pipeline.state import VisionState
from pipeline.tools import detect_labels, detect_text, localize_objects
from utils.image_source import ImageSourceError

log = logging.getLogger(__name__)

# Failures of the image source, Vision API or client credentials; reported through `error`
UPSTREAM_ERRORS = (
    ImageSourceError,
    VisionServiceError,
    google_exceptions.GoogleAPIError,
    auth_exceptions.GoogleAuthError,
)

MISSING_IMAGE = "An image reference is required."


def node_labels(state: VisionState) -> Dict[str, Any]:
    """Node wrapper around the label detection tool."""
    image_url = state.get("image_url")
    log.info("[LABELS] image_url='%s'", image_url)

    if not image_url:
        return {"error": MISSING_IMAGE, "labels": []}

    try:
        result = detect_labels.invoke({"image_url": image_url})
    except UPSTREAM_ERRORS as e:
        log.error("[LABELS] %s", e)
        return {"error": str(e), "labels": []}

    log.info("[LABELS] %d labels", len(result["labels"]))
    return {"labels": result["labels"], "error": None}


def node_build_annotations(state: VisionState) -> Dict[str, Any]:
    """
    Packs detected labels into the ordered description -> score mapping.

    A duplicate description is fatal for the request, so `DuplicateLabelError`
    is left to propagate out of the graph.
    """
    labels = state.get("labels") or []
    annotations = build_label_results(labels)

    log.info("[BUILD] %d annotations", len(annotations))
    return {"annotations": annotations}


def node_text(state: VisionState) -> Dict[str, Any]:
    """Node wrapper around the text extraction tool."""
    image_url = state.get("image_url")
    log.info("[TEXT] image_url='%s'", image_url)

    if not image_url:
        return {"error": MISSING_IMAGE, "text": None}

    try:
        result = detect_text.invoke({"image_url": image_url})
    except UPSTREAM_ERRORS as e:
        log.error("[TEXT] %s", e)
        return {"error": str(e), "text": None}

    log.info("[TEXT] %d characters", len(result["text"]))
    return {"text": result["text"], "error": None}


def node_objects(state: VisionState) -> Dict[str, Any]:
    """Node wrapper around batch object localization."""
    image_url = state.get("image_url")
    log.info("[OBJECTS] image_url='%s'", image_url)

    if not image_url:
        return {"error": MISSING_IMAGE, "objects": []}

    try:
        result = localize_objects.invoke({"image_url": image_url})
    except UPSTREAM_ERRORS as e:
        log.error("[OBJECTS] %s", e)
        return {"error": str(e), "objects": []}

    log.info("[OBJECTS] %d objects", len(result["objects"]))
    return {"objects": result["objects"], "error": None}
