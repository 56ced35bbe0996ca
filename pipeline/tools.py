from __future__ import annotations

import logging
from typing import Any, Dict, List

from google.cloud import vision
from langchain_core.tools import tool

from models.vision_client import check_response, get_vision_client
from utils.image_source import build_image

log = logging.getLogger(__name__)


@tool
def detect_labels(image_url: str) -> Dict[str, Any]:
    """
    Detects labels in an image using Cloud Vision label detection.

    Args:
        image_url: http(s) URL, `gs://` URI or (if enabled) local path.

    Returns:
        Dict with key:
            - labels : list of {"description", "score"} in API order
    """
    client = get_vision_client()
    response = check_response(client.label_detection(image=build_image(image_url)))

    return {
        "labels": [
            {"description": label.description, "score": float(label.score)}
            for label in response.label_annotations
        ]
    }


@tool
def detect_text(image_url: str) -> Dict[str, Any]:
    """
    Extracts text from an image using Cloud Vision text detection.

    Args:
        image_url: http(s) URL, `gs://` URI or (if enabled) local path.

    Returns:
        Dict with key:
            - text : full detected text, empty when the image has none
    """
    client = get_vision_client()
    response = check_response(client.text_detection(image=build_image(image_url)))

    return {"text": response.full_text_annotation.text}


@tool
def localize_objects(image_url: str) -> Dict[str, Any]:
    """
    Detects localized objects with a batch OBJECT_LOCALIZATION request.

    Uses a dedicated client that is closed once the batch completes, whether
    or not the call succeeds.

    Args:
        image_url: `gs://` URI (or any other supported image reference).

    Returns:
        Dict with key:
            - objects : list of {"name", "score", "vertices": [{"x", "y"}]}
                        with vertices normalized to [0, 1]
    """
    request = vision.AnnotateImageRequest(
        image=build_image(image_url),
        features=[vision.Feature(type_=vision.Feature.Type.OBJECT_LOCALIZATION)],
    )

    with vision.ImageAnnotatorClient() as client:
        batch = client.batch_annotate_images(requests=[request])

    objects: List[Dict[str, Any]] = []
    for res in batch.responses:
        check_response(res)
        for entity in res.localized_object_annotations:
            vertices = [
                {"x": float(v.x), "y": float(v.y)}
                for v in entity.bounding_poly.normalized_vertices
            ]
            log.info(
                "[OBJECTS] name=%s confidence=%.4f vertices=%s",
                entity.name,
                entity.score,
                [(v["x"], v["y"]) for v in vertices],
            )
            objects.append(
                {"name": entity.name, "score": float(entity.score), "vertices": vertices}
            )

    return {"objects": objects}
