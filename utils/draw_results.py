from __future__ import annotations

from typing import Any, Dict, List

import cv2
import numpy as np


def decode_image(content: bytes) -> np.ndarray:
    """Decode encoded image bytes (JPEG, PNG, ...) into a BGR array."""
    image = cv2.imdecode(np.frombuffer(content, np.uint8), cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError("Could not decode image content")
    return image


def to_pixels(vertices: List[Dict[str, float]], width: int, height: int) -> np.ndarray:
    """Scale normalized {"x", "y"} vertices to an int32 pixel polygon."""
    return np.array(
        [(int(round(v["x"] * width)), int(round(v["y"] * height))) for v in vertices],
        dtype=np.int32,
    )


def draw_objects(
    image_bgr: np.ndarray,
    objects: List[Dict[str, Any]],
) -> np.ndarray:
    """
    Draw localized object polygons and labels on an image.

    Args:
        image_bgr: Input image in BGR format (as used by OpenCV).
        objects: List of dicts with keys:
            - name: str
            - score: float
            - vertices: list of {"x", "y"} normalized to [0, 1]

    Returns:
        A copy of the image with visualizations applied.
    """
    out = image_bgr.copy()
    h, w = out.shape[:2]

    for obj in objects:
        vertices = obj.get("vertices") or []
        if not vertices:
            continue

        polygon = to_pixels(vertices, w, h)
        cv2.polylines(out, [polygon.reshape(-1, 1, 2)], True, (0, 0, 255), 2)

        x1, y1 = int(polygon[:, 0].min()), int(polygon[:, 1].min())
        text = f"{obj.get('name', 'obj')} {obj.get('score', 0.0):.2f}"
        cv2.putText(
            out,
            text,
            (x1, max(y1 - 5, 0)),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.5,
            (0, 0, 0),
            2,
            cv2.LINE_AA,
        )
        cv2.putText(
            out,
            text,
            (x1, max(y1 - 5, 0)),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.5,
            (255, 255, 255),
            1,
            cv2.LINE_AA,
        )

    return out
