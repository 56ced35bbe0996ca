from __future__ import annotations

import cv2
import numpy as np
import pytest

from utils.draw_results import decode_image, draw_objects, to_pixels


def test_to_pixels_scales_vertices():
    polygon = to_pixels([{"x": 0.0, "y": 0.0}, {"x": 0.5, "y": 1.0}], width=200, height=100)
    assert polygon.tolist() == [[0, 0], [100, 100]]


def test_draw_objects_returns_annotated_copy():
    image = np.zeros((100, 200, 3), dtype=np.uint8)
    objects = [
        {
            "name": "Box",
            "score": 0.8,
            "vertices": [
                {"x": 0.25, "y": 0.25},
                {"x": 0.75, "y": 0.25},
                {"x": 0.75, "y": 0.75},
                {"x": 0.25, "y": 0.75},
            ],
        },
        {"name": "Empty", "score": 0.1, "vertices": []},
    ]

    out = draw_objects(image, objects)

    assert out.shape == image.shape
    assert out.any()
    assert not image.any()


def test_decode_image_round_trip():
    ok, buf = cv2.imencode(".png", np.full((8, 12, 3), 255, dtype=np.uint8))
    assert ok
    assert decode_image(buf.tobytes()).shape == (8, 12, 3)


def test_decode_image_rejects_garbage():
    with pytest.raises(ValueError):
        decode_image(b"not an image")
