from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from google.api_core import exceptions as google_exceptions

from models.vision_client import VisionServiceError
from pipeline.tools import detect_labels, detect_text, localize_objects


def vision_response(**fields):
    response = MagicMock()
    response.error.message = ""
    for name, value in fields.items():
        setattr(response, name, value)
    return response


def scoped_client(mock_cls):
    client = mock_cls.return_value
    client.__enter__.return_value = client
    client.__exit__.return_value = False
    return client


@patch("pipeline.tools.build_image")
@patch("pipeline.tools.get_vision_client")
def test_detect_labels(mock_get_client, mock_build_image):
    mock_get_client.return_value.label_detection.return_value = vision_response(
        label_annotations=[
            SimpleNamespace(description="dog", score=0.95),
            SimpleNamespace(description="animal", score=0.88),
        ]
    )
    result = detect_labels.invoke({"image_url": "https://example.com/dog.jpg"})

    assert result["labels"] == [
        {"description": "dog", "score": 0.95},
        {"description": "animal", "score": 0.88},
    ]
    mock_build_image.assert_called_once_with("https://example.com/dog.jpg")


@patch("pipeline.tools.build_image")
@patch("pipeline.tools.get_vision_client")
def test_detect_labels_api_error(mock_get_client, mock_build_image):
    response = vision_response(label_annotations=[])
    response.error.message = "Bad image data."
    mock_get_client.return_value.label_detection.return_value = response

    with pytest.raises(VisionServiceError, match="Bad image data"):
        detect_labels.invoke({"image_url": "https://example.com/broken.jpg"})


@patch("pipeline.tools.build_image")
@patch("pipeline.tools.get_vision_client")
def test_detect_text(mock_get_client, mock_build_image):
    mock_get_client.return_value.text_detection.return_value = vision_response(
        full_text_annotation=SimpleNamespace(text="OPEN 24H\n"),
    )
    result = detect_text.invoke({"image_url": "gs://bucket/sign.jpg"})
    assert result == {"text": "OPEN 24H\n"}


@patch("pipeline.tools.vision.ImageAnnotatorClient")
def test_localize_objects(mock_cls):
    client = scoped_client(mock_cls)
    entity = SimpleNamespace(
        name="Bicycle",
        score=0.91,
        bounding_poly=SimpleNamespace(
            normalized_vertices=[
                SimpleNamespace(x=0.1, y=0.2),
                SimpleNamespace(x=0.6, y=0.2),
                SimpleNamespace(x=0.6, y=0.9),
                SimpleNamespace(x=0.1, y=0.9),
            ]
        ),
    )
    client.batch_annotate_images.return_value = SimpleNamespace(
        responses=[vision_response(localized_object_annotations=[entity])]
    )

    result = localize_objects.invoke({"image_url": "gs://bucket/bike.jpg"})

    assert result["objects"] == [
        {
            "name": "Bicycle",
            "score": 0.91,
            "vertices": [
                {"x": 0.1, "y": 0.2},
                {"x": 0.6, "y": 0.2},
                {"x": 0.6, "y": 0.9},
                {"x": 0.1, "y": 0.9},
            ],
        }
    ]
    request = client.batch_annotate_images.call_args.kwargs["requests"][0]
    assert request.image.source.gcs_image_uri == "gs://bucket/bike.jpg"
    client.__exit__.assert_called_once()


@patch("pipeline.tools.vision.ImageAnnotatorClient")
def test_localize_objects_closes_client_on_failure(mock_cls):
    client = scoped_client(mock_cls)
    client.batch_annotate_images.side_effect = google_exceptions.ServiceUnavailable("down")

    with pytest.raises(google_exceptions.ServiceUnavailable):
        localize_objects.invoke({"image_url": "gs://bucket/bike.jpg"})

    client.__exit__.assert_called_once()


@patch("pipeline.tools.vision.ImageAnnotatorClient")
def test_localize_objects_per_image_error(mock_cls):
    client = scoped_client(mock_cls)
    response = vision_response(localized_object_annotations=[])
    response.error.message = "The caller does not have permission"
    client.batch_annotate_images.return_value = SimpleNamespace(responses=[response])

    with pytest.raises(VisionServiceError, match="does not have permission"):
        localize_objects.invoke({"image_url": "gs://bucket/bike.jpg"})

    client.__exit__.assert_called_once()
