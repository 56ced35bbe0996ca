"""
Client access package for the Cloud Vision annotator.

This module exposes:
- `get_vision_client` : singleton Vision `ImageAnnotatorClient`
- `check_response`    : raises `VisionServiceError` on per-image API errors
"""
