"""
FastAPI API package for the Cloud Vision annotator.

Exposes:
- `main` : FastAPI application with label, text and object endpoints.
"""
