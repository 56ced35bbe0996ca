"""
Helpers for the Cloud Vision annotator.

Contains:
- `image_source`  : Resolves `imageUrl` / `gcsPath` references to Vision images
- `draw_results`  : Draws localized object polygons on an image
"""
