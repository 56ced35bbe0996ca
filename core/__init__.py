"""
Core package for the Cloud Vision annotator.

Contains:
- `config` : Environment-driven service settings (`get_settings`)
"""
