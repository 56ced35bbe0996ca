from __future__ import annotations

from typing import Any, Dict, Iterable


class DuplicateLabelError(ValueError):
    """Raised when two label annotations share the same description."""

    def __init__(self, description: str):
        super().__init__(f"Duplicate label: {description}")
        self.description = description


def _field(annotation: Any, name: str) -> Any:
    if isinstance(annotation, dict):
        return annotation[name]
    return getattr(annotation, name)


def build_label_results(annotations: Iterable[Any]) -> Dict[str, float]:
    """
    Collects label annotations into a description -> score mapping.

    Keeps the order in which annotations arrive. Scores are passed through
    untouched: no normalization, filtering or sorting.

    Args:
        annotations: Mappings with `description`/`score` keys, or objects
            exposing those attributes (e.g. Vision `EntityAnnotation`).

    Raises:
        DuplicateLabelError: if a description occurs more than once.
    """
    results: Dict[str, float] = {}
    for annotation in annotations:
        description = _field(annotation, "description")
        if description in results:
            raise DuplicateLabelError(description)
        results[description] = _field(annotation, "score")
    return results
