from typing import Dict, List, Literal, Optional, TypedDict

Feature = Literal["labels", "text", "objects"]


class VisionState(TypedDict, total=False):
    """
    Request-scoped state passed between LangGraph nodes.
    """

    image_url: str  # http(s) URL, gs:// URI or local path
    feature: Feature

    # Output of label detection
    labels: Optional[List]  # [{"description", "score"}, ...] in API order

    # Ordered label mapping built from `labels`
    annotations: Optional[Dict[str, float]]

    # Output of text detection
    text: Optional[str]

    # Output of object localization
    objects: Optional[List]  # [{"name", "score", "vertices"}, ...]

    # Upstream failure reported by a tool node
    error: Optional[str]
