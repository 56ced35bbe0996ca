from langgraph.graph import END, START, StateGraph

from pipeline.nodes import (
    node_build_annotations,
    node_labels,
    node_objects,
    node_text,
)
from pipeline.state import VisionState


def route_feature(state):
    """Router: picks the analysis node for the requested feature."""
    feature = state.get("feature") or "labels"
    if feature not in ("labels", "text", "objects"):
        raise ValueError(f"Unknown feature: {feature}")
    return feature


def should_build_annotations(state):
    """Router: skip the builder when label detection failed."""
    if state.get("error"):
        return END
    return "build_annotations"


def build_graph():
    workflow = StateGraph(VisionState)

    workflow.add_node("labels", node_labels)
    workflow.add_node("build_annotations", node_build_annotations)
    workflow.add_node("text", node_text)
    workflow.add_node("objects", node_objects)

    workflow.add_conditional_edges(
        START,
        route_feature,
        {
            "labels": "labels",
            "text": "text",
            "objects": "objects",
        },
    )

    workflow.add_conditional_edges(
        "labels",
        should_build_annotations,
        {
            "build_annotations": "build_annotations",
            END: END,
        },
    )

    workflow.add_edge("build_annotations", END)
    workflow.add_edge("text", END)
    workflow.add_edge("objects", END)

    return workflow.compile()


pipeline = build_graph()


def initial_state(image_url: str, feature: str) -> VisionState:
    return {
        "image_url": image_url,
        "feature": feature,
        "labels": None,
        "annotations": None,
        "text": None,
        "objects": None,
        "error": None,
    }
