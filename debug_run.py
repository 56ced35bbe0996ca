from __future__ import annotations

import argparse
import logging

import cv2

from pipeline.graph import initial_state, pipeline
from utils.draw_results import decode_image, draw_objects
from utils.image_source import fetch_image_bytes

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    """
    Run one image through the pipeline and print each node's state delta.

    With `--feature objects` and `--out`, the localized objects are also
    drawn onto a copy of the image (http(s) or local images only).
    `--graph` prints the routing graph (ASCII and Mermaid) and exits.
    """
    parser = argparse.ArgumentParser(description="Debug pass through the Vision pipeline.")
    parser.add_argument("image_url", nargs="?", help="http(s) URL, gs:// URI or local path")
    parser.add_argument("--feature", choices=["labels", "text", "objects"], default="labels")
    parser.add_argument("--out", help="Where to write the annotated image")
    parser.add_argument("--graph", action="store_true", help="Print the pipeline graph and exit")
    args = parser.parse_args()

    if args.graph:
        graph = pipeline.get_graph()
        print(graph.draw_ascii())
        print(graph.draw_mermaid())
        return
    if not args.image_url:
        parser.error("image_url is required unless --graph is given")

    objects = []
    # Stream: see each node's state delta live
    for step in pipeline.stream(initial_state(args.image_url, args.feature)):
        node = list(step.keys())[0]
        print("\n" + "=" * 40)
        print(f"NODE: {node}")
        print(f"DELTA: {step[node]}")
        objects = step[node].get("objects") or objects

    if args.out and objects:
        image = decode_image(fetch_image_bytes(args.image_url))
        cv2.imwrite(args.out, draw_objects(image, objects))
        print(f"Saved → {args.out}")


if __name__ == "__main__":
    main()
