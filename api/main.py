from __future__ import annotations

import html
import logging
from typing import Dict

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from api.schemas import LabelsResponse, LocalizedObject, ObjectsResponse
from core.config import get_settings
from pipeline.graph import initial_state, pipeline
from pipeline.labels import DuplicateLabelError
from pipeline.state import VisionState
from utils.image_source import InvalidImageReference, validate_image_ref

settings = get_settings()

logging.basicConfig(level=settings.log_level)
log = logging.getLogger(__name__)

app = FastAPI(
    title="Cloud Vision Annotator",
    version="1.0.0",
    description="Labels, text and localized objects from Google Cloud Vision.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DuplicateLabelError)
async def duplicate_label_handler(request: Request, exc: DuplicateLabelError):
    log.error("Rejected label response for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def run_pipeline(image_url: str, feature: str) -> VisionState:
    """
    Invoke the graph for one image and feature.

    Bad references are rejected before any call is made; failures reported
    by the image source or Vision API become 502 responses.
    """
    try:
        image_url = validate_image_ref(image_url)
    except InvalidImageReference as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = pipeline.invoke(initial_state(image_url, feature))

    if result.get("error"):
        raise HTTPException(status_code=502, detail=result["error"])

    return result


def render_labels(image_url: str, annotations: Dict[str, float]) -> str:
    rows = "\n".join(
        f"        <tr><td>{html.escape(description)}</td><td>{score * 100:.2f}%</td></tr>"
        for description, score in annotations.items()
    )
    url = html.escape(image_url, quote=True)
    return f"""
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>Image labels</title>
    <style>
      body {{ font-family: ui-sans-serif, system-ui, Segoe UI, Roboto, Arial; margin: 24px; }}
      img {{ max-width: 480px; display:block; margin-bottom: 16px; }}
      table {{ border-collapse: collapse; }}
      td, th {{ border: 1px solid #ccc; padding: 6px 10px; text-align: left; }}
    </style>
  </head>
  <body>
    <h1>Image labels</h1>
    <img src="{url}" alt="Analyzed image" />
    <table>
      <thead><tr><th>Label</th><th>Certainty</th></tr></thead>
      <tbody>
{rows}
      </tbody>
    </table>
    <p><a href="/ui">Analyze another image</a></p>
  </body>
</html>
    """


@app.get("/extractLabels", response_class=HTMLResponse)
def extract_labels(image_url: str = Query(..., alias="imageUrl")):
    """
    Label an image and render the labels with their certainty.
    """
    result = run_pipeline(image_url, "labels")
    return render_labels(result["image_url"], result.get("annotations") or {})


@app.get("/labels", response_model=LabelsResponse)
def labels(image_url: str = Query(..., alias="imageUrl")):
    """
    Label an image and return the ordered description -> score mapping.
    """
    result = run_pipeline(image_url, "labels")
    annotations = result.get("annotations") or {}
    return LabelsResponse(image_url=result["image_url"], annotations=annotations, total=len(annotations))


@app.get("/extractText", response_class=PlainTextResponse)
def extract_text(image_url: str = Query(..., alias="imageUrl")):
    """
    Extract the text found in an image.
    """
    result = run_pipeline(image_url, "text")
    return "Text from image: " + (result.get("text") or "")


@app.get("/localizeObjects", response_model=ObjectsResponse)
def localize(gcs_path: str = Query(..., alias="gcsPath")):
    """
    Localize objects in an image, normally one stored on Cloud Storage.
    """
    result = run_pipeline(gcs_path, "objects")
    objects = [LocalizedObject(**o) for o in (result.get("objects") or [])]
    return ObjectsResponse(gcs_path=result["image_url"], objects=objects, total=len(objects))


@app.get("/graph/ascii")
def graph_ascii():
    """
    Return an ASCII representation of the pipeline graph.
    """
    return {"graph": pipeline.get_graph().draw_ascii()}


@app.get("/graph/mermaid")
def graph_mermaid():
    """
    Return Mermaid source for visualizing the pipeline graph.
    """
    return {"mermaid": pipeline.get_graph().draw_mermaid()}


@app.get("/ui", response_class=HTMLResponse)
def ui():
    """
    Minimal web UI: submit an image URL for labelling or text extraction.
    """
    return """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Cloud Vision Annotator</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, Segoe UI, Roboto, Arial; margin: 24px; }
      form { margin-bottom: 20px; }
      input[type="text"] { width: 480px; padding: 6px; }
      .muted { color:#666; font-size:12px; }
    </style>
  </head>
  <body>
    <h1>Cloud Vision Annotator</h1>
    <form action="/extractLabels" method="get">
      <label>Image URL for label detection</label><br />
      <input type="text" name="imageUrl" placeholder="https://... or gs://bucket/image.jpg" />
      <button type="submit">Extract labels</button>
    </form>
    <form action="/extractText" method="get">
      <label>Image URL for text extraction</label><br />
      <input type="text" name="imageUrl" placeholder="https://... or gs://bucket/image.jpg" />
      <button type="submit">Extract text</button>
    </form>
    <div class="muted"><a href="/docs" target="_blank">Swagger</a></div>
  </body>
</html>
    """


@app.get("/health")
def health():
    """
    Basic health check.
    """
    return {"status": "ok"}
