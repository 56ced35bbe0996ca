from typing import Dict, List

from pydantic import BaseModel


class LabelsResponse(BaseModel):
    image_url: str
    annotations: Dict[str, float]  # description -> score, in detection order
    total: int


class NormalizedVertex(BaseModel):
    x: float
    y: float


class LocalizedObject(BaseModel):
    name: str
    score: float
    vertices: List[NormalizedVertex]


class ObjectsResponse(BaseModel):
    gcs_path: str
    objects: List[LocalizedObject]
    total: int
