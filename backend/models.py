from pydantic import BaseModel, Field
from typing import List, Optional


class ProcessAddressRequest(BaseModel):
    address: str = Field(..., min_length=1, max_length=255)


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class ProcessAddressResponse(BaseModel):
    coordinates: Coordinates
    display_name: Optional[str] = None


class Bounds(BaseModel):
    minX: float
    minZ: float
    maxX: float
    maxZ: float


class VisualizationResponse(BaseModel):
    buildings: List[dict]
    terrain: dict
    vegetation: dict
    bounds: Optional[Bounds] = None
    extent: Optional[dict] = None


class SolidInfo(BaseModel):
    index: int
    polygon: List[List[float]]
    extrude_depth: float
    color: str


class CameraInfo(BaseModel):
    position: List[float]
    look_at: List[float]
    distance: float
    span: float


class RejectedFootprint(BaseModel):
    index: int
    error: str
    reason: str


class SceneResponse(BaseModel):
    solids: List[SolidInfo]
    camera: Optional[CameraInfo] = None
    rejected: List[RejectedFootprint] = []
