import logging

from fastapi import APIRouter, HTTPException, Query

from backend import config
from backend.models import SceneResponse
from backend.provider import VisualizationProvider
from scenebuilder.constants import DEFAULT_COORDINATE_SCALE, DEFAULT_ELEVATION_FACTOR
from scenebuilder.errors import InvalidBounds
from scenebuilder.framing import frame_payload
from scenebuilder.geometry import build_from_features
from scenebuilder.models import BoundsRegion

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["scene"])

provider = VisualizationProvider()


@router.get("/scene", response_model=SceneResponse)
def get_scene(
    lat: float = Query(config.DEFAULT_LATITUDE, ge=-90, le=90),
    lng: float = Query(config.DEFAULT_LONGITUDE, ge=-180, le=180),
    radius: float = Query(config.DEFAULT_RADIUS_M, gt=0),
    scale: float = Query(DEFAULT_COORDINATE_SCALE, gt=0),
    elevation_factor: float = Query(DEFAULT_ELEVATION_FACTOR, gt=0),
):
    """Extrude the buildings around a point and frame a camera on them.

    Footprints that cannot be extruded are listed under ``rejected``
    instead of failing the request.
    """
    payload = provider.get_visualization_data(lat, lng, radius)

    rejected: list = []
    solids = build_from_features(payload.get('buildings'), scale, rejected=rejected)

    try:
        bounds = (BoundsRegion.from_dict(payload['bounds'])
                  if payload.get('bounds') else None)
        camera = frame_payload(bounds, solids, elevation_factor)
    except InvalidBounds as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    return {
        "solids": [s.to_dict() for s in solids],
        "camera": camera.to_dict() if camera else None,
        "rejected": [
            {"index": i, "error": type(e).__name__, "reason": str(e)}
            for i, e in rejected
        ],
    }
