import logging

from fastapi import APIRouter, HTTPException, Query

from backend import config
from backend.models import VisualizationResponse
from backend.provider import VisualizationProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["data"])

provider = VisualizationProvider()


@router.get("/data", response_model=VisualizationResponse)
def get_visualization_data(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius: float = Query(config.DEFAULT_RADIUS_M, gt=0),
):
    """Buildings, terrain and vegetation within *radius* metres of a point."""
    try:
        return provider.get_visualization_data(lat, lng, radius)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
