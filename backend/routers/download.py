import logging

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from backend import config
from backend.provider import VisualizationProvider, check_download
from scenebuilder.constants import DEFAULT_COORDINATE_SCALE
from scenebuilder.errors import InvalidBounds, NotFound
from scenebuilder.export import download_filename, export_layer, media_type
from scenebuilder.layers import parse_layer
from scenebuilder.models import BoundsRegion

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/download", tags=["download"])

provider = VisualizationProvider()


def _download(layer_type: str, file_type: str, lat: float, lng: float,
              radius: float, scale: float) -> Response:
    try:
        check_download(layer_type, file_type)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    payload = provider.get_visualization_data(lat, lng, radius)
    try:
        bounds = (BoundsRegion.from_dict(payload['bounds'])
                  if payload.get('bounds') else None)
        layer = parse_layer(layer_type, payload.get(layer_type), bounds=bounds)
        blob = export_layer(layer, file_type, scale)
    except (InvalidBounds, ValueError) as exc:
        logger.warning(f"Export of {layer_type}/{file_type} failed: {exc}")
        raise HTTPException(status_code=422, detail=str(exc))

    filename = download_filename(layer_type, file_type)
    return Response(
        content=blob,
        media_type=media_type(file_type),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{layer_type}")
def download_model_default(
    layer_type: str,
    lat: float = Query(config.DEFAULT_LATITUDE, ge=-90, le=90),
    lng: float = Query(config.DEFAULT_LONGITUDE, ge=-180, le=180),
    radius: float = Query(config.DEFAULT_RADIUS_M, gt=0),
    scale: float = Query(DEFAULT_COORDINATE_SCALE, gt=0),
):
    """Download a model of *layer_type* as STL."""
    return _download(layer_type, "stl", lat, lng, radius, scale)


@router.get("/{layer_type}/{file_type}")
def download_model(
    layer_type: str,
    file_type: str,
    lat: float = Query(config.DEFAULT_LATITUDE, ge=-90, le=90),
    lng: float = Query(config.DEFAULT_LONGITUDE, ge=-180, le=180),
    radius: float = Query(config.DEFAULT_RADIUS_M, gt=0),
    scale: float = Query(DEFAULT_COORDINATE_SCALE, gt=0),
):
    """Download a model of *layer_type* in ``stl``, ``obj`` or ``gltf``."""
    return _download(layer_type, file_type, lat, lng, radius, scale)
