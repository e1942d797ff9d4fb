import logging

from geopy.distance import distance

from backend import config
from scenebuilder.constants import EXPORT_FORMATS, LAYER_TYPES
from scenebuilder.errors import NotFound

logger = logging.getLogger(__name__)


def radius_extent(lat: float, lng: float, radius_m: float) -> dict:
    """Lat/lon box enclosing a circle of *radius_m* around (lat, lng)."""
    d = distance(meters=radius_m)
    north = d.destination((lat, lng), bearing=0)
    east = d.destination((lat, lng), bearing=90)
    south = d.destination((lat, lng), bearing=180)
    west = d.destination((lat, lng), bearing=270)
    return {
        "north": north.latitude,
        "south": south.latitude,
        "east": east.longitude,
        "west": west.longitude,
    }


class VisualizationProvider:
    """Spatial data within a radius of a point.

    Stubbed: every query returns the same scene (one building, placeholder
    terrain textures, two trees) in scene units, plus the real lat/lon
    extent of the requested radius.
    """

    def get_visualization_data(self, lat: float, lng: float,
                               radius: float = config.DEFAULT_RADIUS_M) -> dict:
        if radius <= 0:
            raise ValueError(f"Radius must be positive, got {radius}")
        logger.info(f"Visualization data for ({lat:.6f}, {lng:.6f}) r={radius}m")

        return {
            "buildings": [
                {
                    "footprint": {
                        "coordinates": [[[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]]
                    },
                    "height": 20,
                    "color": "#888888",
                }
            ],
            "terrain": {
                "heightmapUrl": "/placeholder/heightmap.png",
                "textureConfig": {
                    "diffuse": "/placeholder/terrain_diffuse.jpg",
                    "normal": "/placeholder/terrain_normal.jpg",
                    "elevationScale": 50,
                    "repeatX": 10,
                    "repeatY": 10,
                },
            },
            "vegetation": {
                "positions": [
                    {"x": 5, "z": 5},
                    {"x": -5, "z": -5},
                ]
            },
            "bounds": {"minX": -100, "minZ": -100, "maxX": 100, "maxZ": 100},
            "extent": radius_extent(lat, lng, radius),
        }


def check_download(layer_type: str, file_type: str) -> None:
    """Raise ``NotFound`` for unsupported layer type / format pairs."""
    if layer_type not in LAYER_TYPES:
        raise NotFound(f"Unknown model type: {layer_type}")
    if file_type not in EXPORT_FORMATS:
        raise NotFound(f"Unknown model format: {file_type}")
