"""Configuration constants and environment overrides."""

import os
import logging

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


# ── Buildings ────────────────────────────────────────────────────────────
DEFAULT_COLOR = "#888888"           # neutral gray for records without a color
DEFAULT_BUILDING_HEIGHT = 10.0      # metres, used when a record has no height

# Footprint units → scene units.  Applied uniformly to x and y.
DEFAULT_COORDINATE_SCALE = _env_float("SCENEBUILDER_COORDINATE_SCALE", 10.0)

# ── Camera framing ───────────────────────────────────────────────────────
DEFAULT_ELEVATION_FACTOR = _env_float("SCENEBUILDER_ELEVATION_FACTOR", 1.5)

# Span substituted for a zero-extent bounds region so the camera never
# collapses onto its target.
MIN_FRAMING_SPAN = 10.0

# ── Export ───────────────────────────────────────────────────────────────
LAYER_TYPES = ("buildings", "terrain", "vegetation")
EXPORT_FORMATS = {
    'stl': "model/stl",
    'obj': "model/obj",
    'gltf': "model/gltf-binary",
}

TERRAIN_THICKNESS = 1.0             # ground slab depth below Y=0
TERRAIN_COLOR = [0.36, 0.55, 0.27, 1.0]
TREE_TRUNK_COLOR = [0.40, 0.26, 0.13, 1.0]
TREE_CANOPY_COLOR = [0.18, 0.45, 0.16, 1.0]

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)
