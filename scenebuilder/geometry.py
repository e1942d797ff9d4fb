"""Footprint validation, uniform scaling, and extrusion into solids."""

import math
import logging

import numpy as np
import trimesh
from shapely.geometry import Polygon
from shapely.validation import explain_validity

from .constants import DEFAULT_BUILDING_HEIGHT, DEFAULT_COLOR
from .errors import GeometryError, InvalidGeometry, InvalidHeight
from .models import FootprintRecord, Solid, Z_UP_TO_Y_UP, parse_color

logger = logging.getLogger(__name__)


# ── Validation helpers ───────────────────────────────────────────────────

def _signed_area(coords: np.ndarray) -> float:
    """Shoelace area of a closed ring; positive for counter-clockwise."""
    x, y = coords[:, 0], coords[:, 1]
    return 0.5 * float(np.sum(x[:-1] * y[1:] - x[1:] * y[:-1]))


def _scaled_polygon(ring, coordinate_scale: float) -> Polygon:
    """Scale *ring* uniformly and return it as a validated Polygon."""
    coords = np.asarray(ring, dtype=np.float64)
    if coords.ndim != 2 or coords.shape[1] != 2:
        raise InvalidGeometry(f"Ring must be a sequence of (x, y) pairs, "
                              f"got shape {coords.shape}")
    if not np.isfinite(coords).all():
        raise InvalidGeometry("Ring contains non-finite coordinates")

    coords = coords * coordinate_scale
    # Close an open ring rather than rejecting it
    if len(coords) and not np.array_equal(coords[0], coords[-1]):
        coords = np.vstack([coords, coords[:1]])

    if len(coords) < 4:
        raise InvalidGeometry(f"Ring needs at least 4 points, got {len(coords)}")

    distinct = np.unique(coords[:-1], axis=0)
    if len(distinct) < 3:
        raise InvalidGeometry(f"Ring has only {len(distinct)} distinct vertices")

    if abs(_signed_area(coords)) < 1e-12:
        raise InvalidGeometry("Ring has zero area")

    polygon = Polygon(coords)
    if not polygon.is_valid:
        raise InvalidGeometry(f"Ring is not simple: {explain_validity(polygon)}")
    return polygon


def _resolve_height(height) -> float:
    if height is None:
        return DEFAULT_BUILDING_HEIGHT
    try:
        value = float(height)
    except (TypeError, ValueError) as e:
        raise InvalidHeight(f"Non-numeric height {height!r}") from e
    if not math.isfinite(value) or value <= 0:
        raise InvalidHeight(f"Height must be positive, got {height!r}")
    return value


def _resolve_color(color) -> str:
    if color is None:
        return DEFAULT_COLOR
    resolved = parse_color(color)
    if resolved is None:
        logger.warning(f"Unrecognised color {color!r}, using {DEFAULT_COLOR}")
        return DEFAULT_COLOR
    return resolved


def _check_scale(coordinate_scale) -> float:
    try:
        scale = float(coordinate_scale)
    except (TypeError, ValueError):
        scale = math.nan
    if not math.isfinite(scale) or scale <= 0:
        raise ValueError(f"coordinate_scale must be positive, got {coordinate_scale!r}")
    return scale


# ── Public API ───────────────────────────────────────────────────────────

def extrude_solid(record: FootprintRecord, coordinate_scale: float,
                  index: int = 0) -> Solid:
    """Turn one footprint into a Solid.

    Raises ``InvalidGeometry`` / ``InvalidHeight`` for bad records.
    """
    try:
        polygon = _scaled_polygon(record.ring, coordinate_scale)
        height = _resolve_height(record.height)
    except GeometryError as e:
        e.index = index
        raise

    return Solid(
        base_shape=polygon,
        extrude_depth=height,
        material=_resolve_color(record.color),
        transform=Z_UP_TO_Y_UP.copy(),
        index=index,
    )


def build_solids(records, coordinate_scale: float,
                 rejected: list | None = None) -> list[Solid]:
    """Convert footprint records into solids, one per valid record.

    Records that fail validation are logged and skipped; the rest keep
    their relative input order.  When *rejected* is a list, each failure
    is appended to it as ``(index, error)``.

    Parameters
    ----------
    records : iterable of FootprintRecord
    coordinate_scale : float
        Footprint units → scene units, applied to both axes of every
        record in the batch.
    rejected : list, optional
        Collector for per-record failures.
    """
    scale = _check_scale(coordinate_scale)

    solids: list[Solid] = []
    total = 0
    for i, record in enumerate(records):
        total += 1
        try:
            solids.append(extrude_solid(record, scale, index=i))
        except GeometryError as e:
            logger.warning(f"Skipping footprint {i}: {e}")
            if rejected is not None:
                rejected.append((i, e))

    logger.info(f"Built {len(solids)} solids from {total} footprints")
    return solids


def build_from_features(features, coordinate_scale: float,
                        rejected: list | None = None) -> list[Solid]:
    """Like ``build_solids`` but starting from wire-format features.

    Solid and rejection indices refer to positions in *features*, so a
    feature that fails to parse counts the same as one that fails to
    extrude.
    """
    scale = _check_scale(coordinate_scale)

    solids: list[Solid] = []
    for i, feature in enumerate(features or []):
        try:
            record = FootprintRecord.from_feature(feature)
            solids.append(extrude_solid(record, scale, index=i))
        except GeometryError as e:
            e.index = i
            logger.warning(f"Skipping feature {i}: {e}")
            if rejected is not None:
                rejected.append((i, e))
    return solids


def solids_to_scene(solids) -> trimesh.Scene:
    """Assemble a trimesh Scene with one named mesh per solid."""
    scene = trimesh.Scene()
    for solid in solids:
        scene.add_geometry(solid.to_mesh(), geom_name=f"building_{solid.index}")
    return scene
