"""Data classes for footprints, solids, bounds and camera frames."""

import math
import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import trimesh
from shapely.geometry import Polygon
from shapely.geometry.polygon import orient

from .constants import DEFAULT_COLOR
from .errors import InvalidBounds, InvalidGeometry, InvalidHeight

logger = logging.getLogger(__name__)

# Local solids are extruded along +Z; rotating -90° about X puts the
# extrusion on world +Y (glTF / WebGL up) and a footprint point (x, y)
# at world (x, 0, -y).
Z_UP_TO_Y_UP = trimesh.transformations.rotation_matrix(-math.pi / 2, [1, 0, 0])


def parse_color(value) -> Optional[str]:
    """Normalise ``#rrggbb`` / ``rrggbb`` / ``0xRRGGBB`` to ``#rrggbb``.

    Returns None when *value* is not a recognisable color.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        if 0 <= value <= 0xFFFFFF:
            return f"#{value:06x}"
        return None
    text = str(value).strip().lower()
    if text.startswith('#'):
        text = text[1:]
    elif text.startswith('0x'):
        text = text[2:]
    if len(text) == 3:
        text = ''.join(c * 2 for c in text)
    if len(text) != 6:
        return None
    try:
        int(text, 16)
    except ValueError:
        return None
    return f"#{text}"


def hex_to_rgba(color: str) -> list[float]:
    """``#rrggbb`` → ``[r, g, b, 1.0]`` floats in 0..1."""
    text = color.lstrip('#')
    return [int(text[i:i + 2], 16) / 255.0 for i in (0, 2, 4)] + [1.0]


@dataclass(frozen=True)
class FootprintRecord:
    ring: tuple
    height: Optional[float] = None
    color: Optional[object] = None

    @classmethod
    def from_feature(cls, feature: dict) -> "FootprintRecord":
        """Parse the ``{footprint: {coordinates: [[[x, y], ...]]}, height, color}``
        wire shape.  Only the outer (first) ring is used.
        """
        if not isinstance(feature, dict):
            raise InvalidGeometry(f"Feature must be an object, got {type(feature).__name__}")
        try:
            rings = feature['footprint']['coordinates']
            outer = rings[0]
            ring = tuple((float(p[0]), float(p[1])) for p in outer)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise InvalidGeometry(f"Malformed footprint: {e}") from e

        height = feature.get('height')
        if height is not None:
            try:
                height = float(height)
            except (TypeError, ValueError) as e:
                raise InvalidHeight(f"Non-numeric height {height!r}") from e

        return cls(ring=ring, height=height, color=feature.get('color'))


def records_from_features(features, rejected: list | None = None) -> list:
    """Parse wire features, skipping (and optionally collecting) bad ones."""
    records = []
    for i, feature in enumerate(features or []):
        try:
            records.append(FootprintRecord.from_feature(feature))
        except (InvalidGeometry, InvalidHeight) as e:
            e.index = i
            logger.warning(f"Skipping feature {i}: {e}")
            if rejected is not None:
                rejected.append((i, e))
    return records


@dataclass(frozen=True, eq=False)
class Solid:
    """One extruded building, ready to be added to a scene."""
    base_shape: Polygon
    extrude_depth: float
    material: str = DEFAULT_COLOR
    transform: np.ndarray = field(default_factory=lambda: Z_UP_TO_Y_UP.copy())
    index: int = 0

    @property
    def rgba(self) -> list[float]:
        return hex_to_rgba(self.material)

    @property
    def world_bounds(self) -> "BoundsRegion":
        """X/Z extent of the solid after the Y-up transform."""
        corners = np.array([[x, y, 0.0, 1.0]
                            for x, y in self.base_shape.exterior.coords])
        world = corners @ self.transform.T
        return BoundsRegion(
            min_x=float(world[:, 0].min()), min_z=float(world[:, 2].min()),
            max_x=float(world[:, 0].max()), max_z=float(world[:, 2].max()),
        )

    def to_mesh(self) -> trimesh.Trimesh:
        """Extrude the base shape and place it in world space.

        The polygon is re-oriented counter-clockwise first so the caps
        face outward regardless of the source winding.
        """
        mesh = trimesh.creation.extrude_polygon(
            orient(self.base_shape, sign=1.0), height=self.extrude_depth)
        mesh.apply_transform(self.transform)
        material = trimesh.visual.material.PBRMaterial(
            baseColorFactor=self.rgba,
            roughnessFactor=0.7,
            metallicFactor=0.1,
        )
        mesh.visual = trimesh.visual.TextureVisuals(material=material)
        return mesh

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "polygon": [list(c) for c in self.base_shape.exterior.coords],
            "extrude_depth": self.extrude_depth,
            "color": self.material,
        }


@dataclass(frozen=True)
class BoundsRegion:
    min_x: float
    min_z: float
    max_x: float
    max_z: float

    @classmethod
    def from_dict(cls, data: dict) -> "BoundsRegion":
        """Accept either ``minX``-style or ``min_x``-style keys."""
        try:
            return cls(
                min_x=float(data.get('minX', data.get('min_x'))),
                min_z=float(data.get('minZ', data.get('min_z'))),
                max_x=float(data.get('maxX', data.get('max_x'))),
                max_z=float(data.get('maxZ', data.get('max_z'))),
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise InvalidBounds(f"Malformed bounds {data!r}: {e}") from e

    @classmethod
    def from_solids(cls, solids) -> Optional["BoundsRegion"]:
        """Union of the world X/Z extents of *solids*, or None if empty."""
        boxes = [s.world_bounds for s in solids]
        if not boxes:
            return None
        return cls(
            min_x=min(b.min_x for b in boxes), min_z=min(b.min_z for b in boxes),
            max_x=max(b.max_x for b in boxes), max_z=max(b.max_z for b in boxes),
        )

    def validate(self) -> "BoundsRegion":
        values = (self.min_x, self.min_z, self.max_x, self.max_z)
        if not all(math.isfinite(v) for v in values):
            raise InvalidBounds(f"Non-finite bounds: {values}")
        if self.min_x > self.max_x:
            raise InvalidBounds(f"minX {self.min_x} > maxX {self.max_x}")
        if self.min_z > self.max_z:
            raise InvalidBounds(f"minZ {self.min_z} > maxZ {self.max_z}")
        return self

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def depth(self) -> float:
        return self.max_z - self.min_z

    def to_dict(self) -> dict:
        return {"minX": self.min_x, "minZ": self.min_z,
                "maxX": self.max_x, "maxZ": self.max_z}


@dataclass(frozen=True)
class CameraFrame:
    position: tuple
    look_at: tuple
    distance: float = 0.0
    span: float = 0.0

    def to_dict(self) -> dict:
        return {
            "position": list(self.position),
            "look_at": list(self.look_at),
            "distance": self.distance,
            "span": self.span,
        }
