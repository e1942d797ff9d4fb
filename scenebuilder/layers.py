"""Typed layers for the buildings / terrain / vegetation payload sections."""

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Optional

from .errors import NotFound
from .models import BoundsRegion, records_from_features

logger = logging.getLogger(__name__)


@dataclass
class BuildingsLayer:
    kind: ClassVar[str] = "buildings"
    records: list = field(default_factory=list)
    rejected: list = field(default_factory=list)

    @classmethod
    def from_payload(cls, data, bounds: Optional[BoundsRegion] = None) -> "BuildingsLayer":
        rejected: list = []
        records = records_from_features(data or [], rejected=rejected)
        return cls(records=records, rejected=rejected)


@dataclass
class TextureConfig:
    diffuse: Optional[str] = None
    normal: Optional[str] = None
    elevation_scale: float = 1.0
    repeat_x: float = 1.0
    repeat_y: float = 1.0


@dataclass
class TerrainLayer:
    kind: ClassVar[str] = "terrain"
    heightmap_url: Optional[str] = None
    texture: TextureConfig = field(default_factory=TextureConfig)
    bounds: Optional[BoundsRegion] = None

    @classmethod
    def from_payload(cls, data, bounds: Optional[BoundsRegion] = None) -> "TerrainLayer":
        data = data or {}
        tex = data.get('textureConfig') or {}
        return cls(
            heightmap_url=data.get('heightmapUrl'),
            texture=TextureConfig(
                diffuse=tex.get('diffuse'),
                normal=tex.get('normal'),
                elevation_scale=float(tex.get('elevationScale', 1.0)),
                repeat_x=float(tex.get('repeatX', 1.0)),
                repeat_y=float(tex.get('repeatY', 1.0)),
            ),
            bounds=bounds,
        )


@dataclass
class VegetationLayer:
    kind: ClassVar[str] = "vegetation"
    positions: list = field(default_factory=list)   # [(x, z), ...] scene units

    @classmethod
    def from_payload(cls, data, bounds: Optional[BoundsRegion] = None) -> "VegetationLayer":
        positions = []
        for p in (data or {}).get('positions', []):
            try:
                positions.append((float(p['x']), float(p['z'])))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping vegetation position {p!r}: {e}")
        return cls(positions=positions)


LAYER_CLASSES = {cls.kind: cls for cls in (BuildingsLayer, TerrainLayer, VegetationLayer)}


def parse_layer(kind: str, data, bounds: Optional[BoundsRegion] = None):
    """Build the layer variant for *kind* from its payload section."""
    try:
        layer_cls = LAYER_CLASSES[kind]
    except KeyError:
        raise NotFound(f"Unknown layer type: {kind}")
    return layer_cls.from_payload(data, bounds=bounds)


def layers_from_payload(payload: dict) -> dict:
    """Parse every known layer present in a visualization payload."""
    bounds = None
    if payload.get('bounds') is not None:
        bounds = BoundsRegion.from_dict(payload['bounds'])
    return {
        kind: parse_layer(kind, payload.get(kind), bounds=bounds)
        for kind in LAYER_CLASSES
        if kind in payload
    }
