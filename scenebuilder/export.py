"""Layer → mesh conversion and STL / OBJ / glTF serialisation.

Usage:
    from scenebuilder.export import export_layer
    blob = export_layer(layer, 'stl', coordinate_scale=10.0)
"""

import logging

import trimesh

from .constants import (EXPORT_FORMATS, TERRAIN_COLOR, TERRAIN_THICKNESS,
                        TREE_CANOPY_COLOR, TREE_TRUNK_COLOR)
from .errors import NotFound
from .geometry import build_solids
from .layers import BuildingsLayer, TerrainLayer, VegetationLayer
from .models import Z_UP_TO_Y_UP

logger = logging.getLogger(__name__)

TRUNK_RADIUS = 0.8
TRUNK_HEIGHT = 4.0
CANOPY_RADIUS = 3.0


def _paint(mesh: trimesh.Trimesh, color) -> trimesh.Trimesh:
    material = trimesh.visual.material.PBRMaterial(
        baseColorFactor=color,
        doubleSided=True,
    )
    mesh.visual = trimesh.visual.TextureVisuals(material=material)
    return mesh


def _tree_meshes(x: float, z: float) -> list[trimesh.Trimesh]:
    """Low-poly tree: hexagonal trunk + icosphere canopy, base at Y=0."""
    trunk = trimesh.creation.cylinder(radius=TRUNK_RADIUS, height=TRUNK_HEIGHT,
                                      sections=6)
    trunk.apply_transform(Z_UP_TO_Y_UP)
    trunk.apply_translation([x, TRUNK_HEIGHT / 2, z])

    canopy = trimesh.creation.icosphere(subdivisions=1, radius=CANOPY_RADIUS)
    canopy.apply_translation([x, TRUNK_HEIGHT + CANOPY_RADIUS * 0.8, z])
    return [_paint(trunk, TREE_TRUNK_COLOR), _paint(canopy, TREE_CANOPY_COLOR)]


def _terrain_mesh(layer: TerrainLayer) -> trimesh.Trimesh:
    """Flat ground slab over the layer bounds with its top face at Y=0."""
    if layer.bounds is None:
        raise ValueError("Terrain layer has no bounds")
    b = layer.bounds.validate()
    width = max(b.width, 1.0)
    depth = max(b.depth, 1.0)
    slab = trimesh.creation.box(extents=[width, TERRAIN_THICKNESS, depth])
    slab.apply_translation([(b.min_x + b.max_x) / 2,
                            -TERRAIN_THICKNESS / 2,
                            (b.min_z + b.max_z) / 2])
    return _paint(slab, TERRAIN_COLOR)


def layer_meshes(layer, coordinate_scale: float) -> list[tuple[str, trimesh.Trimesh]]:
    """Return ``(name, mesh)`` pairs in world space for *layer*."""
    if isinstance(layer, BuildingsLayer):
        solids = build_solids(layer.records, coordinate_scale)
        return [(f"building_{s.index}", s.to_mesh()) for s in solids]
    if isinstance(layer, TerrainLayer):
        return [("terrain", _terrain_mesh(layer))]
    if isinstance(layer, VegetationLayer):
        meshes = []
        for i, (x, z) in enumerate(layer.positions):
            trunk, canopy = _tree_meshes(x, z)
            meshes.append((f"tree_trunk_{i}", trunk))
            meshes.append((f"tree_canopy_{i}", canopy))
        return meshes
    raise NotFound(f"Unsupported layer: {type(layer).__name__}")


def export_meshes(meshes, file_type: str) -> bytes:
    """Serialise ``(name, mesh)`` pairs.

    ``gltf`` is written as binary glTF with per-mesh PBR materials; STL
    and OBJ carry geometry only and are merged into a single body.
    """
    if file_type not in EXPORT_FORMATS:
        raise NotFound(f"Unsupported export format: {file_type}")
    if not meshes:
        raise ValueError("No valid geometry to export")

    if file_type == 'gltf':
        scene = trimesh.Scene()
        for name, mesh in meshes:
            scene.add_geometry(mesh, geom_name=name)
        data = scene.export(file_type='glb')
    else:
        combined = trimesh.util.concatenate([
            trimesh.Trimesh(vertices=m.vertices, faces=m.faces, process=False)
            for _, m in meshes
        ])
        data = combined.export(file_type=file_type)

    if isinstance(data, str):
        data = data.encode('utf-8')
    logger.info(f"Exported {len(meshes)} meshes as {file_type} ({len(data)} bytes)")
    return data


def export_layer(layer, file_type: str, coordinate_scale: float) -> bytes:
    if file_type not in EXPORT_FORMATS:
        raise NotFound(f"Unsupported export format: {file_type}")
    return export_meshes(layer_meshes(layer, coordinate_scale), file_type)


def media_type(file_type: str) -> str:
    try:
        return EXPORT_FORMATS[file_type]
    except KeyError:
        raise NotFound(f"Unsupported export format: {file_type}")


def download_filename(layer_type: str, file_type: str) -> str:
    extension = 'glb' if file_type == 'gltf' else file_type
    return f"{layer_type}_model.{extension}"
