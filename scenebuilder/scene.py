"""Scene lifecycle: dispose the previous solids before showing new ones."""

import logging

import trimesh

from .constants import DEFAULT_COORDINATE_SCALE, DEFAULT_ELEVATION_FACTOR
from .errors import InvalidBounds
from .export import export_meshes
from .framing import frame_payload
from .geometry import build_from_features, build_solids
from .models import BoundsRegion

logger = logging.getLogger(__name__)


class SceneSession:
    """Holds the meshes and camera frame of the currently displayed data.

    Every ``show`` call releases the geometry of the previous one before
    adding new meshes.  Use as a context manager to guarantee the final
    release::

        with SceneSession() as session:
            session.show(records, bounds)
            blob = session.export('gltf')
    """

    def __init__(self, coordinate_scale: float = DEFAULT_COORDINATE_SCALE,
                 elevation_factor: float = DEFAULT_ELEVATION_FACTOR):
        self.coordinate_scale = coordinate_scale
        self.elevation_factor = elevation_factor
        self.scene = trimesh.Scene()
        self.solids = []
        self.camera = None
        self.rejected = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False

    def dispose(self) -> None:
        """Remove every mesh and its graph node from the scene."""
        names = list(self.scene.geometry.keys())
        if names:
            self.scene.delete_geometry(names)
        self.solids = []
        logger.debug(f"Disposed {len(names)} meshes")

    def show(self, records, bounds=None) -> list:
        """Replace the displayed solids with those built from *records*.

        The camera is re-framed on *bounds* (or on the new solids when no
        bounds are given).  Invalid bounds keep the previous camera frame.
        """
        rejected: list = []
        solids = build_solids(records, self.coordinate_scale, rejected=rejected)
        return self._replace(solids, rejected, bounds)

    def show_payload(self, payload: dict) -> list:
        """Show the buildings of a visualization payload framed on its bounds.

        Rejection indices refer to positions in ``payload["buildings"]``.
        Malformed payload bounds keep the previous camera frame.
        """
        rejected: list = []
        solids = build_from_features(payload.get("buildings"),
                                     self.coordinate_scale, rejected=rejected)
        bounds = None
        if payload.get("bounds"):
            try:
                bounds = BoundsRegion.from_dict(payload["bounds"])
            except InvalidBounds as e:
                logger.warning(f"Ignoring payload bounds: {e}")
                return self._replace(solids, rejected, None, reframe=False)
        return self._replace(solids, rejected, bounds)

    def _replace(self, solids, rejected, bounds, reframe: bool = True) -> list:
        self.dispose()
        for solid in solids:
            self.scene.add_geometry(solid.to_mesh(), geom_name=f"building_{solid.index}")
        self.solids = solids
        self.rejected = rejected

        if reframe:
            try:
                camera = frame_payload(bounds, solids, self.elevation_factor)
            except InvalidBounds as e:
                logger.warning(f"Keeping previous camera frame: {e}")
            else:
                if camera is not None:
                    self.camera = camera

        logger.info(f"Scene shows {len(solids)} solids "
                    f"({len(rejected)} footprints rejected)")
        return solids

    def export(self, file_type: str) -> bytes:
        return export_meshes(list(self.scene.geometry.items()), file_type)
