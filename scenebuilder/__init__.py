"""SceneBuilder package: 3D scene generation from building footprints.

Import constants FIRST so environment overrides and logging are configured
before any other module reads them.
"""

from scenebuilder import constants as _constants  # noqa: F401

from scenebuilder.errors import (
    GeocodeError, InvalidBounds, InvalidGeometry, InvalidHeight, NotFound,
)
from scenebuilder.framing import frame
from scenebuilder.geometry import build_solids
from scenebuilder.models import BoundsRegion, CameraFrame, FootprintRecord, Solid
from scenebuilder.scene import SceneSession
