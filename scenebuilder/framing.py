"""Camera placement that frames a bounds region."""

import math
import logging

from .constants import DEFAULT_ELEVATION_FACTOR, MIN_FRAMING_SPAN
from .models import BoundsRegion, CameraFrame

logger = logging.getLogger(__name__)


def frame(bounds: BoundsRegion,
          elevation_factor: float = DEFAULT_ELEVATION_FACTOR) -> CameraFrame:
    """Place the camera diagonally above and outside *bounds*.

    The camera sits at ``(cx + d, d, cz + d)`` looking at the region
    centre on the ground plane, where ``d`` is the larger of the two
    horizontal spans times *elevation_factor*.  A zero-extent region uses
    ``MIN_FRAMING_SPAN`` instead of a zero span.

    Raises ``InvalidBounds`` for inverted or non-finite bounds.
    """
    bounds.validate()
    if not (math.isfinite(elevation_factor) and elevation_factor > 0):
        raise ValueError(f"elevation_factor must be positive, got {elevation_factor!r}")

    cx = (bounds.min_x + bounds.max_x) / 2
    cz = (bounds.min_z + bounds.max_z) / 2

    span = max(bounds.width, bounds.depth)
    if span == 0:
        logger.info(f"Zero-extent bounds at ({cx}, {cz}), "
                    f"using minimum span {MIN_FRAMING_SPAN}")
        span = MIN_FRAMING_SPAN

    distance = span * elevation_factor
    return CameraFrame(
        position=(cx + distance, distance, cz + distance),
        look_at=(cx, 0.0, cz),
        distance=distance,
        span=span,
    )


def frame_payload(bounds: BoundsRegion | None, solids,
                  elevation_factor: float = DEFAULT_ELEVATION_FACTOR) -> CameraFrame | None:
    """Frame *bounds* if given, otherwise the extent of *solids*.

    Returns None when there is nothing to frame.
    """
    if bounds is None:
        bounds = BoundsRegion.from_solids(solids)
        if bounds is None:
            return None
    return frame(bounds, elevation_factor)
