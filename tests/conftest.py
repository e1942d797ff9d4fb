"""Shared fixtures for the SceneBuilder test suite."""

import pytest

from scenebuilder.models import FootprintRecord

SQUARE = ((0, 0), (10, 0), (10, 10), (0, 10), (0, 0))
SQUARE_CW = ((0, 0), (0, 10), (10, 10), (10, 0), (0, 0))
DEGENERATE = ((5, 5), (5, 5), (5, 5), (5, 5))


@pytest.fixture
def square():
    return FootprintRecord(ring=SQUARE, height=20.0)


@pytest.fixture
def degenerate():
    return FootprintRecord(ring=DEGENERATE, height=20.0)


@pytest.fixture
def payload():
    """Visualization payload in the wire format served by /api/data."""
    return {
        "buildings": [
            {
                "footprint": {"coordinates": [[list(p) for p in SQUARE]]},
                "height": 20,
                "color": "#888888",
            },
            {
                "footprint": {"coordinates": [[list(p) for p in DEGENERATE]]},
                "height": 20,
            },
        ],
        "terrain": {
            "heightmapUrl": "/placeholder/heightmap.png",
            "textureConfig": {"elevationScale": 50, "repeatX": 10, "repeatY": 10},
        },
        "vegetation": {"positions": [{"x": 5, "z": 5}, {"x": -5, "z": -5}]},
        "bounds": {"minX": -100, "minZ": -100, "maxX": 100, "maxZ": 100},
    }
