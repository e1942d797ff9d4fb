"""Tests for footprint validation and extrusion."""

import math

import numpy as np
import pytest

from scenebuilder.constants import DEFAULT_BUILDING_HEIGHT, DEFAULT_COLOR
from scenebuilder.errors import InvalidGeometry, InvalidHeight
from scenebuilder.geometry import (build_from_features, build_solids,
                                   extrude_solid, solids_to_scene)
from scenebuilder.models import FootprintRecord, parse_color

from conftest import DEGENERATE, SQUARE, SQUARE_CW


# ============================================================
# Valid footprints
# ============================================================


class TestExtrusion:
    def test_one_solid_per_valid_record(self, square):
        solids = build_solids([square], coordinate_scale=10.0)
        assert len(solids) == 1
        solid = solids[0]
        assert solid.extrude_depth == 20.0
        assert len(solid.base_shape.exterior.coords) == len(SQUARE)

    def test_point_count_preserved_for_larger_ring(self):
        ring = ((0, 0), (4, 0), (6, 2), (4, 4), (0, 4), (-1, 2), (0, 0))
        solid = extrude_solid(FootprintRecord(ring=ring, height=3.0), 1.0)
        assert len(solid.base_shape.exterior.coords) == len(ring)

    def test_scale_applied_uniformly(self, square):
        solid = extrude_solid(square, 10.0)
        assert solid.base_shape.bounds == (0.0, 0.0, 100.0, 100.0)

    def test_mesh_is_watertight_and_upright(self, square):
        mesh = extrude_solid(square, 10.0).to_mesh()
        assert mesh.is_watertight
        lo, hi = mesh.bounds
        assert lo[1] == pytest.approx(0.0, abs=1e-9)
        assert hi[1] == pytest.approx(20.0, abs=1e-9)
        # footprint (x, y) lands on world (x, -y)
        assert lo[0] == pytest.approx(0.0, abs=1e-9)
        assert hi[0] == pytest.approx(100.0, abs=1e-9)
        assert lo[2] == pytest.approx(-100.0, abs=1e-9)
        assert hi[2] == pytest.approx(0.0, abs=1e-9)

    def test_clockwise_ring_still_extrudes_up(self):
        mesh = extrude_solid(FootprintRecord(ring=SQUARE_CW, height=20.0), 10.0).to_mesh()
        lo, hi = mesh.bounds
        assert lo[1] == pytest.approx(0.0, abs=1e-9)
        assert hi[1] == pytest.approx(20.0, abs=1e-9)
        assert mesh.volume == pytest.approx(100 * 100 * 20)

    def test_open_ring_is_closed(self):
        solid = extrude_solid(FootprintRecord(ring=SQUARE[:-1], height=5.0), 1.0)
        coords = list(solid.base_shape.exterior.coords)
        assert coords[0] == coords[-1]
        assert solid.base_shape.area == pytest.approx(100.0)

    def test_world_bounds(self, square):
        b = extrude_solid(square, 10.0).world_bounds
        assert b.min_x == pytest.approx(0.0, abs=1e-9)
        assert b.max_x == pytest.approx(100.0, abs=1e-9)
        assert b.min_z == pytest.approx(-100.0, abs=1e-9)
        assert b.max_z == pytest.approx(0.0, abs=1e-9)

    def test_scene_has_one_mesh_per_solid(self, square):
        solids = build_solids([square, square], 1.0)
        scene = solids_to_scene(solids)
        assert sorted(scene.geometry) == ["building_0", "building_1"]


# ============================================================
# Defaults and materials
# ============================================================


class TestDefaults:
    def test_missing_height_is_deterministic(self):
        record = FootprintRecord(ring=SQUARE)
        first = extrude_solid(record, 1.0)
        second = extrude_solid(record, 1.0)
        assert first.extrude_depth == DEFAULT_BUILDING_HEIGHT
        assert second.extrude_depth == first.extrude_depth

    def test_missing_color_is_gray(self, square):
        assert extrude_solid(square, 1.0).material == DEFAULT_COLOR == "#888888"

    def test_integer_color(self):
        solid = extrude_solid(FootprintRecord(ring=SQUARE, color=0xFF0000), 1.0)
        assert solid.material == "#ff0000"
        assert solid.rgba == [1.0, 0.0, 0.0, 1.0]

    def test_unparseable_color_falls_back(self):
        solid = extrude_solid(FootprintRecord(ring=SQUARE, color="brick"), 1.0)
        assert solid.material == DEFAULT_COLOR

    @pytest.mark.parametrize("value,expected", [
        ("#AbCdEf", "#abcdef"),
        ("abcdef", "#abcdef"),
        ("#abc", "#aabbcc"),
        ("0x00ff00", "#00ff00"),
        (0x123456, "#123456"),
        ("#12345", None),
        (-1, None),
        (True, None),
    ])
    def test_parse_color(self, value, expected):
        assert parse_color(value) == expected


# ============================================================
# Rejections
# ============================================================


class TestRejections:
    def test_degenerate_ring(self, degenerate):
        with pytest.raises(InvalidGeometry):
            extrude_solid(degenerate, 1.0)

    def test_collinear_ring(self):
        ring = ((0, 0), (1, 0), (2, 0), (0, 0))
        with pytest.raises(InvalidGeometry):
            extrude_solid(FootprintRecord(ring=ring, height=1.0), 1.0)

    def test_self_intersecting_ring(self):
        ring = ((0, 0), (10, 0), (0, 5), (10, 10), (0, 10), (0, 0))
        with pytest.raises(InvalidGeometry):
            extrude_solid(FootprintRecord(ring=ring, height=1.0), 1.0)

    def test_too_few_points(self):
        with pytest.raises(InvalidGeometry):
            extrude_solid(FootprintRecord(ring=((0, 0), (1, 1)), height=1.0), 1.0)

    def test_non_finite_coordinates(self):
        ring = ((0, 0), (math.nan, 0), (1, 1), (0, 0))
        with pytest.raises(InvalidGeometry):
            extrude_solid(FootprintRecord(ring=ring, height=1.0), 1.0)

    @pytest.mark.parametrize("height", [0, -5.0, math.nan, math.inf])
    def test_non_positive_height(self, height):
        with pytest.raises(InvalidHeight):
            extrude_solid(FootprintRecord(ring=SQUARE, height=height), 1.0)

    @pytest.mark.parametrize("scale", [0, -1.0, math.nan, "ten"])
    def test_bad_scale_fails_the_call(self, square, scale):
        with pytest.raises(ValueError):
            build_solids([square], scale)


# ============================================================
# Batches
# ============================================================


class TestBatch:
    def test_bad_record_does_not_block_batch(self, square, degenerate):
        rejected = []
        solids = build_solids([square, degenerate], 10.0, rejected=rejected)
        assert len(solids) == 1
        assert solids[0].extrude_depth == 20.0
        assert [i for i, _ in rejected] == [1]
        assert isinstance(rejected[0][1], InvalidGeometry)

    def test_order_preserved_among_survivors(self, degenerate):
        records = [
            FootprintRecord(ring=SQUARE, height=1.0),
            degenerate,
            FootprintRecord(ring=SQUARE, height=2.0),
            FootprintRecord(ring=SQUARE, height=-1.0),
            FootprintRecord(ring=SQUARE, height=3.0),
        ]
        solids = build_solids(records, 1.0)
        assert [s.extrude_depth for s in solids] == [1.0, 2.0, 3.0]
        assert [s.index for s in solids] == [0, 2, 4]

    def test_idempotent(self, square, degenerate):
        first = build_solids([square, degenerate], 10.0)
        second = build_solids([square, degenerate], 10.0)
        assert len(first) == len(second) == 1
        a, b = first[0], second[0]
        assert a.base_shape.equals_exact(b.base_shape, 0.0)
        assert a.extrude_depth == b.extrude_depth
        assert a.material == b.material
        np.testing.assert_allclose(a.to_mesh().vertices, b.to_mesh().vertices)

    def test_input_not_mutated(self, square):
        before = square.ring
        build_solids([square], 10.0)
        assert square.ring == before == SQUARE

    def test_from_features_uses_payload_indices(self, payload):
        payload["buildings"].insert(0, {"footprint": {}})
        rejected = []
        solids = build_from_features(payload["buildings"], 10.0, rejected=rejected)
        assert [s.index for s in solids] == [1]
        assert [i for i, _ in rejected] == [0, 2]

    def test_feature_with_string_height(self):
        feature = {"footprint": {"coordinates": [[list(p) for p in SQUARE]]},
                   "height": "12.5"}
        assert FootprintRecord.from_feature(feature).height == 12.5

    def test_feature_with_bad_height(self):
        feature = {"footprint": {"coordinates": [[list(p) for p in SQUARE]]},
                   "height": "tall"}
        with pytest.raises(InvalidHeight):
            FootprintRecord.from_feature(feature)
