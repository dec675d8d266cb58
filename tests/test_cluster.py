"""Tests for angular clustering of wall hits."""

from __future__ import annotations

import math

import pytest
from conftest import make_hit

from wallart.core.config import DetectorConfig
from wallart.core.types import Vec3
from wallart.pipeline.cluster import (
    angular_distance,
    canonical_hit_order,
    cluster_walls,
    group_hits_by_angle,
)
from wallart.pipeline.sampler import sample_walls


def _column(angle: float, heights=(0.0, 0.8, 1.6, 2.4), **kwargs):
    return [make_hit(angle, h, **kwargs) for h in heights]


class TestAngularDistance:
    def test_wraparound(self):
        assert angular_distance(0.1, 2 * math.pi - 0.1) == pytest.approx(0.2)

    def test_symmetric(self):
        assert angular_distance(1.0, 3.0) == pytest.approx(angular_distance(3.0, 1.0))

    def test_opposite(self):
        assert angular_distance(0.0, math.pi) == pytest.approx(math.pi)


class TestGrouping:
    def test_close_angles_share_group(self):
        groups = group_hits_by_angle([make_hit(0.0, 1.0), make_hit(0.2, 1.0)])
        assert len(groups) == 1

    def test_far_angles_split(self):
        groups = group_hits_by_angle([make_hit(0.0, 1.0), make_hit(1.0, 1.0)])
        assert len(groups) == 2

    def test_groups_across_wraparound(self):
        groups = group_hits_by_angle([make_hit(0.05, 1.0), make_hit(2 * math.pi - 0.05, 1.0)])
        assert len(groups) == 1

    def test_first_matching_group_wins(self):
        # 0.35 is within tolerance of both anchors (0.0 and 0.5); the first one takes it
        hits = [make_hit(0.0, 1.0), make_hit(0.5, 1.0), make_hit(0.35, 1.0)]
        groups = group_hits_by_angle(hits)
        assert len(groups) == 2
        assert [h.angle for h in groups[0]] == [0.0, 0.35]

    def test_tolerance_is_strict(self):
        groups = group_hits_by_angle([make_hit(0.0, 1.0), make_hit(math.pi / 8, 1.0)])
        assert len(groups) == 2

    def test_rounding_margin_below_tolerance(self):
        # neighbouring grid azimuths sit π/8 apart give or take one ulp
        just_below = group_hits_by_angle([make_hit(0.0, 1.0), make_hit(math.pi / 8 - 5e-10, 1.0)])
        assert len(just_below) == 2
        clearly_below = group_hits_by_angle([make_hit(0.0, 1.0), make_hit(math.pi / 8 - 1e-6, 1.0)])
        assert len(clearly_below) == 1

    def test_canonical_order(self):
        hits = [make_hit(1.0, 2.0), make_hit(0.5, 1.0), make_hit(1.0, 0.0)]
        ordered = canonical_hit_order(hits)
        assert [(h.angle, h.height) for h in ordered] == [(0.5, 1.0), (1.0, 0.0), (1.0, 2.0)]


class TestClusterWalls:
    def test_single_wall(self):
        walls = cluster_walls(_column(0.0) + _column(0.2))
        assert len(walls) == 1
        wall = walls[0]
        assert wall.sample_count == 8
        assert wall.angle == 0.0
        assert wall.height == pytest.approx(2.4)
        assert wall.normal.x < -0.9
        assert wall.area == pytest.approx(wall.width * wall.height)

    def test_rejects_small_groups(self):
        assert cluster_walls(_column(0.0, heights=(0.0, 1.0, 2.0))) == []

    def test_rejects_short_walls(self):
        assert cluster_walls(_column(0.0, heights=(1.0, 1.2, 1.4, 1.6))) == []

    def test_rejects_tall_walls(self):
        assert cluster_walls(_column(0.0, heights=(0.0, 6.0, 12.0, 18.0))) == []

    def test_rejects_vertical_average(self):
        hits = _column(0.0, normal=(-0.8, 0.6, 0.0)) + _column(0.1, normal=(0.8, 0.6, 0.0))
        # each hit passes a loose threshold, the averaged normal points straight up
        assert cluster_walls(hits, DetectorConfig(vertical_threshold=0.7)) == []

    def test_idempotent(self):
        hits = _column(0.0) + _column(1.6) + _column(3.2) + _column(0.3)
        first = cluster_walls(hits)
        second = cluster_walls(hits)
        assert first == second

    def test_box_room_invariants(self, box_room):
        config = DetectorConfig()
        hits = sample_walls(Vec3(x=0.0, y=1.5, z=0.0), box_room, config)
        walls = cluster_walls(canonical_hit_order(hits), config)
        # every ray direction forms its own group: π/8 spacing equals the tolerance
        assert len(walls) == 16
        for wall in walls:
            assert wall.sample_count >= config.min_cluster_size
            assert abs(wall.normal.y) < config.vertical_threshold
            assert config.min_height <= wall.height <= config.max_height
