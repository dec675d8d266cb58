"""Shared test fixtures – synthetic rooms and hand-built wall hits."""

from __future__ import annotations

import math

import numpy as np
import pytest
import trimesh

from wallart.core.types import BBox, Vec3, WallCandidate, WallHit


class BoxRoomSurfaces:
    """Analytic stand-in for a surface set: four axis-aligned walls.

    Walls sit at x = ±half_x and z = ±half_z, span y in [floor, ceiling]
    and have normals pointing into the room.  There is no floor or
    ceiling geometry, so rays above the walls escape.
    """

    def __init__(self, half_x: float = 6.0, half_z: float = 6.0, floor: float = 0.0, ceiling: float = 3.0):
        self.half = {0: half_x, 2: half_z}
        self.floor = floor
        self.ceiling = ceiling
        self.walls = [
            (0, half_x, np.array([-1.0, 0.0, 0.0])),
            (2, half_z, np.array([0.0, 0.0, -1.0])),
            (0, -half_x, np.array([1.0, 0.0, 0.0])),
            (2, -half_z, np.array([0.0, 0.0, 1.0])),
        ]

    def __len__(self) -> int:
        return len(self.walls)

    def bounds(self) -> BBox:
        return BBox(
            min=Vec3(x=-self.half[0], y=self.floor, z=-self.half[2]),
            max=Vec3(x=self.half[0], y=self.ceiling, z=self.half[2]),
        )

    def raycast(self, origins: np.ndarray, directions: np.ndarray, max_distance: float):
        ray_idx, points, normals, distances = [], [], [], []
        eps = 1e-9
        for i, (origin, direction) in enumerate(zip(origins, directions)):
            best = None
            for axis, coord, normal in self.walls:
                if abs(direction[axis]) < 1e-12:
                    continue
                t = (coord - origin[axis]) / direction[axis]
                if t <= 0 or t > max_distance:
                    continue
                p = origin + t * direction
                other = 2 - axis
                if abs(p[other]) > self.half[other] + eps:
                    continue
                if not (self.floor - eps <= p[1] <= self.ceiling + eps):
                    continue
                if best is None or t < best[0]:
                    best = (t, p, normal)
            if best is not None:
                ray_idx.append(i)
                points.append(best[1])
                normals.append(best[2])
                distances.append(best[0])
        return (
            np.array(ray_idx, dtype=np.int64),
            np.array(points).reshape(-1, 3),
            np.array(normals).reshape(-1, 3),
            np.array(distances),
        )


class EmptySurfaces:
    def __len__(self) -> int:
        return 0

    def bounds(self):
        return None

    def raycast(self, origins, directions, max_distance):
        raise AssertionError("raycast must not be called on an empty surface set")


@pytest.fixture()
def box_room() -> BoxRoomSurfaces:
    """A 12 m × 12 m room with 3 m high walls, centred on the origin."""
    return BoxRoomSurfaces()


@pytest.fixture()
def room_mesh() -> trimesh.Trimesh:
    """A closed 12 × 5 × 10 box with faces turned inward, like a room shell.

    The sides differ so that no ray of the default grid lands on a corner.
    """
    room = trimesh.creation.box(extents=(12.0, 5.0, 10.0))
    room.invert()
    return room


def make_hit(angle: float, height: float, distance: float = 5.0, normal=None) -> WallHit:
    """A wall hit produced by a ray at *angle* from the origin."""
    direction = np.array([math.cos(angle), 0.0, math.sin(angle)])
    point = direction * distance
    point[1] = height
    if normal is None:
        normal = -direction
    return WallHit(
        point=Vec3.from_array(point),
        normal=Vec3.from_array(normal),
        distance=distance,
        angle=angle,
        height=height,
    )


def make_wall(
    position=(5.0, 1.5, 0.0),
    normal=(-1.0, 0.0, 0.0),
    sample_count: int = 5,
    distance: float = 5.0,
    angle: float = 0.0,
    width: float = 4.0,
    height: float = 3.0,
) -> WallCandidate:
    """A hand-built wall candidate whose bounds straddle *position*."""
    p = np.asarray(position, dtype=float)
    n = np.asarray(normal, dtype=float)
    tangent = np.array([-n[2], 0.0, n[0]])
    half = np.abs(tangent) * width / 2 + np.array([0.0, height / 2, 0.0])
    return WallCandidate(
        position=Vec3.from_array(p),
        normal=Vec3.from_array(n),
        width=width,
        height=height,
        area=width * height,
        sample_count=sample_count,
        angle=angle,
        distance=distance,
        bounds=BBox(min=Vec3.from_array(p - half), max=Vec3.from_array(p + half)),
    )
