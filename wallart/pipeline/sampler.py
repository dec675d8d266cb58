"""Omnidirectional horizontal ray sampling from an interior point."""

from __future__ import annotations

import logging

import numpy as np

from wallart.core.config import DetectorConfig
from wallart.core.types import Ray, Vec3, WallHit
from wallart.pipeline.geometry import normalize

logger = logging.getLogger(__name__)


def sampling_heights(center_y: float, config: DetectorConfig) -> np.ndarray:
    """Heights of the ray rings, starting below the centre and stepping up."""
    return center_y + config.height_start_offset + config.height_step * np.arange(config.height_samples)


def sampling_angles(config: DetectorConfig) -> np.ndarray:
    return np.arange(config.ray_directions) / config.ray_directions * 2.0 * np.pi


def generate_rays(center: Vec3, config: DetectorConfig) -> list[tuple[Ray, float, float]]:
    """Build the (height, azimuth) ray grid, height-major.

    Returns ``(ray, angle, height)`` triples.
    """
    rays = []
    for height in sampling_heights(center.y, config):
        for angle in sampling_angles(config):
            rays.append((
                Ray(
                    origin=Vec3(x=center.x, y=float(height), z=center.z),
                    direction=Vec3(x=float(np.cos(angle)), y=0.0, z=float(np.sin(angle))),
                ),
                float(angle),
                float(height),
            ))
    return rays


def sample_walls(center: Vec3, surfaces, config: DetectorConfig | None = None) -> list[WallHit]:
    """Cast the ray grid against *surfaces* and keep the wall-like hits.

    *surfaces* is any object with ``len()`` and a batched
    ``raycast(origins, directions, max_distance)`` returning
    ``(ray_index, points, normals, distances)``, e.g. a
    :class:`~wallart.pipeline.surfaces.SurfaceSet`.

    Hits are dropped when they are within ``min_hit_distance`` of the
    origin, when the surface normal is degenerate, or when its vertical
    component reaches ``vertical_threshold``.
    """
    config = config or DetectorConfig()
    if len(surfaces) == 0:
        return []

    grid = generate_rays(center, config)
    origins = np.array([ray.origin.as_array() for ray, _, _ in grid])
    directions = np.array([ray.direction.as_array() for ray, _, _ in grid])

    ray_idx, points, normals, distances = surfaces.raycast(
        origins, directions, config.raycast_distance
    )

    hits: list[WallHit] = []
    rejected_near = rejected_vertical = 0
    for i, point, normal, distance in zip(ray_idx, points, normals, distances):
        if distance <= config.min_hit_distance:
            rejected_near += 1
            continue
        unit = normalize(np.asarray(normal, dtype=np.float64))
        if unit is None or abs(unit[1]) >= config.vertical_threshold:
            rejected_vertical += 1
            continue
        _, angle, height = grid[int(i)]
        hits.append(
            WallHit(
                point=Vec3.from_array(point),
                normal=Vec3.from_array(unit),
                distance=float(distance),
                angle=angle,
                height=height,
            )
        )

    # raycast results arrive grouped per ray; restore the grid order
    hits.sort(key=lambda h: (h.height, h.angle))

    if config.debug:
        logger.info(
            "Raycast: %d rays, %d hits, %d too close, %d not vertical → %d wall hits",
            len(grid), len(ray_idx), rejected_near, rejected_vertical, len(hits),
        )
    return hits
