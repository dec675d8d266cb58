"""Hang artworks on ranked walls, one per wall, with minimum spacing."""

from __future__ import annotations

import logging
import math

import numpy as np

from wallart.core.config import PlacementConfig
from wallart.core.types import Placement, Vec3, WallCandidate
from wallart.pipeline.geometry import horizontal_distances

logger = logging.getLogger(__name__)


def compute_placement(wall: WallCandidate, index: int, config: PlacementConfig) -> Placement:
    """Pose for an artwork on *wall*.

    The artwork sits ``safe_distance`` off the wall centroid along the wall
    normal, at ``height_from_floor``, and faces along the normal.
    """
    normal = wall.normal.as_array()
    position = wall.position.as_array() + normal * config.safe_distance
    position[1] = config.height_from_floor
    return Placement(
        position=Vec3.from_array(position),
        rotation_y=math.atan2(normal[0], normal[2]),
        wall_normal=(wall.normal.x, wall.normal.y, wall.normal.z),
        wall_index=index,
    )


def place_artworks(
    ranked_walls: list[WallCandidate],
    artwork_count: int,
    config: PlacementConfig | None = None,
) -> list[Placement]:
    """Compute at most *artwork_count* placements over *ranked_walls*.

    Walls are visited in order; a candidate placement closer than
    ``spacing`` (in x/z) to an accepted one is skipped.  Running out of
    walls or artworks simply truncates the result.
    """
    config = config or PlacementConfig()
    placements: list[Placement] = []
    accepted = np.empty((0, 3))

    for index, wall in enumerate(ranked_walls):
        if len(placements) >= artwork_count:
            break
        placement = compute_placement(wall, index, config)
        position = placement.position.as_array()
        if np.any(horizontal_distances(position, accepted) < config.spacing):
            if config.debug:
                logger.info("Skipping wall %d: too close to an existing artwork (< %.2f)", index, config.spacing)
            continue
        placements.append(placement)
        accepted = np.vstack([accepted, position])

    if config.debug:
        for i, p in enumerate(placements):
            logger.info(
                "  Artwork #%d: wall %d, position (%.2f, %.2f, %.2f), yaw %.1f°",
                i + 1, p.wall_index, p.position.x, p.position.y, p.position.z,
                math.degrees(p.rotation_y),
            )
    logger.info("Placed %d artwork(s) on %d wall(s)", len(placements), len(ranked_walls))
    return placements
