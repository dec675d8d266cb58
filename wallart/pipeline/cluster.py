"""Angular clustering of wall hits and reduction into wall candidates."""

from __future__ import annotations

import logging
import math

import numpy as np

from wallart.core.config import DetectorConfig
from wallart.core.types import Vec3, WallCandidate, WallHit
from wallart.pipeline.geometry import compute_bounds, normalize

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi

# azimuths spaced exactly one tolerance apart must not merge through rounding
ANGLE_EPSILON = 1e-9


def angular_distance(a: float, b: float) -> float:
    """Circular distance between two azimuths, in ``[0, π]``."""
    diff = abs(a - b) % TWO_PI
    return min(diff, TWO_PI - diff)


def canonical_hit_order(hits: list[WallHit]) -> list[WallHit]:
    """Sort hits by azimuth, then height, so grouping is order-independent."""
    return sorted(hits, key=lambda h: (h.angle % TWO_PI, h.height))


def group_hits_by_angle(
    hits: list[WallHit],
    tolerance: float = math.pi / 8,
) -> list[list[WallHit]]:
    """Greedy grouping of hits by ray azimuth.

    Each hit joins the *first* group whose anchor angle is strictly closer
    than *tolerance*; otherwise it anchors a new group.  The result depends
    on input order.
    """
    anchors: list[float] = []
    groups: list[list[WallHit]] = []
    for hit in hits:
        for anchor, group in zip(anchors, groups):
            if angular_distance(hit.angle, anchor) < tolerance - ANGLE_EPSILON:
                group.append(hit)
                break
        else:
            anchors.append(hit.angle)
            groups.append([hit])
    return groups


def reduce_group(group: list[WallHit], config: DetectorConfig) -> WallCandidate | None:
    """Merge one hit group into a wall candidate, or *None* if implausible."""
    anchor = group[0].angle
    if len(group) < config.min_cluster_size:
        if config.debug:
            logger.info("Skipping group at %.1f°: only %d hit(s)", math.degrees(anchor), len(group))
        return None

    points = np.array([h.point.as_array() for h in group])
    normals = np.array([h.normal.as_array() for h in group])

    normal = normalize(normals.mean(axis=0))
    if normal is None or abs(normal[1]) >= config.vertical_threshold:
        if config.debug:
            logger.info("Skipping group at %.1f°: averaged normal too vertical", math.degrees(anchor))
        return None

    bounds = compute_bounds(points)
    size = bounds.size
    width = float(max(size[0], size[2]))
    height = float(size[1])
    if height < config.min_height or height > config.max_height:
        if config.debug:
            logger.info("Skipping group at %.1f°: invalid height (%.2f)", math.degrees(anchor), height)
        return None

    return WallCandidate(
        position=Vec3.from_array(points.mean(axis=0)),
        normal=Vec3.from_array(normal),
        width=width,
        height=height,
        area=width * height,
        sample_count=len(group),
        angle=anchor,
        distance=float(np.mean([h.distance for h in group])),
        bounds=bounds,
    )


def cluster_walls(hits: list[WallHit], config: DetectorConfig | None = None) -> list[WallCandidate]:
    """Group *hits* by azimuth and keep the groups that look like walls."""
    config = config or DetectorConfig()
    groups = group_hits_by_angle(hits, config.angle_tolerance)
    walls = [w for w in (reduce_group(g, config) for g in groups) if w is not None]
    logger.info("Clustered %d hits into %d group(s), %d wall candidate(s)", len(hits), len(groups), len(walls))
    return walls
