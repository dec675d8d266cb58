"""Coplanar wall fusing — merge per-direction clusters lying on one wall."""

from __future__ import annotations

import logging

import numpy as np
from scipy.stats import circmean

from wallart.core.config import DetectorConfig
from wallart.core.types import Vec3, WallCandidate
from wallart.pipeline.geometry import bounds_gap, normalize, union_bounds

logger = logging.getLogger(__name__)


def should_fuse(
    a: WallCandidate,
    b: WallCandidate,
    normal_threshold: float,
    offset_threshold: float,
    spatial_gap: float,
) -> bool:
    """Return True if walls *a* and *b* face the same way on a common plane."""
    na = a.normal.as_array()
    nb = b.normal.as_array()
    if np.dot(na, nb) < normal_threshold:
        return False

    delta = b.position.as_array() - a.position.as_array()
    if max(abs(np.dot(na, delta)), abs(np.dot(nb, delta))) > offset_threshold:
        return False

    return bounds_gap(a.bounds, b.bounds) <= spatial_gap


def merge_walls(a: WallCandidate, b: WallCandidate) -> WallCandidate:
    """Merge two coplanar walls, weighting by sample count.

    The anchor angle is the circular mean of both anchors, weighted the
    same way.
    """
    wa, wb = a.sample_count, b.sample_count
    total = wa + wb

    position = (a.position.as_array() * wa + b.position.as_array() * wb) / total
    normal = normalize(a.normal.as_array() * wa + b.normal.as_array() * wb)
    if normal is None:
        normal = (a if wa >= wb else b).normal.as_array()

    bounds = union_bounds(a.bounds, b.bounds)
    size = bounds.size
    width = float(max(size[0], size[2]))
    height = float(size[1])

    angle = float(circmean(np.repeat([a.angle, b.angle], [wa, wb])))

    return WallCandidate(
        position=Vec3.from_array(position),
        normal=Vec3.from_array(normal),
        width=width,
        height=height,
        area=width * height,
        sample_count=total,
        angle=angle,
        distance=(a.distance * wa + b.distance * wb) / total,
        bounds=bounds,
    )


def _is_plausible(wall: WallCandidate, config: DetectorConfig) -> bool:
    return (
        wall.area >= config.min_wall_area
        and config.min_height <= wall.height <= config.max_height
        and abs(wall.normal.y) < config.vertical_threshold
    )


def fuse_coplanar_walls(
    walls: list[WallCandidate],
    config: DetectorConfig | None = None,
) -> list[WallCandidate]:
    """Merge coplanar, nearby wall candidates into single walls.

    The pass repeats until no more merges occur (transitive closure).
    Walls produced by a merge are dropped afterwards when smaller than
    ``min_wall_area``.  Candidates that merged with nothing pass through
    unchanged: a wall seen by a single ray direction has zero width.
    """
    config = config or DetectorConfig()
    fused = list(walls)
    merged = [False] * len(fused)
    changed = True
    while changed:
        changed = False
        i = 0
        while i < len(fused):
            j = i + 1
            while j < len(fused):
                if should_fuse(
                    fused[i], fused[j],
                    config.fuse_normal_threshold, config.fuse_offset_threshold, config.fuse_gap,
                ):
                    if config.debug:
                        logger.info(
                            "Fusing wall %d (%d hits) ← wall %d (%d hits)",
                            i, fused[i].sample_count, j, fused[j].sample_count,
                        )
                    fused[i] = merge_walls(fused[i], fused[j])
                    merged[i] = True
                    fused.pop(j)
                    merged.pop(j)
                    changed = True
                else:
                    j += 1
            i += 1

    kept = [w for w, m in zip(fused, merged) if not m or _is_plausible(w, config)]
    if len(walls) != len(kept):
        logger.info(
            "Fused %d wall candidates down to %d (%d below area/height limits)",
            len(walls), len(kept), len(fused) - len(kept),
        )
    return kept
