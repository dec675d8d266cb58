"""Small vector helpers: bounds, normalisation, horizontal distances."""

from __future__ import annotations

import numpy as np
from scipy.spatial.distance import cdist

from wallart.core.types import BBox, Vec3


def compute_bounds(points: np.ndarray) -> BBox:
    """Return the axis-aligned bounding box of an (N, 3) point array."""
    mins = points.min(axis=0)
    maxs = points.max(axis=0)
    return BBox(min=Vec3.from_array(mins), max=Vec3.from_array(maxs))


def union_bounds(a: BBox, b: BBox) -> BBox:
    mins = np.minimum(a.min.as_array(), b.min.as_array())
    maxs = np.maximum(a.max.as_array(), b.max.as_array())
    return BBox(min=Vec3.from_array(mins), max=Vec3.from_array(maxs))


def bounds_gap(a: BBox, b: BBox) -> float:
    """Largest per-axis separation between two boxes (0 when they overlap)."""
    lo = np.maximum(a.min.as_array(), b.min.as_array())
    hi = np.minimum(a.max.as_array(), b.max.as_array())
    return float(np.max(np.maximum(lo - hi, 0.0)))


def normalize(vector: np.ndarray) -> np.ndarray | None:
    """Return *vector* scaled to unit length, or *None* if it is degenerate."""
    norm = np.linalg.norm(vector)
    if not np.isfinite(norm) or norm < 1e-12:
        return None
    return vector / norm


def horizontal_distances(point: np.ndarray, others: np.ndarray) -> np.ndarray:
    """Distances in the x/z plane from *point* to each row of *others*."""
    if len(others) == 0:
        return np.empty(0)
    return cdist(point[[0, 2]][None, :], others[:, [0, 2]])[0]
