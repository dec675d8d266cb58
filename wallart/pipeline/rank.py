"""Order wall candidates by detection confidence."""

from __future__ import annotations

from wallart.core.types import WallCandidate


def rank_walls(walls: list[WallCandidate]) -> list[WallCandidate]:
    """Most-sampled walls first; nearer walls win ties.

    The sort is stable, so walls equal on both keys keep their input order.
    """
    return sorted(walls, key=lambda w: (-w.sample_count, w.distance))
