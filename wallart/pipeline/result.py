"""Build a DetectionResult from pipeline outputs and scene metadata."""

from __future__ import annotations

from wallart.core.types import BBox, DetectionResult, Placement, Vec3, WallCandidate


def build_detection_result(
    *,
    source_file: str,
    surface_count: int,
    bounds: BBox | None,
    hit_count: int,
    walls: list[WallCandidate],
    placements: list[Placement],
) -> DetectionResult:
    """Assemble pipeline outputs into a :class:`DetectionResult`."""
    return DetectionResult(
        source_file=source_file,
        surface_count=surface_count,
        bounds=bounds,
        center=Vec3.from_array(bounds.center) if bounds is not None else None,
        hit_count=hit_count,
        walls=walls,
        placements=placements,
    )
