"""End-to-end pipeline: load a mesh scene → detect walls → place artworks."""

from __future__ import annotations

import logging
from pathlib import Path

from wallart.core.config import DetectorConfig, PlacementConfig
from wallart.core.types import DetectionResult, Vec3, WallCandidate, WallHit
from wallart.pipeline.cluster import canonical_hit_order, cluster_walls
from wallart.pipeline.fuse import fuse_coplanar_walls
from wallart.pipeline.placement import place_artworks
from wallart.pipeline.rank import rank_walls
from wallart.pipeline.result import build_detection_result
from wallart.pipeline.sampler import sample_walls
from wallart.pipeline.surfaces import load_surfaces

logger = logging.getLogger(__name__)


def detect_walls_with_hits(
    surfaces,
    config: DetectorConfig | None = None,
) -> tuple[list[WallCandidate], list[WallHit]]:
    """Run sampling → clustering → fusion → ranking from the scene centre.

    Returns the ranked walls together with the raw hits they came from.
    """
    config = config or DetectorConfig()
    bounds = surfaces.bounds() if len(surfaces) else None
    if bounds is None:
        logger.warning("No surfaces found in scene")
        return [], []

    center = Vec3.from_array(bounds.center)
    if config.debug:
        size = bounds.size
        logger.info(
            "Scene bounds: centre (%.2f, %.2f, %.2f), size (%.2f, %.2f, %.2f)",
            center.x, center.y, center.z, *size,
        )

    hits = sample_walls(center, surfaces, config)
    if not hits:
        logger.warning("No wall hits from %d rays", config.ray_directions * config.height_samples)
        return [], []

    walls = cluster_walls(canonical_hit_order(hits), config)
    if config.fuse_coplanar:
        walls = fuse_coplanar_walls(walls, config)
    walls = rank_walls(walls)

    if not walls:
        logger.warning("No walls detected from %d wall hits", len(hits))
    logger.info("Detected %d wall(s)", len(walls))
    if config.debug:
        for i, wall in enumerate(walls):
            logger.info(
                "  Wall #%d: position (%.2f, %.2f, %.2f), normal (%.2f, %.2f, %.2f), "
                "%d hits, %.2f × %.2f, distance %.2f",
                i + 1, wall.position.x, wall.position.y, wall.position.z,
                wall.normal.x, wall.normal.y, wall.normal.z,
                wall.sample_count, wall.width, wall.height, wall.distance,
            )
    return walls, hits


def detect_walls(surfaces, config: DetectorConfig | None = None) -> list[WallCandidate]:
    walls, _ = detect_walls_with_hits(surfaces, config)
    return walls


def process_scene(
    input_path: str | Path,
    *,
    artwork_count: int = 0,
    detector_config: DetectorConfig | None = None,
    placement_config: PlacementConfig | None = None,
) -> DetectionResult:
    """Run the full pipeline on a single scene file.

    1. Load the scene and snapshot its surfaces.
    2. Raycast from the scene centre and cluster wall hits.
    3. Fuse and rank the wall candidates.
    4. Place *artwork_count* artworks.
    5. Assemble a :class:`DetectionResult`.
    """
    input_path = Path(input_path)
    logger.info("Loading %s …", input_path.name)
    surfaces = load_surfaces(input_path)

    walls, hits = detect_walls_with_hits(surfaces, detector_config)
    placements = place_artworks(walls, artwork_count, placement_config) if walls else []

    return build_detection_result(
        source_file=input_path.name,
        surface_count=len(surfaces),
        bounds=surfaces.bounds(),
        hit_count=len(hits),
        walls=walls,
        placements=placements,
    )


def process_scene_to_json(
    input_path: str | Path,
    output_path: str | Path | None = None,
    **kwargs,
) -> str:
    """Run the pipeline and write the detection result to a JSON file.

    Returns the JSON string.
    """
    result = process_scene(input_path, **kwargs)
    json_str = result.model_dump_json(indent=2)

    if output_path is None:
        output_path = Path(input_path).with_suffix(".walls.json")
    Path(output_path).write_text(json_str)
    logger.info("Wrote detection result → %s", output_path)
    return json_str
