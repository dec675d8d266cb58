"""Tunable parameters for wall detection and artwork placement."""

from __future__ import annotations

import logging
import math

from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

MIN_SPACING = 0.1


class DetectorConfig(BaseModel):
    """Sampling, clustering and fusion parameters for wall detection."""

    # sampling grid
    ray_directions: int = Field(16, ge=1, description="Azimuth samples over 2π")
    height_samples: int = Field(5, ge=1, description="Number of sampling heights")
    height_start_offset: float = Field(-1.5, description="First sampling height relative to the scene centre")
    height_step: float = 0.8
    raycast_distance: float = Field(50.0, gt=0)
    min_hit_distance: float = Field(1.0, description="Hits this close to the origin are artefacts")

    # wall filters
    vertical_threshold: float = Field(0.3, gt=0, le=1, description="Max |normal.y| of a wall")
    min_height: float = 1.0
    max_height: float = 15.0
    min_wall_area: float = Field(5.0, description="Applied to fused walls only")

    # clustering
    angle_tolerance: float = Field(math.pi / 8, gt=0)
    min_cluster_size: int = Field(4, ge=1)

    # coplanar fusion
    fuse_coplanar: bool = True
    fuse_normal_threshold: float = 0.95
    fuse_offset_threshold: float = 0.25
    fuse_gap: float = 5.0

    debug: bool = False

    @model_validator(mode="after")
    def _check_height_bounds(self) -> DetectorConfig:
        if self.min_height > self.max_height:
            raise ValueError("min_height must not exceed max_height")
        return self


class PlacementConfig(BaseModel):
    """Parameters for hanging artworks on ranked walls."""

    spacing: float = Field(3.0, description="Minimum horizontal distance between placements")
    height_from_floor: float = 1.5
    offset_from_wall: float = Field(0.5, description="Informational; positioning uses safe_distance")
    safe_distance: float = Field(1.2, description="Displacement from the wall centroid along its normal")
    debug: bool = False

    @field_validator("spacing")
    @classmethod
    def _clamp_spacing(cls, value: float) -> float:
        if value < MIN_SPACING:
            logger.warning("spacing=%.3f is below the minimum; clamping to %.2f", value, MIN_SPACING)
            return MIN_SPACING
        return value
