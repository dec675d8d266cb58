"""Pydantic models for wall detection and artwork placement artefacts.

The detection result is the structured JSON output of the scene-analysis
pipeline.  It describes the inferred walls (clusters of raycast hits) and
the poses computed for the artworks hung on them.
"""

from __future__ import annotations

from datetime import datetime, timezone

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


# ── tiny helpers ──────────────────────────────────────────────────────
class Vec3(BaseModel):
    """A 3-component vector (x, y, z).  Y is up."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float

    @classmethod
    def from_array(cls, values) -> Vec3:
        return cls(x=float(values[0]), y=float(values[1]), z=float(values[2]))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)


class BBox(BaseModel):
    """Axis-aligned bounding box."""

    model_config = ConfigDict(frozen=True)

    min: Vec3
    max: Vec3

    @property
    def size(self) -> np.ndarray:
        return self.max.as_array() - self.min.as_array()

    @property
    def center(self) -> np.ndarray:
        return (self.min.as_array() + self.max.as_array()) / 2.0


# ── sampling ─────────────────────────────────────────────────────────
class Ray(BaseModel):
    model_config = ConfigDict(frozen=True)

    origin: Vec3
    direction: Vec3


class WallHit(BaseModel):
    """A single ray/surface intersection that passed the wall filters."""

    model_config = ConfigDict(frozen=True)

    point: Vec3
    normal: Vec3
    distance: float
    angle: float = Field(description="Azimuth of the producing ray (radians)")
    height: float = Field(description="Sampling height of the producing ray")


# ── walls / placements ───────────────────────────────────────────────
class WallCandidate(BaseModel):
    """A near-vertical surface inferred from a cluster of wall hits."""

    model_config = ConfigDict(frozen=True)

    position: Vec3 = Field(description="Centroid of the contributing hits")
    normal: Vec3
    width: float
    height: float
    area: float
    sample_count: int
    angle: float = Field(description="Anchor azimuth of the hit cluster (radians)")
    distance: float = Field(description="Mean hit distance from the sampling origin")
    bounds: BBox


class Placement(BaseModel):
    """Pose of one artwork on one wall."""

    model_config = ConfigDict(frozen=True)

    position: Vec3
    rotation_y: float
    wall_normal: tuple[float, float, float]
    wall_index: int = Field(description="Index of the source wall in the ranked list")

    @property
    def rotation(self) -> tuple[float, float, float]:
        return (0.0, self.rotation_y, 0.0)


class Artwork(BaseModel):
    """Externally supplied artwork metadata."""

    title: str
    description: str = ""
    image: str = ""


# ── detection result ─────────────────────────────────────────────────
class DetectionResult(BaseModel):
    """Top-level result produced by the scene-analysis pipeline."""

    version: str = "0.1.0"
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    units: str = "metres"
    source_file: str = ""
    surface_count: int = 0
    bounds: BBox | None = None
    center: Vec3 | None = None
    hit_count: int = 0
    walls: list[WallCandidate] = Field(default_factory=list)
    placements: list[Placement] = Field(default_factory=list)
