"""Load mesh scenes and snapshot them into a raycastable surface set.

Supported formats
-----------------
Anything ``trimesh`` reads as a scene; the loader accepts **glTF/GLB**,
**OBJ**, **PLY**, **STL** and **OFF**.

The snapshot bakes every node's world transform into a copy of its mesh,
so the analysis never touches the live scene graph.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import trimesh

from wallart.core.types import BBox
from wallart.pipeline.geometry import compute_bounds

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".glb", ".gltf", ".obj", ".ply", ".stl", ".off")


class SurfaceSet:
    """Immutable collection of world-space triangle meshes.

    Exposes the two capabilities the wall detector needs: the scene
    bounding box and a batched nearest-hit raycast.
    """

    def __init__(self, meshes: list[trimesh.Trimesh]):
        self._meshes = tuple(m for m in meshes if len(m.faces) > 0)
        self._combined: trimesh.Trimesh | None = None
        if self._meshes:
            self._combined = trimesh.util.concatenate(list(self._meshes))

    @classmethod
    def from_meshes(cls, meshes: list[trimesh.Trimesh]) -> SurfaceSet:
        return cls([m.copy() for m in meshes])

    @classmethod
    def from_scene(cls, scene: trimesh.Scene) -> SurfaceSet:
        """Snapshot every mesh node of *scene* in world space."""
        meshes = []
        for node_name in scene.graph.nodes_geometry:
            transform, geometry_name = scene.graph[node_name]
            geometry = scene.geometry.get(geometry_name)
            if not isinstance(geometry, trimesh.Trimesh):
                continue
            mesh = geometry.copy()
            mesh.apply_transform(transform)
            meshes.append(mesh)
        logger.info("Snapshot %d surface(s) from scene", len(meshes))
        return cls(meshes)

    def __len__(self) -> int:
        return len(self._meshes)

    @property
    def meshes(self) -> tuple[trimesh.Trimesh, ...]:
        return self._meshes

    def bounds(self) -> BBox | None:
        if self._combined is None:
            return None
        return compute_bounds(np.asarray(self._combined.bounds))

    def raycast(
        self,
        origins: np.ndarray,
        directions: np.ndarray,
        max_distance: float,
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Nearest hit per ray.

        Returns ``(ray_index, points, normals, distances)`` holding one row
        for every ray that hit a surface within *max_distance*.  Normals
        are the world-space face normals of the hit triangles.
        """
        if self._combined is None or len(origins) == 0:
            return np.empty(0, dtype=np.int64), np.empty((0, 3)), np.empty((0, 3)), np.empty(0)

        locations, ray_idx, face_idx = self._combined.ray.intersects_location(
            origins, directions, multiple_hits=True
        )
        if len(locations) == 0:
            return np.empty(0, dtype=np.int64), np.empty((0, 3)), np.empty((0, 3)), np.empty(0)

        distances = np.linalg.norm(locations - origins[ray_idx], axis=1)

        # closest hit for each ray: sort by (ray, distance), keep the first row per ray
        order = np.lexsort((distances, ray_idx))
        first = np.ones(len(order), dtype=bool)
        first[1:] = ray_idx[order][1:] != ray_idx[order][:-1]
        nearest = order[first]
        nearest = nearest[distances[nearest] <= max_distance]

        normals = np.asarray(self._combined.face_normals)[face_idx[nearest]]
        return (
            ray_idx[nearest].astype(np.int64),
            locations[nearest],
            normals,
            distances[nearest],
        )


def load_scene(path: str | Path) -> trimesh.Scene:
    """Read a mesh file as a :class:`trimesh.Scene`.

    Raises ``ValueError`` for unsupported extensions.
    """
    p = Path(path)
    ext = p.suffix.lower()
    if ext not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported scene format '{ext}'. Supported: {', '.join(SUPPORTED_SUFFIXES)}"
        )
    logger.info("Reading %s scene %s", ext, p.name)
    return trimesh.load(str(p), force="scene")


def load_surfaces(path: str | Path) -> SurfaceSet:
    return SurfaceSet.from_scene(load_scene(path))
