"""FastAPI application for the wall detection service.

Accepts uploaded mesh scenes, runs the wall detector, and computes
artwork placements for the viewer.
"""

from __future__ import annotations

import json
import logging
import shutil
import tempfile
from pathlib import Path

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel as PydanticBaseModel

from wallart.core.config import DetectorConfig, PlacementConfig
from wallart.core.types import Artwork, DetectionResult, Placement
from wallart.pipeline.placement import place_artworks
from wallart.pipeline.process import detect_walls_with_hits
from wallart.pipeline.result import build_detection_result
from wallart.pipeline.surfaces import SUPPORTED_SUFFIXES, load_surfaces

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Wall Art API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # permissive for local development; tighten for production
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── In-memory store (single-scene MVP) ───────────────────────────────
_state: dict = {
    "result": None,       # DetectionResult or None
    "placements": None,   # list[dict] or None
    "source_file": None,  # original filename
}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/upload")
async def upload_scene(file: UploadFile = File(...)):
    """Upload a mesh scene, detect its walls, and store the result."""
    if not file.filename:
        raise HTTPException(400, "No filename provided")

    suffix = Path(file.filename).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise HTTPException(
            400, f"Unsupported format '{suffix}'. Use one of {', '.join(SUPPORTED_SUFFIXES)}"
        )

    logger.info("Receiving scene: %s", file.filename)

    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
        shutil.copyfileobj(file.file, tmp)
        tmp_path = Path(tmp.name)

    try:
        surfaces = load_surfaces(tmp_path)
        walls, hits = detect_walls_with_hits(surfaces, DetectorConfig())
        result = build_detection_result(
            source_file=file.filename,  # original name, not temp path
            surface_count=len(surfaces),
            bounds=surfaces.bounds(),
            hit_count=len(hits),
            walls=walls,
            placements=[],
        )

        _state["result"] = result
        _state["placements"] = None
        _state["source_file"] = file.filename

        logger.info("Detected %d walls in %s", len(walls), file.filename)
        return {
            "filename": file.filename,
            "surface_count": len(surfaces),
            "walls_detected": len(walls),
        }
    except Exception as e:
        logger.exception("Processing failed")
        raise HTTPException(500, f"Processing failed: {e}")
    finally:
        tmp_path.unlink(missing_ok=True)


@app.get("/walls")
def get_walls():
    """Return the detection result JSON (walls, bounds, etc.)."""
    if _state["result"] is None:
        raise HTTPException(404, "No scene uploaded yet")

    result: DetectionResult = _state["result"]
    return JSONResponse(content=json.loads(result.model_dump_json()))


class PlaceRequest(PydanticBaseModel):
    """Body for the placement endpoint."""
    artworks: list[Artwork] = []
    artwork_count: int | None = None  # defaults to len(artworks)
    spacing: float = 3.0
    height_from_floor: float = 1.5
    safe_distance: float = 1.2


def _join_artworks(placements: list[Placement], artworks: list[Artwork]) -> list[dict]:
    """Pair each placement with the artwork at the same index, if any."""
    joined = []
    for i, placement in enumerate(placements):
        artwork = artworks[i] if i < len(artworks) else None
        joined.append({
            "placement": json.loads(placement.model_dump_json()),
            "artwork": artwork.model_dump() if artwork is not None else None,
        })
    return joined


@app.post("/place")
def place(req: PlaceRequest):
    """Hang artworks on the detected walls of the current scene."""
    if _state["result"] is None:
        raise HTTPException(404, "No scene uploaded yet")

    result: DetectionResult = _state["result"]
    count = req.artwork_count if req.artwork_count is not None else len(req.artworks)
    config = PlacementConfig(
        spacing=req.spacing,
        height_from_floor=req.height_from_floor,
        safe_distance=req.safe_distance,
    )

    placements = place_artworks(result.walls, count, config)
    _state["result"] = result.model_copy(update={"placements": placements})
    _state["placements"] = _join_artworks(placements, req.artworks)

    logger.info("Placed %d/%d artworks", len(placements), count)
    return {"placed": len(placements), "placements": _state["placements"]}


@app.get("/placements")
def get_placements():
    """Return the placements computed by the last /place call."""
    if _state["placements"] is None:
        raise HTTPException(404, "No placements computed yet")
    return {"placements": _state["placements"]}
