"""
Layer management and index query endpoints.

The index endpoints serve what the code map front end asks for while drawing:
the colors of each line of a file, and the composition of a file when it is
too small to show lines.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from pathlib import Path
import logging

from codelayers.api.dependencies import get_repository, get_settings
from codelayers.api.models import (
    ActiveRequest,
    LayerListResponse,
    LayerSummary,
    LoadLayerRequest,
    MacroResponse,
    MicroResponse,
    StatsResponse,
)
from codelayers.config import Settings
from codelayers.core import LayerDecodeError, files_per_kind, stat_of_layer
from codelayers.repositories import InMemoryLayerRepository

router = APIRouter(prefix="/api/v1")
logger = logging.getLogger(__name__)


def _require(repo: InMemoryLayerRepository, name: str) -> None:
    if name not in repo:
        raise HTTPException(status_code=404, detail=f"Unknown layer: {name}")


def _list_layers(repo: InMemoryLayerRepository) -> LayerListResponse:
    return LayerListResponse(
        root=repo.root,
        layers=[LayerSummary(**entry) for entry in repo.get_statistics()],
        unresolved_kinds=list(repo.layer_set.unresolved_kinds),
    )


def _layer_path(settings: Settings, path: str) -> Path:
    """Resolve a requested layer file, which must lie inside the layer directory."""
    if not settings.layer_dir:
        raise HTTPException(status_code=403, detail="No layer directory configured")
    base = Path(settings.layer_dir).resolve()
    target = (base / path).resolve()
    if base not in target.parents:
        raise HTTPException(status_code=403, detail=f"Not inside the layer directory: {path}")
    return target


@router.get("/layers", response_model=LayerListResponse)
async def list_layers(repo: InMemoryLayerRepository = Depends(get_repository)):
    return _list_layers(repo)


@router.post("/layers/load", response_model=LayerListResponse)
async def load_layer(request: LoadLayerRequest,
                     repo: InMemoryLayerRepository = Depends(get_repository),
                     settings: Settings = Depends(get_settings)):
    """Load a layer file from the layer directory and add it to the index."""
    path = _layer_path(settings, request.path)
    try:
        name = repo.load_layer(str(path), name=request.name, active=request.active)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Layer file not found: {request.path}")
    except LayerDecodeError as e:
        logger.error(f"Layer decoding failed: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except OSError as e:
        logger.error(f"Layer loading failed: {e}")
        raise HTTPException(status_code=500, detail=f"Could not read {request.path}: {e.strerror}")

    logger.info(f"Loaded layer '{name}' from {request.path}")
    return _list_layers(repo)


@router.put("/layers/{name}/active", response_model=LayerListResponse)
async def set_active(name: str, request: ActiveRequest,
                     repo: InMemoryLayerRepository = Depends(get_repository)):
    _require(repo, name)
    repo.set_active(name, request.active)
    return _list_layers(repo)


@router.delete("/layers/{name}", response_model=LayerListResponse)
async def remove_layer(name: str, repo: InMemoryLayerRepository = Depends(get_repository)):
    _require(repo, name)
    repo.remove_layer(name)
    return _list_layers(repo)


@router.get("/layers/{name}/stats", response_model=StatsResponse)
async def layer_stats(name: str, repo: InMemoryLayerRepository = Depends(get_repository)):
    _require(repo, name)
    layer = repo.get_layer(name)
    return StatsResponse(name=name, stats=stat_of_layer(layer), files_per_kind=files_per_kind(layer))


@router.get("/index/files")
async def index_files(repo: InMemoryLayerRepository = Depends(get_repository)):
    return {"root": repo.root, "files": repo.layer_set.files()}


@router.get("/index/micro", response_model=MicroResponse)
async def micro_level(file: str = Query(..., description="Absolute filename"),
                      repo: InMemoryLayerRepository = Depends(get_repository)):
    """Colors per line; lines not annotated by any active layer are absent."""
    return MicroResponse(file=file, lines=repo.layer_set.lines_of(file))


@router.get("/index/macro", response_model=MacroResponse)
async def macro_level(file: str = Query(..., description="Absolute filename"),
                      repo: InMemoryLayerRepository = Depends(get_repository)):
    """(fraction, color) entries of all active layers, not renormalized."""
    return MacroResponse(file=file, macro=repo.layer_set.macro_of(file))
