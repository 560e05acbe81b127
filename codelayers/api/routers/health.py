"""
Health check and information endpoints.
"""

from fastapi import APIRouter, Depends
from typing import Dict, Any
from datetime import datetime, timezone

from codelayers.api.dependencies import get_repository
from codelayers.api.models import HealthResponse
from codelayers.repositories import InMemoryLayerRepository

router = APIRouter()


@router.get("/", response_model=Dict[str, Any])
async def root():
    """Root endpoint - API information"""
    return {
        "name": "Code Layers API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "layers": "/api/v1/layers",
            "load": "/api/v1/layers/load",
            "active": "/api/v1/layers/{name}/active",
            "stats": "/api/v1/layers/{name}/stats",
            "files": "/api/v1/index/files",
            "micro": "/api/v1/index/micro?file=...",
            "macro": "/api/v1/index/macro?file=...",
        }
    }


@router.get("/health", response_model=HealthResponse)
async def health_check(repo: InMemoryLayerRepository = Depends(get_repository)):
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        layers_loaded=len(repo.names()),
        message="API is running.",
    )
