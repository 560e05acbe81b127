"""
Code Layers API

FastAPI application serving the merged layer index to the code map front end.

Run:
    CODELAYERS_ROOT=/path/to/repo CODELAYERS_LAYER_DIR=layers/ python -m codelayers.api.main
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
from typing import Optional
import logging

from codelayers.api.routers import health, layers
from codelayers.config import Settings
from codelayers.core import load_layers_from_dir
from codelayers.repositories import InMemoryLayerRepository

logger = logging.getLogger(__name__)


def create_repository(settings: Settings) -> InMemoryLayerRepository:
    repo = InMemoryLayerRepository(root=settings.root, strict_decode=settings.strict_decode)
    if settings.layer_dir and not Path(settings.layer_dir).is_dir():
        logger.error(f"Layer directory not found: {settings.layer_dir}")
    elif settings.layer_dir:
        for name, layer in load_layers_from_dir(settings.layer_dir, strict=settings.strict_decode):
            repo.add_layer(name, layer)
        logger.info(f"Loaded {len(repo.names())} layers from {settings.layer_dir}")
    return repo


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Code Layers API",
        description="API for loading code layers and querying the merged layer index",
        version="1.0.0",
    )

    # The code map front end may be served from anywhere
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.repository = create_repository(settings)

    app.include_router(health.router)
    app.include_router(layers.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=app.state.settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
