"""
FastAPI dependency injection for API routes.

The layer repository lives on ``app.state`` for the lifetime of the
application; every route shares it.
"""

from fastapi import Request

from codelayers.config import Settings
from codelayers.repositories import InMemoryLayerRepository


def get_repository(request: Request) -> InMemoryLayerRepository:
    """
    Application-scoped repository dependency.

    Usage in an endpoint::

        @router.get("/example")
        async def example(repo: InMemoryLayerRepository = Depends(get_repository)):
            return {"layers": repo.names()}
    """
    return request.app.state.repository


def get_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings
