from .memory_repository import InMemoryLayerRepository

__all__ = [
    "InMemoryLayerRepository",
]
