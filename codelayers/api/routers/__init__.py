from . import health, layers

__all__ = ["health", "layers"]
