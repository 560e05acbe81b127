"""
Layer Errors

Exception taxonomy for the layer core.

    LayerError
     └── LayerDecodeError           malformed layer file, aborts that load
          ├── MissingFieldError     required field absent
          ├── DuplicateFieldError   field given twice in one object
          ├── ExtraFieldError       unknown field (strict mode only)
          └── FieldTypeError        value of the wrong JSON type

Unresolved kinds are not exceptions: the index builder drops the entry and
logs a warning once per kind. I/O failures surface as the builtin OSError.
"""

from typing import Optional


class LayerError(Exception):
    """Base class for all layer errors."""


class LayerDecodeError(LayerError, ValueError):
    """
    A layer file could not be decoded.

    Attributes:
        message: What went wrong
        path: JSON path of the offending node, e.g. ``$.files[2][1].micro_level``
        source: File being loaded, filled in by ``load_layer``
    """

    def __init__(self, message: str, path: str = "$"):
        super().__init__(message)
        self.message = message
        self.path = path
        self.source: Optional[str] = None

    def __str__(self) -> str:
        where = f"{self.source}: " if self.source else ""
        return f"{where}{self.message} (at {self.path})"


class MissingFieldError(LayerDecodeError):
    def __init__(self, field: str, path: str = "$"):
        super().__init__(f"missing required field '{field}'", path)
        self.field = field


class DuplicateFieldError(LayerDecodeError):
    def __init__(self, field: str, path: str = "$"):
        super().__init__(f"field '{field}' is repeated", path)
        self.field = field


class ExtraFieldError(LayerDecodeError):
    def __init__(self, field: str, path: str = "$"):
        super().__init__(f"unexpected field '{field}'", path)
        self.field = field


class FieldTypeError(LayerDecodeError):
    """A JSON node has the wrong type, e.g. a string where a line number is expected."""
