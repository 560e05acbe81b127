"""
Code Layers Core

Layers are per-line and per-file annotations of a codebase (dead code,
coverage, age, lint findings) drawn as colored overlays on a treemap.

Usage:
    from codelayers.core import (
        SourcePosition, simple_layer_of_facts, build_index_of_layers,
        load_layer, save_layer, stat_of_layer,
    )

    layer = simple_layer_of_facts("/repo", facts, {"dead": "red"})
    save_layer(layer, "deadcode.json")

    layer_set = build_index_of_layers([(load_layer("deadcode.json"), True)], root="/repo")
    layer_set.colors_at("/repo/src/a.py", 10)
"""

from .errors import (
    LayerError,
    LayerDecodeError,
    MissingFieldError,
    DuplicateFieldError,
    ExtraFieldError,
    FieldTypeError,
)
from .layer_model import (
    Kind,
    Color,
    SourcePosition,
    FileInfo,
    Layer,
)
from .layer_builder import (
    relative_filename,
    simple_layer_of_facts,
)
from .layer_index import (
    LayerSet,
    LayerIndexBuilder,
    build_index_of_layers,
    join_root,
)
from .layer_stats import (
    stat_of_layer,
    files_per_kind,
    filter_layer,
)
from .layer_codec import (
    layer_to_json,
    layer_of_json,
)
from .layer_io import (
    is_json_filename,
    load_layer,
    save_layer,
    load_layers_from_dir,
)

__all__ = [
    # Errors
    "LayerError",
    "LayerDecodeError",
    "MissingFieldError",
    "DuplicateFieldError",
    "ExtraFieldError",
    "FieldTypeError",
    # Model
    "Kind",
    "Color",
    "SourcePosition",
    "FileInfo",
    "Layer",
    # Builder
    "relative_filename",
    "simple_layer_of_facts",
    # Index
    "LayerSet",
    "LayerIndexBuilder",
    "build_index_of_layers",
    "join_root",
    # Stats
    "stat_of_layer",
    "files_per_kind",
    "filter_layer",
    # Persistence
    "layer_to_json",
    "layer_of_json",
    "is_json_filename",
    "load_layer",
    "save_layer",
    "load_layers_from_dir",
]
