"""
Code Layers

Colored overlays for a treemap of a codebase, merged from any number of
annotation layers.
"""

from .core import (
    Layer,
    FileInfo,
    SourcePosition,
    LayerSet,
    build_index_of_layers,
    simple_layer_of_facts,
    stat_of_layer,
    filter_layer,
    load_layer,
    save_layer,
)

__all__ = [
    "Layer",
    "FileInfo",
    "SourcePosition",
    "LayerSet",
    "build_index_of_layers",
    "simple_layer_of_facts",
    "stat_of_layer",
    "filter_layer",
    "load_layer",
    "save_layer",
]

__version__ = "1.0.0"
