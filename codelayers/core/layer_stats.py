"""
Layer Statistics and Filtering
"""

from typing import Callable, Dict

from .layer_model import Filename, Kind, Layer


def stat_of_layer(layer: Layer) -> Dict[Kind, int]:
    """
    Count micro-level lines per kind over all files.

    Every kind of the legend is reported, with 0 when unused.
    """
    stats: Dict[Kind, int] = {kind: 0 for kind, _color in layer.kinds}
    for _filename, finfo in layer.files:
        for _line, kind in finfo.micro_level:
            stats[kind] = stats.get(kind, 0) + 1
    return stats


def files_per_kind(layer: Layer) -> Dict[Kind, int]:
    """Number of distinct files in which each kind marks at least one line."""
    stats: Dict[Kind, int] = {kind: 0 for kind, _color in layer.kinds}
    for _filename, finfo in layer.files:
        for kind in {kind for _line, kind in finfo.micro_level}:
            stats[kind] = stats.get(kind, 0) + 1
    return stats


def filter_layer(predicate: Callable[[Filename], bool], layer: Layer) -> Layer:
    """New layer with the same legend, keeping the files accepted by ``predicate``."""
    return Layer(
        files=[(filename, finfo) for filename, finfo in layer.files if predicate(filename)],
        kinds=layer.kinds,
    )
