"""
Layer Model

Data structures for code "layers": per-line and per-file annotations that a
treemap of a codebase can show or hide, like map layers. Typical layers are
dead code, test coverage, age of file or lint findings.

A layer maps files to lines carrying a kind, and each kind to a color:

    Layer
     ├── files: ((filename, FileInfo), ...)   filenames relative to a root
     └── kinds: ((kind, color), ...)          legend

    FileInfo
     ├── micro_level: ((line, kind), ...)     zoomed in, one color per line
     └── macro_level: ((kind, fraction), ...) zoomed out, share of the file

The macro level lets each layer say how a whole file should look when the
lines are too small to draw. It may be empty, in which case the renderer can
mix the micro-level colors itself. Fractions are weights, they do not have to
add up to 1.

Colors are names from an external palette (e.g. "red", "grey53") and are not
validated here. Kinds used in a file but missing from the legend are legal in
the model; they are dropped when the layers are indexed.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple, Union

Kind = str
Color = str
Filename = str

MicroEntry = Tuple[int, Kind]
MacroEntry = Tuple[Kind, float]
KindsInput = Union[Mapping[Kind, Color], Iterable[Tuple[Kind, Color]]]


def _pairs(items: Iterable) -> Tuple[tuple, ...]:
    return tuple(tuple(item) for item in items)


@dataclass(frozen=True)
class SourcePosition:
    """Where an analysis pass found something: an absolute file and a 1-based line."""
    file: str
    line: int


@dataclass(frozen=True)
class FileInfo:
    """Annotations of one file within a layer."""
    micro_level: Tuple[MicroEntry, ...] = ()
    macro_level: Tuple[MacroEntry, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "micro_level", _pairs(self.micro_level))
        object.__setattr__(self, "macro_level", _pairs(self.macro_level))

    def kinds_used(self) -> Tuple[Kind, ...]:
        """Distinct kinds referenced at either level, first-seen order."""
        seen: Dict[Kind, None] = {}
        for _line, kind in self.micro_level:
            seen.setdefault(kind, None)
        for kind, _fraction in self.macro_level:
            seen.setdefault(kind, None)
        return tuple(seen)


@dataclass(frozen=True)
class Layer:
    """
    An immutable layer.

    Lists and dicts given to the constructor are normalized to tuples, so two
    layers with the same content compare equal whatever they were built from.
    """
    files: Tuple[Tuple[Filename, FileInfo], ...] = ()
    kinds: Tuple[Tuple[Kind, Color], ...] = ()

    def __post_init__(self) -> None:
        kinds = self.kinds.items() if isinstance(self.kinds, Mapping) else self.kinds
        object.__setattr__(self, "kinds", _pairs(kinds))
        object.__setattr__(self, "files", _pairs(self.files))

    def kinds_mapping(self) -> Dict[Kind, Color]:
        """Kind to color lookup; a kind defined twice keeps its last color."""
        return dict(self.kinds)

    def filenames(self) -> Tuple[Filename, ...]:
        return tuple(name for name, _ in self.files)

    def file_info(self, filename: Filename) -> FileInfo:
        for name, finfo in self.files:
            if name == filename:
                return finfo
        raise KeyError(filename)
