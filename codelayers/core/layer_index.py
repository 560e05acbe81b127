"""
Multi-Layer Index

Merges the active layers into lookups keyed by absolute filename, which is
what a treemap needs when it draws a file:

    micro_index[abs_file][line] -> [color, ...]
    macro_index[abs_file]       -> [(fraction, color), ...]

Merge rules:
    - Inactive layers contribute nothing. Changing a flag means rebuilding.
    - A kind missing from its layer's legend is dropped with one warning per
      kind and per build, so a kind can be hidden by deleting its legend
      entry from a JSON layer file.
    - Several layers (or several kinds) may mark the same line. All colors
      are kept in layer order; a renderer showing one color takes the first.
    - Macro entries of all layers are appended together, so their fractions
      no longer add up to a file share. Consumers renormalize if they need to.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .layer_model import Color, Filename, Kind, Layer

logger = logging.getLogger(__name__)

MicroIndex = Dict[Filename, Dict[int, List[Color]]]
MacroIndex = Dict[Filename, List[Tuple[float, Color]]]


def join_root(root: str, filename: Filename) -> Filename:
    """Absolute filename of a layer entry: root, a single '/', then the name."""
    if not root or root.endswith("/"):
        return root + filename
    return root + "/" + filename


@dataclass(frozen=True)
class LayerSet:
    """
    Read-only query structure built from (layer, active) pairs.

    Attributes:
        root: Absolute directory the layer filenames are relative to
        layers: The (layer, active) pairs, kept so the set can be rebuilt
        micro_index: abs file -> line -> colors in insertion order
        macro_index: abs file -> (fraction, color) entries
        unresolved_kinds: Kinds dropped because no legend defined them
    """
    root: str
    layers: Tuple[Tuple[Layer, bool], ...]
    micro_index: MicroIndex = field(default_factory=dict, repr=False)
    macro_index: MacroIndex = field(default_factory=dict, repr=False)
    unresolved_kinds: Tuple[Kind, ...] = ()

    def colors_at(self, filename: Filename, line: int) -> List[Color]:
        return list(self.micro_index.get(filename, {}).get(line, ()))

    def primary_color_at(self, filename: Filename, line: int) -> Optional[Color]:
        """Color with the highest priority on a line, i.e. the first inserted."""
        colors = self.micro_index.get(filename, {}).get(line)
        return colors[0] if colors else None

    def lines_of(self, filename: Filename) -> Dict[int, List[Color]]:
        return {line: list(colors) for line, colors in self.micro_index.get(filename, {}).items()}

    def macro_of(self, filename: Filename) -> List[Tuple[float, Color]]:
        return list(self.macro_index.get(filename, ()))

    def files(self) -> List[Filename]:
        return sorted(set(self.micro_index) | set(self.macro_index))

    def active_layers(self) -> List[Layer]:
        return [layer for layer, active in self.layers if active]

    def with_active_flags(self, flags: Sequence[bool]) -> LayerSet:
        """Rebuild from scratch with one new flag per layer."""
        if len(flags) != len(self.layers):
            raise ValueError(f"Expected {len(self.layers)} flags, got {len(flags)}")
        pairs = [(layer, bool(flag)) for (layer, _), flag in zip(self.layers, flags)]
        return build_index_of_layers(pairs, self.root)


class LayerIndexBuilder:
    """
    Builds one LayerSet.

    The set of kinds already reported belongs to the builder, so separate
    builds each report their own unresolved kinds.
    """

    def __init__(self, root: str):
        self.root = root
        self.logger = logging.getLogger(__name__)
        self.micro_index: MicroIndex = {}
        self.macro_index: MacroIndex = {}
        self._warned: Set[Kind] = set()

    def _warn_once(self, kind: Kind) -> None:
        if kind not in self._warned:
            self._warned.add(kind)
            self.logger.warning(f"Kind '{kind}' is not defined by its layer, dropping its entries")

    def add_layer(self, layer: Layer) -> None:
        colors = layer.kinds_mapping()

        for filename, finfo in layer.files:
            abs_file = join_root(self.root, filename)

            for kind, fraction in finfo.macro_level:
                color = colors.get(kind)
                if color is None:
                    self._warn_once(kind)
                    continue
                self.macro_index.setdefault(abs_file, []).append((fraction, color))

            for line, kind in finfo.micro_level:
                color = colors.get(kind)
                if color is None:
                    self._warn_once(kind)
                    continue
                self.micro_index.setdefault(abs_file, {}).setdefault(line, []).append(color)

    def build(self, layers: Iterable[Tuple[Layer, bool]]) -> LayerSet:
        pairs = tuple((layer, bool(active)) for layer, active in layers)
        for layer, active in pairs:
            if active:
                self.add_layer(layer)

        self.logger.debug(
            f"Indexed {sum(1 for _, a in pairs if a)}/{len(pairs)} active layers: "
            f"{len(self.micro_index)} files at micro level, {len(self.macro_index)} at macro level"
        )
        # The builder stays usable, so the LayerSet gets its own copy
        return LayerSet(
            root=self.root,
            layers=pairs,
            micro_index={
                abs_file: {line: list(colors) for line, colors in lines.items()}
                for abs_file, lines in self.micro_index.items()
            },
            macro_index={abs_file: list(entries) for abs_file, entries in self.macro_index.items()},
            unresolved_kinds=tuple(sorted(self._warned)),
        )


def build_index_of_layers(layers: Iterable[Tuple[Layer, bool]], root: str) -> LayerSet:
    """Merge the active layers of ``layers`` into a LayerSet rooted at ``root``."""
    return LayerIndexBuilder(root).build(layers)
