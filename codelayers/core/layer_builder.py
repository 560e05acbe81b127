"""
Layer Builder

Turns facts reported by an analysis pass, pairs of (source position, kind),
into a Layer. Facts are grouped by file, then by line, and each line keeps a
kind at most once.

Usage:
    from codelayers.core import SourcePosition, simple_layer_of_facts

    facts = [
        (SourcePosition("/repo/src/a.py", 10), "dead"),
        (SourcePosition("/repo/src/a.py", 12), "covered"),
    ]
    layer = simple_layer_of_facts("/repo", facts, {"dead": "red", "covered": "green"})
"""

import logging
import os
from typing import Any, Dict, Iterable, List, Tuple

from .layer_model import FileInfo, Filename, Kind, KindsInput, Layer

logger = logging.getLogger(__name__)


def relative_filename(root: str, file: str) -> Filename:
    """
    Make ``file`` relative to ``root``.

    Relative paths are first resolved against the current directory.
    Raises ValueError when the file does not live under the root.
    """
    root = os.path.abspath(root)
    path = os.path.abspath(file)
    prefix = root if root.endswith(os.sep) else root + os.sep
    if not path.startswith(prefix):
        raise ValueError(f"{file} is not under root {root}")
    return path[len(prefix):]


def simple_layer_of_facts(root: str,
                          facts: Iterable[Tuple[Any, Kind]],
                          kinds: KindsInput) -> Layer:
    """
    Build a layer from (position, kind) facts.

    Args:
        root: Directory the layer filenames are made relative to
        facts: Pairs of a position exposing ``file`` and ``line``, and a kind
        kinds: Kind to color legend, attached to the layer as given

    Files and lines keep the order in which they were first seen. The macro
    level lists every kind seen in a file with weight 1.0; it tells which
    kinds are present, not how much of the file they cover.
    """
    # file -> line -> kinds, dicts used as ordered sets
    grouped: Dict[Filename, Dict[int, Dict[Kind, None]]] = {}
    count = 0

    for position, kind in facts:
        filename = relative_filename(root, position.file)
        lines = grouped.setdefault(filename, {})
        lines.setdefault(position.line, {}).setdefault(kind, None)
        count += 1

    files: List[Tuple[Filename, FileInfo]] = []
    for filename, lines in grouped.items():
        micro_level = [(line, kind) for line, line_kinds in lines.items() for kind in line_kinds]

        all_kinds: Dict[Kind, None] = {}
        for line_kinds in lines.values():
            for kind in line_kinds:
                all_kinds.setdefault(kind, None)
        # TODO: weight each kind by the share of lines it covers
        macro_level = [(kind, 1.0) for kind in all_kinds]

        files.append((filename, FileInfo(micro_level=micro_level, macro_level=macro_level)))

    logger.debug(f"Built layer from {count} facts over {len(files)} files")
    return Layer(files=files, kinds=kinds)
