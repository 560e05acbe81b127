"""
Layer JSON Codec

Explicit mapping between a Layer and its JSON tree:

    {
      "files": [["src/a.py", {"micro_level": [[3, "dead"]],
                              "macro_level": [["dead", 1.0]]}]],
      "kinds": [["dead", "red"]]
    }

JSON is what users edit by hand (to change a color, or drop a kind), so the
decoder reports precisely what is wrong and where:

    MissingFieldError    a required field is absent
    DuplicateFieldError  a field appears twice in one object
    ExtraFieldError      an unknown field, only when strict
    FieldTypeError       wrong type, e.g. a line number given as a string

Duplicates are only visible while parsing, so text should go through
``parse_json`` rather than ``json.loads``.
"""

import json
from typing import Any, Dict, List, Sequence, Tuple

from .errors import (
    DuplicateFieldError,
    ExtraFieldError,
    FieldTypeError,
    LayerDecodeError,
    MissingFieldError,
)
from .layer_model import FileInfo, Layer

LAYER_FIELDS = ("files", "kinds")
FILE_INFO_FIELDS = ("micro_level", "macro_level")


class JsonObject(list):
    """A JSON object kept as its list of (name, value) pairs, duplicates included."""


# =============================================================================
# Encoding
# =============================================================================

def file_info_to_json(finfo: FileInfo) -> Dict[str, Any]:
    return {
        "micro_level": [[line, kind] for line, kind in finfo.micro_level],
        "macro_level": [[kind, float(fraction)] for kind, fraction in finfo.macro_level],
    }


def layer_to_json(layer: Layer) -> Dict[str, Any]:
    """Convert a layer to a JSON-serializable tree."""
    return {
        "files": [[filename, file_info_to_json(finfo)] for filename, finfo in layer.files],
        "kinds": [[kind, color] for kind, color in layer.kinds],
    }


def dumps(layer: Layer, indent: int = 2) -> str:
    return json.dumps(layer_to_json(layer), indent=indent)


# =============================================================================
# Decoding
# =============================================================================

def parse_json(text: str) -> Any:
    """Parse JSON text, keeping objects as JsonObject so duplicates survive."""
    try:
        return json.loads(text, object_pairs_hook=JsonObject)
    except json.JSONDecodeError as e:
        raise LayerDecodeError(f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e


def _fields(node: Any, path: str, names: Sequence[str], strict: bool) -> Dict[str, Any]:
    if isinstance(node, JsonObject):
        pairs = list(node)
    elif isinstance(node, dict):
        pairs = list(node.items())
    else:
        raise FieldTypeError(f"expected an object, got {_type_name(node)}", path)

    values: Dict[str, Any] = {}
    seen = set()
    for name, value in pairs:
        if name in seen:
            raise DuplicateFieldError(name, path)
        seen.add(name)
        if name not in names:
            if strict:
                raise ExtraFieldError(name, path)
            continue
        values[name] = value

    for name in names:
        if name not in values:
            raise MissingFieldError(name, path)
    return values


def _type_name(node: Any) -> str:
    if isinstance(node, JsonObject) or isinstance(node, dict):
        return "object"
    if isinstance(node, list):
        return "array"
    if node is None:
        return "null"
    if isinstance(node, bool):
        return "boolean"
    if isinstance(node, (int, float)):
        return "number"
    if isinstance(node, str):
        return "string"
    return type(node).__name__


def _list(node: Any, path: str) -> List[Any]:
    if isinstance(node, JsonObject) or not isinstance(node, list):
        raise FieldTypeError(f"expected an array, got {_type_name(node)}", path)
    return node


def _pair(node: Any, path: str) -> Tuple[Any, Any]:
    items = _list(node, path)
    if len(items) != 2:
        raise FieldTypeError(f"expected a pair, got an array of {len(items)} elements", path)
    return items[0], items[1]


def _str(node: Any, path: str) -> str:
    if not isinstance(node, str):
        raise FieldTypeError(f"expected a string, got {_type_name(node)}", path)
    return node


def _kind(node: Any, path: str) -> str:
    kind = _str(node, path)
    if not kind:
        raise FieldTypeError("expected a non-empty kind", path)
    return kind


def _int(node: Any, path: str) -> int:
    if isinstance(node, bool) or not isinstance(node, int):
        raise FieldTypeError(f"expected an integer, got {_type_name(node)}", path)
    return node


def _float(node: Any, path: str) -> float:
    if isinstance(node, bool) or not isinstance(node, (int, float)):
        raise FieldTypeError(f"expected a number, got {_type_name(node)}", path)
    return float(node)


def file_info_of_json(node: Any, path: str = "$", strict: bool = True) -> FileInfo:
    fields = _fields(node, path, FILE_INFO_FIELDS, strict)

    micro_path = f"{path}.micro_level"
    micro_level = []
    for i, entry in enumerate(_list(fields["micro_level"], micro_path)):
        entry_path = f"{micro_path}[{i}]"
        line, kind = _pair(entry, entry_path)
        micro_level.append((_int(line, f"{entry_path}[0]"), _kind(kind, f"{entry_path}[1]")))

    macro_path = f"{path}.macro_level"
    macro_level = []
    for i, entry in enumerate(_list(fields["macro_level"], macro_path)):
        entry_path = f"{macro_path}[{i}]"
        kind, fraction = _pair(entry, entry_path)
        macro_level.append((_kind(kind, f"{entry_path}[0]"), _float(fraction, f"{entry_path}[1]")))

    return FileInfo(micro_level=micro_level, macro_level=macro_level)


def layer_of_json(node: Any, strict: bool = True) -> Layer:
    """
    Convert a JSON tree back into a layer.

    Args:
        node: Tree from ``parse_json`` (or plain dicts and lists)
        strict: Reject fields that are not part of the format

    Raises:
        LayerDecodeError: or one of its subclasses, nothing is returned
            for a partially valid tree
    """
    fields = _fields(node, "$", LAYER_FIELDS, strict)

    files = []
    for i, entry in enumerate(_list(fields["files"], "$.files")):
        entry_path = f"$.files[{i}]"
        filename, finfo = _pair(entry, entry_path)
        files.append((
            _str(filename, f"{entry_path}[0]"),
            file_info_of_json(finfo, f"{entry_path}[1]", strict),
        ))

    kinds = []
    for i, entry in enumerate(_list(fields["kinds"], "$.kinds")):
        entry_path = f"$.kinds[{i}]"
        kind, color = _pair(entry, entry_path)
        kinds.append((_kind(kind, f"{entry_path}[0]"), _str(color, f"{entry_path}[1]")))

    return Layer(files=files, kinds=kinds)


def loads(text: str, strict: bool = True) -> Layer:
    return layer_of_json(parse_json(text), strict=strict)
