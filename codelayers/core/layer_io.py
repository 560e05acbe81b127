"""
Layer Load/Save

Two encodings, picked by file suffix:
- .json: the documented JSON format, meant to be edited by hand
- anything else: pickle, compact and private to this package

Usage:
    from codelayers.core import load_layer, save_layer

    save_layer(layer, "layers/deadcode.json")
    layer = load_layer("layers/deadcode.json")
"""

import logging
import pickle
from pathlib import Path
from typing import List, Tuple, Union

from . import layer_codec
from .errors import LayerDecodeError
from .layer_model import Layer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

JSON_SUFFIX = ".json"
LAYER_SUFFIXES = (JSON_SUFFIX, ".layer", ".pickle", ".pkl")


def is_json_filename(path: PathLike) -> bool:
    return Path(path).suffix.lower() == JSON_SUFFIX


def load_layer(path: PathLike, strict: bool = True) -> Layer:
    """
    Load a layer file.

    Raises:
        LayerDecodeError: the content is not a valid layer; ``source`` is set
            to the file path
        OSError: the file cannot be read
    """
    logger.info(f"Loading layer: {path}")

    try:
        if is_json_filename(path):
            try:
                text = Path(path).read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                raise LayerDecodeError(f"invalid UTF-8: {e}") from e
            return layer_codec.loads(text, strict=strict)

        with open(path, "rb") as f:
            # A corrupt pickle can raise almost any exception type
            try:
                layer = pickle.load(f)
            except OSError:
                raise
            except Exception as e:
                raise LayerDecodeError(f"not a layer file: {e}") from e
        if not isinstance(layer, Layer):
            raise LayerDecodeError(f"expected a Layer, got {type(layer).__name__}")
        return layer

    except LayerDecodeError as e:
        e.source = str(path)
        raise


def save_layer(layer: Layer, path: PathLike) -> str:
    """Write a layer, creating parent directories. Returns the path written."""
    logger.info(f"Saving layer: {path}")

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)

    if is_json_filename(out):
        with open(out, "w", encoding="utf-8") as f:
            f.write(layer_codec.dumps(layer))
            f.write("\n")
    else:
        with open(out, "wb") as f:
            pickle.dump(layer, f, protocol=pickle.HIGHEST_PROTOCOL)

    return str(out)


def find_layer_files(directory: PathLike) -> List[Path]:
    """Layer files directly inside ``directory``, sorted by name."""
    return sorted(
        p for p in Path(directory).iterdir()
        if p.is_file() and p.suffix.lower() in LAYER_SUFFIXES
    )


def load_layers_from_dir(directory: PathLike, strict: bool = True) -> List[Tuple[str, Layer]]:
    """
    Load every layer file of a directory as (name, layer) pairs.

    A file that fails to decode is skipped with an error logged; the other
    layers still load.
    """
    layers = []
    for path in find_layer_files(directory):
        try:
            layers.append((path.stem, load_layer(path, strict=strict)))
        except LayerDecodeError as e:
            logger.error(f"Skipping {path.name}: {e}")
    return layers
