import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from codelayers.core import Layer, LayerSet, build_index_of_layers, load_layer, stat_of_layer


class InMemoryLayerRepository:
    """
    Named layers with their active flags, and the LayerSet built from them.

    Layers keep the order in which they were added, which is also their
    priority in the index. Any change to the layers or the flags triggers a
    full rebuild of the LayerSet.
    """

    def __init__(self, root: str, strict_decode: bool = True) -> None:
        self.root = root
        self.strict_decode = strict_decode
        self.logger = logging.getLogger(__name__)
        self._layers: Dict[str, Tuple[Layer, bool]] = {}
        self._layer_set: Optional[LayerSet] = None

    def add_layer(self, name: str, layer: Layer, active: bool = True) -> None:
        """Register a layer; a layer with the same name is replaced in place."""
        self._layers[name] = (layer, active)
        self._rebuild()

    def load_layer(self, path: str, name: Optional[str] = None, active: bool = True) -> str:
        layer = load_layer(path, strict=self.strict_decode)
        if name is None:
            name = Path(path).stem
        self.add_layer(name, layer, active)
        return name

    def remove_layer(self, name: str) -> None:
        del self._layers[name]
        self._rebuild()

    def set_active(self, name: str, active: bool) -> None:
        layer, _ = self._layers[name]
        self._layers[name] = (layer, active)
        self._rebuild()

    def get_layer(self, name: str) -> Layer:
        return self._layers[name][0]

    def is_active(self, name: str) -> bool:
        return self._layers[name][1]

    def names(self) -> List[str]:
        return list(self._layers)

    def __contains__(self, name: str) -> bool:
        return name in self._layers

    @property
    def layer_set(self) -> LayerSet:
        if self._layer_set is None:
            self._rebuild()
        return self._layer_set

    def _rebuild(self) -> None:
        self._layer_set = build_index_of_layers(self._layers.values(), self.root)
        self.logger.info(
            f"Rebuilt layer index: {len(self._layer_set.active_layers())}/{len(self._layers)} active layers"
        )

    def get_statistics(self) -> List[Dict]:
        return [
            {
                "name": name,
                "active": active,
                "files": len(layer.files),
                "kinds": dict(layer.kinds),
                "stats": stat_of_layer(layer),
            }
            for name, (layer, active) in self._layers.items()
        ]
