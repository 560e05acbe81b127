"""
Visualization

Terminal display and static charts of layers. The treemap itself is drawn by
the code map front end, which reads the layer index through the API.
"""

from .display import Colors, colored, display_layer_stats, display_layer_set

__all__ = [
    "Colors",
    "colored",
    "display_layer_stats",
    "display_layer_set",
]
