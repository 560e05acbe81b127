"""
Display Module

Terminal output for layers and layer sets.
"""

from __future__ import annotations
from typing import Dict, List, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.layer_model import Layer
    from ..core.layer_index import LayerSet


# =============================================================================
# Terminal Colors
# =============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


# Palette names are matched by prefix, so "grey53" and "red3" get a color too
_PALETTE_PREFIXES = [
    ("red", Colors.RED),
    ("green", Colors.GREEN),
    ("yellow", Colors.YELLOW),
    ("orange", Colors.YELLOW),
    ("blue", Colors.BLUE),
    ("purple", Colors.MAGENTA),
    ("magenta", Colors.MAGENTA),
    ("cyan", Colors.CYAN),
    ("grey", Colors.GRAY),
    ("gray", Colors.GRAY),
    ("white", Colors.WHITE),
]


def colored(text: str, color: str, bold: bool = False) -> str:
    """Apply color to text."""
    style = Colors.BOLD if bold else ""
    return f"{style}{color}{text}{Colors.RESET}"


def palette_color(name: str) -> str:
    """Closest ANSI code for a palette color name."""
    lowered = name.lower()
    for prefix, code in _PALETTE_PREFIXES:
        if lowered.startswith(prefix):
            return code
    return Colors.RESET


# =============================================================================
# Common Display Functions
# =============================================================================

def print_header(title: str, char: str = "=", width: int = 78) -> None:
    """Print a formatted header."""
    print(f"\n{colored(char * width, Colors.CYAN)}")
    print(f"{colored(f' {title} '.center(width), Colors.CYAN, bold=True)}")
    print(f"{colored(char * width, Colors.CYAN)}")


def print_subheader(title: str, char: str = "-", width: int = 78) -> None:
    """Print a formatted subheader."""
    print(f"\n{colored(f' {title} ', Colors.WHITE, bold=True)}")
    print(f"{colored(char * width, Colors.GRAY)}")


# =============================================================================
# Layer Display
# =============================================================================

def display_layer_stats(name: str, layer: "Layer", stats: Dict[str, int],
                        files: Dict[str, int]) -> None:
    """Per-kind line counts as a bar chart, with the number of files."""
    print_header(f"Layer: {name}")
    print(f"  {'Files:':<20} {len(layer.files)}")
    print(f"  {'Kinds:':<20} {len(layer.kinds)}")

    print_subheader("Lines per Kind")
    colors = layer.kinds_mapping()
    total = sum(stats.values())
    for kind, count in sorted(stats.items(), key=lambda x: x[1], reverse=True):
        color = colors.get(kind)
        code = palette_color(color) if color else Colors.RED
        bar = "█" * (min(count * 40 // total, 40) if total else 0)
        label = color if color else "undefined"
        print(f"  {kind:<16} {colored(bar, code)} {count} lines in {files.get(kind, 0)} files ({label})")


def display_layer_set(layer_set: "LayerSet", names: List[str], max_files: int = 20) -> None:
    """Summary of an index: which layers are active and what each file gets."""
    print_header("Layer Index")
    print(f"  {'Root:':<20} {layer_set.root}")
    for name, (layer, active) in zip(names, layer_set.layers):
        status = colored("active", Colors.GREEN) if active else colored("inactive", Colors.GRAY)
        print(f"  {name:<20} {status} ({len(layer.files)} files)")

    if layer_set.unresolved_kinds:
        print(colored(f"\n  Undefined kinds dropped: {', '.join(layer_set.unresolved_kinds)}", Colors.YELLOW))

    files = layer_set.files()
    print_subheader(f"Files ({len(files)})")
    for filename in files[:max_files]:
        lines = layer_set.lines_of(filename)
        macro = layer_set.macro_of(filename)
        print(f"  {filename}")
        print(f"    {len(lines)} annotated lines, macro: "
              + (", ".join(f"{colored(c, palette_color(c))} {v:g}" for v, c in macro) or "-"))
    if len(files) > max_files:
        print(colored(f"  ... {len(files) - max_files} more", Colors.GRAY))
