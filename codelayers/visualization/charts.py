"""
Layer Charts

Static charts (base64 encoded PNGs) of layer statistics, for dashboards and
reports.
"""

import base64
import io
import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import is_color_like

DEFAULT_BAR_COLOR = "#34495e"

_GREY_LEVEL = re.compile(r"^gr[ae]y(\d{1,3})$")


@dataclass
class ChartOutput:
    title: str
    png_base64: str
    description: str = ""

    def write_png(self, path: str) -> str:
        with open(path, "wb") as f:
            f.write(base64.b64decode(self.png_base64))
        return path


def to_matplotlib_color(name: Optional[str]) -> str:
    """
    Translate a palette color name to something matplotlib draws.

    Grey levels such as "grey53" become grayscale strings ("0.53"), other
    names ending in a digit ("red3") fall back to their base name.
    """
    if not name:
        return DEFAULT_BAR_COLOR
    lowered = name.lower()
    match = _GREY_LEVEL.match(lowered)
    if match:
        return str(min(int(match.group(1)), 100) / 100)
    if is_color_like(lowered):
        return lowered
    base = lowered.rstrip("0123456789")
    return base if base and is_color_like(base) else DEFAULT_BAR_COLOR


class ChartGenerator:
    def __init__(self):
        self.logger = logging.getLogger(__name__)
        plt.style.use("ggplot")
        plt.rc("font", size=10)
        plt.rc("axes", titlesize=12)
        plt.rc("axes", labelsize=10)

    def _fig_to_base64(self, fig) -> str:
        """Convert matplotlib figure to base64 string."""
        buf = io.BytesIO()
        fig.savefig(buf, format="png", bbox_inches="tight", dpi=100)
        buf.seek(0)
        img_str = base64.b64encode(buf.read()).decode("utf-8")
        plt.close(fig)
        return img_str

    def plot_kind_distribution(self, stats: Dict[str, int], kinds: Dict[str, str],
                               title: str) -> Optional[ChartOutput]:
        """Bar chart of annotated lines per kind, each bar in its kind's color."""
        if not stats:
            return None

        labels = list(stats.keys())
        values = list(stats.values())
        colors = [to_matplotlib_color(kinds.get(kind)) for kind in labels]

        fig, ax = plt.subplots(figsize=(max(6, len(labels) * 0.8), 4))
        bars = ax.bar(labels, values, color=colors, edgecolor="#333333", width=0.6)

        ax.set_title(title)
        ax.set_ylabel("Lines")
        ax.grid(axis="y", linestyle="--", alpha=0.5)

        for bar in bars:
            height = bar.get_height()
            ax.text(bar.get_x() + bar.get_width() / 2., height,
                    f"{int(height)}", ha="center", va="bottom")

        self.logger.debug(f"Plotted {len(labels)} kinds for '{title}'")
        return ChartOutput(title, self._fig_to_base64(fig), "Annotated lines per kind.")
