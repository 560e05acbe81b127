"""
Application Settings

Environment configuration for the CLI and the API.
"""

import os
from dataclasses import dataclass
from typing import Optional

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class Settings:
    """Application settings from environment."""

    # Directory the layer filenames are relative to
    root: str = "."
    # Layers loaded by the API at start-up
    layer_dir: Optional[str] = None
    # Reject unknown fields in JSON layer files
    strict_decode: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            root=os.path.abspath(os.getenv("CODELAYERS_ROOT", ".")),
            layer_dir=os.getenv("CODELAYERS_LAYER_DIR") or None,
            strict_decode=_env_flag("CODELAYERS_STRICT_DECODE", True),
            log_level=os.getenv("CODELAYERS_LOG_LEVEL", "INFO").upper(),
        )
