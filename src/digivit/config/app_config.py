"""Default application paths and settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Factory address of the digiVIT Ethernet module.
DEFAULT_SENSOR_ADDRESS = "192.168.0.145"


@dataclass
class AppPaths:
    """
    Where log files are written.

    ``DIGIVIT_DATA_DIR`` overrides the default (the current working
    directory, which is where the original acquisition script wrote).
    """

    output_dir: Path = field(init=False)

    def __post_init__(self) -> None:
        env_dir = os.environ.get("DIGIVIT_DATA_DIR")
        if env_dir:
            self.output_dir = Path(env_dir).expanduser()
        else:
            self.output_dir = Path.cwd()

    def ensure(self) -> None:
        """Create the output directory if it does not yet exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
