from __future__ import annotations

import os
import tempfile
from pathlib import Path


class Settings:
    """Centralized configuration for the tracker stores."""

    def __init__(self) -> None:
        data_root_default = Path.home() / ".tracker"

        # Application-private directory holding one JSON log per domain.
        self.data_root: Path = Path(
            os.environ.get("TRACKER_DATA_ROOT") or data_root_default
        ).expanduser()
        # Scratch directory for share/export copies.
        self.export_dir: Path = Path(
            os.environ.get("TRACKER_EXPORT_DIR") or tempfile.gettempdir()
        ).expanduser()

        # ---- Fixed file names (not user configurable) ----
        self.workout_filename: str = "workout-log.json"
        self.diet_filename: str = "diet-log.json"
        self.export_timestamp_format: str = "%Y-%m-%d-%H%M%S"

    @property
    def workout_log_path(self) -> Path:
        return self.data_root / self.workout_filename

    @property
    def diet_log_path(self) -> Path:
        return self.data_root / self.diet_filename


settings = Settings()
