"""Loading of the bridge's timing and target settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from chatgpt_desktop_mcp.models import AutomationSettings


class SettingsManager:
    """Reads automation settings from a JSON file."""

    def __init__(self, storage_path: Optional[Path] = None) -> None:
        package_root = Path(__file__).resolve().parent
        self._storage_path = Path(storage_path) if storage_path else package_root / "settings.json"
        self._last_error: Optional[str] = None

    @property
    def storage_path(self) -> Path:
        """Absolute path to the settings file."""
        return self._storage_path

    @property
    def last_error(self) -> Optional[str]:
        """Why the last load fell back to defaults, if it did."""
        return self._last_error

    def load(self) -> AutomationSettings:
        """Load settings from disk, returning defaults if the file is missing or corrupt.

        Values that parse but are out of range raise ValueError; a bad timing
        value should stop the server rather than silently run with defaults.
        """
        self._last_error = None
        path = self.storage_path
        if not path.exists():
            return AutomationSettings()

        try:
            content = path.read_text(encoding="utf-8")
            raw_data = json.loads(content)
            if not isinstance(raw_data, dict):
                raise TypeError("Settings file has invalid structure")
        except (OSError, TypeError, json.JSONDecodeError) as exc:
            # Keep the unreadable file around for inspection.
            self._last_error = f"{path}: {exc}"
            backup_path = path.with_suffix(".bak")
            try:
                path.replace(backup_path)
            except OSError:
                pass
            return AutomationSettings()

        return AutomationSettings.from_dict(raw_data)
