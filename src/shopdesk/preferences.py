"""Device-local preferences persisted as a small JSON file."""

import json
from pathlib import Path
from typing import Any, Optional

from shopdesk.config.logging import get_logger
from shopdesk.config.settings import default_prefs_path

logger = get_logger(__name__)

SKIP_DELETE_WARNING = "skipDeleteWarning"


class PreferenceStore:
    """Key-value preferences scoped to this device."""

    def __init__(self, path: Optional[str | Path] = None):
        """Initialize preference store.

        Args:
            path: JSON file to use. If None, checks SHOPDESK_PREFS_PATH, then
                defaults to ~/.shopdesk/preferences.json
        """
        self.path = Path(path) if path is not None else default_prefs_path()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            # A corrupt file behaves like an empty one; the next write replaces it
            logger.warning("preferences_unreadable", path=str(self.path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")

    @property
    def skip_delete_warning(self) -> bool:
        """True once the user asked not to confirm deletions again."""
        return self.get(SKIP_DELETE_WARNING) is True

    @skip_delete_warning.setter
    def skip_delete_warning(self, value: bool) -> None:
        if value:
            self.set(SKIP_DELETE_WARNING, True)
        else:
            self.remove(SKIP_DELETE_WARNING)
