"""
Client-local key/value persistence.

A single JSON file holding string keys, the way a browser keeps
localStorage. Used for the pending verification email/name and the
API session cookies.
"""

import json
import logging
import tempfile
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class LocalStorage:
    """
    JSON-file backed key/value store.

    With path=None the store lives only in memory, which is what tests
    and one-off scripts want.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path).expanduser() if path is not None else None
        self._memory: dict[str, Any] = {}

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def _load(self) -> dict[str, Any]:
        if self._path is None:
            return dict(self._memory)
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read local storage at {self._path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, Any]) -> None:
        if self._path is None:
            self._memory = dict(data)
            return
        self._atomic_write(self._path, data)

    def _atomic_write(self, path: Path, data: dict[str, Any]) -> None:
        """Write to a temp file beside path, then swap it in."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w", dir=path.parent, suffix=".tmp", delete=False, encoding="utf-8"
        ) as tf:
            json.dump(data, tf, indent=2)
            temp_path = Path(tf.name)

        try:
            temp_path.replace(path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            logger.error(f"Failed to save local storage to {path}")
            raise

    def get_item(self, key: str) -> Optional[Any]:
        return self._load().get(key)

    def set_item(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def keys(self) -> list[str]:
        return list(self._load().keys())

    def clear(self) -> None:
        self._save({})
