"""
File backed key-value store.

All keys live in one JSON object on disk. The file is re-read on every access
so several processes sharing a profile directory see each other's writes, and
rewritten through a temporary file so a crash never leaves half a document.
"""

import json
import os
from pathlib import Path

from loguru import logger

from ai_notebook.persistence.base import KeyValueStore


class JsonFileKeyValueStore(KeyValueStore):
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Ignoring unreadable state file {self.path}: {exc}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring state file {self.path}: top level is not an object")
            return {}
        return {str(key): str(value) for key, value in data.items()}

    def _dump(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data)
