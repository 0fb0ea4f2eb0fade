from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from cookbook.client.errors import StorageError
from cookbook.client.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Keeps every key in one JSON object on disk.
    Two processes sharing the file race; the last writer wins.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    def get_item(self, key: str) -> Optional[str]:
        value = self._read(key).get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._read(key)
        items[key] = value
        self._write(key, items)

    def remove_item(self, key: str) -> None:
        items = self._read(key)
        if items.pop(key, None) is not None:
            self._write(key, items)

    def _read(self, key: str) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as error:
            raise StorageError(key, str(error)) from error
        if not isinstance(data, dict):
            raise StorageError(key, f"{self._path} does not hold a JSON object")
        return data

    def _write(self, key: str, items: dict[str, object]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(items, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as error:
            raise StorageError(key, str(error)) from error
        logger.debug("Wrote %s to %s", key, self._path)
