import json
import os
from typing import Dict, Optional

from obd_sampler.data_processing.exceptions import StorageError
from obd_sampler.infrastructure.interfaces import IKeyValueStore
from obd_sampler.settings import STORAGE_FILE_NAME, default_storage_dir
from obd_sampler.utils.io import ensure_folder


class LocalStorage(IKeyValueStore):
    """
    Key/value store kept in a single JSON file.
    Every write rewrites the whole file; the last write wins.
    """

    def __init__(self, storage_dir: Optional[str] = None, file_name: str = STORAGE_FILE_NAME):
        self.storage_dir = storage_dir or default_storage_dir()
        self.file_path = os.path.join(self.storage_dir, file_name)

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.file_path):
            return {}
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Local storage is corrupt: {self.file_path}", {"error": str(e)}) from e
        if not isinstance(data, dict):
            raise StorageError(f"Local storage is corrupt: {self.file_path}")
        return data

    def _save(self, data: Dict[str, str]) -> None:
        ensure_folder(self.storage_dir)
        with open(self.file_path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)
        print(f"[IO] Saved '{key}' to {self.file_path}")

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
            print(f"[IO] Removed '{key}' from {self.file_path}")


class MemoryStorage(IKeyValueStore):
    """In-process store, used when nothing should touch the disk"""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)
