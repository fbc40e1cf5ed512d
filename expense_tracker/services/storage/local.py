"""
Local Key-Value Slot Stores

DESIGN DECISION: The expense collection is small (a few thousand
entries at most), so one JSON document per slot is plenty.

- LocalFileKeyValueStore keeps each slot in <data_dir>/<key>.json and
  replaces it atomically, so a crash mid-write never leaves half a file.
- InMemoryKeyValueStore keeps slots in a dict. Used in tests and when
  the data directory is unavailable.

Both enforce a per-slot size limit, mirroring the quota browsers put
on local storage.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from expense_tracker.services.storage.interface import (
    KeyValueStoreInterface,
    QuotaExceededError,
    StorageReadError,
    StorageWriteError,
)


def _check_quota(key: str, value: str, max_slot_bytes: Optional[int]) -> None:
    if max_slot_bytes is None:
        return
    size = len(value.encode("utf-8"))
    if size > max_slot_bytes:
        raise QuotaExceededError(
            f"Slot {key!r} would hold {size} bytes; limit is {max_slot_bytes}"
        )


class LocalFileKeyValueStore(KeyValueStoreInterface):
    """
    Slot store backed by one file per key.
    """
    
    def __init__(
        self,
        data_dir: Path,
        max_slot_bytes: Optional[int] = None,
    ):
        """
        Initialize the store. The directory is created if missing.
        
        Raises:
            StorageWriteError: If the directory cannot be created
        """
        self._data_dir = Path(data_dir)
        self._max_slot_bytes = max_slot_bytes
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageWriteError(
                f"Cannot create data directory {self._data_dir}: {e}"
            ) from e
    
    def path_for(self, key: str) -> Path:
        """File holding the given slot."""
        return self._data_dir / f"{key}.json"
    
    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Cannot read slot {key!r}: {e}") from e
    
    def set_item(self, key: str, value: str) -> None:
        _check_quota(key, value, self._max_slot_bytes)
        
        path = self.path_for(key)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{key}.", suffix=".tmp", dir=self._data_dir
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageWriteError(f"Cannot write slot {key!r}: {e}") from e
    
    def remove_item(self, key: str) -> None:
        try:
            self.path_for(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageWriteError(f"Cannot remove slot {key!r}: {e}") from e


class InMemoryKeyValueStore(KeyValueStoreInterface):
    """
    Slot store backed by a dict. Contents vanish with the process.
    """
    
    def __init__(self, max_slot_bytes: Optional[int] = None):
        self._slots: dict[str, str] = {}
        self._max_slot_bytes = max_slot_bytes
    
    def get_item(self, key: str) -> Optional[str]:
        return self._slots.get(key)
    
    def set_item(self, key: str, value: str) -> None:
        _check_quota(key, value, self._max_slot_bytes)
        self._slots[key] = value
    
    def remove_item(self, key: str) -> None:
        self._slots.pop(key, None)
    
    def __contains__(self, key: str) -> bool:
        return key in self._slots
