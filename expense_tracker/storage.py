"""Key-value blob backends for persisting the expense collection.

Backends store opaque bytes under a string key:

* ``JsonFileStore`` – one ``<key>.json`` file per key inside a directory
* ``InMemoryStore`` – dict backed, for tests and throwaway sessions

Any object with the same ``get``/``set`` pair can be handed to
:class:`expense_tracker.store.ExpenseStore`.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from .config import DATA_DIR
from .errors import PersistenceUnavailable

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[bytes]:
        ...

    def set(self, key: str, value: bytes) -> None:
        ...


class InMemoryStore:
    """Keeps blobs in a dict; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)


class JsonFileStore:
    """Stores each key as ``<directory>/<key>.json``."""

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory or DATA_DIR)

    def get_path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[bytes]:
        target = self.get_path(key)
        if not target.exists():
            return None
        try:
            return target.read_bytes()
        except OSError as exc:
            raise PersistenceUnavailable(f"Could not read {target}: {exc}") from exc

    def set(self, key: str, value: bytes) -> None:
        """Write ``value`` atomically: temp file in the same directory, then rename."""
        target = self.get_path(key)
        tmp_path = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{key}_", suffix='.tmp', dir=self.directory)
            with os.fdopen(fd, 'wb') as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, target)
            tmp_path = None
        except OSError as exc:
            raise PersistenceUnavailable(f"Could not write {target}: {exc}") from exc
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
        logger.debug("Wrote %d bytes to %s", len(value), target)


def get_backend(directory: Optional[Path] = None) -> JsonFileStore:
    """Default backend rooted at the configured data directory."""
    return JsonFileStore(directory or DATA_DIR)
