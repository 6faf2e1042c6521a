"""
Session stores for component contexts.

Records are plain ``{"type": tag, "data": {...}}`` dictionaries keyed by a
per-component identifier. Reads and writes are synchronous.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

from ..config import RouterSettings

logger = logger.bind(module="session_store")


def atomic_write_json(
    file_path: Union[str, Path],
    data: dict,
    encoding: str = 'utf-8',
    indent: Optional[int] = 2
) -> None:
    """
    Write JSON data to a file atomically.

    The data is written to a temporary file next to the target, which is
    then renamed over it, so readers see either the old or the new file.

    Raises:
        OSError: If the write or rename operation fails
        TypeError: If the data cannot be serialized to JSON
    """
    file_path = Path(file_path)
    parent_dir = file_path.parent
    parent_dir.mkdir(parents=True, exist_ok=True)

    content = json.dumps(data, indent=indent, ensure_ascii=False)
    temp_path = None
    try:
        fd, temp_path = tempfile.mkstemp(
            dir=parent_dir,
            prefix=f".{file_path.name}.",
            suffix=".tmp",
            text=True
        )
        with os.fdopen(fd, 'w', encoding=encoding) as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, str(file_path))
        logger.debug(f"Atomically wrote {len(content)} chars to {file_path}")
    except (OSError, TypeError) as e:
        if temp_path and os.path.exists(temp_path):
            os.unlink(temp_path)
        logger.error(f"Failed to atomically write to {file_path}: {e}")
        raise


class InMemorySessionStore:
    """Session store that lives as long as the process."""

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        record = self._records.get(key)
        return json.loads(json.dumps(record)) if record is not None else None

    def set(self, key: str, record: Dict[str, Any]) -> None:
        # Round-trip through JSON so stored records look like they would after a reload
        self._records[key] = json.loads(json.dumps(record))

    def remove(self, key: str) -> None:
        self._records.pop(key, None)

    def clear(self) -> None:
        self._records.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._records


class JsonFileSessionStore:
    """
    Session store persisted to a single JSON file.

    The whole file is rewritten on every ``set``; it is meant for a handful
    of component contexts per session, not bulk data.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._records: Dict[str, Dict[str, Any]] = self._load()

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring corrupt session file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring session file {self.path}: top level is not an object")
            return {}
        logger.debug(f"Loaded {len(data)} session records from {self.path}")
        return data

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        return self._records.get(key)

    def set(self, key: str, record: Dict[str, Any]) -> None:
        records = dict(self._records)
        records[key] = record
        atomic_write_json(self.path, records)
        self._records = json.loads(json.dumps(records))

    def remove(self, key: str) -> None:
        if key in self._records:
            records = dict(self._records)
            del records[key]
            atomic_write_json(self.path, records)
            self._records = records

    def clear(self) -> None:
        self._records = {}
        if self.path.exists():
            self.path.unlink()

    def __contains__(self, key: str) -> bool:
        return key in self._records


def create_session_store(settings: Optional[RouterSettings] = None):
    """Build the session store selected by ``settings.session_backend``."""
    settings = settings or RouterSettings.from_config()
    if settings.session_backend == "json":
        if settings.session_path is None:
            raise ValueError("session.path must be set when session.backend is 'json'")
        logger.info(f"Using JSON session store at {settings.session_path}")
        return JsonFileSessionStore(settings.session_path)
    if settings.session_backend != "memory":
        logger.warning(f"Unknown session backend '{settings.session_backend}', using in-memory store")
    return InMemorySessionStore()
