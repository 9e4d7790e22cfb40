"""Local key-value storage - Imperative Shell.

A single JSON document on disk, rewritten atomically on every write.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


class JsonFileStore:
    """Key-value store backed by one JSON file.

    Document structure:
    {
        "<key>": <JSON value>,
        ...
    }
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the store.

        Args:
            path: JSON file location; `~` is expanded and parent
                directories are created on first write
        """
        self.path = Path(path).expanduser()

    def _read_all(self) -> dict[str, Any]:
        """Read the whole document; a missing or corrupt file reads as empty."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read state file %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("State file %s is not a JSON object, ignoring", self.path)
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for `key`, or `default`."""
        return self._read_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under `key`.

        This method performs file I/O.

        Raises:
            TypeError: If the value is not JSON-serializable
            OSError: If the file cannot be written
        """
        data = self._read_all()
        data[key] = value
        encoded = json.dumps(data, indent=2, sort_keys=True)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(encoded)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
