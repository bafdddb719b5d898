"""JSON file persistence for the last fetched stock payload."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from .config import STOCK_FILE
from .errors import PersistenceError

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Single-slot store: one JSON document, last write wins.

    There is no locking; overlapping poll cycles may race on the file.
    """

    def __init__(self, path: Union[str, Path] = STOCK_FILE):
        self.path = Path(path)

    def load(self) -> Optional[Any]:
        """Return the stored payload, or None if there is no usable snapshot."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.debug("No snapshot at %s", self.path)
            return None
        except OSError as e:
            logger.warning("Could not read snapshot %s: %s", self.path, e)
            return None

        try:
            return json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Ignoring invalid snapshot %s: %s", self.path, e)
            return None

    def save(self, payload: Any) -> None:
        """Overwrite the snapshot with ``payload`` (sorted keys, 2-space indent)."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            text = json.dumps(payload, indent=2, sort_keys=True)
            self.path.write_text(text, encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to save snapshot to {self.path}: {e}") from e
        logger.debug("Saved snapshot to %s", self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


__all__ = ["SnapshotStore"]
