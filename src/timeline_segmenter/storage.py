"""Snapshot storage for timer collections."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence

from .models import Timer

logger = logging.getLogger(__name__)

STORAGE_KEY = "timers"


def dumps_timers(timers: Sequence[Timer]) -> str:
    """Serialize timers to the JSON snapshot format."""
    return json.dumps([timer.to_dict() for timer in timers], ensure_ascii=False)


def loads_timers(text: str) -> List[Timer]:
    """
    Parse a JSON snapshot.

    Args:
        text: JSON array of timer objects

    Returns:
        List of Timer objects in snapshot order

    Raises:
        ValueError: If the text is not valid JSON, not an array of timers,
            or a timer breaks the partition invariants
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError(f"Snapshot must be a JSON array, got {type(data).__name__}")

    timers = []
    for i, item in enumerate(data, 1):
        try:
            timer = Timer.from_dict(item)
            timer.validate()
        except ValueError as e:
            raise ValueError(f"Error in timer {i}: {e}")
        timers.append(timer)

    ids = [timer.id for timer in timers]
    if len(set(ids)) != len(ids):
        raise ValueError("Snapshot contains duplicate timer ids")

    return timers


class SnapshotStore:
    """Durable home of a single snapshot entry."""

    def read(self) -> Optional[str]:
        """Return the stored snapshot, or None when nothing has been saved."""
        raise NotImplementedError

    def write(self, text: str) -> None:
        """Replace the stored snapshot."""
        raise NotImplementedError


class MemorySnapshotStore(SnapshotStore):
    """Keeps the snapshot in process memory."""

    def __init__(self, initial: Optional[str] = None):
        self.text = initial

    def read(self) -> Optional[str]:
        return self.text

    def write(self, text: str) -> None:
        self.text = text


class FileSnapshotStore(SnapshotStore):
    """Stores the snapshot as <directory>/<key>.json."""

    def __init__(self, directory: Path, key: str = STORAGE_KEY):
        """
        Initialize FileSnapshotStore.

        Args:
            directory: Directory holding the snapshot file
            key: Name of the snapshot entry
        """
        self.directory = Path(directory).expanduser()
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding='utf-8')

    def write(self, text: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

        # Write beside the target and rename so readers never see half a file
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{self.key}_", suffix=".tmp", dir=str(self.directory)
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(text)
            os.replace(temp_name, self.path)
        finally:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
        logger.debug(f"Snapshot written to {self.path}")
