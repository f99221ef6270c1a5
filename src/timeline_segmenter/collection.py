"""Timer collection state container."""

import logging
from typing import Callable, Iterator, List, Optional, Tuple

from .models import Timer
from .partition import SegmentPartitioner
from .storage import MemorySnapshotStore, SnapshotStore, dumps_timers, loads_timers

logger = logging.getLogger(__name__)


class TimerCollection:
    """
    Owns the list of timers and the timer currently open for editing.

    Every mutating operation looks its timer up by id, replaces it with the
    result of the matching SegmentPartitioner method and, when anything
    changed, writes the whole collection to the snapshot store. Unknown ids
    are ignored. Storage failures are logged and never raised.
    """

    def __init__(self,
                 store: Optional[SnapshotStore] = None,
                 partitioner: Optional[SegmentPartitioner] = None):
        """
        Initialize TimerCollection and restore the last snapshot.

        Args:
            store: Snapshot storage (default: in-memory)
            partitioner: Segment algorithms (default: SegmentPartitioner())
        """
        self.store = store if store is not None else MemorySnapshotStore()
        self.partitioner = partitioner or SegmentPartitioner()
        self._timers: List[Timer] = self._restore()
        self._editing_timer_id: Optional[str] = None

    @property
    def timers(self) -> Tuple[Timer, ...]:
        return tuple(self._timers)

    @property
    def editing_timer_id(self) -> Optional[str]:
        return self._editing_timer_id

    @property
    def editing_timer(self) -> Optional[Timer]:
        """Timer open for editing, if any."""
        if self._editing_timer_id is None:
            return None
        return self.get(self._editing_timer_id)

    def get(self, timer_id: str) -> Optional[Timer]:
        for timer in self._timers:
            if timer.id == timer_id:
                return timer
        return None

    def __len__(self) -> int:
        return len(self._timers)

    def __iter__(self) -> Iterator[Timer]:
        return iter(tuple(self._timers))

    def __contains__(self, timer_id: object) -> bool:
        return any(timer.id == timer_id for timer in self._timers)

    def add_timer(self) -> Timer:
        """Append a default timer and return it."""
        timer = self.partitioner.create_timer()
        self._timers.append(timer)
        logger.debug(f"Added timer {timer.id}")
        self._persist()
        return timer

    def remove_timer(self, timer_id: str) -> None:
        remaining = [timer for timer in self._timers if timer.id != timer_id]
        if len(remaining) == len(self._timers):
            logger.debug(f"Timer {timer_id} not found")
            return

        self._timers = remaining
        if self._editing_timer_id == timer_id:
            self._editing_timer_id = None
        logger.debug(f"Removed timer {timer_id}")
        self._persist()

    def rename(self, timer_id: str, name: str) -> None:
        self._update(timer_id, lambda t: self.partitioner.rename(t, name))

    def add_segment(self, timer_id: str) -> None:
        self._update(timer_id, self.partitioner.add_segment)

    def remove_segment(self, timer_id: str, segment_id: str) -> None:
        self._update(timer_id, lambda t: self.partitioner.remove_segment(t, segment_id))

    def set_start(self, timer_id: str, value: str) -> None:
        self._update(timer_id, lambda t: self.partitioner.set_start(t, value))

    def set_end(self, timer_id: str, value: str) -> None:
        self._update(timer_id, lambda t: self.partitioner.set_end(t, value))

    def set_segment_field(self, timer_id: str, segment_id: str, field: str, value: str) -> None:
        self._update(
            timer_id,
            lambda t: self.partitioner.set_segment_field(t, segment_id, field, value),
        )

    def open_editor(self, timer_id: str) -> None:
        if timer_id not in self:
            logger.debug(f"Cannot open editor, timer {timer_id} not found")
            return
        self._editing_timer_id = timer_id

    def close_editor(self) -> None:
        self._editing_timer_id = None

    def _update(self, timer_id: str, updater: Callable[[Timer], Timer]) -> None:
        """Replace one timer with updater(timer), keeping every position."""
        for i, timer in enumerate(self._timers):
            if timer.id == timer_id:
                break
        else:
            logger.debug(f"Timer {timer_id} not found")
            return

        updated = updater(timer)
        if updated == timer:
            return

        self._timers[i] = updated
        self._persist()

    def _restore(self) -> List[Timer]:
        """Load the stored snapshot, falling back to an empty collection."""
        try:
            text = self.store.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read timer snapshot: {e}")
            return []

        if text is None:
            return []

        try:
            timers = loads_timers(text)
        except ValueError as e:
            logger.warning(f"Ignoring unreadable timer snapshot: {e}")
            return []

        logger.debug(f"Restored {len(timers)} timers")
        return timers

    def _persist(self) -> None:
        try:
            self.store.write(dumps_timers(self._timers))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to save timer snapshot: {e}")
