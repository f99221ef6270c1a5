"""Data models for timeline segmenter."""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Tuple

from .utils import Clock


def _require_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"Field '{key}' must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class Segment:
    """A labeled slice of a timer; it starts where the previous one ends."""
    id: str
    title: str
    color: str
    end: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "color": self.color,
            "end": self.end,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Segment":
        if not isinstance(data, dict):
            raise ValueError(f"Segment must be an object, got {type(data).__name__}")
        return cls(
            id=_require_str(data, "id"),
            title=_require_str(data, "title"),
            color=_require_str(data, "color"),
            end=Clock.parse(_require_str(data, "end")),
        )


@dataclass(frozen=True)
class SegmentSpan:
    """Read-only view of a segment together with its derived start."""
    segment: Segment
    start: str
    end: str

    @property
    def duration_minutes(self) -> int:
        """Forward duration of the span in minutes."""
        return Clock.diff_minutes_wrap(self.start, self.end)

    @property
    def duration_label(self) -> str:
        return Clock.duration_label(self.start, self.end)


@dataclass(frozen=True)
class Timer:
    """
    A named window on the 24-hour clock partitioned into segments.

    Only segment ends are stored. The start of segment i is the timer start
    for i == 0 and the end of segment i - 1 otherwise; use segment_start()
    instead of caching it anywhere.
    """
    id: str
    name: str
    start: str
    end: str
    segments: Tuple[Segment, ...]

    def segment_start(self, index: int) -> str:
        """
        Start boundary of the segment at index.

        Args:
            index: Position of the segment (negative indexes allowed)

        Returns:
            ClockTime where the segment begins
        """
        if index < 0:
            index += len(self.segments)
        if not 0 <= index < len(self.segments):
            raise IndexError(f"Segment index out of range: {index}")
        return self.start if index == 0 else self.segments[index - 1].end

    def index_of(self, segment_id: str) -> int:
        """Position of the segment with segment_id, or -1 if absent."""
        for i, segment in enumerate(self.segments):
            if segment.id == segment_id:
                return i
        return -1

    def offset(self, t: str) -> int:
        """Offset of t from this timer's start."""
        return Clock.rel_minutes(self.start, t)

    def spans(self) -> Iterator[SegmentSpan]:
        """Iterate segments with their derived start boundaries."""
        for i, segment in enumerate(self.segments):
            yield SegmentSpan(segment=segment, start=self.segment_start(i), end=segment.end)

    @property
    def duration_minutes(self) -> int:
        return Clock.diff_minutes_wrap(self.start, self.end)

    @property
    def duration_label(self) -> str:
        return Clock.duration_label(self.start, self.end)

    def validate(self) -> None:
        """
        Check the partition invariants.

        Raises:
            ValueError: Describing the first invariant that does not hold
        """
        if not self.segments:
            raise ValueError(f"Timer {self.id} has no segments")

        if self.segments[-1].end != self.end:
            raise ValueError(
                f"Timer {self.id}: last segment ends at {self.segments[-1].end} "
                f"but timer ends at {self.end}"
            )

        previous = 0
        for i, segment in enumerate(self.segments):
            current = self.offset(segment.end)
            if current < previous + 1:
                raise ValueError(
                    f"Timer {self.id}: segment {i + 1} ({segment.end}) must end "
                    f"at least 1 minute after {self.segment_start(i)}"
                )
            previous = current

        ids = [segment.id for segment in self.segments]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Timer {self.id} has duplicate segment ids")

    def is_valid(self) -> bool:
        try:
            self.validate()
        except ValueError:
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "start": self.start,
            "end": self.end,
            "segments": [segment.to_dict() for segment in self.segments],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Timer":
        """
        Build a Timer from its JSON mapping.

        Raises:
            ValueError: If a field is missing or has the wrong shape
        """
        if not isinstance(data, dict):
            raise ValueError(f"Timer must be an object, got {type(data).__name__}")

        segments = data.get("segments")
        if not isinstance(segments, list):
            raise ValueError("Field 'segments' must be a list")

        return cls(
            id=_require_str(data, "id"),
            name=_require_str(data, "name"),
            start=Clock.parse(_require_str(data, "start")),
            end=Clock.parse(_require_str(data, "end")),
            segments=tuple(Segment.from_dict(item) for item in segments),
        )

    def __repr__(self) -> str:
        """String representation of Timer."""
        return (
            f"Timer(id={self.id!r}, name={self.name!r}, start={self.start}, "
            f"end={self.end}, segments={len(self.segments)})"
        )
