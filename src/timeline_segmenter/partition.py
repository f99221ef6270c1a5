"""Segment partition algorithms for timeline segmenter."""

import logging
from dataclasses import replace
from typing import Callable, List, Optional

from .models import Segment, Timer
from .utils import Clock, generate_id

logger = logging.getLogger(__name__)

DEFAULT_TIMER_NAME = "Timer"
DEFAULT_START = "09:00"
DEFAULT_END = "12:00"
FIRST_SEGMENT_COLOR = "#1976d2"
NEW_SEGMENT_COLOR = "#9c27b0"
START_PUSH_MINUTES = 15

EDITABLE_FIELDS = ("end", "title", "color")


class SegmentPartitioner:
    """
    Edits the segment partition of a single timer.

    Every method returns a new Timer and leaves its argument untouched.
    Out-of-range times are clamped toward the nearest legal value; unknown
    ids leave the timer unchanged.
    """

    def __init__(self,
                 first_color: str = FIRST_SEGMENT_COLOR,
                 new_color: str = NEW_SEGMENT_COLOR,
                 start_push: int = START_PUSH_MINUTES,
                 id_factory: Optional[Callable[[str], str]] = None):
        """
        Initialize SegmentPartitioner.

        Args:
            first_color: Color of the segment every new timer starts with
            new_color: Color given to segments created by add_segment
            start_push: Minutes the first boundary is pushed past a new start
                that overruns it
            id_factory: Callable taking a prefix and returning a fresh id
        """
        self.first_color = first_color
        self.new_color = new_color
        self.start_push = start_push
        self.id_factory = id_factory or generate_id

    def create_timer(self,
                     name: str = DEFAULT_TIMER_NAME,
                     start: str = DEFAULT_START,
                     end: str = DEFAULT_END) -> Timer:
        """Create a timer with one segment spanning its whole window."""
        start = Clock.clamp_time(start)
        end = Clock.rel_to_hhmm(start, max(1, Clock.rel_minutes(start, Clock.clamp_time(end))))
        segment = Segment(
            id=self.id_factory("seg"),
            title="Segment 1",
            color=self.first_color,
            end=end,
        )
        return Timer(
            id=self.id_factory("timer"),
            name=name,
            start=start,
            end=end,
            segments=(segment,),
        )

    def rename(self, timer: Timer, name: str) -> Timer:
        return replace(timer, name=name)

    def add_segment(self, timer: Timer) -> Timer:
        """
        Split the last segment in two.

        The former last segment is shrunk to end at the midpoint of its span
        and a new segment is appended from there to the original end.

        Args:
            timer: Timer to split

        Returns:
            Timer with one more segment, or the same timer when the last
            segment is only 1 minute long
        """
        segments = list(timer.segments)
        last = segments[-1]
        prev_start = timer.offset(timer.segment_start(-1))
        last_end = timer.offset(last.end)

        if last_end - prev_start < 2:
            logger.debug(f"Last segment of timer {timer.id} is too short to split")
            return timer

        mid = prev_start + (last_end - prev_start) // 2

        new_end = Clock.rel_to_hhmm(timer.start, last_end)
        segments[-1] = replace(last, end=Clock.rel_to_hhmm(timer.start, mid))
        segments.append(Segment(
            id=self._unique_segment_id(timer),
            title=f"Segment {len(segments) + 1}",
            color=self.new_color,
            end=new_end,
        ))
        return replace(timer, end=new_end, segments=tuple(segments))

    def remove_segment(self, timer: Timer, segment_id: str) -> Timer:
        """
        Remove a segment.

        Removing the last segment moves the timer end back to the new last
        boundary. Removing any other segment leaves boundaries as they are,
        so the following segment takes over the removed span. The only
        segment of a timer cannot be removed.
        """
        idx = timer.index_of(segment_id)
        if idx == -1:
            logger.debug(f"Segment {segment_id} not found in timer {timer.id}")
            return timer

        if len(timer.segments) == 1:
            logger.debug(f"Refusing to remove the only segment of timer {timer.id}")
            return timer

        segments = timer.segments[:idx] + timer.segments[idx + 1:]
        if idx == len(timer.segments) - 1:
            return replace(timer, end=segments[-1].end, segments=segments)
        return replace(timer, segments=segments)

    def set_start(self, timer: Timer, new_start: str) -> Timer:
        """
        Move the timer start.

        Moving the start forward onto or past the first boundary pushes that
        boundary to start_push minutes after the new start, capped at the
        timer end. Later boundaries the move overran are pushed along so
        every segment keeps at least one minute. Moving the start earlier
        keeps every boundary where it is.

        Args:
            timer: Timer to edit
            new_start: Requested start time

        Returns:
            Timer starting at the clamped new start
        """
        value = Clock.clamp_time(new_start)
        shift = timer.offset(value)
        offsets = [timer.offset(segment.end) for segment in timer.segments]

        if shift > offsets[-1]:
            # New start lies outside the window: it only grows earlier.
            return replace(timer, start=value)

        relative = [offset - shift for offset in offsets]
        if relative[0] <= 0:
            relative[0] = self.start_push
        length = max(relative[-1], len(relative))
        relative = self._fit_boundaries(relative, length)

        segments = tuple(
            replace(segment, end=Clock.rel_to_hhmm(value, offset))
            for segment, offset in zip(timer.segments, relative)
        )
        return replace(timer, start=value, end=segments[-1].end, segments=segments)

    def set_end(self, timer: Timer, new_end: str) -> Timer:
        """Move the timer end, keeping the last segment at least 1 minute long."""
        value = Clock.clamp_time(new_end)
        end_rel = max(
            timer.offset(value),
            timer.offset(timer.segment_start(-1)) + 1,
        )
        end = Clock.rel_to_hhmm(timer.start, end_rel)

        segments = timer.segments[:-1] + (replace(timer.segments[-1], end=end),)
        return replace(timer, end=end, segments=segments)

    def set_segment_field(self, timer: Timer, segment_id: str, field: str, value: str) -> Timer:
        """
        Change one field of a segment.

        A new end is held strictly between the segment's own start and the
        end of the following segment. Title and color are stored verbatim.
        """
        idx = timer.index_of(segment_id)
        if idx == -1 or field not in EDITABLE_FIELDS:
            logger.debug(f"Ignoring edit of {field!r} on segment {segment_id} in timer {timer.id}")
            return timer

        segment = timer.segments[idx]
        is_last = idx == len(timer.segments) - 1

        if field == "end":
            rel = timer.offset(Clock.clamp_time(value))
            rel = max(rel, timer.offset(timer.segment_start(idx)) + 1)
            if not is_last:
                rel = min(rel, timer.offset(timer.segments[idx + 1].end) - 1)
            segment = replace(segment, end=Clock.rel_to_hhmm(timer.start, rel))
        else:
            segment = replace(segment, **{field: value})

        segments = timer.segments[:idx] + (segment,) + timer.segments[idx + 1:]
        if is_last:
            return replace(timer, end=segment.end, segments=segments)
        return replace(timer, segments=segments)

    @staticmethod
    def _fit_boundaries(relative: List[int], length: int) -> List[int]:
        """
        Adjust boundary offsets so they climb by at least one minute.

        The last offset is pinned to length; earlier offsets are pushed up
        past their predecessor and then capped below their successor.
        """
        fitted = list(relative)
        fitted[-1] = length

        floor = 0
        for i in range(len(fitted)):
            fitted[i] = max(fitted[i], floor + 1)
            floor = fitted[i]

        fitted[-1] = length
        for i in range(len(fitted) - 2, -1, -1):
            fitted[i] = min(fitted[i], fitted[i + 1] - 1)

        return fitted

    def _unique_segment_id(self, timer: Timer) -> str:
        existing = {segment.id for segment in timer.segments}
        segment_id = self.id_factory("seg")
        while segment_id in existing:
            segment_id = self.id_factory("seg")
        return segment_id
