"""Shared fixtures for timeline segmenter tests."""

import itertools

import pytest

from timeline_segmenter.models import Segment, Timer
from timeline_segmenter.partition import SegmentPartitioner


def build_timer(start, ends, timer_id="timer_1", name="Timer"):
    """Build a timer whose segments end at the given boundaries."""
    segments = tuple(
        Segment(id=f"seg_{i + 1}", title=f"Segment {i + 1}", color="#1976d2", end=end)
        for i, end in enumerate(ends)
    )
    return Timer(id=timer_id, name=name, start=start, end=ends[-1], segments=segments)


@pytest.fixture
def partitioner():
    """Create a SegmentPartitioner with predictable ids."""
    counter = itertools.count(1)
    return SegmentPartitioner(id_factory=lambda prefix: f"{prefix}_{next(counter)}")


@pytest.fixture
def make_timer():
    """Factory for timers with the given start and segment ends."""
    return build_timer
