"""
Timeline Segmenter

Splits a named window on the 24-hour clock into contiguous, labeled,
colored segments and keeps the partition consistent while it is edited.
"""

# Version information
__version__ = "1.0.0"
__author__ = "Your Name"
__email__ = "your.email@example.com"

# Package metadata
__title__ = "timeline-segmenter"
__description__ = "Edit contiguous segment partitions of daily time windows"
__url__ = "https://github.com/yourusername/timeline-segmenter"
__license__ = "MIT"
__copyright__ = "Copyright 2024 Your Name"

# Import main components
from .models import Segment, SegmentSpan, Timer
from .utils import Clock, generate_id
from .partition import SegmentPartitioner
from .storage import (
    SnapshotStore,
    MemorySnapshotStore,
    FileSnapshotStore,
    dumps_timers,
    loads_timers,
)
from .collection import TimerCollection
from .preview import TimerPreview

# Public API
__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__title__",
    "__description__",
    "__url__",
    "__license__",
    "__copyright__",

    # Classes
    "Segment",
    "SegmentSpan",
    "Timer",
    "Clock",
    "SegmentPartitioner",
    "SnapshotStore",
    "MemorySnapshotStore",
    "FileSnapshotStore",
    "TimerCollection",
    "TimerPreview",

    # Functions
    "generate_id",
    "dumps_timers",
    "loads_timers",
]
