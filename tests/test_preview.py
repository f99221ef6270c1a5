"""Tests for text rendering of timers."""

import dataclasses

import pytest

from timeline_segmenter.preview import TimerPreview


class TestTimerPreview:
    """Test TimerPreview class."""

    @pytest.fixture
    def preview(self):
        return TimerPreview()

    def test_render_single_segment(self, preview, make_timer):
        timer = make_timer("09:00", ["12:00"], name="Morning")

        assert preview.render_timer(timer) == [
            "Morning (3h 0m)",
            "09:00 - Start",
            "  #1976d2 Segment 1 (3h 0m)",
            "12:00 - End",
        ]

    def test_render_hides_last_boundary(self, preview, make_timer):
        """Test that inner boundaries are listed and the last one only as the end."""
        timer = make_timer("23:30", ["23:45", "00:15"])

        assert preview.render_timer(timer) == [
            "Timer (45m)",
            "23:30 - Start",
            "  #1976d2 Segment 1 (15m)",
            "23:45",
            "  #1976d2 Segment 2 (30m)",
            "00:15 - End",
        ]

    def test_render_fallback_titles(self, preview, make_timer):
        timer = make_timer("09:00", ["12:00"], name="")
        segment = dataclasses.replace(timer.segments[0], title="", color="#000")
        timer = dataclasses.replace(timer, segments=(segment,))
        lines = preview.render_timer(timer)

        assert lines[0] == "Timer (3h 0m)"
        assert lines[2] == "  #000 Segment 1 (3h 0m)"

    def test_render_with_ids(self, make_timer):
        preview = TimerPreview(show_ids=True)
        lines = preview.render_timer(make_timer("09:00", ["12:00"]))

        assert lines[0].endswith("[timer_1]")
        assert lines[2].endswith("[seg_1]")

    def test_render_collection_marks_editing(self, preview, make_timer):
        timers = [
            make_timer("09:00", ["12:00"], timer_id="a", name="First"),
            make_timer("13:00", ["14:00"], timer_id="b", name="Second"),
        ]
        text = preview.render_collection(timers, editing_timer_id="b")
        blocks = text.split("\n\n")

        assert len(blocks) == 2
        assert blocks[0].startswith("First (3h 0m)")
        assert blocks[1].startswith("* Second (1h 0m)")

    def test_render_empty_collection(self, preview):
        assert preview.render_collection([]) == ""
