"""Plain-text rendering of timers."""

from typing import Iterable, List, Optional

from .models import Timer


class TimerPreview:
    """Renders timers as lines of text for terminals and logs."""

    def __init__(self, show_ids: bool = False, indent: str = "  "):
        """
        Initialize TimerPreview.

        Args:
            show_ids: Include timer and segment ids (needed to address them
                from the command line)
            indent: Prefix for segment lines
        """
        self.show_ids = show_ids
        self.indent = indent

    def render_timer(self, timer: Timer) -> List[str]:
        """
        Render one timer.

        The boundary after the last segment is only shown as the end line.

        Args:
            timer: Timer to render

        Returns:
            Lines of text, without trailing newlines
        """
        header = f"{timer.name or 'Timer'} ({timer.duration_label})"
        if self.show_ids:
            header += f" [{timer.id}]"

        lines = [header, f"{timer.start} - Start"]
        spans = list(timer.spans())
        for i, span in enumerate(spans):
            title = span.segment.title or f"Segment {i + 1}"
            line = f"{self.indent}{span.segment.color} {title} ({span.duration_label})"
            if self.show_ids:
                line += f" [{span.segment.id}]"
            lines.append(line)
            if i < len(spans) - 1:
                lines.append(span.end)
        lines.append(f"{timer.end} - End")
        return lines

    def render_collection(self,
                          timers: Iterable[Timer],
                          editing_timer_id: Optional[str] = None) -> str:
        """Render several timers separated by blank lines."""
        blocks = []
        for timer in timers:
            lines = self.render_timer(timer)
            if timer.id == editing_timer_id:
                lines[0] = f"* {lines[0]}"
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)
