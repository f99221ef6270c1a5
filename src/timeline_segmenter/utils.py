"""Clock arithmetic utilities for timeline segmenter."""

import re
import uuid

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE = MINUTES_PER_DAY - 1


def generate_id(prefix: str = "id") -> str:
    """
    Generate an opaque identifier.

    Args:
        prefix: Short tag describing what the id belongs to

    Returns:
        Identifier such as "seg_3f9a1c2b7d10"
    """
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class Clock:
    """Utility class for "HH:MM" values on a wrapping 24-hour clock.

    Every duration is a forward distance that may cross midnight, so
    comparisons go through rel_minutes/diff_minutes_wrap rather than
    comparing strings or raw minute-of-day values.
    """

    TIME_PATTERN = re.compile(r'^(\d{1,2}):(\d{1,2})$')
    STRICT_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})$')

    @classmethod
    def parse(cls, text: str) -> str:
        """
        Validate user input and return it as a canonical ClockTime.

        Args:
            text: Time string in format "H:MM" or "HH:MM"

        Returns:
            Zero-padded "HH:MM" string

        Raises:
            ValueError: If the string is not a valid 24-hour time

        Examples:
            >>> Clock.parse("9:05")
            '09:05'
        """
        match = cls.STRICT_PATTERN.match(text.strip()) if text else None

        if not match:
            raise ValueError(
                f"Invalid time format: {text}. "
                f"Expected format: HH:MM (e.g., 09:30)"
            )

        hours, minutes = map(int, match.groups())

        if hours >= 24 or minutes >= 60:
            raise ValueError(
                f"Invalid time values in {text}: "
                f"hours must be < 24 and minutes < 60"
            )

        return f"{hours:02d}:{minutes:02d}"

    @classmethod
    def to_minutes(cls, t: str) -> int:
        """
        Convert "HH:MM" to minutes since midnight.

        Hours are reduced modulo 24 and minutes modulo 60.

        Raises:
            ValueError: If the string is not made of two numeric fields

        Examples:
            >>> Clock.to_minutes("10:30")
            630
        """
        match = cls.TIME_PATTERN.match(t)
        if not match:
            raise ValueError(f"Invalid time format: {t}. Expected format: HH:MM")

        hours, minutes = map(int, match.groups())
        return (hours % 24) * 60 + (minutes % 60)

    @staticmethod
    def to_hhmm(minutes: int) -> str:
        """
        Format minutes since midnight as "HH:MM", wrapping out-of-range values.

        Examples:
            >>> Clock.to_hhmm(-5)
            '23:55'
            >>> Clock.to_hhmm(1500)
            '01:00'
        """
        wrapped = minutes % MINUTES_PER_DAY
        hours, mins = divmod(wrapped, 60)
        return f"{hours:02d}:{mins:02d}"

    @classmethod
    def diff_minutes_wrap(cls, a: str, b: str) -> int:
        """
        Minutes to move forward from a to reach b, crossing midnight if needed.

        Examples:
            >>> Clock.diff_minutes_wrap("22:00", "01:00")
            180
        """
        am = cls.to_minutes(a)
        bm = cls.to_minutes(b)
        if bm < am:
            bm += MINUTES_PER_DAY
        return bm - am

    @classmethod
    def rel_minutes(cls, start: str, t: str) -> int:
        """
        Offset of t from start on the same wrapping clock.

        Examples:
            >>> Clock.rel_minutes("23:30", "00:15")
            45
        """
        return cls.diff_minutes_wrap(start, t)

    @classmethod
    def rel_to_hhmm(cls, start: str, rel: int) -> str:
        """Convert an offset from start back to an absolute "HH:MM"."""
        return cls.to_hhmm(cls.to_minutes(start) + max(0, rel))

    @classmethod
    def clamp_time(cls, t: str) -> str:
        """Normalize a time into the [00:00, 23:59] range."""
        return cls.to_hhmm(min(max(cls.to_minutes(t), 0), LAST_MINUTE))

    @classmethod
    def midpoint_time(cls, a: str, b: str) -> str:
        """
        Time halfway from a to b in the forward direction, rounded down.

        Examples:
            >>> Clock.midpoint_time("09:00", "12:00")
            '10:30'
            >>> Clock.midpoint_time("23:00", "01:00")
            '00:00'
        """
        return cls.to_hhmm(cls.to_minutes(a) + cls.diff_minutes_wrap(a, b) // 2)

    @staticmethod
    def format_duration(minutes: int) -> str:
        """
        Format a minute count for display.

        Examples:
            >>> Clock.format_duration(90)
            '1h 30m'
            >>> Clock.format_duration(45)
            '45m'
        """
        hours, mins = divmod(max(0, minutes), 60)
        return f"{hours}h {mins}m" if hours > 0 else f"{mins}m"

    @classmethod
    def duration_label(cls, a: str, b: str) -> str:
        """Human-readable forward duration from a to b."""
        return cls.format_duration(cls.diff_minutes_wrap(a, b))
