from typing import Optional

MINUTES_PER_DAY = 24 * 60


def to_minutes(clock_value: Optional[str], is_start: bool = True) -> int:
    """Convert an HH:MM string to minutes since midnight.

    An empty or missing value is an open bound: 0 (00:00) for a start,
    1440 (24:00) for an end. Malformed values raise ``ValueError``.
    """
    if not clock_value:
        return 0 if is_start else MINUTES_PER_DAY
    hours, minutes = clock_value.split(":")
    return int(hours) * 60 + int(minutes)


def to_clock_string(minutes: int) -> str:
    """Format minutes since midnight as HH:MM, with 1440 and above as 24:00."""
    if minutes >= MINUTES_PER_DAY:
        return "24:00"
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def describe_range(time_range) -> str:
    """Human readable label for a time range with open bounds."""
    start, end = time_range.start, time_range.end
    if not start and not end:
        return "all day (00:00 - 24:00)"
    if not start:
        return f"until {end}"
    if not end:
        return f"from {start}"
    return f"{start} - {end}"
