"""Interval arithmetic over the time ranges of a single day.

Ranges are resolved to half-open ``[start, end)`` minute intervals, with an
empty start meaning 00:00 and an empty end meaning 24:00.
"""
from typing import Iterable, List, Tuple

from .models import TimeRange
from .utils.clock import MINUTES_PER_DAY, to_clock_string, to_minutes

Interval = Tuple[int, int]


def resolve(time_range: TimeRange) -> Interval:
    """Resolve a time range to minute bounds."""
    return to_minutes(time_range.start, True), to_minutes(time_range.end, False)


def normalize(ranges: Iterable[TimeRange]) -> List[Interval]:
    """Merge ranges into a minimal, sorted list of disjoint minute intervals.

    Touching ranges merge as well as overlapping ones.

    Example:
        >>> normalize([TimeRange("09:00", "11:00"), TimeRange("10:30", "12:00")])
        [(540, 720)]
    """
    items = sorted((resolve(r) for r in ranges), key=lambda i: i[0])
    if not items:
        return []

    merged: List[Interval] = []
    cur_start, cur_end = items[0]

    for nxt_start, nxt_end in items[1:]:
        if nxt_start <= cur_end:
            cur_end = max(cur_end, nxt_end)
        else:
            merged.append((cur_start, cur_end))
            cur_start, cur_end = nxt_start, nxt_end

    merged.append((cur_start, cur_end))
    return merged


def merge_ranges(ranges: Iterable[TimeRange]) -> List[TimeRange]:
    """Normalize ranges and render them back with explicit HH:MM bounds."""
    return [TimeRange(to_clock_string(s), to_clock_string(e)) for s, e in normalize(ranges)]


def _to_open_range(start: int, end: int) -> TimeRange:
    return TimeRange(
        start="" if start == 0 else to_clock_string(start),
        end="" if end == MINUTES_PER_DAY else to_clock_string(end),
    )


def invert(ranges: Iterable[TimeRange]) -> List[TimeRange]:
    """Return the complement of ``ranges`` within the day.

    Nothing specified inverts to a single all-day range; a range touching
    either end of the day is rendered with an open bound there.

    Example:
        >>> invert([TimeRange("09:00", "12:00")])
        [TimeRange(start='', end='09:00'), TimeRange(start='12:00', end='')]
    """
    merged = normalize(ranges)
    if not merged:
        return [TimeRange("", "")]

    gaps: List[Interval] = []
    cursor = 0
    for start, end in merged:
        if start > cursor:
            gaps.append((cursor, start))
        cursor = max(cursor, end)

    if cursor < MINUTES_PER_DAY:
        gaps.append((cursor, MINUTES_PER_DAY))

    return [_to_open_range(start, end) for start, end in gaps]
