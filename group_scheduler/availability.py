from .intervals import resolve
from .models import Mode, Participant, TimeRange


def overlaps(time_range: TimeRange, slot_start: int, slot_end: int) -> bool:
    """Check if a range shares more than a single instant with the slot."""
    range_start, range_end = resolve(time_range)
    return max(range_start, slot_start) < min(range_end, slot_end)


def is_available(participant: Participant, date_str: str, slot_start: int, slot_end: int) -> bool:
    """Decide whether a participant can attend ``[slot_start, slot_end)`` on a date.

    A whitelist participant with nothing entered for the date is unavailable
    all day; a blacklist participant with nothing entered is available all day.
    """
    entry = participant.availability_for(date_str)
    ranges = entry.time_ranges if entry is not None else []

    if participant.mode is Mode.WHITELIST:
        if not ranges:
            return False
        return any(overlaps(r, slot_start, slot_end) for r in ranges)

    if participant.mode is Mode.BLACKLIST:
        if not ranges:
            return True
        return not any(overlaps(r, slot_start, slot_end) for r in ranges)

    raise ValueError(f"Unknown participant mode: {participant.mode}")
