"""Copy-on-write edits of events and participants.

Every function returns a new object and leaves its arguments untouched, so an
event can be handed to the aggregator while an edit is being prepared.
"""
import logging
import secrets
import string
from dataclasses import replace
from typing import Iterable, List, Optional, Set

from .exceptions import ParticipantNotFoundError
from .intervals import invert
from .models import Availability, Event, Mode, Participant, Period, TimeRange
from .utils.dates import is_business_day, normalize_date_str, parse_date, sort_dates

logger = logging.getLogger(__name__)


def generate_id(length: int = 10) -> str:
    chars = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(chars) for _ in range(length))


def create_event(title: str, dates: Iterable[str], description: str = "", event_id: Optional[str] = None) -> Event:
    """Create an event over a set of (possibly non-contiguous) candidate dates.

    Raises:
        ValueError: If no dates are given or a date cannot be parsed
    """
    candidate_dates = sort_dates(normalize_date_str(d) for d in dates)
    if not candidate_dates:
        raise ValueError("At least one candidate date is required")

    return Event(
        id=event_id or generate_id(),
        title=title,
        description=description,
        candidate_dates=candidate_dates,
        period=Period(parse_date(candidate_dates[0]), parse_date(candidate_dates[-1])),
        participants=[],
    )


def new_participant(name: str, mode: Mode = Mode.WHITELIST, participant_id: Optional[str] = None) -> Participant:
    name = name.strip()
    if not name:
        raise ValueError("Participant name must not be empty")
    return Participant(id=participant_id or generate_id(8), name=name, mode=Mode(mode))


def set_day(
    participant: Participant,
    date_str: str,
    time_ranges: Optional[List[TimeRange]] = None,
    memo: Optional[str] = None,
) -> Participant:
    """Replace the ranges and/or memo of one date, creating the entry if needed."""
    updated = []
    found = False
    for entry in participant.availabilities:
        if entry.date_str == date_str and not found:
            found = True
            entry = Availability(
                date_str=date_str,
                time_ranges=list(time_ranges) if time_ranges is not None else list(entry.time_ranges),
                memo=memo if memo is not None else entry.memo,
            )
        updated.append(entry)

    if not found:
        updated.append(Availability(date_str=date_str, time_ranges=list(time_ranges or []), memo=memo or ""))

    return replace(participant, availabilities=updated)


def add_time_range(participant: Participant, date_str: str, time_range: TimeRange) -> Participant:
    entry = participant.availability_for(date_str)
    existing = entry.time_ranges if entry is not None else []
    return set_day(participant, date_str, time_ranges=[*existing, time_range])


def remove_time_range(participant: Participant, date_str: str, index: int) -> Participant:
    """Drop the range at ``index`` (0-based) from one date's entry, keeping the memo.

    Raises:
        ValueError: If the date has no range at that position
    """
    entry = participant.availability_for(date_str)
    existing = entry.time_ranges if entry is not None else []
    if not 0 <= index < len(existing):
        raise ValueError(f"No time range #{index + 1} on {date_str} for {participant.name}")
    return set_day(participant, date_str, time_ranges=[r for i, r in enumerate(existing) if i != index])


def rename_participant(participant: Participant, name: str) -> Participant:
    name = name.strip()
    if not name:
        raise ValueError("Participant name must not be empty")
    return replace(participant, name=name)


def apply_bulk(
    participant: Participant,
    dates: Iterable[str],
    time_range: TimeRange,
    weekdays: Optional[Set[int]] = None,
) -> Participant:
    """Append ``time_range`` to every date falling on one of ``weekdays``.

    Weekdays use Monday as 0; when omitted, Monday to Friday are used.
    """
    result = participant
    applied = 0
    for date_str in dates:
        day = parse_date(date_str)
        matches = is_business_day(day) if weekdays is None else day.weekday() in weekdays
        if matches:
            result = add_time_range(result, date_str, time_range)
            applied += 1
    logger.debug("Bulk range %s applied to %d dates for %s", time_range, applied, participant.name)
    return result


def switch_mode(participant: Participant, new_mode: Mode, dates: Iterable[str]) -> Participant:
    """Change a participant's mode, converting entered ranges to their complement.

    When the participant has entered ranges, every date in ``dates`` is
    rebuilt with the inverse of that date's ranges (a date without ranges
    becomes all day) and memos are kept. Entries for other dates are dropped.
    Without entered ranges only the mode changes.
    """
    new_mode = Mode(new_mode)
    if not participant.has_input:
        return replace(participant, mode=new_mode)

    converted = []
    for date_str in dates:
        entry = participant.availability_for(date_str)
        converted.append(Availability(
            date_str=date_str,
            time_ranges=invert(entry.time_ranges if entry is not None else []),
            memo=entry.memo if entry is not None else "",
        ))

    logger.debug("Converted %d dates for %s to %s", len(converted), participant.name, new_mode.value)
    return replace(participant, mode=new_mode, availabilities=converted)


def upsert_participant(event: Event, participant: Participant) -> Event:
    """Replace the participant with the same id, or append a new one."""
    participants = list(event.participants)
    for index, existing in enumerate(participants):
        if existing.id == participant.id:
            participants[index] = participant
            break
    else:
        participants.append(participant)
    return replace(event, participants=participants)


def remove_participant(event: Event, participant_id: str) -> Event:
    return replace(event, participants=[p for p in event.participants if p.id != participant_id])


def find_participant(event: Event, key: str) -> Participant:
    """Look up a participant by id, then by name."""
    for participant in event.participants:
        if participant.id == key:
            return participant
    for participant in event.participants:
        if participant.name == key:
            return participant
    raise ParticipantNotFoundError(f"Participant not found: {key}")
