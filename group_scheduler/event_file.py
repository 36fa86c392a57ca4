import os
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .editing import create_event, new_participant, set_day, upsert_participant
from .exceptions import EventFileError
from .models import Availability, Event, Mode, Participant, Period, TimeRange
from .utils.clock import to_clock_string
from .utils.dates import normalize_date_str, parse_date, parse_time


def _clock(value: Any) -> str:
    """Read a clock value; YAML 1.1 turns unquoted 10:00 into the base-60 int 600."""
    if value is None or value == "":
        return ""
    if isinstance(value, int):
        return to_clock_string(value)
    return parse_time(str(value).strip())


def _time_range_from_dict(data: Any) -> TimeRange:
    if not isinstance(data, dict):
        raise ValueError(f"time range must be a mapping, got {data!r}")
    return TimeRange(start=_clock(data.get("start")), end=_clock(data.get("end")))


def _participant_from_dict(data: Any) -> Participant:
    if not isinstance(data, dict):
        raise ValueError(f"participant must be a mapping, got {data!r}")

    availabilities = []
    seen = set()
    for item in data.get("availabilities") or []:
        if not isinstance(item, dict):
            raise ValueError(f"availability must be a mapping, got {item!r}")
        date_str = normalize_date_str(item["date"])
        if date_str in seen:
            raise ValueError(f"duplicate availability for {date_str} ({data.get('name')})")
        seen.add(date_str)
        availabilities.append(Availability(
            date_str=date_str,
            time_ranges=[_time_range_from_dict(r) for r in item.get("time_ranges") or []],
            memo=str(item.get("memo") or ""),
        ))

    return Participant(
        id=str(data["id"]),
        name=str(data["name"]),
        mode=Mode(str(data.get("mode") or Mode.WHITELIST.value).lower()),
        availabilities=availabilities,
    )


def event_from_dict(data: Dict[str, Any]) -> Event:
    """Build an Event from its plain-data form.

    Raises:
        EventFileError: If required fields are missing or malformed
    """
    try:
        period = None
        if data.get("period"):
            period = Period(parse_date(data["period"]["start"]), parse_date(data["period"]["end"]))

        return Event(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            candidate_dates=sorted({normalize_date_str(d) for d in data.get("candidate_dates") or []}),
            period=period,
            participants=[_participant_from_dict(p) for p in data.get("participants") or []],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise EventFileError(f"Invalid event data: {e}")


def event_to_dict(event: Event) -> Dict[str, Any]:
    return {
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "candidate_dates": list(event.candidate_dates),
        "period": {
            "start": event.period.start.isoformat(),
            "end": event.period.end.isoformat(),
        } if event.period else None,
        "participants": [
            {
                "id": p.id,
                "name": p.name,
                "mode": p.mode.value,
                "availabilities": [
                    {
                        "date": a.date_str,
                        "time_ranges": [{"start": r.start, "end": r.end} for r in a.time_ranges],
                        "memo": a.memo,
                    }
                    for a in p.availabilities
                ],
            }
            for p in event.participants
        ],
    }


def load_event(path: Path) -> Event:
    """Load an event from a YAML file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise EventFileError(f"Event file not found: {path}")
    except (OSError, yaml.YAMLError) as e:
        raise EventFileError(f"Failed to read event file {path}: {e}")

    if not isinstance(data, dict):
        raise EventFileError(f"Event file {path} does not contain an event")

    return event_from_dict(data)


def save_event(path: Path, event: Event) -> None:
    """Write an event to a YAML file, replacing it as a whole."""
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(event_to_dict(event), f, default_flow_style=False, allow_unicode=True, sort_keys=False)
        os.replace(tmp_path, path)
    except OSError as e:
        raise EventFileError(f"Failed to save event file {path}: {e}")


def sample_event(today: Optional[date] = None) -> Event:
    """Demo event: three participants over three non-contiguous dates."""
    today = today or date.today()
    d1, d2, d3 = (today + timedelta(days=n) for n in (1, 3, 7))
    d1, d2, d3 = d1.isoformat(), d2.isoformat(), d3.isoformat()

    event = create_event(
        "Project sync & dinner",
        [d1, d2, d3],
        description="Next project sync followed by dinner.\nThe candidate dates are spread out.",
    )

    tanaka = new_participant("Tanaka (organizer)", Mode.WHITELIST, participant_id="p1")
    tanaka = set_day(tanaka, d1, [TimeRange("10:00", "18:00")])
    tanaka = set_day(tanaka, d2, [TimeRange("13:00", "")], memo="Free in the afternoon")

    suzuki = new_participant("Suzuki", Mode.BLACKLIST, participant_id="p2")
    suzuki = set_day(suzuki, d1, [TimeRange("09:00", "12:00")], memo="Busy in the morning")

    sato = new_participant("Sato", Mode.WHITELIST, participant_id="p3")
    sato = set_day(sato, d1, [TimeRange("15:00", "")], memo="After 15:00")
    sato = set_day(sato, d2, [TimeRange("", "12:00")], memo="Mornings only")
    sato = set_day(sato, d3, [TimeRange("", "")], memo="Any time")

    for participant in (tanaka, suzuki, sato):
        event = upsert_participant(event, participant)
    return event
