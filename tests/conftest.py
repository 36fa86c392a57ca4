import pytest

from group_scheduler.models import Availability, Event, Mode, Participant, TimeRange


DAY = "2025-06-11"


def make_participant(pid, name, mode, ranges_by_date=None, memos=None):
    ranges_by_date = ranges_by_date or {}
    memos = memos or {}
    dates = list(ranges_by_date) + [d for d in memos if d not in ranges_by_date]
    return Participant(
        id=pid,
        name=name,
        mode=mode,
        availabilities=[
            Availability(
                date_str=d,
                time_ranges=[TimeRange(s, e) for s, e in ranges_by_date.get(d, [])],
                memo=memos.get(d, ""),
            )
            for d in dates
        ],
    )


@pytest.fixture
def three_person_event():
    """A whitelists 10-18, B blacklists 09-12, C whitelists from 15."""
    return Event(
        id="evt1",
        title="Planning",
        candidate_dates=[DAY],
        participants=[
            make_participant("a", "A", Mode.WHITELIST, {DAY: [("10:00", "18:00")]}),
            make_participant("b", "B", Mode.BLACKLIST, {DAY: [("09:00", "12:00")]}, memos={DAY: "Busy in the morning"}),
            make_participant("c", "C", Mode.WHITELIST, {DAY: [("15:00", "")]}),
        ],
    )


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    from group_scheduler.config import ConfigManager

    path = tmp_path / "config" / "config.yml"
    monkeypatch.setattr(ConfigManager, "CONFIG_PATH", path)
    return path
