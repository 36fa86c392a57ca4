"""Tests for copy-on-write event and participant edits."""

import pytest
from datetime import date

from group_scheduler.editing import (
    add_time_range, apply_bulk, create_event, find_participant, new_participant,
    remove_participant, remove_time_range, rename_participant, set_day, switch_mode,
    upsert_participant,
)
from group_scheduler.exceptions import ParticipantNotFoundError
from group_scheduler.models import Mode, TimeRange

from .conftest import DAY, make_participant


class TestCreateEvent:
    """Test event creation from candidate dates."""

    def test_sorts_and_deduplicates_dates(self):
        event = create_event("Sync", ["2025-06-13", "2025-06-11", "2025-06-13"])
        assert event.candidate_dates == ["2025-06-11", "2025-06-13"]
        assert event.period.start == date(2025, 6, 11)
        assert event.period.end == date(2025, 6, 13)
        assert event.participants == []

    def test_generates_id(self):
        event = create_event("Sync", ["2025-06-11"])
        assert len(event.id) == 10
        assert create_event("Sync", ["2025-06-11"], event_id="fixed").id == "fixed"

    def test_requires_a_date(self):
        with pytest.raises(ValueError):
            create_event("Sync", [])

    def test_rejects_bad_date(self):
        with pytest.raises(ValueError):
            create_event("Sync", ["not a date"])


class TestParticipantEdits:
    """Test edits of a participant's entries."""

    def test_new_participant(self):
        p = new_participant("  Alice ", Mode.BLACKLIST)
        assert p.name == "Alice"
        assert p.mode is Mode.BLACKLIST
        assert p.availabilities == []

    def test_new_participant_requires_name(self):
        with pytest.raises(ValueError):
            new_participant("   ")

    def test_set_day_creates_and_updates(self):
        p = new_participant("Alice", participant_id="a")
        p = set_day(p, DAY, [TimeRange("09:00", "10:00")])
        p = set_day(p, DAY, memo="only mornings")
        entry = p.availability_for(DAY)
        assert entry.time_ranges == [TimeRange("09:00", "10:00")]
        assert entry.memo == "only mornings"
        assert len(p.availabilities) == 1

    def test_add_time_range_appends(self):
        p = make_participant("a", "A", Mode.WHITELIST, {DAY: [("09:00", "10:00")]})
        updated = add_time_range(p, DAY, TimeRange("13:00", ""))
        assert updated.availability_for(DAY).time_ranges == [TimeRange("09:00", "10:00"), TimeRange("13:00", "")]
        assert p.availability_for(DAY).time_ranges == [TimeRange("09:00", "10:00")]

    def test_remove_time_range_keeps_others_and_memo(self):
        p = make_participant(
            "a", "A", Mode.WHITELIST,
            {DAY: [("09:00", "10:00"), ("13:00", ""), ("", "08:00")]},
            memos={DAY: "flexible"},
        )
        updated = remove_time_range(p, DAY, 1)
        entry = updated.availability_for(DAY)
        assert entry.time_ranges == [TimeRange("09:00", "10:00"), TimeRange("", "08:00")]
        assert entry.memo == "flexible"
        assert len(p.availability_for(DAY).time_ranges) == 3

    @pytest.mark.parametrize("index", [-1, 1])
    def test_remove_time_range_out_of_range(self, index):
        p = make_participant("a", "A", Mode.WHITELIST, {DAY: [("09:00", "10:00")]})
        with pytest.raises(ValueError):
            remove_time_range(p, DAY, index)

    def test_remove_time_range_without_entry(self):
        with pytest.raises(ValueError):
            remove_time_range(new_participant("A", participant_id="a"), DAY, 0)

    def test_rename(self):
        p = make_participant("a", "A", Mode.BLACKLIST, {DAY: [("09:00", "10:00")]})
        renamed = rename_participant(p, "  Alice ")
        assert renamed.name == "Alice"
        assert renamed.id == "a"
        assert renamed.availabilities == p.availabilities
        assert p.name == "A"

    def test_rename_requires_name(self):
        with pytest.raises(ValueError):
            rename_participant(new_participant("A"), " ")

    def test_apply_bulk_on_selected_weekdays(self):
        # 2025-06-09 is a Monday.
        dates = ["2025-06-09", "2025-06-10", "2025-06-14"]
        p = apply_bulk(new_participant("A", participant_id="a"), dates, TimeRange("18:00", ""), weekdays={0, 5})
        assert [a.date_str for a in p.availabilities] == ["2025-06-09", "2025-06-14"]

    def test_apply_bulk_defaults_to_business_days(self):
        dates = ["2025-06-13", "2025-06-14", "2025-06-15", "2025-06-16"]
        p = apply_bulk(new_participant("A", participant_id="a"), dates, TimeRange("", "12:00"))
        assert [a.date_str for a in p.availabilities] == ["2025-06-13", "2025-06-16"]


class TestSwitchMode:
    """Test mode switching with range conversion."""

    def test_converts_every_target_date(self):
        p = make_participant(
            "a", "A", Mode.WHITELIST,
            {"2025-06-11": [("10:00", "18:00")]},
            memos={"2025-06-11": "office day"},
        )
        switched = switch_mode(p, Mode.BLACKLIST, ["2025-06-11", "2025-06-12"])

        assert switched.mode is Mode.BLACKLIST
        first = switched.availability_for("2025-06-11")
        assert first.time_ranges == [TimeRange("", "10:00"), TimeRange("18:00", "")]
        assert first.memo == "office day"
        assert switched.availability_for("2025-06-12").time_ranges == [TimeRange("", "")]

    def test_drops_dates_outside_targets(self):
        p = make_participant("a", "A", Mode.BLACKLIST, {"2025-05-01": [("09:00", "10:00")], DAY: [("", "")]})
        switched = switch_mode(p, Mode.WHITELIST, [DAY])
        assert [a.date_str for a in switched.availabilities] == [DAY]
        assert switched.availability_for(DAY).time_ranges == []

    def test_without_input_only_mode_changes(self):
        p = make_participant("a", "A", Mode.WHITELIST, memos={DAY: "maybe"})
        switched = switch_mode(p, Mode.BLACKLIST, [DAY, "2025-06-12"])
        assert switched.mode is Mode.BLACKLIST
        assert switched.availabilities == p.availabilities

    def test_original_is_untouched(self):
        p = make_participant("a", "A", Mode.WHITELIST, {DAY: [("10:00", "18:00")]})
        switch_mode(p, Mode.BLACKLIST, [DAY])
        assert p.mode is Mode.WHITELIST
        assert p.availability_for(DAY).time_ranges == [TimeRange("10:00", "18:00")]


class TestEventParticipants:
    """Test wholesale replacement of the participant list."""

    def test_upsert_appends_then_replaces(self, three_person_event):
        newcomer = new_participant("D", participant_id="d")
        event = upsert_participant(three_person_event, newcomer)
        assert [p.id for p in event.participants] == ["a", "b", "c", "d"]

        renamed = new_participant("Bee", Mode.BLACKLIST, participant_id="b")
        event = upsert_participant(event, renamed)
        assert [p.name for p in event.participants] == ["A", "Bee", "C", "D"]
        assert len(three_person_event.participants) == 3

    def test_remove(self, three_person_event):
        event = remove_participant(three_person_event, "b")
        assert [p.id for p in event.participants] == ["a", "c"]
        assert len(three_person_event.participants) == 3

    def test_find_by_id_or_name(self, three_person_event):
        assert find_participant(three_person_event, "c").name == "C"
        assert find_participant(three_person_event, "B").id == "b"

    def test_find_missing(self, three_person_event):
        with pytest.raises(ParticipantNotFoundError):
            find_participant(three_person_event, "nobody")
