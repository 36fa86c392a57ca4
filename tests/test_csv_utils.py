"""Tests for CSV export of results."""

import csv

import pytest

from group_scheduler import aggregate
from group_scheduler.csv_utils import RESULT_HEADERS, write_results


def test_write_results(tmp_path, three_person_event):
    path = tmp_path / "results.csv"
    write_results(path, aggregate(three_person_event))

    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))

    assert list(rows[0].keys()) == RESULT_HEADERS
    assert rows[0] == {
        "date": "2025-06-11",
        "start_time": "15:00",
        "end_time": "18:00",
        "score": "1.00",
        "available_count": "3",
        "attendees": "A; B; C",
        "absentees": "",
    }
    assert rows[2]["end_time"] == "24:00"
    assert rows[2]["absentees"] == "A"


def test_write_results_bad_path(tmp_path, three_person_event):
    with pytest.raises(ValueError):
        write_results(tmp_path / "missing" / "results.csv", aggregate(three_person_event))
