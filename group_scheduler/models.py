from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Iterator

from .utils.clock import to_clock_string
from .utils.dates import date_range, sort_dates


class Mode(str, Enum):
    """How a participant's stored ranges are interpreted."""
    WHITELIST = "whitelist"
    BLACKLIST = "blacklist"


@dataclass(frozen=True)
class TimeRange:
    """A time-of-day range. Empty bounds are open (00:00 / 24:00)."""
    start: str = ""
    end: str = ""


@dataclass
class Availability:
    """Ranges and memo entered by one participant for one date."""
    date_str: str
    time_ranges: List[TimeRange] = field(default_factory=list)
    memo: str = ""

    @property
    def has_ranges(self) -> bool:
        return len(self.time_ranges) > 0


@dataclass
class Participant:
    """Represents a participant answering an event."""
    id: str
    name: str
    mode: Mode = Mode.WHITELIST
    availabilities: List[Availability] = field(default_factory=list)

    def __post_init__(self):
        self.mode = Mode(self.mode)

    def availability_for(self, date_str: str) -> Optional[Availability]:
        for availability in self.availabilities:
            if availability.date_str == date_str:
                return availability
        return None

    @property
    def has_input(self) -> bool:
        return any(a.has_ranges for a in self.availabilities)


@dataclass
class Period:
    """Inclusive date range used when an event has no candidate dates."""
    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError("Period start must be before period end")

    def dates(self) -> Iterator[str]:
        for current in date_range(self.start, self.end):
            yield current.isoformat()


@dataclass
class Event:
    """Represents an event and everyone who answered it."""
    id: str
    title: str
    description: str = ""
    candidate_dates: List[str] = field(default_factory=list)
    period: Optional[Period] = None
    participants: List[Participant] = field(default_factory=list)

    def target_dates(self) -> List[str]:
        """Dates to evaluate: candidate dates when given, else the period."""
        if self.candidate_dates:
            return sort_dates(self.candidate_dates)
        if self.period is not None:
            return list(self.period.dates())
        return []


@dataclass(frozen=True)
class AggregatedSlot:
    """A merged run of slots on one date sharing the same availability count."""
    date_str: str
    start_min: int
    end_min: int
    score: float
    available_count: int
    attendees: List[str]
    absentees: List[str]

    @property
    def start_time(self) -> str:
        return to_clock_string(self.start_min)

    @property
    def end_time(self) -> str:
        return to_clock_string(self.end_min)

    @property
    def rating(self) -> str:
        if self.score == 1.0:
            return "best"
        if self.score >= 0.75:
            return "good"
        return "fair"
