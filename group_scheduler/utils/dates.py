from datetime import datetime, date, timedelta
from typing import Iterable, Iterator, List, Set, Tuple, Union
from dateutil import parser


WEEKDAY_NAMES = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]


def parse_date(value: Union[str, date]) -> date:
    """Parse date string in YYYY-MM-DD format."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        try:
            return parser.parse(value).date()
        except Exception:
            raise ValueError(f"Invalid date format: {value}. Expected YYYY-MM-DD")


def normalize_date_str(value: Union[str, date]) -> str:
    """Return the fixed-width, sortable YYYY-MM-DD form of a date."""
    return parse_date(value).isoformat()


def parse_time(time_str: str) -> str:
    """Validate an HH:MM string (or empty for an open bound) and return it zero padded."""
    if not time_str:
        return ""
    if time_str == "24:00":
        return time_str
    try:
        return datetime.strptime(time_str, '%H:%M').strftime('%H:%M')
    except ValueError:
        raise ValueError(f"Invalid time format: {time_str}. Expected HH:MM")


def parse_weekdays(days_str: str) -> Set[int]:
    """Parse a weekday list like 'mon,tue,fri' into weekday numbers (Monday is 0)."""
    weekdays = set()
    for token in days_str.split(','):
        name = token.strip().lower()[:3]
        if not name:
            continue
        if name not in WEEKDAY_NAMES:
            raise ValueError(f"Invalid weekday: {token.strip()}. Expected one of {', '.join(WEEKDAY_NAMES)}")
        weekdays.add(WEEKDAY_NAMES.index(name))
    if not weekdays:
        raise ValueError("At least one weekday is required")
    return weekdays


def is_business_day(date_obj: date) -> bool:
    """Check if date is a business day (Monday-Friday)."""
    return date_obj.weekday() < 5


def date_range(start_date: date, end_date: date) -> Iterator[date]:
    """Generate date range from start to end (inclusive)."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def sort_dates(date_strs: Iterable[str]) -> List[str]:
    """Return distinct date strings in ascending order."""
    return sorted(set(date_strs))


def parse_range(range_str: str) -> Tuple[str, str]:
    """Parse a range string like '09:00-12:00' into (start, end).

    Either bound may be left empty or written as '*' to leave it open:
    '-12:00', '*-12:00', '15:00-' and '-' are all valid.
    """
    try:
        start_str, end_str = range_str.split('-')
    except ValueError:
        raise ValueError(f"Invalid range format: {range_str}. Expected HH:MM-HH:MM")

    start_str, end_str = start_str.strip(), end_str.strip()
    start = parse_time("" if start_str == "*" else start_str)
    end = parse_time("" if end_str == "*" else end_str)
    return start, end
