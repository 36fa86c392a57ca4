import logging
from dataclasses import replace
from typing import Iterator, List, Tuple

from .availability import is_available
from .models import AggregatedSlot, Event
from .utils.clock import MINUTES_PER_DAY

logger = logging.getLogger(__name__)

SLOT_MINUTES = 15
SCORE_THRESHOLD = 0.5


class Aggregator:
    """Core algorithm for ranking meeting times.

    Scores every fixed-width slot of every target date by the share of
    participants available, keeps slots at or above the threshold, merges
    contiguous slots with the same head count, and ranks the result.
    """

    def __init__(self, *, slot_minutes: int = SLOT_MINUTES, threshold: float = SCORE_THRESHOLD):
        """Initialize aggregator with slot granularity and admission threshold.

        Args:
            slot_minutes: Slot width in minutes; must evenly divide a day
            threshold: Minimum score (0-1) for a slot to be kept
        """
        if slot_minutes <= 0 or MINUTES_PER_DAY % slot_minutes != 0:
            raise ValueError(f"Slot minutes must evenly divide {MINUTES_PER_DAY}: {slot_minutes}")

        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be between 0 and 1: {threshold}")

        self.slot_minutes = slot_minutes
        self.threshold = threshold

    def aggregate(self, event: Event) -> List[AggregatedSlot]:
        """Compute the ranked list of candidate meeting times for an event.

        Args:
            event: Event with participants and their availabilities

        Returns:
            Merged slots sorted by score (descending), date, then start time.
            Empty when the event has no participants or no slot reaches
            the threshold.
        """
        if not event.participants:
            logger.debug("Event %s has no participants", event.id)
            return []

        scored = list(self._score_slots(event))
        merged = self._merge(scored)
        logger.debug(
            "Event %s: %d slots admitted, %d after merge",
            event.id, len(scored), len(merged),
        )
        return sorted(merged, key=lambda s: (-s.score, s.date_str, s.start_min))

    def _score_slots(self, event: Event) -> Iterator[AggregatedSlot]:
        """Yield admitted slots in date-then-time order."""
        participants = event.participants
        total = len(participants)

        for date_str in event.target_dates():
            for slot_start, slot_end in self._daily_slots():
                available = [p for p in participants if is_available(p, date_str, slot_start, slot_end)]
                score = len(available) / total

                if score < self.threshold:
                    continue

                yield AggregatedSlot(
                    date_str=date_str,
                    start_min=slot_start,
                    end_min=slot_end,
                    score=score,
                    available_count=len(available),
                    attendees=[p.name for p in available],
                    absentees=[p.name for p in participants if not any(p is a for a in available)],
                )

    def _daily_slots(self) -> Iterator[Tuple[int, int]]:
        """Generate the fixed-width slots covering one day."""
        for start in range(0, MINUTES_PER_DAY, self.slot_minutes):
            yield start, start + self.slot_minutes

    def _merge(self, slots: List[AggregatedSlot]) -> List[AggregatedSlot]:
        """Join contiguous slots on the same date with the same head count."""
        merged: List[AggregatedSlot] = []
        for slot in slots:
            current = merged[-1] if merged else None
            if (
                current is not None
                and slot.date_str == current.date_str
                and slot.start_min == current.end_min
                and slot.available_count == current.available_count
            ):
                merged[-1] = replace(current, end_min=slot.end_min)
            else:
                merged.append(slot)
        return merged


def aggregate(event: Event, *, slot_minutes: int = SLOT_MINUTES, threshold: float = SCORE_THRESHOLD) -> List[AggregatedSlot]:
    """Rank meeting times for an event with the given slot size and threshold."""
    return Aggregator(slot_minutes=slot_minutes, threshold=threshold).aggregate(event)


def memos_for_date(event: Event, date_str: str) -> List[Tuple[str, str]]:
    """Collect (name, memo) pairs of participants who left a memo for a date."""
    memos = []
    for participant in event.participants:
        entry = participant.availability_for(date_str)
        if entry is not None and entry.memo.strip():
            memos.append((participant.name, entry.memo))
    return memos
