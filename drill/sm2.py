"""SM-2 Scheduler — SuperMemo 2 algorithm implementation.

Maintains per-card state: ease factor, interval, repetition count,
due time and an extra-review flag for answers graded below 4.
Records are plain dataclasses; persistence goes through encode/decode.
"""

import dataclasses
import math
from datetime import datetime, timedelta, timezone


class SchedulerError(ValueError):
    """The scheduler rejected a review (bad quality, card not due)."""


@dataclasses.dataclass
class SchedulingRecord:
    card_id: int
    due: datetime
    n: int = 0
    ef: float = 2.5
    interval: int = 0
    needs_extra_review: bool = False


@dataclasses.dataclass
class ReviewLog:
    card_id: int
    quality: int
    reviewed_at: datetime


class Scheduler:
    scheduler_id = "sm2"

    def __init__(self, clock=None):
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def new_record(self, card_id: int, now: datetime | None = None) -> SchedulingRecord:
        """Fresh record for a new card, due immediately."""
        return SchedulingRecord(card_id=card_id, due=now or self.clock())

    def advance(self, record: SchedulingRecord, quality: int,
                as_of: datetime | None = None) -> tuple[SchedulingRecord, ReviewLog]:
        """Process a review and return the updated record plus a log entry."""
        if isinstance(quality, bool) or not isinstance(quality, int) or not 0 <= quality <= 5:
            raise SchedulerError(f"Quality must be an integer in 0..5, got {quality!r}")
        reviewed_at = as_of or self.clock()
        if not record.needs_extra_review and reviewed_at < record.due:
            raise SchedulerError(
                f"Card {record.card_id} is not due until {record.due.isoformat()}")

        card = dataclasses.replace(record)
        if card.needs_extra_review:
            if quality >= 4:
                card.needs_extra_review = False
                card.due = reviewed_at + timedelta(days=card.interval)
            else:
                card.due = reviewed_at
        else:
            if quality >= 3:  # correct
                if card.n == 0:
                    card.interval = 1
                elif card.n == 1:
                    card.interval = 6
                else:
                    card.interval = math.ceil(card.interval * card.ef)
                card.n += 1
            else:  # incorrect
                card.n = 0
                card.interval = 1
            card.ef = max(card.ef + 0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02), 1.3)
            if quality < 4:
                card.needs_extra_review = True
                card.due = reviewed_at
            else:
                card.due = reviewed_at + timedelta(days=card.interval)

        return card, ReviewLog(card_id=card.card_id, quality=quality, reviewed_at=reviewed_at)

    def encode(self, record: SchedulingRecord) -> dict:
        data = dataclasses.asdict(record)
        data["due"] = record.due.isoformat()
        return data

    def decode(self, data: dict) -> SchedulingRecord:
        data = dict(data)
        due = datetime.fromisoformat(data.pop("due"))
        if due.tzinfo is None:
            due = due.replace(tzinfo=timezone.utc)
        return SchedulingRecord(due=due, **data)
