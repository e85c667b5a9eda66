"""Shared data classes used across the session, importer, and CLI."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

LEARN = "learn"
LEARN_OR_RETRY = "learn-or-retry"
REVIEW = "review"
REVIEW_EAGER = "review-eager"
MODES = (LEARN, LEARN_OR_RETRY, REVIEW, REVIEW_EAGER)


@dataclass
class Item:
    id: int
    front: str
    back: str
    parent_id: int | None = None
    input_mode: str | None = None


@dataclass
class ImportRow:
    front: str
    back: str


@dataclass
class HistoryEntry:
    card_id: int
    reviewed_at: datetime


@dataclass
class CardView:
    """An item merged with its scheduling record."""
    id: int
    front: str
    back: str
    parent_id: int | None
    input_mode: str | None
    scheduling: Any

    @classmethod
    def of(cls, item: Item, scheduling) -> "CardView":
        return cls(id=item.id, front=item.front, back=item.back,
                   parent_id=item.parent_id, input_mode=item.input_mode,
                   scheduling=scheduling)
