"""Session: all review state for one user, independent of storage and UI."""

import dataclasses
from datetime import datetime, timezone

from drill import sm2
from drill.children import get_or_create_child
from drill.models import CardView, HistoryEntry, ImportRow, Item
from drill.review import get_due_date, review
from drill.selector import select_next


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Session:
    """Holds items, scheduling records, history, and the virtual child index.

    Usage:
        session = Session(skip_window_seconds=20)
        session.add_items([{"front": "cat", "back": "gato"}])
        card = session.select_next("learn")
        session.review(card.id, 5)

    For testing, pass a fixed ``clock`` and a scheduler built on the same
    clock.
    """

    def __init__(self, scheduler=None, clock=None, skip_window_seconds: float | None = 20):
        self.clock = clock or _utcnow
        self.scheduler = scheduler or sm2.Scheduler(clock=self.clock)
        self.skip_window_seconds = skip_window_seconds
        self.clear()

    # ─── Reset ────────────────────────────────────────────────────────────

    def clear(self):
        """Drop every item, record, and history entry."""
        self.items_by_id: dict[int, Item] = {}
        self.records_by_id: dict[int, object] = {}
        self.children_by_parent_id: dict[int, dict[str, int]] = {}
        self.item_ids_by_answer: dict[str, list[int]] = {}
        self.min_id = 0
        self.clear_history()

    def clear_history(self):
        self.history: list[HistoryEntry] = []

    # ─── Ids and indexes ──────────────────────────────────────────────────

    def allocate_id(self) -> int:
        card_id = self.min_id
        self._ensure_min_id_gt(card_id)
        return card_id

    def _ensure_min_id_gt(self, value: int):
        if self.min_id <= value:
            self.min_id = value + 1

    def index_answers(self):
        result: dict[str, list[int]] = {}
        for item in self.items_by_id.values():
            result.setdefault(item.back, []).append(item.id)
        self.item_ids_by_answer = result

    def _index_children(self):
        result: dict[int, dict[str, int]] = {}
        for item in self.items_by_id.values():
            if item.parent_id is not None and item.input_mode:
                result.setdefault(item.parent_id, {})[item.input_mode] = item.id
        self.children_by_parent_id = result

    # ─── Bulk accessors ───────────────────────────────────────────────────

    def add_items(self, rows):
        """Create an item and a fresh scheduling record for each row."""
        now = self.clock()
        for row in rows:
            if isinstance(row, dict):
                row = ImportRow(front=row["front"], back=row["back"])
            card_id = self.allocate_id()
            self.items_by_id[card_id] = Item(id=card_id, front=row.front, back=row.back)
            self.records_by_id[card_id] = self.scheduler.new_record(card_id, now)
        self.index_answers()

    def set_items(self, items):
        self.items_by_id = {item.id: item for item in items}
        for card_id in self.items_by_id:
            self._ensure_min_id_gt(card_id)
        self.index_answers()
        self._index_children()

    def set_records(self, encoded: dict):
        self.records_by_id = {int(card_id): self.scheduler.decode(data)
                              for card_id, data in encoded.items()}

    def snapshot(self) -> dict:
        return {
            "items": [dataclasses.asdict(item) for item in self.items_by_id.values()],
            "records": {card_id: self.scheduler.encode(record)
                        for card_id, record in self.records_by_id.items()},
            "history": [{"card_id": h.card_id, "reviewed_at": h.reviewed_at.isoformat()}
                        for h in self.history],
        }

    def load_snapshot(self, snapshot: dict):
        """Replace all state with ``snapshot`` (as produced by snapshot())."""
        items = [Item(**data) for data in snapshot.get("items", [])]
        records = snapshot.get("records", {})
        item_ids = {item.id for item in items}
        record_ids = {int(k) for k in records}
        if item_ids - record_ids:
            raise ValueError(f"Snapshot items without scheduling records: {sorted(item_ids - record_ids)}")
        if record_ids - item_ids:
            raise ValueError(f"Snapshot scheduling records without items: {sorted(record_ids - item_ids)}")
        self.clear()
        self.set_items(items)
        self.set_records(records)
        self.history = [
            HistoryEntry(card_id=h["card_id"], reviewed_at=datetime.fromisoformat(h["reviewed_at"]))
            for h in snapshot.get("history", [])
        ]

    # ─── Lookups ──────────────────────────────────────────────────────────

    def get_item(self, card_id: int) -> Item | None:
        return self.items_by_id.get(card_id)

    def get_due_date(self, card_id: int) -> datetime | None:
        return get_due_date(self, card_id)

    def cards(self) -> list[CardView]:
        """All cards, soonest due first."""
        views = [CardView.of(item, self.records_by_id[item.id])
                 for item in self.items_by_id.values()]
        return sorted(views, key=lambda c: (c.scheduling.due, c.id))

    def phase(self, card_id: int) -> str | None:
        record = self.records_by_id.get(card_id)
        if record is None:
            return None
        if record.n >= 1:
            return "graduated"
        if any(h.card_id == card_id for h in self.history):
            return "learning"
        return "new"

    # ─── Core operations ──────────────────────────────────────────────────

    def select_next(self, mode: str, input_mode: str | None = None,
                    exclude_input_mode: str | None = None) -> CardView | None:
        return select_next(self, mode, input_mode, exclude_input_mode)

    def get_or_create_child(self, parent: Item, input_mode: str) -> CardView:
        return get_or_create_child(self, parent, input_mode)

    def review(self, card_id: int, quality: int, extra_progress: int = 0,
               eager: bool = False):
        return review(self, card_id, quality, extra_progress, eager)
