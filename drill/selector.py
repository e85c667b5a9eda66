"""Due-item selection: pick the next card to show for a study mode."""

from datetime import datetime, timedelta

from drill.children import find_child, get_or_create_child
from drill.models import (LEARN, LEARN_OR_RETRY, MODES, REVIEW, REVIEW_EAGER,
                          CardView, Item)


def select_next(session, mode: str, input_mode: str | None = None,
                exclude_input_mode: str | None = None) -> CardView | None:
    """Return the next card for ``mode``, or None when nothing is eligible.

    With an ``input_mode``, only virtual children for that mode are
    considered. When none qualify, a root card eligible for learning or
    retry is picked instead and its child for ``input_mode`` is created
    (or fetched) and returned.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode!r}")
    input_mode = input_mode or None
    now = session.clock()

    found = _best_candidate(session, mode, input_mode, exclude_input_mode, now)
    if found is not None:
        return found
    if not input_mode:
        return None

    parent = _best_candidate(session, LEARN_OR_RETRY, None, input_mode, now)
    if parent is None:
        return None
    return get_or_create_child(session, session.items_by_id[parent.id], input_mode)


def _best_candidate(session, mode, input_mode, exclude_input_mode, now) -> CardView | None:
    best = None
    for card_id, record in session.records_by_id.items():
        item = session.items_by_id[card_id]
        if item.input_mode != input_mode:
            continue
        if not _matches_mode(mode, record):
            continue
        if mode != REVIEW_EAGER and record.due > now:
            continue
        if exclude_input_mode and find_child(session, card_id, exclude_input_mode) is not None:
            continue
        if _recently_answered(session, item, now):
            continue
        if best is None or (record.due, card_id) < (best[0].due, best[1].id):
            best = (record, item)
    if best is None:
        return None
    return CardView.of(best[1], best[0])


def _matches_mode(mode: str, record) -> bool:
    # n only counts reviews the scheduler judged successful.
    if mode == LEARN:
        return record.n == 0
    if mode == LEARN_OR_RETRY:
        return record.n == 0 or bool(getattr(record, "needs_extra_review", False))
    if mode in (REVIEW, REVIEW_EAGER):
        return record.n >= 1
    return False


def _recently_answered(session, item: Item, now: datetime) -> bool:
    """True when a card with the same answer text was reviewed inside the skip window."""
    if not session.skip_window_seconds:
        return False
    same_answer = set(session.item_ids_by_answer.get(item.back, ()))
    if not same_answer:
        return False
    for entry in reversed(session.history):
        if entry.card_id in same_answer:
            return now - entry.reviewed_at < timedelta(seconds=session.skip_window_seconds)
    return False
