"""Review transition: apply a graded review to a card's scheduling record."""

from drill.models import HistoryEntry


def review(session, card_id: int, quality: int, extra_progress: int = 0,
           eager: bool = False):
    """Grade a card and store the scheduler's updated record.

    Returns the new record, or None when ``card_id`` has no record.
    ``eager`` backdates an early review to the card's due time.
    ``extra_progress`` repeats the review that many more times, each one
    timed at the previous result's due time. Scheduler errors propagate;
    records produced before the failure are kept.
    """
    record = session.records_by_id.get(card_id)
    if record is None:
        return None
    now = session.clock()
    session.history.append(HistoryEntry(card_id=card_id, reviewed_at=now))

    as_of = record.due if eager and record.due > now else None
    record, _log = session.scheduler.advance(record, quality, as_of)
    session.records_by_id[card_id] = record
    for _ in range(max(extra_progress, 0)):
        record, _log = session.scheduler.advance(record, quality, record.due)
        session.records_by_id[card_id] = record
    return record


def get_due_date(session, card_id: int):
    record = session.records_by_id.get(card_id)
    return record.due if record is not None else None
