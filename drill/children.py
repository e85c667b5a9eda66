"""Virtual child cards: per-input-mode copies of a parent item."""

from drill.models import CardView, Item


def get_or_create_child(session, parent: Item, input_mode: str) -> CardView:
    """Return the child of ``parent`` for ``input_mode``, creating it on first use.

    A new child copies the parent's front/back at creation time and gets
    its own fresh scheduling record. The parent is left untouched.
    """
    children = session.children_by_parent_id.get(parent.id, {})
    existing_id = children.get(input_mode)
    if existing_id is not None:
        return CardView.of(session.items_by_id[existing_id], session.records_by_id[existing_id])

    child_id = session.allocate_id()
    child = Item(id=child_id, front=parent.front, back=parent.back,
                 parent_id=parent.id, input_mode=input_mode)
    record = session.scheduler.new_record(child_id, session.clock())

    session.items_by_id[child_id] = child
    session.records_by_id[child_id] = record
    session.children_by_parent_id.setdefault(parent.id, {})[input_mode] = child_id
    session.item_ids_by_answer.setdefault(child.back, []).append(child_id)
    return CardView.of(child, record)


def find_child(session, parent_id: int, input_mode: str) -> int | None:
    return session.children_by_parent_id.get(parent_id, {}).get(input_mode)
