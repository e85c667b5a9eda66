"""Answer checks for typed input modes."""

PREFIX1 = "prefix1"


def _check_prefix(back: str, text: str) -> bool:
    return back.lower().startswith(text.lower())


CHECKS = {
    PREFIX1: _check_prefix,
}


def input_is_correct(session, card_id: int, input_mode: str, text: str) -> bool | None:
    """Check typed ``text`` against a card's answer. None for an unknown card."""
    item = session.get_item(card_id)
    if item is None or card_id not in session.records_by_id:
        return None
    check = CHECKS.get(input_mode)
    if check is None:
        raise ValueError(f"Unknown input mode: {input_mode!r}")
    if not text:
        return False
    return check(item.back, text)
