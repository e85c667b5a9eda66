"""Tests for the terminal study loop."""

from drill.study import StudyLoop, parse_grade


def _loop(session, mode, answers, **kwargs):
    inputs = iter(answers)
    out = []
    loop = StudyLoop(session, mode, input_fn=lambda _prompt: next(inputs),
                     output_fn=out.append, **kwargs)
    return loop, out


def test_parse_grade():
    assert parse_grade("0") == (0, 0)
    assert parse_grade("5") == (5, 0)
    assert parse_grade("+", 3) == (5, 3)
    assert parse_grade("6") is None
    assert parse_grade("x") is None


def test_no_cards(session):
    loop, out = _loop(session, "learn", [])
    assert loop.run() == 0
    assert out == ["No cards available for learn."]


def test_learn_session_runs_until_empty(session):
    session.add_items([{"front": "cat", "back": "gato"}, {"front": "dog", "back": "perro"}])
    saved = []
    loop, out = _loop(session, "learn", ["", "5", "", "4"], on_graded=lambda: saved.append(1))
    assert loop.run() == 2
    assert out[-1] == "No more cards due in this session."
    assert "  cat" in out and "  gato" in out
    assert session.records_by_id[0].n == 1
    assert session.records_by_id[1].n == 1
    assert saved == [1, 1]


def test_invalid_grade_reprompts(session):
    session.add_items([{"front": "cat", "back": "gato"}])
    loop, out = _loop(session, "learn", ["", "9", "5"])
    assert loop.run() == 1
    assert "Please enter 0-5, + or q." in out


def test_quit(session):
    session.add_items([{"front": "cat", "back": "gato"}])
    loop, out = _loop(session, "learn", ["q"])
    assert loop.run() == 0
    assert session.history == []


def test_extra_easy(session, scheduler):
    session.add_items([{"front": "cat", "back": "gato"}])
    loop, _ = _loop(session, "learn", ["", "+"], extra_easy_progress=2)
    loop.run()
    assert len(scheduler.calls) == 3
    assert session.records_by_id[0].n == 3


def test_review_eager_backdates(session, clock, scheduler):
    session.add_items([{"front": "cat", "back": "gato"}])
    session.review(0, 5)
    due = session.records_by_id[0].due
    clock.advance(minutes=5)
    loop, _ = _loop(session, "review-eager", ["", "5", "q"])
    loop.run()
    assert scheduler.calls[1] == (0, 5, due)


def test_input_mode_checks_typed_answer(session):
    session.add_items([{"front": "cat", "back": "gato"}])
    loop, out = _loop(session, "learn", ["ga", "5"], input_mode="prefix1")
    assert loop.run() == 1
    assert "Correct." in out
    assert session.children_by_parent_id == {0: {"prefix1": 1}}
    assert session.records_by_id[1].n == 1
    assert session.records_by_id[0].n == 0


def test_quit_at_typed_answer(session):
    session.add_items([{"front": "cat", "back": "gato"}])
    loop, out = _loop(session, "learn", [":q"], input_mode="prefix1")
    assert loop.run() == 0
    assert session.history == []
    assert "Correct." not in out and "Not quite." not in out


def test_plain_q_is_a_typed_answer(session):
    session.add_items([{"front": "quit", "back": "quitar"}])
    loop, out = _loop(session, "learn", ["q", "5"], input_mode="prefix1")
    assert loop.run() == 1
    assert "Correct." in out
