"""StudyLoop: a terminal study session for one mode."""

from drill.input_modes import input_is_correct
from drill.models import REVIEW_EAGER

GRADE_PROMPT = "Grade 0-5 (0=fail, 5=perfect, + = extra easy, q = quit): "


class StudyLoop:
    def __init__(self, session, mode, input_mode=None, extra_easy_progress=2,
                 on_graded=None, input_fn=None, output_fn=None):
        self.session = session
        self.mode = mode
        self.input_mode = input_mode
        self.extra_easy_progress = extra_easy_progress
        self.on_graded = on_graded
        self.input = input_fn or input
        self.output = output_fn or print
        self.reviewed = 0

    def run(self) -> int:
        """Study until nothing is left or the user quits. Returns the number graded."""
        card = self.session.select_next(self.mode, self.input_mode)
        if card is None:
            self.output(f"No cards available for {self.mode}.")
            return 0
        while card is not None:
            if not self.show(card):
                self.output(f"Stopped after {self.reviewed} card(s).")
                return self.reviewed
            card = self.session.select_next(self.mode, self.input_mode)
        self.output("No more cards due in this session.")
        return self.reviewed

    def show(self, card) -> bool:
        """Present one card and grade it. False when the user quits."""
        self.output("")
        self.output(f"  {card.front}")
        if card.input_mode:
            typed = self.input("Your answer (:q to quit): ").strip()
            if typed.lower() == ":q":
                return False
            ok = input_is_correct(self.session, card.id, card.input_mode, typed)
            self.output("Correct." if ok else "Not quite.")
        else:
            if self.input("[Enter] to reveal, q to quit: ").strip().lower() == "q":
                return False
        self.output(f"  {card.back}")

        while True:
            answer = self.input(GRADE_PROMPT).strip().lower()
            if answer == "q":
                return False
            grade = parse_grade(answer, self.extra_easy_progress)
            if grade is not None:
                break
            self.output("Please enter 0-5, + or q.")

        quality, extra = grade
        self.session.review(card.id, quality, extra_progress=extra,
                            eager=self.mode == REVIEW_EAGER)
        self.reviewed += 1
        if self.on_graded:
            self.on_graded()
        due = self.session.get_due_date(card.id)
        self.output(f"Next due: {due:%Y-%m-%d %H:%M}")
        return True


def parse_grade(answer: str, extra_easy_progress: int = 2) -> tuple[int, int] | None:
    """Map typed input to (quality, extra_progress), or None if invalid."""
    if answer == "+":
        return 5, extra_easy_progress
    if answer.isdigit() and 0 <= int(answer) <= 5:
        return int(answer), 0
    return None
