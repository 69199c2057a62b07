"""Per-render quiz state and score grading."""
from __future__ import annotations

import math
from dataclasses import dataclass, field

# Shown while nothing has been answered yet.
NEUTRAL_COLOR = "#808080"

RED = (244, 0, 0)
YELLOW = (244, 193, 0)
GREEN = (76, 180, 0)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def lerp(start: int, end: int, t: float) -> int:
    """Linear interpolation rounded to the nearest integer."""
    return round_half_up(start + (end - start) * t)


@dataclass
class QuizState:
    """Answers counted since the visible question list was last rendered.

    A question id is counted at most once, so re-submitting an answer never
    changes the score.
    """

    total_answered: int = 0
    correct_count: int = 0
    answered_question_ids: set[str] = field(default_factory=set)

    def record_answer(self, question_id: str, is_correct: bool) -> bool:
        """Count an answer. Returns False if the question was already counted."""
        if question_id in self.answered_question_ids:
            return False
        self.answered_question_ids.add(question_id)
        self.total_answered += 1
        if is_correct:
            self.correct_count += 1
        return True

    def reset(self) -> None:
        self.total_answered = 0
        self.correct_count = 0
        self.answered_question_ids = set()

    def percentage(self) -> int:
        if self.total_answered == 0:
            return 0
        return round_half_up(self.correct_count / self.total_answered * 100)


def score_rgb(percentage: float) -> tuple[int, int, int]:
    """Red to yellow over [0, 50], yellow to green over (50, 100]."""
    percentage = max(0.0, min(100.0, percentage))
    if percentage <= 50:
        start, end, t = RED, YELLOW, percentage / 50
    else:
        start, end, t = YELLOW, GREEN, (percentage - 50) / 50
    return tuple(lerp(s, e, t) for s, e in zip(start, end))


def score_color(percentage: float) -> str:
    r, g, b = score_rgb(percentage)
    return f"rgb({r},{g},{b})"


@dataclass(frozen=True)
class ScoreDisplay:
    text: str
    color: str


def score_display(state: QuizState, shown_count: int) -> ScoreDisplay:
    pct = state.percentage()
    text = f"{state.correct_count}/{state.total_answered} ({pct}%, {shown_count} total)"
    color = NEUTRAL_COLOR if state.total_answered == 0 else score_color(pct)
    return ScoreDisplay(text=text, color=color)
