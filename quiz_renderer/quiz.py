"""Quiz controller: filtered view of the corpus plus the running score.

Every rebuild of the visible list (new filters, re-render) resets the session
so stale counts never carry over.
"""
from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from quiz_renderer.config import Settings
from quiz_renderer.filters import FilterCriteria, apply_criteria
from quiz_renderer.models import (
    Answer,
    InfoQuestion,
    MultiSelectQuestion,
    MultipleChoiceQuestion,
    Question,
    TextInputQuestion,
    UnknownTypeQuestion,
)
from quiz_renderer.scoring import QuizState, ScoreDisplay, score_display

log = logging.getLogger("quiz_renderer.quiz")


@dataclass(frozen=True)
class RenderedQuestion:
    question: Question
    position: int
    answers: tuple[Answer, ...]


@dataclass(frozen=True)
class AnswerFeedback:
    question_id: str
    correct: bool
    message: str
    correct_answers: list[Answer] = field(default_factory=list)
    explanation: str = ""
    counted: bool = True


def shuffled(items: Sequence, rng: random.Random | None = None) -> list:
    """Return a shuffled copy; the input is left untouched."""
    copy = list(items)
    (rng or random).shuffle(copy)
    return copy


def display_answers(
    question: Question, shuffle_answers: bool, rng: random.Random | None = None
) -> tuple[Answer, ...]:
    answers = question.answers
    if shuffle_answers and question.allow_answer_shuffling and len(answers) > 1:
        return tuple(shuffled(answers, rng))
    return answers


def _missing_answer_prompt(question: Question, submission: object) -> str | None:
    if isinstance(question, MultipleChoiceQuestion) and submission is None:
        return "Please select an answer!"
    if isinstance(question, MultiSelectQuestion):
        if submission is None or (isinstance(submission, (list, tuple, set)) and not submission):
            return "Please select at least one answer!"
    if isinstance(question, TextInputQuestion):
        if submission is None or (isinstance(submission, str) and not submission.strip()):
            return "Please enter an answer!"
    return None


def _answer_as_text(question: Question, submission: object) -> str:
    if isinstance(question, TextInputQuestion):
        return str(submission).strip()
    picked = submission if isinstance(submission, (list, tuple, set)) else [submission]
    by_index = {a.index: a.text for a in question.answers}
    return ", ".join(by_index.get(i, str(i)) for i in sorted(picked, key=str))


class Quiz:
    def __init__(self, questions: Sequence[Question]):
        self.all_questions: list[Question] = list(questions)
        self.filtered: list[Question] = list(self.all_questions)
        self.criteria = FilterCriteria()
        self.state = QuizState()

    @property
    def shown_count(self) -> int:
        return len(self.filtered)

    @property
    def total_count(self) -> int:
        return len(self.all_questions)

    def find(self, question_id: str) -> Question | None:
        return next((q for q in self.filtered if q.id == question_id), None)

    def apply_filters(self, criteria: FilterCriteria) -> list[Question]:
        self.criteria = criteria
        self.filtered = apply_criteria(self.all_questions, criteria)
        self.state.reset()
        log.info("Showing %d of %d questions", self.shown_count, self.total_count)
        return self.filtered

    def render_list(
        self, settings: Settings, rng: random.Random | None = None
    ) -> list[RenderedQuestion]:
        """Build the visible list for one render and start a fresh session."""
        self.state.reset()
        ordered = shuffled(self.filtered, rng) if settings.shuffle_questions else list(self.filtered)
        return [
            RenderedQuestion(
                question=q,
                position=i,
                answers=display_answers(q, settings.shuffle_answers, rng),
            )
            for i, q in enumerate(ordered)
        ]

    def check_answer(self, question_id: str, submission: object = None) -> AnswerFeedback | None:
        question = self.find(question_id)
        if question is None:
            log.warning("No visible question with id %s", question_id)
            return None
        if isinstance(question, UnknownTypeQuestion):
            log.error("Unknown question type: %s. Aborting.", question.type)
            return None

        if isinstance(question, InfoQuestion):
            counted = self.state.record_answer(question.id, True)
            return AnswerFeedback(
                question_id=question.id,
                correct=True,
                message="",
                explanation=question.explanation,
                counted=counted,
            )

        prompt = _missing_answer_prompt(question, submission)
        if prompt is not None:
            counted = self.state.record_answer(question.id, False)
            return AnswerFeedback(
                question_id=question.id,
                correct=False,
                message=prompt,
                correct_answers=question.correct_answers(),
                explanation=question.explanation,
                counted=counted,
            )

        correct = question.validate_answer(submission)
        counted = self.state.record_answer(question.id, correct)
        if correct:
            message = "Correct!"
        else:
            message = f"Incorrect! You answered: '{_answer_as_text(question, submission)}'"
        return AnswerFeedback(
            question_id=question.id,
            correct=correct,
            message=message,
            correct_answers=question.correct_answers(),
            explanation=question.explanation,
            counted=counted,
        )

    def score(self) -> ScoreDisplay:
        return score_display(self.state, self.shown_count)
