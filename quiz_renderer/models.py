"""Question and answer data model with per-type answer validation."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

log = logging.getLogger("quiz_renderer.models")


class QuestionType(str, Enum):
    TEXT_INPUT = "text_input"
    MULTIPLE_CHOICE = "multiple_choice"
    MULTI_SELECT = "multi_select"
    INFO = "info"


DIFFICULTY_LEVELS = {
    "easy": 1,
    "medium": 2,
    "hard": 3,
}

IMPORTANCE_LEVELS = {
    "essential": 5,
    "important": 4,
    "standard": 3,
    "rare": 2,
    "very rare": 1,
}

DEFAULT_DIFFICULTY = "medium"
DEFAULT_IMPORTANCE = "standard"


def normalize_text(value: str) -> str:
    return value.strip().lower()


@dataclass(frozen=True)
class Answer:
    text: str
    index: int
    is_correct: bool


@dataclass(frozen=True)
class Question:
    """Common fields shared by every question variant.

    Variants override ``validate_answer``; ``answers`` keeps the authored
    order, display code shuffles a copy.
    """

    id: str
    text: str
    explanation: str = ""
    tags: tuple[str, ...] = ()
    difficulty: str = DEFAULT_DIFFICULTY
    importance: str = DEFAULT_IMPORTANCE
    allow_answer_shuffling: bool = True
    answers: tuple[Answer, ...] = field(default_factory=tuple)

    type: str = ""

    @property
    def difficulty_rank(self) -> int:
        return DIFFICULTY_LEVELS.get(self.difficulty, 0)

    @property
    def importance_rank(self) -> int:
        return IMPORTANCE_LEVELS.get(self.importance, 0)

    @property
    def is_info(self) -> bool:
        return self.type == QuestionType.INFO.value

    def correct_answers(self) -> list[Answer]:
        return [a for a in self.answers if a.is_correct]

    def correct_indices(self) -> set[int]:
        return {a.index for a in self.answers if a.is_correct}

    def has_tag(self, tags: Iterable[str]) -> bool:
        """True if any of our tags matches one of *tags* (already lowercased)."""
        wanted = set(tags)
        return any(t.lower() in wanted for t in self.tags)

    def validate_answer(self, submitted: object = None) -> bool:
        """Variants without their own rule fail closed."""
        log.warning("Unknown question type: %s (question %s)", self.type, self.id)
        return False


def _invalid_shape(question: Question, submitted: object) -> bool:
    log.info(
        "Invalid answer shape for %s question %s: %r",
        question.type, question.id, submitted,
    )
    return False


def _as_index(value: object) -> int | None:
    # bool is an int subclass but never a valid selection
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


@dataclass(frozen=True)
class MultipleChoiceQuestion(Question):
    type: str = QuestionType.MULTIPLE_CHOICE.value

    def validate_answer(self, submitted: object = None) -> bool:
        # A one-element list is what checkbox-style widgets hand back
        if isinstance(submitted, (list, tuple)) and len(submitted) == 1:
            submitted = submitted[0]
        index = _as_index(submitted)
        if index is None:
            return _invalid_shape(self, submitted)
        return index in self.correct_indices()


@dataclass(frozen=True)
class MultiSelectQuestion(Question):
    type: str = QuestionType.MULTI_SELECT.value

    def validate_answer(self, submitted: object = None) -> bool:
        if isinstance(submitted, (str, bytes)) or not isinstance(submitted, Iterable):
            return _invalid_shape(self, submitted)
        selected = list(submitted)
        indices = [_as_index(v) for v in selected]
        if not indices or any(i is None for i in indices):
            return _invalid_shape(self, submitted)
        # Exact set equality: no partial credit, duplicates collapse
        return set(indices) == self.correct_indices()


@dataclass(frozen=True)
class TextInputQuestion(Question):
    type: str = QuestionType.TEXT_INPUT.value

    def validate_answer(self, submitted: object = None) -> bool:
        if not isinstance(submitted, str) or not submitted.strip():
            return _invalid_shape(self, submitted)
        given = normalize_text(submitted)
        return any(given == normalize_text(a.text) for a in self.correct_answers())


@dataclass(frozen=True)
class InfoQuestion(Question):
    type: str = QuestionType.INFO.value

    def validate_answer(self, submitted: object = None) -> bool:
        return True


@dataclass(frozen=True)
class UnknownTypeQuestion(Question):
    """A record whose ``type`` matched no known variant; never answerable."""


QUESTION_CLASSES: dict[str, type[Question]] = {
    QuestionType.MULTIPLE_CHOICE.value: MultipleChoiceQuestion,
    QuestionType.MULTI_SELECT.value: MultiSelectQuestion,
    QuestionType.TEXT_INPUT.value: TextInputQuestion,
    QuestionType.INFO.value: InfoQuestion,
}
