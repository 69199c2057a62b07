"""Parse raw question records (the questions.json schema) into Question objects.

Record shape:
  {type, question, explanation?, tags?, difficulty?, importance?,
   allowAnswerShuffling?, answers?, correctIndices?, correctAnswers?}

Choice types build their answers from the parallel ``answers`` and
``correctIndices`` arrays; text_input turns every ``correctAnswers`` entry into
a correct answer; info carries none.
"""
from __future__ import annotations

import logging

from quiz_renderer.errors import MalformedQuestion
from quiz_renderer.models import (
    DEFAULT_DIFFICULTY,
    DEFAULT_IMPORTANCE,
    QUESTION_CLASSES,
    Answer,
    Question,
    QuestionType,
    UnknownTypeQuestion,
)

log = logging.getLogger("quiz_renderer.parser")


class IdCounter:
    """Hands out increasing question ids for one corpus build."""

    def __init__(self, start: int = 0):
        self._next = start

    def next_id(self) -> str:
        current = self._next
        self._next += 1
        return str(current)

    @property
    def issued(self) -> int:
        return self._next


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _tags(record: dict) -> tuple[str, ...]:
    tags = record.get("tags")
    if tags is None:
        return ()
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise MalformedQuestion("tags", record.get("question"), "expected a list of strings")
    return tuple(sorted(tags))


def _choice_answers(record: dict) -> tuple[Answer, ...]:
    texts = record.get("answers")
    if not isinstance(texts, list):
        raise MalformedQuestion("answers", record.get("question"))
    correct = record.get("correctIndices")
    if correct is None:
        correct = []
    elif not isinstance(correct, list) or not all(_is_index(i) for i in correct):
        raise MalformedQuestion("correctIndices", record.get("question"), "expected a list of integers")
    return tuple(
        Answer(text=str(text), index=i, is_correct=i in correct)
        for i, text in enumerate(texts)
    )


def _text_answers(record: dict) -> tuple[Answer, ...]:
    texts = record.get("correctAnswers")
    if not isinstance(texts, list):
        raise MalformedQuestion("correctAnswers", record.get("question"))
    return tuple(Answer(text=str(text), index=i, is_correct=True) for i, text in enumerate(texts))


def parse_question(record: dict, ids: IdCounter) -> Question:
    qtype = record.get("type", "")
    if not isinstance(qtype, str):
        qtype = str(qtype)
    if qtype == QuestionType.TEXT_INPUT.value:
        answers = _text_answers(record)
    elif qtype in (QuestionType.MULTIPLE_CHOICE.value, QuestionType.MULTI_SELECT.value):
        answers = _choice_answers(record)
    else:
        answers = ()

    shuffle = record.get("allowAnswerShuffling")
    cls = QUESTION_CLASSES.get(qtype, UnknownTypeQuestion)
    if cls is UnknownTypeQuestion:
        log.warning("Unknown question type %r for question: %r", qtype, record.get("question"))

    return cls(
        id=ids.next_id(),
        text=record.get("question", ""),
        explanation=record.get("explanation") or "",
        tags=_tags(record),
        difficulty=record.get("difficulty") or DEFAULT_DIFFICULTY,
        importance=record.get("importance") or DEFAULT_IMPORTANCE,
        allow_answer_shuffling=True if shuffle is None else bool(shuffle),
        answers=answers,
        type=qtype,
    )


def parse_questions(records: list[dict], ids: IdCounter | None = None) -> list[Question]:
    """Build the full corpus; any malformed record aborts the whole build."""
    ids = ids or IdCounter()
    questions = [parse_question(r, ids) for r in records]
    log.info("Parsed %d questions", len(questions))
    return questions
