"""Narrow a question corpus by tags, difficulty and importance.

Each stage filters the result of the previous one; empty criteria are no-ops.
Filtering always starts again from the full corpus and never raises.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from quiz_renderer.models import DIFFICULTY_LEVELS, IMPORTANCE_LEVELS, Question

log = logging.getLogger("quiz_renderer.filters")

ALL = "all"


@dataclass(frozen=True)
class FilterCriteria:
    include_tags: str = ""
    exclude_tags: str = ""
    difficulty: str = ALL
    importance: str = ALL

    @property
    def is_empty(self) -> bool:
        return (
            not parse_tag_list(self.include_tags)
            and not parse_tag_list(self.exclude_tags)
            and _is_noop_spec(self.difficulty)
            and _is_noop_spec(self.importance)
        )


def parse_tag_list(raw: str | None) -> list[str]:
    """Split a comma-separated tag field into trimmed, lowercased tags."""
    if not raw:
        return []
    return [t for t in (part.strip().lower() for part in raw.split(",")) if t]


def _is_noop_spec(spec: str | None) -> bool:
    return not spec or not spec.strip() or spec.strip().lower() == ALL


def level_predicate(
    spec: str | None,
    levels: dict[str, int],
    attr: str,
) -> Callable[[Question], bool] | None:
    """Turn ``level``, ``level+`` or ``level-`` into a predicate on the question's *attr*.

    Returns None for ``all``/empty. An unrecognized level name yields a
    predicate that rejects everything.
    """
    if _is_noop_spec(spec):
        return None
    spec = spec.strip().lower()
    op = spec[-1] if spec[-1] in "+-" else ""
    base = spec[:-1].strip() if op else spec
    threshold = levels.get(base)
    if threshold is None:
        log.warning("Unknown level in filter spec %r", spec)
        return lambda q: False

    def rank(q: Question) -> int:
        return getattr(q, f"{attr}_rank")

    if op == "+":
        return lambda q: rank(q) >= threshold
    if op == "-":
        # unknown question levels rank 0 and must not pass an "at most" filter
        return lambda q: 0 < rank(q) <= threshold
    return lambda q: getattr(q, attr) == base


def filter_questions(
    questions: Sequence[Question],
    include_tags: str = "",
    exclude_tags: str = "",
    difficulty: str = ALL,
    importance: str = ALL,
) -> list[Question]:
    result = list(questions)

    included = parse_tag_list(include_tags)
    if included:
        result = [q for q in result if q.has_tag(included)]

    excluded = parse_tag_list(exclude_tags)
    if excluded:
        result = [q for q in result if not q.has_tag(excluded)]

    for spec, levels, attr in (
        (difficulty, DIFFICULTY_LEVELS, "difficulty"),
        (importance, IMPORTANCE_LEVELS, "importance"),
    ):
        pred = level_predicate(spec, levels, attr)
        if pred is not None:
            result = [q for q in result if pred(q)]

    log.debug("Filter kept %d of %d questions", len(result), len(questions))
    return result


def apply_criteria(questions: Sequence[Question], criteria: FilterCriteria) -> list[Question]:
    if criteria.is_empty:
        return list(questions)
    return filter_questions(
        questions,
        include_tags=criteria.include_tags,
        exclude_tags=criteria.exclude_tags,
        difficulty=criteria.difficulty,
        importance=criteria.importance,
    )
