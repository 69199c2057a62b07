"""CLI entry point for quiz-renderer.

Usage:
  python -m quiz_renderer run [--questions SOURCE] [--include TAGS] [--exclude TAGS]
                              [--difficulty SPEC] [--importance SPEC] [--seed N]
  python -m quiz_renderer list [same filter flags]
  python -m quiz_renderer settings [--set key=value ...]
  python -m quiz_renderer check [--questions SOURCE]

SOURCE is a path or an http(s) URL (default: questions.json).
SPEC is all, a level name, or a level suffixed with + (at least) or - (at most).
Add --verbose to any command for debug logging.
"""
from __future__ import annotations

import logging
import random
import sys

from quiz_renderer.errors import DataLoadError

SETTINGS_FLAGS = {
    "shuffle-questions": "shuffle_questions",
    "shuffle-answers": "shuffle_answers",
    "show-difficulty": "show_difficulty",
    "show-importance": "show_importance",
    "show-tags": "show_tags",
}


def main(argv: list[str] | None = None):
    args = sys.argv[1:] if argv is None else argv
    command = args[0] if args else "run"

    logging.basicConfig(
        level=logging.DEBUG if "--verbose" in args else logging.WARNING,
        format="%(name)s | %(message)s",
    )

    if command == "run":
        _run(args[1:])
    elif command == "list":
        _list(args[1:])
    elif command == "settings":
        _settings(args[1:])
    elif command == "check":
        _check(args[1:])
    else:
        print(f"Unknown command: {command}")
        print("Commands: run, list, settings, check")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _parse_multi_flag(args: list[str], name: str) -> list[str]:
    return [args[i + 1] for i, a in enumerate(args) if a == name and i + 1 < len(args)]


def _criteria_from_args(args: list[str]):
    from quiz_renderer.filters import ALL, FilterCriteria

    return FilterCriteria(
        include_tags=_parse_flag(args, "--include", ""),
        exclude_tags=_parse_flag(args, "--exclude", ""),
        difficulty=_parse_flag(args, "--difficulty", ALL),
        importance=_parse_flag(args, "--importance", ALL),
    )


def _load_quiz(args: list[str]):
    from quiz_renderer.loader import DEFAULT_SOURCE, load_questions
    from quiz_renderer.quiz import Quiz

    source = _parse_flag(args, "--questions", DEFAULT_SOURCE)
    try:
        questions = load_questions(source)
    except DataLoadError as e:
        print(f"Failed to load questions: {e}")
        sys.exit(1)
    quiz = Quiz(questions)
    quiz.apply_filters(_criteria_from_args(args))
    return quiz


def parse_submission(question, raw: str, answers) -> object:
    """Map terminal input onto the validation input shape for *question*.

    Choice options are numbered from 1 in display order, which may differ
    from the authored order when answers are shuffled. Unparseable input
    becomes None so the quiz prompts for an answer.
    """
    from quiz_renderer.models import MultiSelectQuestion, MultipleChoiceQuestion

    raw = raw.strip()
    if isinstance(question, (MultipleChoiceQuestion, MultiSelectQuestion)):
        picked = []
        for part in raw.replace(" ", ",").split(","):
            if not part:
                continue
            try:
                n = int(part)
            except ValueError:
                return None
            if not 1 <= n <= len(answers):
                return None
            picked.append(answers[n - 1].index)
        if not picked:
            return None
        if isinstance(question, MultipleChoiceQuestion):
            return picked[0] if len(picked) == 1 else None
        return picked
    return raw


def _run(args: list[str]):
    from quiz_renderer.config import load_settings
    from quiz_renderer.render import NO_QUESTIONS, render_feedback, render_question, render_score

    settings = load_settings()
    quiz = _load_quiz(args)
    seed = _parse_flag(args, "--seed", "")
    rng = random.Random(int(seed)) if seed else None

    items = quiz.render_list(settings, rng)
    print(f"Showing {quiz.shown_count} of {quiz.total_count} questions")
    if not items:
        print(NO_QUESTIONS)
        return

    try:
        for item in items:
            print()
            print(render_question(item, settings))
            q = item.question
            if q.is_info:
                input("Press Enter to show the answer ")
                submission = None
            else:
                submission = parse_submission(q, input("> "), item.answers)
            feedback = quiz.check_answer(q.id, submission)
            if feedback is None:
                continue
            print(render_feedback(feedback, q))
            print(render_score(quiz.score()))
    except (EOFError, KeyboardInterrupt):
        print()

    print()
    print(f"Final {render_score(quiz.score())}")


def _list(args: list[str]):
    from quiz_renderer.config import load_settings
    from quiz_renderer.render import render_quiz

    settings = load_settings()
    quiz = _load_quiz(args)
    print(f"Showing {quiz.shown_count} of {quiz.total_count} questions\n")
    print(render_quiz(quiz.render_list(settings), settings))


def _settings(args: list[str]):
    from quiz_renderer.config import load_settings, save_settings

    settings = load_settings()
    changes = _parse_multi_flag(args, "--set")
    for change in changes:
        key, _, value = change.partition("=")
        attr = SETTINGS_FLAGS.get(key.strip())
        if attr is None:
            print(f"Unknown setting: {key}")
            print("Settings: " + ", ".join(SETTINGS_FLAGS))
            sys.exit(1)
        setattr(settings, attr, value.strip().lower() in ("1", "true", "yes", "on"))
    if changes:
        save_settings(settings)

    for flag, attr in SETTINGS_FLAGS.items():
        print(f"{flag:18s} {'on' if getattr(settings, attr) else 'off'}")


def _check(args: list[str]):
    """Report problems in a question file without starting a quiz."""
    from quiz_renderer.loader import DEFAULT_SOURCE, load_questions
    from quiz_renderer.models import UnknownTypeQuestion

    source = _parse_flag(args, "--questions", DEFAULT_SOURCE)
    try:
        questions = load_questions(source)
    except DataLoadError as e:
        print(f"FAIL {e}")
        sys.exit(1)

    problems = 0
    for q in questions:
        if isinstance(q, UnknownTypeQuestion):
            print(f"  [{q.id}] unknown type {q.type!r}: {q.text}")
            problems += 1
        elif not q.is_info and not q.correct_answers():
            print(f"  [{q.id}] no correct answer defined: {q.text}")
            problems += 1

    print(f"{len(questions)} questions, {problems} problems")
    if problems:
        sys.exit(1)


if __name__ == "__main__":
    main()
