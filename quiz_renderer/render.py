"""Plain-text rendering of questions, feedback and the score line."""
from __future__ import annotations

from quiz_renderer.config import Settings
from quiz_renderer.models import (
    MultiSelectQuestion,
    MultipleChoiceQuestion,
    Question,
    TextInputQuestion,
)
from quiz_renderer.quiz import AnswerFeedback, RenderedQuestion
from quiz_renderer.scoring import ScoreDisplay

NO_QUESTIONS = "No questions match your filters."
NO_CORRECT_ANSWER = "Error: No correct answer defined."


def capitalize_first_letter(text: str) -> str:
    if not isinstance(text, str):
        raise TypeError("Input must be a string")
    if not text:
        return text
    return text[0].upper() + text[1:].lower()


def render_metadata(question: Question, settings: Settings) -> str:
    parts = []
    if settings.show_difficulty:
        parts.append(f"[{capitalize_first_letter(question.difficulty)}]")
    if settings.show_importance:
        parts.append(f"[{capitalize_first_letter(question.importance)}]")
    if settings.show_tags and question.tags:
        parts.append(", ".join(capitalize_first_letter(t) for t in question.tags))
    return " ".join(parts)


def render_question(item: RenderedQuestion, settings: Settings) -> str:
    q = item.question
    lines = [f"Q{item.position + 1}. {q.text}"]
    meta = render_metadata(q, settings)
    if meta:
        lines.insert(0, meta)

    if isinstance(q, MultipleChoiceQuestion):
        lines.extend(f"  ({n}) {a.text}" for n, a in enumerate(item.answers, 1))
    elif isinstance(q, MultiSelectQuestion):
        lines.extend(f"  [{n}] {a.text}" for n, a in enumerate(item.answers, 1))
        lines.append("  (select all that apply, e.g. 1,3)")
    elif isinstance(q, TextInputQuestion):
        lines.append("  Type your answer...")
    return "\n".join(lines)


def render_quiz(items: list[RenderedQuestion], settings: Settings) -> str:
    if not items:
        return NO_QUESTIONS
    return "\n\n".join(render_question(i, settings) for i in items)


def render_correct_answers(question: Question) -> str:
    if question.is_info:
        return ""
    correct = question.correct_answers()
    if not correct:
        return NO_CORRECT_ANSWER
    label = "Correct answers" if len(correct) > 1 else "Correct answer"
    return f"{label}: " + " | ".join(a.text for a in correct)


def render_feedback(feedback: AnswerFeedback, question: Question) -> str:
    lines = []
    if feedback.message:
        mark = "✅" if feedback.correct else "❌"
        lines.append(f"{mark} {feedback.message}")
    spoiler = render_correct_answers(question)
    if spoiler:
        lines.append(spoiler)
    if feedback.explanation:
        lines.append(f"Explanation: {feedback.explanation}")
    return "\n".join(lines)


def render_score(score: ScoreDisplay) -> str:
    return f"Score: {score.text} [{score.color}]"
