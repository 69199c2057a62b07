from __future__ import annotations


class MalformedQuestion(ValueError):
    """A question record is missing, or has the wrong shape for, a field its type requires."""

    def __init__(self, field: str, question_text: str | None, reason: str | None = None):
        self.field = field
        self.question_text = question_text
        self.reason = reason
        if reason:
            message = f'Invalid "{field}" for question: "{question_text}" ({reason}).'
        else:
            message = f'Missing "{field}" array for question: "{question_text}".'
        super().__init__(message)


class DataLoadError(RuntimeError):
    """The question corpus could not be retrieved or parsed."""
