"""Shared test fixtures."""
from __future__ import annotations

import json

import pytest

from quiz_renderer.parsers.question_parser import IdCounter, parse_question, parse_questions


@pytest.fixture
def ids():
    return IdCounter()


@pytest.fixture
def mc_record():
    return {
        "type": "multiple_choice",
        "question": "What is the capital of France?",
        "answers": ["Berlin", "Paris", "Madrid", "Rome"],
        "correctIndices": [1],
        "tags": ["geography", "Europe"],
        "difficulty": "easy",
        "importance": "essential",
    }


@pytest.fixture
def ms_record():
    return {
        "type": "multi_select",
        "question": "Which of these are prime numbers?",
        "answers": ["2", "4", "5", "9"],
        "correctIndices": [0, 2],
        "explanation": "4 and 9 are squares.",
        "tags": ["math"],
        "difficulty": "medium",
    }


@pytest.fixture
def text_record():
    return {
        "type": "text_input",
        "question": "What is the chemical symbol for gold?",
        "correctAnswers": ["Au", " aurum "],
        "tags": ["science", "chemistry"],
        "difficulty": "hard",
        "importance": "rare",
    }


@pytest.fixture
def info_record():
    return {
        "type": "info",
        "question": "Water boils at 100 degrees Celsius at sea level.",
        "tags": ["science"],
    }


@pytest.fixture
def mc_question(mc_record, ids):
    return parse_question(mc_record, ids)


@pytest.fixture
def ms_question(ms_record, ids):
    return parse_question(ms_record, ids)


@pytest.fixture
def text_question(text_record, ids):
    return parse_question(text_record, ids)


@pytest.fixture
def info_question(info_record, ids):
    return parse_question(info_record, ids)


@pytest.fixture
def sample_records(mc_record, ms_record, text_record, info_record):
    return [mc_record, ms_record, text_record, info_record]


@pytest.fixture
def sample_questions(sample_records):
    return parse_questions(sample_records)


@pytest.fixture
def questions_file(tmp_path, sample_records):
    """A questions.json on disk holding the sample records."""
    path = tmp_path / "questions.json"
    path.write_text(json.dumps(sample_records))
    return path
