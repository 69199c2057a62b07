"""Tests for corpus retrieval from files and URLs."""
from __future__ import annotations

import json

import httpx
import pytest

from quiz_renderer.errors import DataLoadError, MalformedQuestion
from quiz_renderer.loader import is_url, load_question_data, load_questions
from quiz_renderer.parsers.question_parser import IdCounter


def _transport(status=200, body=None, text=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=body)
    return httpx.MockTransport(handler)


class TestIsUrl:
    def test_urls(self):
        assert is_url("http://example.com/q.json")
        assert is_url("https://example.com/q.json")

    def test_paths(self):
        assert not is_url("questions.json")
        assert not is_url("/srv/http/questions.json")


class TestLoadFromFile:
    @pytest.mark.asyncio
    async def test_loads_file(self, questions_file):
        questions = await load_question_data(questions_file)
        assert [q.type for q in questions] == ["multiple_choice", "multi_select", "text_input", "info"]

    @pytest.mark.asyncio
    async def test_string_path(self, questions_file):
        questions = await load_question_data(str(questions_file))
        assert len(questions) == 4

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError):
            await load_question_data(tmp_path / "missing.json")

    @pytest.mark.asyncio
    async def test_invalid_json(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text("[{")
        with pytest.raises(DataLoadError):
            await load_question_data(path)

    @pytest.mark.asyncio
    async def test_not_a_list(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps({"type": "info"}))
        with pytest.raises(DataLoadError, match="JSON array"):
            await load_question_data(path)

    @pytest.mark.asyncio
    async def test_record_not_object(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps([{"type": "info", "question": "ok"}, "oops"]))
        with pytest.raises(DataLoadError, match="record 1"):
            await load_question_data(path)

    @pytest.mark.asyncio
    async def test_malformed_question_fails_whole_load(self, tmp_path, sample_records):
        sample_records.append({"type": "text_input", "question": "No answers"})
        path = tmp_path / "questions.json"
        path.write_text(json.dumps(sample_records))
        with pytest.raises(DataLoadError) as exc:
            await load_question_data(path)
        assert isinstance(exc.value.__cause__, MalformedQuestion)
        assert "correctAnswers" in str(exc.value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"correctIndices": 1}, "correctIndices"),
            ({"tags": ["a", 1]}, "tags"),
            ({"tags": "math"}, "tags"),
        ],
    )
    async def test_wrongly_typed_fields_fail_as_data_load_error(self, tmp_path, mc_record, overrides, field):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps([{**mc_record, **overrides}]))
        with pytest.raises(DataLoadError) as exc:
            await load_question_data(path)
        assert isinstance(exc.value.__cause__, MalformedQuestion)
        assert exc.value.__cause__.field == field

    @pytest.mark.asyncio
    async def test_ids_threaded_through(self, questions_file):
        ids = IdCounter(start=100)
        questions = await load_question_data(questions_file, ids=ids)
        assert questions[0].id == "100"
        assert ids.issued == 104


class TestLoadFromUrl:
    @pytest.mark.asyncio
    async def test_fetch(self, sample_records):
        questions = await load_question_data(
            "https://quiz.example/questions.json", transport=_transport(body=sample_records)
        )
        assert len(questions) == 4

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        with pytest.raises(DataLoadError, match="status: 404"):
            await load_question_data(
                "https://quiz.example/questions.json", transport=_transport(status=404, text="nope")
            )

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(DataLoadError):
            await load_question_data(
                "https://quiz.example/questions.json", transport=httpx.MockTransport(handler)
            )

    @pytest.mark.asyncio
    async def test_bad_body(self):
        with pytest.raises(DataLoadError):
            await load_question_data(
                "https://quiz.example/questions.json", transport=_transport(text="<html>")
            )


class TestLoadQuestionsSync:
    def test_blocking_wrapper(self, questions_file):
        assert len(load_questions(questions_file)) == 4
