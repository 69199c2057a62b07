"""Retrieve the question corpus from a local file or an http(s) URL."""
from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import httpx

from quiz_renderer.errors import DataLoadError
from quiz_renderer.models import Question
from quiz_renderer.parsers.question_parser import IdCounter, parse_questions

log = logging.getLogger("quiz_renderer.loader")

DEFAULT_SOURCE = "questions.json"


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


async def _fetch_text(url: str, transport: httpx.AsyncBaseTransport | None = None) -> str:
    async with httpx.AsyncClient(timeout=30.0, transport=transport) as client:
        resp = await client.get(url)
        resp.raise_for_status()
        return resp.text


async def load_question_data(
    source: str | Path = DEFAULT_SOURCE,
    transport: httpx.AsyncBaseTransport | None = None,
    ids: IdCounter | None = None,
) -> list[Question]:
    """Load and parse every question record from *source*.

    Any failure is terminal for this load: no partial corpus is returned.
    """
    try:
        if is_url(source):
            log.info("Fetching questions from %s", source)
            text = await _fetch_text(source, transport)
        else:
            log.info("Reading questions from %s", source)
            text = Path(source).read_text(encoding="utf-8")

        records = json.loads(text)
        if not isinstance(records, list):
            raise DataLoadError(f"Expected a JSON array of questions, got {type(records).__name__}")
        for i, record in enumerate(records):
            if not isinstance(record, dict):
                raise DataLoadError(f"Question record {i} is not an object")

        return parse_questions(records, ids)
    except DataLoadError as e:
        log.error("Question loading failed: %s", e)
        raise
    except httpx.HTTPStatusError as e:
        log.error("Question loading failed: %s", e)
        raise DataLoadError(f"HTTP error! status: {e.response.status_code}") from e
    except (httpx.HTTPError, OSError, ValueError) as e:
        # ValueError covers bad JSON, bad encoding and MalformedQuestion
        log.error("Question loading failed: %s", e)
        raise DataLoadError(str(e)) from e


def load_questions(source: str | Path = DEFAULT_SOURCE) -> list[Question]:
    return asyncio.run(load_question_data(source))
