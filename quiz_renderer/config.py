from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from pathlib import Path

log = logging.getLogger("quiz_renderer.config")

CONFIG_PATH = Path(
    os.environ.get(
        "QUIZ_RENDERER_SETTINGS",
        Path(__file__).resolve().parent.parent / "quiz_settings.json",
    )
)

DEFAULTS = {
    "shuffle_questions": False,
    "shuffle_answers": False,
    "show_difficulty": True,
    "show_importance": True,
    "show_tags": True,
}

# Python field name -> key in the persisted blob
BLOB_KEYS = {
    "shuffle_questions": "shuffleQuestions",
    "shuffle_answers": "shuffleAnswers",
    "show_difficulty": "showDifficulty",
    "show_importance": "showImportance",
    "show_tags": "showTags",
}


@dataclass
class Settings:
    shuffle_questions: bool = DEFAULTS["shuffle_questions"]
    shuffle_answers: bool = DEFAULTS["shuffle_answers"]
    show_difficulty: bool = DEFAULTS["show_difficulty"]
    show_importance: bool = DEFAULTS["show_importance"]
    show_tags: bool = DEFAULTS["show_tags"]

    def to_dict(self) -> dict:
        return {
            "shuffleQuestions": self.shuffle_questions,
            "shuffleAnswers": self.shuffle_answers,
            "showDifficulty": self.show_difficulty,
            "showImportance": self.show_importance,
            "showTags": self.show_tags,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> Settings:
        """Accept either blob keys or field names; unknown keys are dropped."""
        known = {f.name for f in fields(cls)}
        by_blob_key = {v: k for k, v in BLOB_KEYS.items()}
        values = {}
        for key, value in raw.items():
            name = by_blob_key.get(key, key)
            if name in known:
                values[name] = bool(value)
        return cls(**values)


class SettingsStore(ABC):
    @abstractmethod
    def load(self) -> Settings:
        ...

    @abstractmethod
    def save(self, settings: Settings) -> None:
        ...


class JsonFileSettingsStore(SettingsStore):
    def __init__(self, path: Path):
        self.path = path

    def load(self) -> Settings:
        if not self.path.exists():
            return Settings()
        try:
            raw = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            log.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            return Settings()
        if not isinstance(raw, dict):
            log.warning("Ignoring settings file %s: expected a JSON object", self.path)
            return Settings()
        return Settings.from_dict(raw)

    def save(self, settings: Settings) -> None:
        self.path.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")


class MemorySettingsStore(SettingsStore):
    """Keeps the serialized blob in memory (tests, throwaway runs)."""

    def __init__(self, blob: dict | None = None):
        self.blob = dict(blob) if blob else None

    def load(self) -> Settings:
        if self.blob is None:
            return Settings()
        return Settings.from_dict(self.blob)

    def save(self, settings: Settings) -> None:
        self.blob = settings.to_dict()


def load_settings() -> Settings:
    return JsonFileSettingsStore(CONFIG_PATH).load()


def save_settings(settings: Settings) -> None:
    JsonFileSettingsStore(CONFIG_PATH).save(settings)
