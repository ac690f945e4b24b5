"""YAML loaders for test answer keys and learner submissions."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from knowcode.errors import ConfigError


class TestKey(BaseModel):
    """Answer key for one test: question answers plus the copy reference."""

    __test__ = False  # not a pytest test class

    test_id: str
    title: str = ""
    speed_wpm: Optional[int] = None
    passing_score: Optional[int] = Field(default=None, ge=0)  # None: use the configured default
    correct_answers: dict[str, str] = Field(default_factory=dict)
    reference_text: str = ""


class Submission(BaseModel):
    callsign: str
    answers: dict[str, str] = Field(default_factory=dict)  # question_id -> "A"/"B"/"C"/"D"
    copy_text: Optional[str] = None

    @field_validator("callsign")
    @classmethod
    def _normalize_callsign(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("Callsign is required")
        return value


def _read_yaml(path: Path) -> dict:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}")
    return data


def _mapping(value, what: str, path: Path) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"Expected a mapping for {what} in {path}")
    return value


def load_test_key(path: Path) -> TestKey:
    """Load a test key from YAML.

    The file holds a ``test`` mapping; question ids map to the correct
    option letter under ``answers`` and the copy passage sits under
    ``reference_text``.
    """
    data = _read_yaml(path)
    t = _mapping(data.get("test", data), "test", path)
    answers = _mapping(t.get("answers"), "answers", path)
    try:
        return TestKey(
            test_id=str(t["id"]),
            title=t.get("title", ""),
            speed_wpm=t.get("speed_wpm"),
            passing_score=t.get("passing_score"),
            correct_answers={str(k): str(v) for k, v in answers.items()},
            reference_text=t.get("reference_text", ""),
        )
    except KeyError as e:
        raise ConfigError(f"Missing field {e} in {path}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid test key in {path}: {e}") from e


def load_submission(path: Path) -> Submission:
    """Load a learner submission from YAML (or JSON, which YAML accepts)."""
    data = _read_yaml(path)
    answers = {
        str(k): str(v) for k, v in _mapping(data.get("answers"), "answers", path).items()
    }
    try:
        return Submission(
            callsign=data.get("callsign", ""),
            answers=answers,
            copy_text=data.get("copy_text"),
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid submission in {path}: {e}") from e
