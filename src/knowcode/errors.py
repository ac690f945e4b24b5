"""Exceptions raised by the grading layers around the matching core."""

from __future__ import annotations


class KnowCodeError(Exception):
    """Base class for KnowCode errors."""


class ConfigError(KnowCodeError):
    """A config or test-key file could not be read or parsed."""


class InputTooLongError(KnowCodeError):
    """A submitted or reference text exceeds the configured length limit."""

    def __init__(self, field: str, length: int, limit: int):
        super().__init__(f"{field} is {length} characters; the limit is {limit}")
        self.field = field
        self.length = length
        self.limit = limit
