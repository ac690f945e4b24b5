"""Configuration model for KnowCode."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from knowcode.engine.prosigns import ProsignMapping
from knowcode.errors import ConfigError

DEFAULT_DATA_DIR = Path.home() / ".knowcode"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ProsignConfig(BaseModel):
    prosign: str
    alternate: str

    @field_validator("prosign", "alternate")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    def to_mapping(self) -> ProsignMapping:
        return ProsignMapping(prosign=self.prosign, alternate=self.alternate)


def _default_prosigns() -> list[ProsignConfig]:
    return [
        ProsignConfig(prosign="<BT>", alternate="="),
        ProsignConfig(prosign="<AR>", alternate="+"),
        ProsignConfig(prosign="<KN>", alternate="("),
        ProsignConfig(prosign="<AS>", alternate="&"),
    ]


class GradingConfig(BaseModel):
    copy_pass_chars: int = Field(default=100, ge=1)
    question_pass_score: int = Field(default=7, ge=0)
    max_text_length: int = Field(default=2000, ge=1)


class Settings(BaseModel):
    prosigns: list[ProsignConfig] = Field(default_factory=_default_prosigns)
    grading: GradingConfig = Field(default_factory=GradingConfig)
    log_level: str = "WARNING"
    data_dir: Path = DEFAULT_DATA_DIR

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return value

    def prosign_table(self) -> list[ProsignMapping]:
        """The prosign table in configured order."""
        return [p.to_mapping() for p in self.prosigns]

    @staticmethod
    def config_path() -> Path:
        env_path = os.environ.get("KNOWCODE_CONFIG")
        if env_path:
            return Path(env_path)
        return DEFAULT_DATA_DIR / "config.yaml"

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        config_path = path or cls.config_path()
        data: dict = {}
        if config_path.exists():
            try:
                with open(config_path) as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Expected a mapping in {config_path}")

        # Environment overrides the file
        if os.environ.get("KNOWCODE_LOG_LEVEL"):
            data["log_level"] = os.environ["KNOWCODE_LOG_LEVEL"]

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {config_path}: {e}") from e

    def save(self, path: Optional[Path] = None) -> Path:
        config_path = path or self.data_dir / "config.yaml"
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)
        return config_path
