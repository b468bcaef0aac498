"""Typed parsing and validation for scoring config files.

Example ``govcon-match.toml``:

    schema_version = 1

    [scoring]
    scoring_config_path = "data/reference/weights.json"
    notify_min_match_score = 80
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError
from .protocols import FileSystem

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class MatchConfigFile:
    """Validated scoring config values loaded from a TOML file."""

    scoring_config_path: str | None = None
    certification_taxonomy_path: str | None = None
    notify_min_match_score: int | None = None
    notify_min_credibility: int | None = None
    notify_min_confidence: int | None = None
    reference_year: int | None = None
    output_dir: str | None = None


class _ScoringSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    scoring_config_path: str | None = None
    certification_taxonomy_path: str | None = None
    notify_min_match_score: int | None = None
    notify_min_credibility: int | None = None
    notify_min_confidence: int | None = None
    reference_year: int | None = None
    output_dir: str | None = None

    @field_validator("scoring_config_path", "certification_taxonomy_path", "output_dir")
    @classmethod
    def _validate_non_empty_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("notify_min_match_score", "notify_min_credibility", "notify_min_confidence")
    @classmethod
    def _validate_threshold(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 0 or value > 100:
            raise ValueError
        return value

    @field_validator("reference_year")
    @classmethod
    def _validate_reference_year(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 1:
            raise ValueError
        return value


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    scoring: _ScoringSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_match_config_file(*, path: Path, fs: FileSystem) -> MatchConfigFile:
    """Load and validate a scoring TOML config file."""
    if not fs.exists(path):
        raise ConfigFileNotFoundError(str(path))

    raw_payload = fs.read_text(path)
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), _format_validation_error(exc)) from exc

    section = model.scoring
    return MatchConfigFile(
        scoring_config_path=section.scoring_config_path,
        certification_taxonomy_path=section.certification_taxonomy_path,
        notify_min_match_score=section.notify_min_match_score,
        notify_min_credibility=section.notify_min_credibility,
        notify_min_confidence=section.notify_min_confidence,
        reference_year=section.reference_year,
        output_dir=section.output_dir,
    )
