"""Loading and strict validation for alternate scoring weight tables."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..domain.scoring_config import CATEGORIES, DEFAULT_SCORING_CONFIG, ScoringConfig
from ..exceptions import ScoringConfigFileNotFoundError, ScoringConfigValidationError
from ..protocols import FileSystem

_SCHEMA_VERSION = 1
_SUM_TOLERANCE = 1e-6


def _sums_to_100(values: Mapping[str, float]) -> bool:
    return abs(sum(values.values()) - 100) <= _SUM_TOLERANCE


class _ScoringConfigModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    id: str
    name: str
    version: str
    category_weights: dict[str, float]
    sub_factor_weights: dict[str, dict[str, float]]
    section_weights: dict[str, float] | None = None

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @field_validator("id", "name", "version")
    @classmethod
    def _validate_non_empty(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("category_weights", "section_weights")
    @classmethod
    def _validate_category_table(cls, value: dict[str, float] | None) -> dict[str, float] | None:
        if value is None:
            return None
        if set(value) != set(CATEGORIES):
            raise ValueError(f"categories must be exactly {', '.join(CATEGORIES)}")
        if any(weight < 0 for weight in value.values()):
            raise ValueError("weights must be non-negative")
        if not _sums_to_100(value):
            raise ValueError("weights must sum to 100")
        return value

    @model_validator(mode="after")
    def _validate_sub_factors(self) -> _ScoringConfigModel:
        if set(self.sub_factor_weights) != set(CATEGORIES):
            raise ValueError(f"sub_factor_weights must cover exactly {', '.join(CATEGORIES)}")
        for category, weights in self.sub_factor_weights.items():
            expected = set(DEFAULT_SCORING_CONFIG.sub_factors(category))
            if set(weights) != expected:
                raise ValueError(
                    f"{category} sub-factors must be exactly {', '.join(sorted(expected))}"
                )
            if any(weight < 0 for weight in weights.values()):
                raise ValueError(f"{category} sub-factor weights must be non-negative")
            if not _sums_to_100(weights):
                raise ValueError(f"{category} sub-factor weights must sum to 100")
        return self


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",))) or "<root>"
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def _to_readonly_mapping(values: Mapping[str, float]) -> MappingProxyType[str, float]:
    return MappingProxyType(dict(values))


def load_scoring_config(*, path: Path, fs: FileSystem) -> ScoringConfig:
    """Load and validate a scoring weight table from JSON."""
    if not fs.exists(path):
        raise ScoringConfigFileNotFoundError(str(path))

    payload = fs.read_text(path)
    try:
        model = _ScoringConfigModel.model_validate_json(payload)
    except ValidationError as exc:
        raise ScoringConfigValidationError(str(path), _format_validation_error(exc)) from exc

    section_weights = model.section_weights or model.category_weights
    return ScoringConfig(
        id=model.id,
        name=model.name,
        version=model.version,
        category_weights=_to_readonly_mapping(model.category_weights),
        sub_factor_weights=MappingProxyType(
            {
                category: _to_readonly_mapping(model.sub_factor_weights[category])
                for category in CATEGORIES
            }
        ),
        section_weights=_to_readonly_mapping(section_weights),
    )
