"""Centralised, injectable configuration for govcon match scoring."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import MatchConfigFile
from .domain.notifications import NotificationThresholds


class ThresholdEnvVarError(ValueError):
    """Raised when an environment variable must be a 0-100 threshold."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be an integer between 0 and 100.")


class PositiveIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


@dataclass(frozen=True)
class MatchConfig:
    """Immutable runtime configuration for scoring commands.

    Load from environment with `MatchConfig.from_env()` or construct directly for testing.
    """

    # Optional data files
    scoring_config_path: str = ""
    certification_taxonomy_path: str = ""

    # Notification gate
    notify_min_match_score: int = 75
    notify_min_credibility: int = 60
    notify_min_confidence: int = 65

    # Scoring
    reference_year: int | None = None  # None = current UTC year

    # Output
    output_dir: str = "reports"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            MatchConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            scoring_config_path=os.getenv("SCORING_CONFIG_PATH", "").strip(),
            certification_taxonomy_path=os.getenv("CERTIFICATION_TAXONOMY_PATH", "").strip(),
            notify_min_match_score=_parse_threshold(
                os.getenv("NOTIFY_MIN_MATCH_SCORE", ""),
                env_name="NOTIFY_MIN_MATCH_SCORE",
                default=75,
            ),
            notify_min_credibility=_parse_threshold(
                os.getenv("NOTIFY_MIN_CREDIBILITY", ""),
                env_name="NOTIFY_MIN_CREDIBILITY",
                default=60,
            ),
            notify_min_confidence=_parse_threshold(
                os.getenv("NOTIFY_MIN_CONFIDENCE", ""),
                env_name="NOTIFY_MIN_CONFIDENCE",
                default=65,
            ),
            reference_year=_parse_optional_positive_int(
                os.getenv("SCORING_REFERENCE_YEAR", ""),
                env_name="SCORING_REFERENCE_YEAR",
            ),
            output_dir=os.getenv("OUTPUT_DIR", "reports").strip() or "reports",
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )

    def with_overrides(
        self,
        *,
        scoring_config_path: str | None = None,
        certification_taxonomy_path: str | None = None,
        reference_year: int | None = None,
        output_dir: str | None = None,
        log_level: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            scoring_config_path=self.scoring_config_path
            if scoring_config_path is None
            else scoring_config_path.strip(),
            certification_taxonomy_path=self.certification_taxonomy_path
            if certification_taxonomy_path is None
            else certification_taxonomy_path.strip(),
            reference_year=self.reference_year if reference_year is None else reference_year,
            output_dir=self.output_dir if output_dir is None else output_dir,
            log_level=self.log_level if log_level is None else log_level.strip().upper(),
        )

    def with_file_overrides(self, file_config: MatchConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            scoring_config_path=self.scoring_config_path
            if file_config.scoring_config_path is None
            else file_config.scoring_config_path,
            certification_taxonomy_path=self.certification_taxonomy_path
            if file_config.certification_taxonomy_path is None
            else file_config.certification_taxonomy_path,
            notify_min_match_score=self.notify_min_match_score
            if file_config.notify_min_match_score is None
            else file_config.notify_min_match_score,
            notify_min_credibility=self.notify_min_credibility
            if file_config.notify_min_credibility is None
            else file_config.notify_min_credibility,
            notify_min_confidence=self.notify_min_confidence
            if file_config.notify_min_confidence is None
            else file_config.notify_min_confidence,
            reference_year=self.reference_year
            if file_config.reference_year is None
            else file_config.reference_year,
            output_dir=self.output_dir
            if file_config.output_dir is None
            else file_config.output_dir,
        )

    def notification_thresholds(self) -> NotificationThresholds:
        return NotificationThresholds(
            min_match_score=self.notify_min_match_score,
            min_credibility=self.notify_min_credibility,
            min_confidence=self.notify_min_confidence,
        )


def _parse_threshold(value: str, *, env_name: str, default: int) -> int:
    """Parse an optional 0-100 integer threshold from an environment variable."""
    text = value.strip()
    if not text:
        return default
    try:
        parsed = int(text)
    except ValueError as exc:
        raise ThresholdEnvVarError(env_name) from exc
    if parsed < 0 or parsed > 100:
        raise ThresholdEnvVarError(env_name)
    return parsed


def _parse_optional_positive_int(value: str, *, env_name: str) -> int | None:
    """Parse an optional positive integer from an environment variable."""
    text = value.strip()
    if not text:
        return None
    try:
        parsed = int(text)
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed
