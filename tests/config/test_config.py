"""Tests for MatchConfig behaviour."""

import pytest

import govcon_match.config as config_module
from govcon_match.config import MatchConfig, PositiveIntegerEnvVarError, ThresholdEnvVarError
from govcon_match.config_file import MatchConfigFile
from govcon_match.domain.notifications import NotificationThresholds


def _patch_env(monkeypatch: pytest.MonkeyPatch, env: dict[str, str]) -> None:
    def fake_getenv(key: str, default: str = "") -> str:
        return env.get(key, default)

    def fake_load_dotenv(dotenv_path: str | None = None) -> bool:
        _ = dotenv_path
        return True

    monkeypatch.setattr(config_module.os, "getenv", fake_getenv)
    monkeypatch.setattr(config_module, "load_dotenv", fake_load_dotenv)


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(monkeypatch, {})

    config = MatchConfig.from_env()

    assert config == MatchConfig()
    assert config.notification_thresholds() == NotificationThresholds(75, 60, 65)


def test_from_env_reads_all_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(
        monkeypatch,
        {
            "SCORING_CONFIG_PATH": " data/reference/weights.json ",
            "CERTIFICATION_TAXONOMY_PATH": "data/reference/certifications.json",
            "NOTIFY_MIN_MATCH_SCORE": "80",
            "NOTIFY_MIN_CREDIBILITY": "50",
            "NOTIFY_MIN_CONFIDENCE": "0",
            "SCORING_REFERENCE_YEAR": "2025",
            "OUTPUT_DIR": "out",
            "LOG_LEVEL": "debug",
        },
    )

    config = MatchConfig.from_env()

    assert config.scoring_config_path == "data/reference/weights.json"
    assert config.certification_taxonomy_path == "data/reference/certifications.json"
    assert config.notification_thresholds() == NotificationThresholds(80, 50, 0)
    assert config.reference_year == 2025
    assert config.output_dir == "out"
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["abc", "101", "-1", "75.5"])
def test_from_env_rejects_invalid_thresholds(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    _patch_env(monkeypatch, {"NOTIFY_MIN_CONFIDENCE": value})

    with pytest.raises(ThresholdEnvVarError, match="NOTIFY_MIN_CONFIDENCE"):
        MatchConfig.from_env()


@pytest.mark.parametrize("value", ["0", "next year"])
def test_from_env_rejects_invalid_reference_year(
    monkeypatch: pytest.MonkeyPatch, value: str
) -> None:
    _patch_env(monkeypatch, {"SCORING_REFERENCE_YEAR": value})

    with pytest.raises(PositiveIntegerEnvVarError, match="SCORING_REFERENCE_YEAR"):
        MatchConfig.from_env()


def test_with_overrides_preserves_unset_fields() -> None:
    base = MatchConfig(
        scoring_config_path="weights.json",
        notify_min_match_score=90,
        reference_year=2024,
    )

    updated = base.with_overrides(log_level=" warning ", output_dir="out")

    assert updated.log_level == "WARNING"
    assert updated.output_dir == "out"
    assert updated.scoring_config_path == "weights.json"
    assert updated.notify_min_match_score == 90
    assert updated.reference_year == 2024
    assert base.log_level == "INFO"


def test_file_overrides_take_precedence_over_env_values() -> None:
    base = MatchConfig(scoring_config_path="env.json", notify_min_credibility=40)

    updated = base.with_file_overrides(
        MatchConfigFile(scoring_config_path="file.json", notify_min_match_score=70)
    )

    assert updated.scoring_config_path == "file.json"
    assert updated.notify_min_match_score == 70
    assert updated.notify_min_credibility == 40
    assert updated.output_dir == "reports"
