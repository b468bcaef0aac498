"""Tests for CLI composition root wiring."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from govcon_match import composition
from govcon_match.cli_progress import CliProgressReporter
from govcon_match.config import MatchConfig
from govcon_match.domain.scoring_config import DEFAULT_SCORING_CONFIG
from govcon_match.exceptions import ScoringConfigFileNotFoundError
from tests.fakes import InMemoryFileSystem


def test_build_cli_dependencies_uses_defaults() -> None:
    deps = composition.build_cli_dependencies(config=MatchConfig(), fs=InMemoryFileSystem())

    assert deps.scorer.config is DEFAULT_SCORING_CONFIG
    assert deps.scorer.taxonomy is None
    assert deps.thresholds.min_match_score == 75
    assert isinstance(deps.progress, CliProgressReporter)


def test_build_cli_dependencies_loads_configured_files() -> None:
    fs = InMemoryFileSystem()
    weights = {
        "schema_version": 1,
        "id": "pilot-v5",
        "name": "Pilot weights",
        "version": "5.0",
        "category_weights": dict(DEFAULT_SCORING_CONFIG.category_weights),
        "sub_factor_weights": {
            category: dict(sub_weights)
            for category, sub_weights in DEFAULT_SCORING_CONFIG.sub_factor_weights.items()
        },
    }
    fs.write_text(json.dumps(weights), Path("weights.json"))
    fs.write_text(
        json.dumps({"version": "1", "certifications": [{"id": "wosb", "name": "WOSB"}]}),
        Path("certifications.json"),
    )
    config = MatchConfig(
        scoring_config_path="weights.json",
        certification_taxonomy_path="certifications.json",
        notify_min_match_score=80,
        reference_year=2024,
    )

    deps = composition.build_cli_dependencies(config=config, fs=fs)

    assert deps.scorer.config.id == "pilot-v5"
    assert deps.scorer.taxonomy is not None
    assert deps.scorer.reference_year == 2024
    assert deps.thresholds.min_match_score == 80


def test_build_cli_dependencies_fails_on_missing_weight_table() -> None:
    config = MatchConfig(scoring_config_path="missing.json")

    with pytest.raises(ScoringConfigFileNotFoundError):
        composition.build_cli_dependencies(config=config, fs=InMemoryFileSystem())
