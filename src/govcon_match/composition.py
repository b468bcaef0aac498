"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from pathlib import Path

from .application.certification_taxonomy import load_taxonomy_or_fallback
from .application.scoring_config import load_scoring_config
from .cli import CliDependencies, create_app
from .cli_progress import CliProgressReporter
from .config import MatchConfig
from .domain.match_scoring import MatchScorer
from .domain.scoring_config import DEFAULT_SCORING_CONFIG
from .infrastructure import LocalFileSystem
from .protocols import FileSystem


def build_cli_dependencies(*, config: MatchConfig, fs: FileSystem) -> CliDependencies:
    """Build concrete dependencies for CLI commands.

    Args:
        config: Runtime configuration naming optional weight and taxonomy files.
        fs: Filesystem used to read those files.

    Raises:
        ScoringConfigFileNotFoundError: If a configured weight table is missing.
        ScoringConfigValidationError: If a configured weight table is invalid.
    """
    scoring_config = DEFAULT_SCORING_CONFIG
    if config.scoring_config_path:
        scoring_config = load_scoring_config(path=Path(config.scoring_config_path), fs=fs)
    taxonomy = load_taxonomy_or_fallback(
        path=Path(config.certification_taxonomy_path)
        if config.certification_taxonomy_path
        else None,
        fs=fs,
    )
    if config.reference_year is None:
        scorer = MatchScorer(config=scoring_config, taxonomy=taxonomy)
    else:
        scorer = MatchScorer(
            config=scoring_config, taxonomy=taxonomy, reference_year=config.reference_year
        )
    return CliDependencies(
        scorer=scorer,
        thresholds=config.notification_thresholds(),
        progress=CliProgressReporter(),
    )


app = create_app(build_cli_dependencies, fs=LocalFileSystem())
