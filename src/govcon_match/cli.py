"""CLI for govcon match scoring.

Commands:
- profile-score: Score a contractor profile's completeness
- match-score: Score one opportunity against a profile, with notification readiness
- batch-score: Score many opportunities against one profile and write CSV reports
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint

from . import __version__
from .application.batch import run_batch_score
from .config import MatchConfig
from .config_file import load_match_config_file
from .domain.match_scoring import MatchScorer
from .domain.notifications import NotificationThresholds, get_notification_readiness
from .domain.profile_scoring import calculate_profile_score
from .domain.records import Profile
from .domain.scoring_config import get_category_label
from .exceptions import GovconMatchError
from .infrastructure.io.validation import (
    IncomingDataError,
    parse_opportunity,
    parse_opportunity_list,
    parse_profile,
    validate_json_as,
)
from .observability.logging import UnknownLogLevelError, set_log_level
from .protocols import FileSystem, ProgressReporter


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: MatchConfig, fs: FileSystem) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    scorer: MatchScorer
    thresholds: NotificationThresholds
    progress: ProgressReporter | None = None


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: MatchConfig
    fs: FileSystem
    deps_builder: DependenciesBuilder

    def build_dependencies(self) -> CliDependencies:
        """Return dependencies using the configured builder."""
        try:
            return self.deps_builder(config=self.config, fs=self.fs)
        except GovconMatchError as exc:
            raise typer.BadParameter(str(exc)) from exc


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the govcon-match entry point.")


class InputFileNotFoundError(typer.BadParameter):
    """Raised when a JSON input file does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Input file not found: {path}")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _read_json(fs: FileSystem, path: Path) -> object:
    if not fs.exists(path):
        raise InputFileNotFoundError(path)
    try:
        return validate_json_as(object, fs.read_text(path))
    except IncomingDataError as exc:
        raise typer.BadParameter(f"{path} is not valid JSON.") from exc


def _load_profile(fs: FileSystem, path: Path | None) -> Profile | None:
    if path is None:
        return None
    payload = _read_json(fs, path)
    if payload is None:
        return None
    try:
        return parse_profile(payload)
    except GovconMatchError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _echo_json(payload: dict[str, object]) -> None:
    typer.echo(json.dumps(payload, indent=2, sort_keys=False))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"govcon-match {__version__}")
        raise typer.Exit()


def create_app(deps_builder: DependenciesBuilder, *, fs: FileSystem) -> typer.Typer:
    """Create a Typer app wired with a dependencies builder and filesystem."""
    app = typer.Typer(
        add_completion=False,
        help="Government contracting scoring: profile completeness, opportunity match, notify",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="TOML config file with a [scoring] section",
            ),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option(
                "--log-level",
                help="Logging level (DEBUG, INFO, WARNING, ERROR)",
            ),
        ] = None,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the package version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        config = MatchConfig.from_env()
        if config_path is not None:
            try:
                file_config = load_match_config_file(path=config_path, fs=fs)
            except GovconMatchError as exc:
                raise typer.BadParameter(str(exc)) from exc
            config = config.with_file_overrides(file_config)
        config = config.with_overrides(log_level=log_level)
        try:
            set_log_level(config.log_level)
        except UnknownLogLevelError as exc:
            raise typer.BadParameter(str(exc)) from exc
        ctx.obj = CliContext(config=config, fs=fs, deps_builder=deps_builder)

    @app.command(name="profile-score")
    def profile_score(
        ctx: typer.Context,
        profile_path: Annotated[
            Path,
            typer.Option(
                "--profile",
                "-p",
                help="Profile JSON file",
            ),
        ],
        as_json: Annotated[
            bool,
            typer.Option("--json", help="Emit the full result as JSON"),
        ] = False,
    ) -> None:
        """Score a contractor profile's completeness."""
        state = _get_context(ctx)
        deps = state.build_dependencies()
        profile = _load_profile(state.fs, profile_path)
        result = calculate_profile_score(profile, deps.scorer.config)
        if as_json:
            _echo_json(result.to_dict())
            return

        readiness = result.readiness
        rprint(f"[green]✓ Profile score:[/green] {result.overall}/100 ({readiness.level})")
        rprint(f"  {readiness.description}")
        rprint(
            f"  Fields: {result.completed_fields}/{result.total_fields} complete, "
            f"critical {result.critical_fields_completed}/{result.total_critical_fields}"
        )
        for section in result.sections:
            label = get_category_label(section.section).label
            rprint(f"  {label}: {section.section_score}% (weight {section.weight:g}%)")
        for strength in result.strengths:
            rprint(f"  [green]+[/green] {strength}")
        for weakness in result.weaknesses:
            rprint(f"  [yellow]-[/yellow] {weakness}")
        if result.next_steps:
            rprint("[bold]Next steps:[/bold]")
            for step in result.next_steps:
                rprint(f"  • {step}")

    @app.command(name="match-score")
    def match_score(
        ctx: typer.Context,
        opportunity_path: Annotated[
            Path,
            typer.Option(
                "--opportunity",
                "-o",
                help="Opportunity JSON file",
            ),
        ],
        profile_path: Annotated[
            Path | None,
            typer.Option(
                "--profile",
                "-p",
                help="Profile JSON file (omit to score with neutral defaults)",
            ),
        ] = None,
        as_json: Annotated[
            bool,
            typer.Option("--json", help="Emit the full result as JSON"),
        ] = False,
    ) -> None:
        """Score one opportunity against a profile."""
        state = _get_context(ctx)
        deps = state.build_dependencies()
        profile = _load_profile(state.fs, profile_path)
        try:
            opportunity = parse_opportunity(_read_json(state.fs, opportunity_path))
        except GovconMatchError as exc:
            raise typer.BadParameter(str(exc)) from exc

        result = deps.scorer.score(opportunity, profile)
        readiness = get_notification_readiness(result, deps.thresholds)
        if as_json:
            _echo_json({**result.to_dict(), "notification": readiness.to_dict()})
            return

        rprint(
            f"[green]✓ Match score:[/green] {result.score}/100 "
            f"(confidence {result.confidence}%)"
        )
        for category, factor in result.factors.items():
            label = get_category_label(category).label
            rprint(
                f"  {label}: {factor.score:.1f}% × {factor.weight:g}% = "
                f"{factor.contribution:.2f} ({factor.details})"
            )
        if result.recommendations:
            rprint("[bold]Recommendations:[/bold]")
            for recommendation in result.recommendations:
                rprint(f"  • {recommendation}")
        status = "[green]notify[/green]" if readiness.ready else "[yellow]hold[/yellow]"
        rprint(f"[bold]Notification:[/bold] {status}")
        for reason in readiness.reasons:
            rprint(f"  {reason}")

    @app.command(name="batch-score")
    def batch_score(
        ctx: typer.Context,
        opportunities_path: Annotated[
            Path,
            typer.Option(
                "--opportunities",
                "-O",
                help="JSON array of opportunities",
            ),
        ],
        profile_path: Annotated[
            Path | None,
            typer.Option(
                "--profile",
                "-p",
                help="Profile JSON file",
            ),
        ] = None,
        output_dir: Annotated[
            Path | None,
            typer.Option(
                "--output-dir",
                "-d",
                help="Directory for match_scores.csv and notifications.csv",
            ),
        ] = None,
    ) -> None:
        """Score many opportunities against one profile and write CSV reports."""
        state = _get_context(ctx)
        deps = state.build_dependencies()
        profile = _load_profile(state.fs, profile_path)
        try:
            opportunities = parse_opportunity_list(_read_json(state.fs, opportunities_path))
        except GovconMatchError as exc:
            raise typer.BadParameter(str(exc)) from exc

        outputs = run_batch_score(
            opportunities=opportunities,
            profile=profile,
            out_dir=output_dir or Path(state.config.output_dir),
            fs=state.fs,
            scorer=deps.scorer,
            thresholds=deps.thresholds,
            progress=deps.progress,
        )
        rprint(f"[green]✓ Batch scoring complete:[/green] {outputs.scores}")
        rprint(f"  {outputs.scored:,} scored → {outputs.notified:,} ready to notify")
        rprint(f"  Notifications: {outputs.notifications}")

    return app
