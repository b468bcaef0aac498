"""Batch match scoring: one profile against many opportunities.

Writes a ranked score report and a notification shortlist. Ranking is by match
score, then confidence; ties keep input order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ..domain.match_scoring import MatchScore, MatchScorer
from ..domain.notifications import (
    DEFAULT_NOTIFICATION_THRESHOLDS,
    NotificationThresholds,
    should_notify_user,
)
from ..domain.records import Opportunity, Profile
from ..domain.scoring_config import (
    CREDIBILITY_MARKET_PRESENCE,
    PAST_PERFORMANCE,
    STRATEGIC_FIT_RELATIONSHIPS,
    TECHNICAL_CAPABILITY,
)
from ..observability.logging import get_logger
from ..protocols import FileSystem, ProgressReporter

BATCH_SCORE_COLUMNS: tuple[str, ...] = (
    "opportunity_id",
    "profile_id",
    "score",
    "confidence",
    "past_performance",
    "technical_capability",
    "strategic_fit_relationships",
    "credibility_market_presence",
    "notify",
    "algorithm_version",
    "recommendations",
)

SCORES_FILENAME = "match_scores.csv"
NOTIFICATIONS_FILENAME = "notifications.csv"


@dataclass(frozen=True)
class BatchScoreOutputs:
    scores: Path
    notifications: Path
    scored: int
    notified: int


def build_score_frame(
    results: Sequence[MatchScore],
    thresholds: NotificationThresholds = DEFAULT_NOTIFICATION_THRESHOLDS,
) -> pd.DataFrame:
    """Tabulate match results, ranked by score then confidence."""
    rows = [
        {
            "opportunity_id": result.opportunity_id,
            "profile_id": result.profile_id,
            "score": result.score,
            "confidence": result.confidence,
            PAST_PERFORMANCE: round(result.factors[PAST_PERFORMANCE].score, 2),
            TECHNICAL_CAPABILITY: round(result.factors[TECHNICAL_CAPABILITY].score, 2),
            STRATEGIC_FIT_RELATIONSHIPS: round(
                result.factors[STRATEGIC_FIT_RELATIONSHIPS].score, 2
            ),
            CREDIBILITY_MARKET_PRESENCE: round(
                result.factors[CREDIBILITY_MARKET_PRESENCE].score, 2
            ),
            "notify": should_notify_user(result, thresholds),
            "algorithm_version": result.algorithm_version,
            "recommendations": "; ".join(result.recommendations),
        }
        for result in results
    ]
    df = pd.DataFrame(rows, columns=list(BATCH_SCORE_COLUMNS))
    if df.empty:
        return df
    return df.sort_values(
        ["score", "confidence"], ascending=[False, False], kind="stable"
    ).reset_index(drop=True)


def run_batch_score(
    *,
    opportunities: Sequence[Opportunity],
    profile: Profile | None,
    out_dir: Path,
    fs: FileSystem,
    scorer: MatchScorer | None = None,
    thresholds: NotificationThresholds = DEFAULT_NOTIFICATION_THRESHOLDS,
    progress: ProgressReporter | None = None,
) -> BatchScoreOutputs:
    """Score every opportunity against one profile and write CSV reports.

    Args:
        opportunities: Canonical opportunities, in input order.
        profile: Canonical profile, or None for neutral defaults.
        out_dir: Directory for the score and notification reports.
        fs: Filesystem used for writing.
        scorer: Configured scorer; defaults to the standard weight table.
        thresholds: Notification thresholds applied to the shortlist.
        progress: Optional progress reporter.

    Returns:
        Paths of the written reports and row counts.
    """
    logger = get_logger("govcon_match.batch")
    scorer = scorer or MatchScorer()
    logger.info("Scoring: %s opportunities", len(opportunities))

    if progress is not None:
        progress.start("Scoring opportunities", len(opportunities))
    results: list[MatchScore] = []
    for opportunity in opportunities:
        results.append(scorer.score(opportunity, profile))
        if progress is not None:
            progress.advance(1)
    if progress is not None:
        progress.finish()

    df = build_score_frame(results, thresholds)
    scores_path = out_dir / SCORES_FILENAME
    fs.write_csv(df, scores_path)
    logger.info("Scores: %s", scores_path)

    shortlist = df[df["notify"]] if not df.empty else df
    notifications_path = out_dir / NOTIFICATIONS_FILENAME
    fs.write_csv(shortlist, notifications_path)
    logger.info("Notifications: %s (%s opportunities)", notifications_path, len(shortlist))

    return BatchScoreOutputs(
        scores=scores_path,
        notifications=notifications_path,
        scored=len(df),
        notified=len(shortlist),
    )
