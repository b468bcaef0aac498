"""Notification gating for scored opportunities.

A user is notified only when the match score, profile credibility and scoring
confidence all clear their thresholds. The readiness report explains each
criterion and how to improve the ones that fail.
"""

from __future__ import annotations

from dataclasses import dataclass

from .match_scoring import MatchScore


@dataclass(frozen=True)
class NotificationThresholds:
    """Minimums a match must meet before a user is notified."""

    min_match_score: int = 75
    min_credibility: int = 60
    min_confidence: int = 65


DEFAULT_NOTIFICATION_THRESHOLDS = NotificationThresholds()


@dataclass(frozen=True)
class NotificationScores:
    match: float
    credibility: float
    confidence: float


@dataclass(frozen=True)
class NotificationReadiness:
    """Why a match does or does not warrant a notification."""

    ready: bool
    reasons: tuple[str, ...]
    improvements: tuple[str, ...]
    scores: NotificationScores

    def to_dict(self) -> dict[str, object]:
        return {
            "ready": self.ready,
            "reasons": list(self.reasons),
            "improvements": list(self.improvements),
            "scores": {
                "match": self.scores.match,
                "credibility": self.scores.credibility,
                "confidence": self.scores.confidence,
            },
        }


def should_notify_user(
    match: MatchScore,
    thresholds: NotificationThresholds = DEFAULT_NOTIFICATION_THRESHOLDS,
) -> bool:
    return (
        match.score >= thresholds.min_match_score
        and match.credibility >= thresholds.min_credibility
        and match.confidence >= thresholds.min_confidence
    )


def _pct(value: float) -> str:
    return f"{value:g}%"


def get_notification_readiness(
    match: MatchScore,
    thresholds: NotificationThresholds = DEFAULT_NOTIFICATION_THRESHOLDS,
) -> NotificationReadiness:
    """Explain each notification criterion for a scored match."""
    reasons: list[str] = []
    improvements: list[str] = []
    credibility = match.credibility

    if match.score >= thresholds.min_match_score:
        reasons.append(f"Strong opportunity match ({_pct(match.score)})")
    else:
        reasons.append(
            f"Match score too low ({_pct(match.score)} < {_pct(thresholds.min_match_score)})"
        )
        improvements.append("Focus on improving NAICS alignment and past performance")

    if credibility >= thresholds.min_credibility:
        reasons.append(f"Adequate profile credibility ({_pct(credibility)})")
    else:
        reasons.append(
            "Profile credibility insufficient "
            f"({_pct(credibility)} < {_pct(thresholds.min_credibility)})"
        )
        improvements.append(
            "Complete contact information, basic company details, and SAM.gov registration"
        )

    if match.confidence >= thresholds.min_confidence:
        reasons.append(f"High algorithm confidence ({_pct(match.confidence)})")
    else:
        reasons.append(
            "Algorithm confidence too low "
            f"({_pct(match.confidence)} < {_pct(thresholds.min_confidence)})"
        )
        improvements.append("Add more profile details to improve matching accuracy")

    return NotificationReadiness(
        ready=should_notify_user(match, thresholds),
        reasons=tuple(reasons),
        improvements=tuple(improvements),
        scores=NotificationScores(
            match=match.score,
            credibility=credibility,
            confidence=match.confidence,
        ),
    )
