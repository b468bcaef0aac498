"""Tests for notification gating."""

from types import MappingProxyType

import pytest

from govcon_match.domain.match_scoring import MatchScore, MatchScoreFactor
from govcon_match.domain.notifications import (
    NotificationThresholds,
    get_notification_readiness,
    should_notify_user,
)


def _match(score: int, credibility: float, confidence: int) -> MatchScore:
    return MatchScore(
        opportunity_id="opp",
        profile_id="profile",
        score=score,
        confidence=confidence,
        factors=MappingProxyType(
            {"credibility_market_presence": MatchScoreFactor(credibility, 15, "")}
        ),
        sub_factors=MappingProxyType({}),
        algorithm_version="current-algorithm-v4",
        recommendations=(),
    )


@pytest.mark.parametrize(
    ("score", "credibility", "confidence", "expected"),
    [
        (75, 60, 65, True),
        (90, 95, 99, True),
        (74, 100, 100, False),
        (100, 59, 100, False),
        (100, 100, 64, False),
    ],
)
def test_should_notify_requires_all_thresholds(
    score: int, credibility: float, confidence: int, expected: bool
) -> None:
    assert should_notify_user(_match(score, credibility, confidence)) is expected


def test_custom_thresholds() -> None:
    thresholds = NotificationThresholds(min_match_score=50, min_credibility=0, min_confidence=0)

    assert should_notify_user(_match(50, 10, 10), thresholds)
    assert not should_notify_user(_match(49, 10, 10), thresholds)


def test_readiness_when_all_criteria_pass() -> None:
    readiness = get_notification_readiness(_match(86, 100, 94))

    assert readiness.ready
    assert readiness.reasons == (
        "Strong opportunity match (86%)",
        "Adequate profile credibility (100%)",
        "High algorithm confidence (94%)",
    )
    assert readiness.improvements == ()
    assert readiness.scores.match == 86


def test_readiness_explains_failures() -> None:
    readiness = get_notification_readiness(_match(40, 35, 32))

    assert not readiness.ready
    assert readiness.reasons == (
        "Match score too low (40% < 75%)",
        "Profile credibility insufficient (35% < 60%)",
        "Algorithm confidence too low (32% < 65%)",
    )
    assert readiness.improvements == (
        "Focus on improving NAICS alignment and past performance",
        "Complete contact information, basic company details, and SAM.gov registration",
        "Add more profile details to improve matching accuracy",
    )


def test_readiness_to_dict() -> None:
    payload = get_notification_readiness(_match(80, 70, 70)).to_dict()

    assert payload == {
        "ready": True,
        "reasons": [
            "Strong opportunity match (80%)",
            "Adequate profile credibility (70%)",
            "High algorithm confidence (70%)",
        ],
        "improvements": [],
        "scores": {"match": 80, "credibility": 70, "confidence": 70},
    }
