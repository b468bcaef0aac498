"""Tests for batch match scoring and report writing."""

from pathlib import Path
from types import MappingProxyType

from govcon_match.application.batch import (
    BATCH_SCORE_COLUMNS,
    build_score_frame,
    run_batch_score,
)
from govcon_match.domain.match_scoring import MatchScore, MatchScoreFactor, MatchScorer
from govcon_match.domain.notifications import NotificationThresholds
from tests.fakes import FakeProgressReporter, InMemoryFileSystem
from tests.support.records import strong_opportunity, strong_profile, weak_opportunity

OUT_DIR = Path("reports")
SCORER = MatchScorer(reference_year=2025)


def _result(opportunity_id: str, score: int, confidence: int) -> MatchScore:
    factor = MatchScoreFactor(score, 25, "")
    return MatchScore(
        opportunity_id=opportunity_id,
        profile_id="profile",
        score=score,
        confidence=confidence,
        factors=MappingProxyType(
            {
                "past_performance": factor,
                "technical_capability": factor,
                "strategic_fit_relationships": factor,
                "credibility_market_presence": factor,
            }
        ),
        sub_factors=MappingProxyType({}),
        algorithm_version="current-algorithm-v4",
        recommendations=("First", "Second"),
    )


def test_build_score_frame_ranks_by_score_then_confidence() -> None:
    df = build_score_frame(
        [_result("a", 80, 70), _result("b", 80, 90), _result("c", 90, 50), _result("d", 80, 70)]
    )

    assert df.columns.tolist() == list(BATCH_SCORE_COLUMNS)
    assert df["opportunity_id"].tolist() == ["c", "b", "a", "d"]
    assert df["recommendations"].iloc[0] == "First; Second"


def test_build_score_frame_flags_notifications() -> None:
    thresholds = NotificationThresholds(min_match_score=85, min_credibility=0, min_confidence=0)

    df = build_score_frame([_result("a", 80, 90), _result("b", 90, 90)], thresholds)

    assert df.set_index("opportunity_id")["notify"].to_dict() == {"a": False, "b": True}


def test_run_batch_score_writes_reports(
    in_memory_fs: InMemoryFileSystem, fake_progress: FakeProgressReporter
) -> None:
    opportunities = [
        weak_opportunity(),
        strong_opportunity(id="opp-a"),
        strong_opportunity(id="opp-b"),
    ]

    outputs = run_batch_score(
        opportunities=opportunities,
        profile=strong_profile(),
        out_dir=OUT_DIR,
        fs=in_memory_fs,
        scorer=SCORER,
        progress=fake_progress,
    )

    assert outputs.scores == OUT_DIR / "match_scores.csv"
    assert outputs.notifications == OUT_DIR / "notifications.csv"
    assert outputs.scored == 3
    assert outputs.notified == 2

    scores = in_memory_fs.read_frame(outputs.scores)
    assert scores["opportunity_id"].tolist() == ["opp-a", "opp-b", "opp-weak"]
    assert scores["score"].tolist()[:2] == [86, 86]
    assert scores["profile_id"].unique().tolist() == ["profile-strong"]

    notifications = in_memory_fs.read_frame(outputs.notifications)
    assert notifications["opportunity_id"].tolist() == ["opp-a", "opp-b"]

    assert fake_progress.starts == [("Scoring opportunities", 3)]
    assert fake_progress.advances == [1, 1, 1]
    assert fake_progress.finished == 1


def test_run_batch_score_with_no_opportunities(in_memory_fs: InMemoryFileSystem) -> None:
    outputs = run_batch_score(
        opportunities=[],
        profile=None,
        out_dir=OUT_DIR,
        fs=in_memory_fs,
    )

    assert outputs.scored == 0
    assert outputs.notified == 0
    assert in_memory_fs.read_frame(outputs.scores).columns.tolist() == list(BATCH_SCORE_COLUMNS)
    assert in_memory_fs.read_frame(outputs.notifications).empty
