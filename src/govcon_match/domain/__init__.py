"""Scoring domain: weight tables, canonical records, and pure calculators."""

from .match_scoring import (
    MatchScore,
    MatchScoreFactor,
    MatchScorer,
    calculate_batch_match_scores,
    score_match,
    score_match_from_input,
)
from .notifications import (
    NotificationReadiness,
    NotificationThresholds,
    get_notification_readiness,
    should_notify_user,
)
from .profile_scoring import ProfileScore, calculate_profile_score
from .records import MatchScoreInput, Opportunity, Profile
from .scoring_config import (
    DEFAULT_SCORING_CONFIG,
    ScoringConfig,
    get_category_weights,
    get_sub_factor_weights,
)

__all__ = [
    "DEFAULT_SCORING_CONFIG",
    "MatchScore",
    "MatchScoreFactor",
    "MatchScoreInput",
    "MatchScorer",
    "NotificationReadiness",
    "NotificationThresholds",
    "Opportunity",
    "Profile",
    "ProfileScore",
    "ScoringConfig",
    "calculate_batch_match_scores",
    "calculate_profile_score",
    "get_category_weights",
    "get_notification_readiness",
    "get_sub_factor_weights",
    "score_match",
    "score_match_from_input",
    "should_notify_user",
]
