"""Profile completeness scoring.

Each of the four sections is a checklist of binary-presence fields whose points
total 100. Section scores are weighted by the profile section weights and summed
into an overall score, with strengths, weaknesses, next steps and prioritised
recommendations derived from the section results.

``calculate_profile_score`` never raises: an absent profile yields the empty
result, and an unexpected failure is logged and yields the error result.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Literal

from ..observability.logging import get_logger
from .match_scoring import round_half_up
from .records import Profile
from .scoring_config import (
    CATEGORIES,
    CREDIBILITY_MARKET_PRESENCE,
    DEFAULT_SCORING_CONFIG,
    PAST_PERFORMANCE,
    PROFILE_ALGORITHM,
    PROFILE_ALGORITHM_VERSION,
    PROFILE_SECTION_FIELDS,
    STRATEGIC_FIT_RELATIONSHIPS,
    TECHNICAL_CAPABILITY,
    ReadinessAssessment,
    ScoringConfig,
    get_contract_readiness_assessment,
)

logger = get_logger("govcon_match.profile_scoring")

Priority = Literal["high", "medium", "low"]

EMPTY_TOTAL_CRITICAL_FIELDS = 8

STRENGTH_LABELS = {
    PAST_PERFORMANCE: "Strong Contract History",
    TECHNICAL_CAPABILITY: "Solid Technical Capabilities",
    STRATEGIC_FIT_RELATIONSHIPS: "Good Strategic Positioning",
    CREDIBILITY_MARKET_PRESENCE: "Professional Market Presence",
}
WEAKNESS_LABELS = {
    PAST_PERFORMANCE: "Limited Contract History",
    TECHNICAL_CAPABILITY: "Incomplete Technical Information",
    STRATEGIC_FIT_RELATIONSHIPS: "Missing Strategic Details",
    CREDIBILITY_MARKET_PRESENCE: "Incomplete Profile Information",
}


@dataclass(frozen=True)
class ProfileFieldScore:
    field: str
    label: str
    weight: int
    completeness: int
    raw_score: int
    suggestions: tuple[str, ...]


@dataclass(frozen=True)
class ProfileSectionScore:
    """Result for one completeness section."""

    section: str
    weight: float
    section_score: int
    weighted_score: float
    completeness: int
    quality: int
    missing_fields: tuple[str, ...]
    suggestions: tuple[str, ...]
    fields: tuple[ProfileFieldScore, ...]
    max_possible: int = 100


@dataclass(frozen=True)
class ProfileRecommendation:
    priority: Priority
    title: str
    description: str
    impact: float
    effort: Literal["low", "medium", "high"]
    category: str


@dataclass(frozen=True)
class ProfileScore:
    """Overall profile completeness with guidance."""

    overall: int
    completeness: int
    quality: int
    sections: tuple[ProfileSectionScore, ...]
    total_fields: int
    completed_fields: int
    critical_fields_completed: int
    total_critical_fields: int
    calculated_at: datetime
    algorithm: str
    version: str
    strengths: tuple[str, ...]
    weaknesses: tuple[str, ...]
    next_steps: tuple[str, ...]
    recommendations: tuple[ProfileRecommendation, ...]

    @property
    def readiness(self) -> ReadinessAssessment:
        return get_contract_readiness_assessment(self.overall)

    def to_dict(self) -> dict[str, object]:
        return {
            "overall": self.overall,
            "completeness": self.completeness,
            "quality": self.quality,
            "readiness": self.readiness.level,
            "total_fields": self.total_fields,
            "completed_fields": self.completed_fields,
            "critical_fields_completed": self.critical_fields_completed,
            "total_critical_fields": self.total_critical_fields,
            "calculated_at": self.calculated_at.isoformat(),
            "algorithm": self.algorithm,
            "version": self.version,
            "sections": [
                {
                    "section": section.section,
                    "weight": section.weight,
                    "section_score": section.section_score,
                    "weighted_score": section.weighted_score,
                    "missing_fields": list(section.missing_fields),
                    "suggestions": list(section.suggestions),
                }
                for section in self.sections
            ],
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "next_steps": list(self.next_steps),
            "recommendations": [
                {
                    "priority": item.priority,
                    "title": item.title,
                    "description": item.description,
                    "impact": item.impact,
                    "effort": item.effort,
                    "category": item.category,
                }
                for item in self.recommendations
            ],
        }


def _has_past_performance_description(profile: Profile) -> bool:
    narrative = profile.past_performance
    return bool((narrative is not None and narrative.description) or profile.company_description)


def _has_geographic_preferences(profile: Profile) -> bool:
    preferences = profile.geographic_preferences
    return preferences is not None and not preferences.is_empty


def _has_certifications(profile: Profile) -> bool:
    return profile.certifications is not None and profile.certifications.has_any


def _has_past_performance(profile: Profile) -> bool:
    return profile.past_performance is not None and not profile.past_performance.is_empty


# Presence checks keyed by PROFILE_SECTION_FIELDS keys.
FIELD_CHECKS: dict[str, Callable[[Profile], bool]] = {
    "description": _has_past_performance_description,
    "key_projects": lambda p: bool(p.past_performance and p.past_performance.key_projects),
    "total_contract_value": lambda p: bool(
        p.past_performance and p.past_performance.total_contract_value
    ),
    "years_in_business": lambda p: bool(
        p.year_established or (p.past_performance and p.past_performance.years_in_business)
    ),
    "primary_naics": lambda p: bool(p.primary_naics),
    "secondary_naics": lambda p: bool(p.secondary_naics),
    "certifications": _has_certifications,
    "core_competencies": lambda p: bool(p.core_competencies),
    "business_type": lambda p: bool(p.business_type),
    "year_established": lambda p: bool(p.year_established),
    "employee_count": lambda p: bool(p.employee_count),
    "annual_revenue": lambda p: bool(p.annual_revenue),
    "geographic_preferences": _has_geographic_preferences,
    "contact_email": lambda p: bool(p.contact.email),
    "contact_name": lambda p: bool(p.contact.name),
    "contact_phone": lambda p: bool(p.contact.phone),
    "website": lambda p: bool(p.contact.website),
    "company_name": lambda p: bool(p.company_name),
    "business_address": lambda p: p.address.has_any,
    "logo": lambda p: bool(p.contact.logo_url),
    "security_clearance": lambda p: bool(p.security_clearance),
    "uei_number": lambda p: bool(p.uei),
    "cage_code": lambda p: bool(p.cage_code),
    "sam_gov_integration": lambda p: p.sam_gov_verified,
}

# Individual fields counted towards completed/total field totals.
COUNTED_FIELDS: tuple[tuple[str, Callable[[Profile], bool]], ...] = (
    ("company_name", lambda p: bool(p.company_name)),
    ("dba_name", lambda p: bool(p.dba_name)),
    ("uei", lambda p: bool(p.uei)),
    ("cage_code", lambda p: bool(p.cage_code)),
    ("address_line1", lambda p: bool(p.address.line1)),
    ("city", lambda p: bool(p.address.city)),
    ("state", lambda p: bool(p.address.state)),
    ("zip_code", lambda p: bool(p.address.zip_code)),
    ("contact_name", lambda p: bool(p.contact.name)),
    ("contact_email", lambda p: bool(p.contact.email)),
    ("contact_phone", lambda p: bool(p.contact.phone)),
    ("website", lambda p: bool(p.contact.website)),
    ("logo_url", lambda p: bool(p.contact.logo_url)),
    ("banner_url", lambda p: bool(p.contact.banner_url)),
    ("business_type", lambda p: bool(p.business_type)),
    ("year_established", lambda p: bool(p.year_established)),
    ("employee_count", lambda p: bool(p.employee_count)),
    ("annual_revenue", lambda p: bool(p.annual_revenue)),
    ("primary_naics", lambda p: bool(p.primary_naics)),
    ("secondary_naics", lambda p: bool(p.secondary_naics)),
    ("certifications", _has_certifications),
    ("core_competencies", lambda p: bool(p.core_competencies)),
    ("past_performance", _has_past_performance),
    ("security_clearance", lambda p: bool(p.security_clearance)),
    ("geographic_preferences", _has_geographic_preferences),
    ("government_levels", lambda p: bool(p.government_levels)),
    ("sam_gov_integration", lambda p: p.sam_gov_verified),
)

CRITICAL_FIELDS: tuple[tuple[str, Callable[[Profile], bool]], ...] = (
    ("company_name", lambda p: bool(p.company_name)),
    ("contact_email", lambda p: bool(p.contact.email)),
    ("primary_naics", lambda p: bool(p.primary_naics)),
    ("certifications", _has_certifications),
    ("past_performance", _has_past_performance),
    ("business_type", lambda p: bool(p.business_type)),
    ("year_established", lambda p: bool(p.year_established)),
    ("uei", lambda p: bool(p.uei)),
    ("cage_code", lambda p: bool(p.cage_code)),
)


def calculate_section(
    profile: Profile, section: str, config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> ProfileSectionScore:
    """Score one section's presence checklist."""
    weight = config.section_weights[section]
    score = 0
    missing: list[str] = []
    suggestions: list[str] = []
    fields: list[ProfileFieldScore] = []
    for field_rule in PROFILE_SECTION_FIELDS[section]:
        present = FIELD_CHECKS[field_rule.key](profile)
        if present:
            score += field_rule.points
        else:
            missing.append(field_rule.key)
            suggestions.append(field_rule.suggestion)
        fields.append(
            ProfileFieldScore(
                field=field_rule.key,
                label=field_rule.label,
                weight=field_rule.points,
                completeness=100 if present else 0,
                raw_score=field_rule.points if present else 0,
                suggestions=() if present else (field_rule.suggestion,),
            )
        )
    section_score = min(score, 100)
    return ProfileSectionScore(
        section=section,
        weight=weight,
        section_score=section_score,
        weighted_score=section_score * weight / 100,
        completeness=section_score,
        quality=section_score,
        missing_fields=tuple(missing),
        suggestions=tuple(suggestions),
        fields=tuple(fields),
    )


def _strengths(sections: tuple[ProfileSectionScore, ...]) -> tuple[str, ...]:
    return tuple(
        STRENGTH_LABELS.get(section.section, "Strong Performance")
        for section in sections
        if section.section_score >= 80
    )


def _weaknesses(sections: tuple[ProfileSectionScore, ...]) -> tuple[str, ...]:
    return tuple(
        WEAKNESS_LABELS.get(section.section, "Needs Improvement")
        for section in sections
        if section.section_score < 50
    )


def _next_steps(sections: tuple[ProfileSectionScore, ...]) -> tuple[str, ...]:
    steps: list[str] = []
    for section in sorted(sections, key=lambda item: item.section_score):
        if section.suggestions:
            steps.extend(section.suggestions[:2])
            if len(steps) >= 3:
                break
    return tuple(steps[:3])


def _priority(weight: float) -> Priority:
    if weight >= 30:
        return "high"
    if weight >= 20:
        return "medium"
    return "low"


def _recommendations(
    sections: tuple[ProfileSectionScore, ...],
) -> tuple[ProfileRecommendation, ...]:
    recommendations: list[ProfileRecommendation] = []
    for section in sections:
        if section.section_score >= 80 or not section.missing_fields:
            continue
        for missing in section.missing_fields[:2]:
            recommendations.append(
                ProfileRecommendation(
                    priority=_priority(section.weight),
                    title=f"Complete {missing.replace('_', ' ')}",
                    description=section.suggestions[0],
                    impact=section.weight,
                    effort="medium",
                    category=section.section,
                )
            )
    return tuple(recommendations[:5])


def empty_profile_score(now: datetime | None = None) -> ProfileScore:
    """Result returned when no profile is supplied."""
    return ProfileScore(
        overall=0,
        completeness=0,
        quality=0,
        sections=(),
        total_fields=0,
        completed_fields=0,
        critical_fields_completed=0,
        total_critical_fields=EMPTY_TOTAL_CRITICAL_FIELDS,
        calculated_at=now or datetime.now(UTC),
        algorithm=PROFILE_ALGORITHM,
        version=PROFILE_ALGORITHM_VERSION,
        strengths=(),
        weaknesses=("Profile is empty - start by adding basic information",),
        next_steps=("Add contact information", "Complete basic company details", "Add NAICS codes"),
        recommendations=(),
    )


def _score_profile(profile: Profile, config: ScoringConfig, now: datetime) -> ProfileScore:
    sections = tuple(calculate_section(profile, section, config) for section in CATEGORIES)
    total_weighted = sum(section.weighted_score for section in sections)
    average_completeness = sum(section.completeness for section in sections) / len(sections)
    average_quality = sum(section.quality for section in sections) / len(sections)
    return ProfileScore(
        overall=min(round_half_up(total_weighted), 100),
        completeness=round_half_up(average_completeness),
        quality=round_half_up(average_quality),
        sections=sections,
        total_fields=len(COUNTED_FIELDS),
        completed_fields=sum(1 for _, check in COUNTED_FIELDS if check(profile)),
        critical_fields_completed=sum(1 for _, check in CRITICAL_FIELDS if check(profile)),
        total_critical_fields=len(CRITICAL_FIELDS),
        calculated_at=now,
        algorithm=PROFILE_ALGORITHM,
        version=PROFILE_ALGORITHM_VERSION,
        strengths=_strengths(sections),
        weaknesses=_weaknesses(sections),
        next_steps=_next_steps(sections),
        recommendations=_recommendations(sections),
    )


def calculate_profile_score(
    profile: Profile | None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    *,
    now: datetime | None = None,
) -> ProfileScore:
    """Score profile completeness.

    Args:
        profile: Canonical profile, or None.
        config: Weight table supplying section weights.
        now: Timestamp recorded on the result; defaults to the current UTC time.

    Returns:
        ProfileScore. Never raises.
    """
    timestamp = now or datetime.now(UTC)
    if profile is None:
        return empty_profile_score(timestamp)
    try:
        return _score_profile(profile, config, timestamp)
    except Exception:
        logger.exception("Error calculating profile score for profile %s", profile.id or "<unknown>")
        return replace(
            empty_profile_score(timestamp),
            weaknesses=("Error calculating profile score - please refresh and try again",),
            next_steps=("Check profile data integrity", "Contact support if issue persists"),
        )
