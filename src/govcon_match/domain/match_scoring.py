"""Opportunity match scoring across four weighted categories.

Each category is built from weighted sub-factors, and each sub-factor is a pure
function of ``(profile, opportunity)``. The overall score is the sum of category
contributions; confidence adjusts that score by profile credibility.

All calculators are total: an absent profile or missing nested data resolves
to a documented neutral default instead of raising.

Usage example:
    from govcon_match.domain.match_scoring import MatchScorer
    from govcon_match.domain.records import Opportunity, Profile

    scorer = MatchScorer(reference_year=2025)
    result = scorer.score(
        Opportunity(id="opp-1", naics_codes=("541511",)),
        Profile(id="p-1", primary_naics="541511"),
    )
    assert 0 <= result.score <= 100
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType

from ..observability.logging import get_logger
from .certification_taxonomy import (
    CertificationTaxonomy,
    basic_set_aside_match,
    is_related_certification,
    record_qualifies_for_set_aside,
)
from .records import GovernmentLevel, MatchScoreInput, Opportunity, PreferenceType, Profile
from .scoring_config import (
    CREDIBILITY_MARKET_PRESENCE,
    DEFAULT_SCORING_CONFIG,
    PAST_PERFORMANCE,
    STRATEGIC_FIT_RELATIONSHIPS,
    TECHNICAL_CAPABILITY,
    ScoringConfig,
)

logger = get_logger("govcon_match.match_scoring")

DEFAULT_OPPORTUNITY_VALUE = 500_000.0
RECENT_PROJECT_YEARS = 3

FEDERAL_KEYWORDS = (
    "department of",
    "dept of",
    "dod",
    "defense",
    "gsa",
    "general services",
    "homeland security",
    "dhs",
    "veterans affairs",
    "va",
    "health and human services",
    "hhs",
    "treasury",
    "commerce",
    "epa",
    "environmental protection",
    "nasa",
    "national aeronautics",
    "sba",
    "small business administration",
    "agriculture",
    "usda",
    "education",
    "federal",
    "national",
)
STATE_KEYWORDS = ("state", "state of")
LOCAL_KEYWORDS = ("city", "county", "municipal", "town", "village", "district")

GOVERNMENT_CLIENT_KEYWORDS = ("government", "federal", "state", "county", "city")
GOVERNMENT_PROJECT_KEYWORDS = ("department", "agency", "government")
GOVERNMENT_CUSTOMER_TYPES = frozenset({"federal", "state", "local"})

GOVERNMENT_LEVEL_COMPATIBILITY: MappingProxyType[
    GovernmentLevel, MappingProxyType[GovernmentLevel, int]
] = MappingProxyType(
    {
        "FEDERAL": MappingProxyType({"FEDERAL": 100, "STATE": 60, "LOCAL": 40}),
        "STATE": MappingProxyType({"STATE": 100, "FEDERAL": 60, "LOCAL": 80}),
        "LOCAL": MappingProxyType({"LOCAL": 100, "STATE": 80, "FEDERAL": 30}),
    }
)

CLEARANCE_RANKS: MappingProxyType[str, int] = MappingProxyType(
    {
        "NONE": 0,
        "NOT_REQUIRED": 0,
        "PUBLIC_TRUST": 1,
        "CONFIDENTIAL": 2,
        "SECRET": 3,
        "TOP_SECRET": 4,
        "TS": 4,
        "TS_SCI": 5,
        "TOP_SECRET_SCI": 5,
    }
)


@dataclass(frozen=True)
class MatchScoreFactor:
    """A scored factor with the weight it carries inside its parent."""

    score: float
    weight: float
    details: str

    @property
    def contribution(self) -> float:
        return self.score * self.weight / 100


@dataclass(frozen=True)
class MatchScore:
    """Immutable result of scoring one profile against one opportunity."""

    opportunity_id: str
    profile_id: str
    score: int
    confidence: int
    factors: MappingProxyType[str, MatchScoreFactor]
    sub_factors: MappingProxyType[str, MatchScoreFactor]
    algorithm_version: str
    recommendations: tuple[str, ...]

    @property
    def credibility(self) -> float:
        factor = self.factors.get(CREDIBILITY_MARKET_PRESENCE)
        return factor.score if factor is not None else 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "opportunity_id": self.opportunity_id,
            "profile_id": self.profile_id,
            "score": self.score,
            "confidence": self.confidence,
            "algorithm_version": self.algorithm_version,
            "factors": {name: _factor_dict(factor) for name, factor in self.factors.items()},
            "sub_factors": {
                name: _factor_dict(factor) for name, factor in self.sub_factors.items()
            },
            "recommendations": list(self.recommendations),
        }


def _factor_dict(factor: MatchScoreFactor) -> dict[str, object]:
    return {
        "score": factor.score,
        "weight": factor.weight,
        "contribution": factor.contribution,
        "details": factor.details,
    }


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _fmt(value: float) -> str:
    rounded = round(value, 1)
    return str(int(rounded)) if rounded == int(rounded) else str(rounded)


def _same_text(left: str, right: str) -> bool:
    return bool(left) and left.strip().casefold() == right.strip().casefold()


def _sub_weight(category: str, sub_factor: str) -> float:
    return DEFAULT_SCORING_CONFIG.sub_factors(category)[sub_factor]


def _current_year() -> int:
    return datetime.now(UTC).year


# ---------------------------------------------------------------------------
# Technical capability sub-factors
# ---------------------------------------------------------------------------


def calculate_naics_alignment(
    profile: Profile | None,
    opportunity: Opportunity,
    *,
    weight: float = _sub_weight(TECHNICAL_CAPABILITY, "naics_alignment"),
) -> MatchScoreFactor:
    """Score NAICS alignment; the first qualifying tier wins."""
    if profile is None:
        return MatchScoreFactor(0, weight, "No profile provided")
    primary = profile.primary_naics.strip()
    codes = tuple(code.strip() for code in opportunity.naics_codes if code.strip())
    if not primary or not codes:
        return MatchScoreFactor(0, weight, "No NAICS codes available for comparison")

    if primary in codes:
        return MatchScoreFactor(100, weight, "Exact primary NAICS match")
    secondary = {code.strip() for code in profile.secondary_naics}
    if secondary and any(code in secondary for code in codes):
        return MatchScoreFactor(80, weight, "Secondary NAICS match")
    if any(code[:4] == primary[:4] for code in codes):
        return MatchScoreFactor(60, weight, "Industry group match")
    if any(code[:2] == primary[:2] for code in codes):
        return MatchScoreFactor(40, weight, "Sector match")
    return MatchScoreFactor(0, weight, "No NAICS alignment")


def calculate_certification_match(
    profile: Profile | None,
    opportunity: Opportunity,
    *,
    taxonomy: CertificationTaxonomy | None = None,
    weight: float = _sub_weight(TECHNICAL_CAPABILITY, "certification_match"),
) -> MatchScoreFactor:
    """Score required-certification coverage or set-aside eligibility."""
    if profile is None:
        return MatchScoreFactor(50, weight, "No profile provided")

    required = tuple(cert for cert in opportunity.required_certifications if cert)
    set_aside = opportunity.set_aside_type.strip()
    if not required and not set_aside:
        return MatchScoreFactor(100, weight, "No specific certifications required")

    certifications = profile.certifications
    if certifications is None:
        return MatchScoreFactor(0, weight, "No certification information available")

    if required:
        held = {record.type.upper() for record in certifications.active_records}
        matched = sum(1 for cert in required if cert.upper() in held)
        if matched == len(required):
            return MatchScoreFactor(100, weight, "All required certifications present")
        score = round_half_up(matched / len(required) * 100)
        return MatchScoreFactor(score, weight, f"{matched} of {len(required)} required certifications")

    has_certification = any(
        record_qualifies_for_set_aside(record, set_aside, taxonomy)
        for record in certifications.records
    )
    has_set_aside = any(
        basic_set_aside_match(label, set_aside) for label in certifications.set_asides
    )
    if has_certification and has_set_aside:
        return MatchScoreFactor(
            100, weight, "Perfect match - both certification and set-aside eligibility confirmed"
        )
    if has_certification:
        return MatchScoreFactor(95, weight, "Required certification held")
    if has_set_aside:
        return MatchScoreFactor(90, weight, "Eligible for set-aside type")
    if any(is_related_certification(record, set_aside) for record in certifications.records):
        return MatchScoreFactor(
            40, weight, "Related certifications present - may provide competitive advantage"
        )
    if certifications.has_any:
        return MatchScoreFactor(20, weight, "Other certifications present but not required type")
    return MatchScoreFactor(0, weight, "Required certifications not held")


def calculate_competency_alignment(
    profile: Profile | None,
    opportunity: Opportunity,
    *,
    weight: float = _sub_weight(TECHNICAL_CAPABILITY, "competency_alignment"),
) -> MatchScoreFactor:
    """Score how many core competencies appear in the opportunity text."""
    if profile is None:
        return MatchScoreFactor(50, weight, "No profile provided")
    competencies = tuple(item.strip() for item in profile.core_competencies if item.strip())
    text = f"{opportunity.title} {opportunity.description}".casefold()
    if not competencies or not text.strip():
        return MatchScoreFactor(50, weight, "Competency alignment not assessed")

    matches = sum(1 for item in competencies if _contains_phrase(text, item.casefold()))
    if matches == 0:
        return MatchScoreFactor(30, weight, "No core competencies referenced by the opportunity")
    score = min(100, 60 + 20 * matches)
    return MatchScoreFactor(score, weight, f"{matches} core competencies referenced")


def _contains_phrase(text: str, phrase: str) -> bool:
    return re.search(rf"(?<!\w){re.escape(phrase)}(?!\w)", text) is not None


def _clearance_rank(label: str) -> int | None:
    key = re.sub(r"[\s/\-]+", "_", label.strip().upper())
    if not key:
        return 0
    return CLEARANCE_RANKS.get(key)


def calculate_security_clearance_match(
    profile: Profile | None,
    opportunity: Opportunity,
    *,
    weight: float = _sub_weight(TECHNICAL_CAPABILITY, "security_clearance_match"),
) -> MatchScoreFactor:
    """Compare the profile's clearance level against the opportunity requirement."""
    if profile is None:
        return MatchScoreFactor(50, weight, "No profile provided")
    required_rank = _clearance_rank(opportunity.security_clearance)
    if required_rank == 0:
        return MatchScoreFactor(100, weight, "No security clearance required")

    held_rank = _clearance_rank(profile.security_clearance)
    if held_rank == 0:
        return MatchScoreFactor(0, weight, "Required security clearance not held")
    if required_rank is None or held_rank is None:
        if _same_text(profile.security_clearance, opportunity.security_clearance):
            return MatchScoreFactor(100, weight, "Security clearance meets requirement")
        return MatchScoreFactor(40, weight, "Security clearance level could not be confirmed")
    if held_rank >= required_rank:
        return MatchScoreFactor(100, weight, "Security clearance meets requirement")
    return MatchScoreFactor(40, weight, "Security clearance below required level")


# ---------------------------------------------------------------------------
# Past performance
# ---------------------------------------------------------------------------


def calculate_past_performance(
    profile: Profile | None,
    opportunity: Opportunity,
    *,
    reference_year: int,
    weight: float = DEFAULT_SCORING_CONFIG.category_weight(PAST_PERFORMANCE),
) -> MatchScoreFactor:
    """Score contract history, narrative experience, or a risk-tiered default.

    Uses fixed tiers; the past performance sub-factor weights are not applied.
    """
    if profile is None:
        return MatchScoreFactor(50, weight, "No profile provided")

    past_performance = profile.past_performance
    if past_performance is not None and past_performance.records:
        return _score_contract_records(profile, opportunity, weight)
    if past_performance is not None and past_performance.has_narrative:
        return _score_narrative(profile, opportunity, reference_year, weight)
    return _risk_tiered_default(opportunity, weight)


def _risk_tiered_default(opportunity: Opportunity, weight: float) -> MatchScoreFactor:
    value = opportunity.estimated_value or 0.0
    if value < 250_000:
        return MatchScoreFactor(40, weight, "No past performance (small contract threshold)")
    if value < 1_000_000:
        return MatchScoreFactor(25, weight, "No past performance (medium contract risk)")
    return MatchScoreFactor(10, weight, "No past performance (high contract risk)")


def _score_contract_records(
    profile: Profile, opportunity: Opportunity, weight: float
) -> MatchScoreFactor:
    assert profile.past_performance is not None
    records = profile.past_performance.records
    score = min(20 + 15 * len(records), 80)
    details = [f"{len(records)} past performance record(s)"]

    target = opportunity.estimated_value or DEFAULT_OPPORTUNITY_VALUE
    if any(
        record.value is not None and target * 0.5 <= record.value <= target * 3
        for record in records
    ):
        score += 15
        details.append("Similar contract value experience")
    else:
        score += 5
        details.append("Different contract value scale")

    if opportunity.agency.strip():
        if any(_is_government_client(f"{record.client} {record.agency}") for record in records):
            score += 10
            details.append("Government contracting experience")
        else:
            score += 3
            details.append("Private sector experience")

    return MatchScoreFactor(min(score, 100), weight, ", ".join(details))


def _is_government_client(text: str) -> bool:
    lowered = text.casefold()
    return any(keyword in lowered for keyword in GOVERNMENT_CLIENT_KEYWORDS)


def _score_narrative(
    profile: Profile, opportunity: Opportunity, reference_year: int, weight: float
) -> MatchScoreFactor:
    assert profile.past_performance is not None
    narrative = profile.past_performance
    projects = narrative.key_projects
    if projects:
        government = [
            project
            for project in projects
            if project.customer_type.strip().lower() in GOVERNMENT_CUSTOMER_TYPES
            or any(keyword in project.client.casefold() for keyword in GOVERNMENT_PROJECT_KEYWORDS)
        ]
        if not government:
            return MatchScoreFactor(55, weight, f"General project experience ({len(projects)} projects)")
        recent = [
            project
            for project in government
            if (project.completed_year or 0) >= reference_year - RECENT_PROJECT_YEARS
        ]
        if not recent:
            return MatchScoreFactor(
                60, weight, f"Government project experience ({len(government)} projects)"
            )
        agency = opportunity.agency.casefold()
        if any(_same_agency_type(project.customer_type, agency) for project in recent):
            return MatchScoreFactor(
                90,
                weight,
                f"Recent government experience with similar agency type ({len(government)} projects)",
            )
        return MatchScoreFactor(
            75, weight, f"Recent government project experience ({len(recent)} projects)"
        )

    if narrative.years_in_business is not None and narrative.years_in_business >= 5:
        return MatchScoreFactor(60, weight, f"{narrative.years_in_business} years in business")
    if narrative.description:
        return MatchScoreFactor(55, weight, "Past performance described")
    return MatchScoreFactor(50, weight, "Limited past performance information")


def _same_agency_type(customer_type: str, agency: str) -> bool:
    kind = customer_type.strip().lower()
    if kind == "federal":
        return "department" in agency
    if kind == "state":
        return "state" in agency
    if kind == "local":
        return "city" in agency or "county" in agency
    return False


# ---------------------------------------------------------------------------
# Strategic fit sub-factors
# ---------------------------------------------------------------------------


def calculate_geographic_proximity(
    profile: Profile | None,
    opportunity: Opportunity,
    *,
    weight: float = _sub_weight(STRATEGIC_FIT_RELATIONSHIPS, "geographic_proximity"),
) -> MatchScoreFactor:
    """Compare business address with place of performance; missing data is neutral."""
    if profile is None:
        return MatchScoreFactor(50, weight, "No profile provided")
    location = opportunity.location
    profile_state = profile.address.state
    if location is None or not location.state.strip() or not profile_state.strip():
        return MatchScoreFactor(50, weight, "Location information unavailable")

    if _same_text(location.state, profile_state):
        if _same_text(location.city, profile.address.city):
            return MatchScoreFactor(100, weight, "Same city and state")
        return MatchScoreFactor(75, weight, "Same state, different city")
    return MatchScoreFactor(25, weight, "Different state")


def determine_government_level(agency: str) -> GovernmentLevel:
    """Infer an agency's government level from its name; defaults to FEDERAL."""
    name = agency.casefold()
    if any(keyword in name for keyword in FEDERAL_KEYWORDS):
        return "FEDERAL"
    if any(keyword in name for keyword in STATE_KEYWORDS):
        return "STATE"
    if any(keyword in name for keyword in LOCAL_KEYWORDS):
        return "LOCAL"
    return "FEDERAL"


def calculate_government_level_match(
    profile: Profile | None,
    opportunity: Opportunity,
    *,
    weight: float = _sub_weight(STRATEGIC_FIT_RELATIONSHIPS, "government_level_match"),
) -> MatchScoreFactor:
    if profile is None:
        return MatchScoreFactor(50, weight, "No profile provided")
    levels = profile.government_levels
    if not levels:
        return MatchScoreFactor(50, weight, "No government level preferences specified")

    level = determine_government_level(opportunity.agency)
    if level in levels:
        return MatchScoreFactor(100, weight, f"Perfect government level match ({level})")
    partial = max(GOVERNMENT_LEVEL_COMPATIBILITY[preferred].get(level, 0) for preferred in levels)
    if partial > 0:
        return MatchScoreFactor(partial, weight, f"Partial government level compatibility ({level})")
    return MatchScoreFactor(
        25,
        weight,
        f"Government level mismatch - prefers {', '.join(levels)} but opportunity is {level}",
    )


def _preference_match(profile: Profile, opportunity: Opportunity, kind: PreferenceType) -> str | None:
    preferences = profile.geographic_preferences
    location = opportunity.location
    if preferences is None or location is None:
        return None
    checks = (
        ("STATE", location.state, "State"),
        ("CITY", location.city, "City"),
        ("ZIP", location.zip_code, "Zip"),
    )
    for granularity, value, label in checks:
        if not value:
            continue
        for preference in preferences.of_type(kind, granularity):
            if any(_same_text(candidate, value) for candidate in preference.locations):
                return f"{label}: {value}"
    return None


def calculate_geographic_preference_match(
    profile: Profile | None,
    opportunity: Opportunity,
    *,
    weight: float = _sub_weight(STRATEGIC_FIT_RELATIONSHIPS, "geographic_preference_match"),
) -> MatchScoreFactor:
    """Apply PREFERRED, WILLING and AVOID tags to the place of performance."""
    if profile is None:
        return MatchScoreFactor(50, weight, "No profile provided")
    preferences = profile.geographic_preferences
    if preferences is None or preferences.is_empty:
        return MatchScoreFactor(50, weight, "No geographic preferences specified")
    location = opportunity.location
    if location is None or not location.state.strip() or not location.city.strip():
        return MatchScoreFactor(25, weight, "Opportunity location information incomplete")

    preferred = _preference_match(profile, opportunity, "PREFERRED")
    if preferred:
        return MatchScoreFactor(100, weight, f"Matches preferred geographic area ({preferred})")
    willing = _preference_match(profile, opportunity, "WILLING")
    if willing:
        return MatchScoreFactor(75, weight, f"Matches acceptable geographic area ({willing})")
    avoid = _preference_match(profile, opportunity, "AVOID")
    if avoid:
        return MatchScoreFactor(0, weight, f"Location marked to avoid ({avoid})")
    if preferences.work_from_home:
        return MatchScoreFactor(60, weight, "Can work from home - location flexible")
    return MatchScoreFactor(40, weight, "No specific preference for this location")


def calculate_business_scale_alignment(
    profile: Profile | None,
    opportunity: Opportunity,
    *,
    weight: float = _sub_weight(STRATEGIC_FIT_RELATIONSHIPS, "business_scale_alignment"),
) -> MatchScoreFactor:
    """Compare contract value with annual revenue."""
    if profile is None:
        return MatchScoreFactor(50, weight, "No profile provided")
    value = opportunity.estimated_value
    revenue = profile.annual_revenue
    if not value or not revenue or value <= 0 or revenue <= 0:
        return MatchScoreFactor(70, weight, "Business scale not assessed")

    ratio = value / revenue
    if ratio <= 0.5:
        return MatchScoreFactor(100, weight, "Contract well within annual revenue")
    if ratio <= 1:
        return MatchScoreFactor(85, weight, "Contract comparable to annual revenue")
    if ratio <= 3:
        return MatchScoreFactor(60, weight, "Contract large relative to annual revenue")
    return MatchScoreFactor(30, weight, "Contract may exceed capacity")


# ---------------------------------------------------------------------------
# Credibility & market presence
# ---------------------------------------------------------------------------


def contact_completeness(profile: Profile) -> int:
    contact = profile.contact
    present = sum(
        1
        for value in (
            contact.name,
            contact.email,
            contact.phone,
            contact.website,
            contact.logo_url,
            contact.banner_url,
        )
        if value
    )
    return round_half_up(present / 6 * 100)


def basic_info_completeness(profile: Profile) -> int:
    address = profile.address
    present = sum(
        1
        for value in (
            profile.company_name,
            address.line1,
            address.city,
            address.state,
            address.zip_code,
            address.country,
            profile.dba_name,
            address.line2,
        )
        if value
    )
    return round_half_up(present / 8 * 100)


def sam_gov_readiness(profile: Profile) -> int:
    certifications = profile.certifications
    registered = profile.sam_gov_registered or (
        certifications is not None and certifications.has_sam_registration_record
    )
    points = 2 if registered else 0
    if certifications is not None:
        points += sum(1 for kind in ("UEI", "CAGE", "DUNS") if certifications.has_identifier(kind))
    return min(round_half_up(points / 4 * 100), 100)


def _band(score: float, strong: str, adequate: str, weak: str) -> str:
    if score >= 80:
        return strong
    if score >= 60:
        return adequate
    return weak


def calculate_credibility_market_presence(
    profile: Profile | None,
    *,
    sub_weights: Mapping[str, float] = DEFAULT_SCORING_CONFIG.sub_factors(
        CREDIBILITY_MARKET_PRESENCE
    ),
    weight: float = DEFAULT_SCORING_CONFIG.category_weight(CREDIBILITY_MARKET_PRESENCE),
) -> MatchScoreFactor:
    """Blend contact, company-info and SAM.gov readiness into one credibility score."""
    if profile is None:
        return MatchScoreFactor(50, weight, "No profile provided")
    contact = contact_completeness(profile)
    basic = basic_info_completeness(profile)
    sam = sam_gov_readiness(profile)
    blended = (
        contact * sub_weights["contact_completeness"]
        + basic * sub_weights["basic_company_info"]
        + sam * sub_weights["sam_gov_readiness"]
    ) / 100
    details = ", ".join(
        (
            _band(
                contact,
                "Complete contact information",
                "Adequate contact information",
                "Incomplete contact information",
            ),
            _band(
                basic,
                "Complete company information",
                "Adequate company information",
                "Incomplete company information",
            ),
            _band(
                sam,
                "SAM.gov registered and ready",
                "Some SAM.gov registration",
                "SAM.gov registration incomplete",
            ),
        )
    )
    return MatchScoreFactor(round_half_up(_clamp(blended)), weight, details)


def confidence_multiplier(credibility: float) -> float:
    if credibility >= 80:
        return 1.1
    if credibility >= 60:
        return 1.0
    if credibility >= 40:
        return 0.9
    return 0.8


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def _weighted_category(
    parts: Mapping[str, MatchScoreFactor], weight: float, details: str
) -> MatchScoreFactor:
    score = sum(part.contribution for part in parts.values())
    return MatchScoreFactor(score, weight, details)


def generate_recommendations(
    factors: Mapping[str, MatchScoreFactor],
    sub_factors: Mapping[str, MatchScoreFactor],
    opportunity: Opportunity,
) -> tuple[str, ...]:
    """Turn weak and strong factors into actionable guidance."""
    recommendations: list[str] = []

    naics = sub_factors["naics_alignment"].score
    if naics >= 80:
        recommendations.append("Strong NAICS alignment makes this an excellent opportunity")
    elif naics < 40:
        recommendations.append("Consider building capabilities in the required NAICS codes")

    if sub_factors["geographic_proximity"].score < 60:
        recommendations.append("Consider partnering with local firms for geographic advantage")

    if sub_factors["certification_match"].score < 50 and opportunity.set_aside_type:
        label = opportunity.set_aside_type.replace("_", " ").lower()
        recommendations.append(f"Consider obtaining {label} certification")

    if sub_factors["business_scale_alignment"].score <= 30:
        recommendations.append("Consider teaming arrangements due to contract size")

    credibility = factors[CREDIBILITY_MARKET_PRESENCE].score
    if credibility < 50:
        recommendations.append(
            "Consider improving profile completeness and SAM.gov registration for better credibility"
        )
    elif credibility >= 80:
        recommendations.append(
            "Strong market presence - highlight your professional profile and government readiness"
        )

    government = sub_factors["government_level_match"].score
    if government < 50:
        level = determine_government_level(opportunity.agency)
        recommendations.append(f"Consider building experience with {level.lower()} agencies")
    elif government >= 80:
        recommendations.append("Excellent government level match - highlight relevant experience")

    preference = sub_factors["geographic_preference_match"].score
    if preference == 0:
        recommendations.append("This location is marked to avoid - review if this is still relevant")
    elif preference < 30:
        recommendations.append("Consider if travel requirements align with your geographic preferences")

    return tuple(recommendations)


@dataclass(frozen=True)
class MatchScorer:
    """Match scorer bound to one weight table and optional certification taxonomy.

    ``reference_year`` anchors project recency so that repeated scoring of the
    same inputs is reproducible.
    """

    config: ScoringConfig = DEFAULT_SCORING_CONFIG
    taxonomy: CertificationTaxonomy | None = None
    reference_year: int = field(default_factory=_current_year)

    def score(self, opportunity: Opportunity, profile: Profile | None) -> MatchScore:
        config = self.config
        technical_weights = config.sub_factors(TECHNICAL_CAPABILITY)
        strategic_weights = config.sub_factors(STRATEGIC_FIT_RELATIONSHIPS)

        technical = {
            "naics_alignment": calculate_naics_alignment(
                profile, opportunity, weight=technical_weights["naics_alignment"]
            ),
            "certification_match": calculate_certification_match(
                profile,
                opportunity,
                taxonomy=self.taxonomy,
                weight=technical_weights["certification_match"],
            ),
            "competency_alignment": calculate_competency_alignment(
                profile, opportunity, weight=technical_weights["competency_alignment"]
            ),
            "security_clearance_match": calculate_security_clearance_match(
                profile, opportunity, weight=technical_weights["security_clearance_match"]
            ),
        }
        strategic = {
            "geographic_proximity": calculate_geographic_proximity(
                profile, opportunity, weight=strategic_weights["geographic_proximity"]
            ),
            "government_level_match": calculate_government_level_match(
                profile, opportunity, weight=strategic_weights["government_level_match"]
            ),
            "geographic_preference_match": calculate_geographic_preference_match(
                profile, opportunity, weight=strategic_weights["geographic_preference_match"]
            ),
            "business_scale_alignment": calculate_business_scale_alignment(
                profile, opportunity, weight=strategic_weights["business_scale_alignment"]
            ),
        }

        factors = {
            PAST_PERFORMANCE: calculate_past_performance(
                profile,
                opportunity,
                reference_year=self.reference_year,
                weight=config.category_weight(PAST_PERFORMANCE),
            ),
            TECHNICAL_CAPABILITY: _weighted_category(
                technical,
                config.category_weight(TECHNICAL_CAPABILITY),
                "NAICS: {}%, Certs: {}%, Competencies: {}%, Security: {}%".format(
                    *(_fmt(part.score) for part in technical.values())
                ),
            ),
            STRATEGIC_FIT_RELATIONSHIPS: _weighted_category(
                strategic,
                config.category_weight(STRATEGIC_FIT_RELATIONSHIPS),
                "Geographic: {}%, Gov Level: {}%, Preferences: {}%, Scale: {}%".format(
                    *(_fmt(part.score) for part in strategic.values())
                ),
            ),
            CREDIBILITY_MARKET_PRESENCE: calculate_credibility_market_presence(
                profile,
                sub_weights=config.sub_factors(CREDIBILITY_MARKET_PRESENCE),
                weight=config.category_weight(CREDIBILITY_MARKET_PRESENCE),
            ),
        }
        sub_factors = {**technical, **strategic}

        raw_score = sum(factor.contribution for factor in factors.values())
        credibility = factors[CREDIBILITY_MARKET_PRESENCE].score
        confidence = _clamp(raw_score * confidence_multiplier(credibility))

        result = MatchScore(
            opportunity_id=opportunity.id,
            profile_id=profile.id if profile is not None else "",
            score=round_half_up(_clamp(raw_score)),
            confidence=round_half_up(confidence),
            factors=MappingProxyType(factors),
            sub_factors=MappingProxyType(sub_factors),
            algorithm_version=config.id,
            recommendations=generate_recommendations(factors, sub_factors, opportunity),
        )
        logger.debug(
            "Scored opportunity %s for profile %s: score=%s confidence=%s",
            result.opportunity_id or "<unknown>",
            result.profile_id or "<unknown>",
            result.score,
            result.confidence,
        )
        return result

    def score_input(self, match_input: MatchScoreInput) -> MatchScore:
        return self.score(match_input.opportunity, match_input.profile)

    def score_batch(
        self, opportunities: Iterable[Opportunity], profile: Profile | None
    ) -> list[MatchScore]:
        return [self.score(opportunity, profile) for opportunity in opportunities]


_DEFAULT_SCORER = MatchScorer()


def score_match(
    opportunity: Opportunity,
    profile: Profile | None,
    *,
    scorer: MatchScorer | None = None,
) -> MatchScore:
    """Score one opportunity against one profile."""
    return (scorer or _DEFAULT_SCORER).score(opportunity, profile)


def score_match_from_input(
    match_input: MatchScoreInput,
    *,
    scorer: MatchScorer | None = None,
) -> MatchScore:
    """Score a bundled ``(opportunity, profile)`` input."""
    return (scorer or _DEFAULT_SCORER).score_input(match_input)


def calculate_batch_match_scores(
    opportunities: Iterable[Opportunity],
    profile: Profile | None,
    *,
    scorer: MatchScorer | None = None,
) -> list[MatchScore]:
    """Score many opportunities against one profile, preserving input order."""
    return (scorer or _DEFAULT_SCORER).score_batch(opportunities, profile)
