"""Weight tables shared by profile-completeness and opportunity-match scoring.

Both scoring products use the same four categories. Category weights sum to 100,
and each category's sub-factor weights sum to 100. Values are frozen; callers
that need an alternate table build a new ``ScoringConfig`` (or load one with
``govcon_match.application.scoring_config.load_scoring_config``) and inject it.

Usage example:
    from govcon_match.domain.scoring_config import get_category_weights, get_sub_factor_weights

    weights = get_category_weights()
    assert sum(weights.values()) == 100
    assert get_sub_factor_weights("technical_capability")["naics_alignment"] == 50
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from ..exceptions import UnknownCategoryError

PAST_PERFORMANCE = "past_performance"
TECHNICAL_CAPABILITY = "technical_capability"
STRATEGIC_FIT_RELATIONSHIPS = "strategic_fit_relationships"
CREDIBILITY_MARKET_PRESENCE = "credibility_market_presence"

CATEGORIES: tuple[str, ...] = (
    PAST_PERFORMANCE,
    TECHNICAL_CAPABILITY,
    STRATEGIC_FIT_RELATIONSHIPS,
    CREDIBILITY_MARKET_PRESENCE,
)


@dataclass(frozen=True)
class CategoryLabel:
    """Display metadata for one scoring category."""

    label: str
    priority: str
    description: str


@dataclass(frozen=True)
class ProfileField:
    """One binary-presence check in a profile completeness section."""

    key: str
    label: str
    points: int
    suggestion: str


@dataclass(frozen=True)
class ScoringConfig:
    """A complete, immutable weight table for match and profile scoring."""

    id: str
    name: str
    version: str
    category_weights: MappingProxyType[str, float]
    sub_factor_weights: MappingProxyType[str, MappingProxyType[str, float]]
    section_weights: MappingProxyType[str, float]

    def category_weight(self, category: str) -> float:
        if category not in self.category_weights:
            raise UnknownCategoryError(category, tuple(self.category_weights))
        return self.category_weights[category]

    def sub_factors(self, category: str) -> MappingProxyType[str, float]:
        if category not in self.sub_factor_weights:
            raise UnknownCategoryError(category, tuple(self.sub_factor_weights))
        return self.sub_factor_weights[category]


def _frozen(values: dict[str, float]) -> MappingProxyType[str, float]:
    return MappingProxyType(dict(values))


DEFAULT_SCORING_CONFIG = ScoringConfig(
    id="current-algorithm-v4",
    name="Research-Based 4-Category Algorithm v4.0",
    version="4.0",
    category_weights=_frozen(
        {
            PAST_PERFORMANCE: 35,
            TECHNICAL_CAPABILITY: 35,
            STRATEGIC_FIT_RELATIONSHIPS: 15,
            CREDIBILITY_MARKET_PRESENCE: 15,
        }
    ),
    sub_factor_weights=MappingProxyType(
        {
            # Descriptive only: calculate_past_performance scores by tiers, not these weights.
            PAST_PERFORMANCE: _frozen(
                {
                    "contract_value_alignment": 40,
                    "agency_experience": 30,
                    "industry_experience": 20,
                    "recency_relevance": 10,
                }
            ),
            TECHNICAL_CAPABILITY: _frozen(
                {
                    "naics_alignment": 50,
                    "certification_match": 25,
                    "competency_alignment": 15,
                    "security_clearance_match": 10,
                }
            ),
            STRATEGIC_FIT_RELATIONSHIPS: _frozen(
                {
                    "geographic_proximity": 40,
                    "government_level_match": 30,
                    "geographic_preference_match": 20,
                    "business_scale_alignment": 10,
                }
            ),
            CREDIBILITY_MARKET_PRESENCE: _frozen(
                {
                    "contact_completeness": 40,
                    "basic_company_info": 27,
                    "sam_gov_readiness": 33,
                }
            ),
        }
    ),
    section_weights=_frozen(
        {
            PAST_PERFORMANCE: 35,
            TECHNICAL_CAPABILITY: 35,
            STRATEGIC_FIT_RELATIONSHIPS: 15,
            CREDIBILITY_MARKET_PRESENCE: 15,
        }
    ),
)

PROFILE_ALGORITHM = "government-contracting-v2.1"
PROFILE_ALGORITHM_VERSION = "2.1"

CATEGORY_LABELS: MappingProxyType[str, CategoryLabel] = MappingProxyType(
    {
        PAST_PERFORMANCE: CategoryLabel(
            label="Past Performance",
            priority="critical",
            description="Contract history relevance and agency experience",
        ),
        TECHNICAL_CAPABILITY: CategoryLabel(
            label="Technical Capability",
            priority="critical",
            description="NAICS alignment, certifications, and competencies",
        ),
        STRATEGIC_FIT_RELATIONSHIPS: CategoryLabel(
            label="Strategic Fit & Relationships",
            priority="important",
            description="Geographic fit, government level experience, and business scale",
        ),
        CREDIBILITY_MARKET_PRESENCE: CategoryLabel(
            label="Credibility & Market Presence",
            priority="foundation",
            description="SAM.gov status, contact completeness, and professional presence",
        ),
    }
)

# Field checklists for profile completeness; each section totals 100 points.
PROFILE_SECTION_FIELDS: MappingProxyType[str, tuple[ProfileField, ...]] = MappingProxyType(
    {
        PAST_PERFORMANCE: (
            ProfileField("description", "Description", 25, "Add past performance narrative and overview"),
            ProfileField("key_projects", "Key Projects", 25, "Add detailed project examples with outcomes"),
            ProfileField(
                "total_contract_value",
                "Total Contract Value",
                25,
                "Add historical contract values and scale",
            ),
            ProfileField(
                "years_in_business",
                "Years in Business",
                25,
                "Add business experience and longevity",
            ),
        ),
        TECHNICAL_CAPABILITY: (
            ProfileField("primary_naics", "Primary NAICS Code", 40, "Add main business classification code"),
            ProfileField(
                "secondary_naics",
                "Secondary NAICS Codes",
                20,
                "Add additional capability classifications",
            ),
            ProfileField(
                "certifications",
                "Business Certifications",
                20,
                "Add set-asides: 8(a), WOSB, SDVOSB, etc.",
            ),
            ProfileField("core_competencies", "Core Competencies", 20, "Add skills, clearances, geographic reach"),
        ),
        STRATEGIC_FIT_RELATIONSHIPS: (
            ProfileField(
                "business_type",
                "Business Type",
                20,
                "Add business type: Corporation, LLC, Partnership, etc.",
            ),
            ProfileField("year_established", "Year Established", 20, "Add company founding year and stability"),
            ProfileField("employee_count", "Employee Count", 20, "Add team size and capacity"),
            ProfileField("annual_revenue", "Annual Revenue", 20, "Add financial scale and capability"),
            ProfileField(
                "geographic_preferences",
                "Geographic Preferences",
                20,
                "Add preferred work locations and travel preferences",
            ),
        ),
        CREDIBILITY_MARKET_PRESENCE: (
            ProfileField("contact_email", "Contact Email", 12, "Add primary business email"),
            ProfileField("contact_name", "Contact Name", 7, "Add primary contact person"),
            ProfileField("contact_phone", "Contact Phone", 6, "Add primary business phone number"),
            ProfileField("website", "Website", 5, "Add professional web presence"),
            ProfileField("company_name", "Company Name", 12, "Add legal business name"),
            ProfileField("business_address", "Business Address", 8, "Add physical business location"),
            ProfileField("logo", "Company Logo", 5, "Add company logo for professional presentation"),
            ProfileField(
                "security_clearance",
                "Security Clearance",
                5,
                "Add security clearance level if applicable",
            ),
            ProfileField("uei_number", "UEI Number", 15, "Add Unique Entity Identifier"),
            ProfileField("cage_code", "CAGE Code", 15, "Add Commercial Activity Code"),
            ProfileField(
                "sam_gov_integration",
                "SAM.gov Integration",
                10,
                "Complete full automated integration",
            ),
        ),
    }
)


@dataclass(frozen=True)
class ReadinessAssessment:
    """Contract-readiness band for an overall profile score."""

    level: str
    description: str


def get_category_weights(config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> dict[str, float]:
    """Return the four category weights (sums to 100)."""
    return dict(config.category_weights)


def get_sub_factor_weights(
    category: str,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> dict[str, float]:
    """Return sub-factor weights for one category (sums to 100).

    Raises:
        UnknownCategoryError: If ``category`` is not one of ``CATEGORIES``.
    """
    return dict(config.sub_factors(category))


def get_profile_section_weights(config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> dict[str, float]:
    """Return profile completeness section weights (sums to 100)."""
    return dict(config.section_weights)


def get_category_label(category: str) -> CategoryLabel:
    if category not in CATEGORY_LABELS:
        raise UnknownCategoryError(category, CATEGORIES)
    return CATEGORY_LABELS[category]


def get_contract_readiness_assessment(overall_score: float) -> ReadinessAssessment:
    """Band an overall profile score into a contract-readiness level."""
    if overall_score >= 90:
        return ReadinessAssessment("Excellent", "Ready for large-scale government contracts")
    if overall_score >= 80:
        return ReadinessAssessment("Good", "Ready for mid-tier government contracts")
    if overall_score >= 70:
        return ReadinessAssessment("Fair", "Ready for small government contracts")
    return ReadinessAssessment("Needs Improvement", "Profile improvements needed before contracting")
