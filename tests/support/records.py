"""Canonical profile and opportunity builders for scoring tests."""

from __future__ import annotations

from dataclasses import replace

from govcon_match.domain.records import (
    Address,
    CertificationRecord,
    Certifications,
    ContactInfo,
    ContractRecord,
    GeographicPreferences,
    Location,
    LocationPreference,
    Opportunity,
    PastPerformance,
    Profile,
)


def strong_profile(**overrides: object) -> Profile:
    """A fully built-out Virginia IT contractor."""
    profile = Profile(
        id="profile-strong",
        company_name="Acme Federal Solutions LLC",
        dba_name="Acme Federal",
        company_description="Cloud and cybersecurity services for federal agencies.",
        primary_naics="541511",
        secondary_naics=("541512", "541519"),
        core_competencies=("cloud migration", "cybersecurity"),
        certifications=Certifications(
            records=(
                CertificationRecord(
                    type="SBA_8A", name="8(a) Business Development", status="ACTIVE"
                ),
                CertificationRecord(type="HUBZONE", name="HUBZone", status="ACTIVE"),
            ),
            uei="ACMEUEI12345",
            cage_code="1ABC2",
        ),
        past_performance=PastPerformance(
            records=(
                ContractRecord(
                    contract_number="W91-24-C-0001",
                    agency="Department of Defense",
                    client="Federal Systems Command",
                    value=2_500_000,
                    performance="Exceptional",
                    end_date="2024-09-30",
                ),
            ),
        ),
        address=Address(
            line1="100 Wilson Blvd",
            line2="Suite 400",
            city="Arlington",
            state="Virginia",
            zip_code="22201",
            country="USA",
        ),
        contact=ContactInfo(
            name="Jordan Lee",
            email="jordan@acme.example",
            phone="703-555-0100",
            website="https://acme.example",
            logo_url="https://acme.example/logo.png",
            banner_url="https://acme.example/banner.png",
        ),
        government_levels=("FEDERAL",),
        geographic_preferences=GeographicPreferences(
            preferences=(LocationPreference("STATE", "PREFERRED", ("Virginia",)),),
        ),
        uei="ACMEUEI12345",
        cage_code="1ABC2",
        sam_gov_status="verified",
        business_type="LLC",
        year_established=2012,
        employee_count=45,
        annual_revenue=5_000_000,
    )
    return replace(profile, **overrides)  # type: ignore[arg-type]


def strong_opportunity(**overrides: object) -> Opportunity:
    """A Virginia DoD IT opportunity closely aligned with ``strong_profile``."""
    opportunity = Opportunity(
        id="opp-strong",
        title="Cloud Migration and Cybersecurity Support",
        description="Migrate legacy workloads and harden security posture.",
        naics_codes=("541511",),
        set_aside_type="SMALL_BUSINESS",
        required_certifications=("SBA_8A",),
        agency="Department of Defense",
        location=Location(state="Virginia", city="Arlington", zip_code="22201"),
        estimated_value=3_000_000,
    )
    return replace(opportunity, **overrides)  # type: ignore[arg-type]


def weak_profile(**overrides: object) -> Profile:
    """A thin profile with no certifications or past performance."""
    profile = Profile(
        id="profile-weak",
        company_name="Small Shop Inc",
        primary_naics="541511",
        core_competencies=("cloud migration",),
        address=Address(
            line1="1 Main St",
            city="Arlington",
            state="Virginia",
            zip_code="22201",
            country="USA",
        ),
        contact=ContactInfo(
            name="Sam Park",
            email="sam@smallshop.example",
            phone="703-555-0199",
            website="https://smallshop.example",
        ),
        government_levels=("FEDERAL",),
        geographic_preferences=GeographicPreferences(
            preferences=(LocationPreference("STATE", "PREFERRED", ("Virginia",)),),
        ),
        uei="SMALLUEI0001",
        cage_code="9ZZZ9",
    )
    return replace(profile, **overrides)  # type: ignore[arg-type]


def weak_opportunity(**overrides: object) -> Opportunity:
    """A California county construction job far outside ``weak_profile``'s lane."""
    opportunity = Opportunity(
        id="opp-weak",
        title="Bridge Construction",
        description="Structural repairs to two county bridges.",
        naics_codes=("236220",),
        set_aside_type="WOMAN_OWNED",
        required_certifications=("SDVOSB", "WOSB"),
        agency="Los Angeles County Public Works",
        location=Location(state="California", city="Los Angeles"),
        estimated_value=2_000_000,
    )
    return replace(opportunity, **overrides)  # type: ignore[arg-type]
