"""Tests for canonical record helpers."""

from govcon_match.domain.records import (
    Address,
    CertificationRecord,
    Certifications,
    GeographicPreferences,
    LocationPreference,
    PastPerformance,
    Profile,
)


def test_certification_record_active_statuses() -> None:
    assert CertificationRecord(type="SBA_8A").is_active
    assert CertificationRecord(type="SBA_8A", status="Active").is_active
    assert CertificationRecord(type="SBA_8A", status="valid").is_active
    assert not CertificationRecord(type="SBA_8A", status="EXPIRED").is_active


def test_has_identifier_checks_direct_fields_and_records() -> None:
    certifications = Certifications(
        records=(CertificationRecord(type="duns", name="DUNS"),),
        uei="UEI123",
    )

    assert certifications.has_identifier("UEI")
    assert certifications.has_identifier("duns")
    assert not certifications.has_identifier("CAGE")
    assert not certifications.has_identifier("SBA_8A")


def test_past_performance_emptiness() -> None:
    assert PastPerformance().is_empty
    assert not PastPerformance(description="Delivered 12 contracts").is_empty
    assert PastPerformance(years_in_business=3).has_narrative


def test_geographic_preferences_filter_by_type_and_granularity() -> None:
    preferences = GeographicPreferences(
        preferences=(
            LocationPreference("STATE", "PREFERRED", ("Virginia",)),
            LocationPreference("CITY", "PREFERRED", ("Austin",)),
            LocationPreference("STATE", "AVOID", ("Alaska",)),
        )
    )

    assert [p.locations for p in preferences.of_type("PREFERRED", "STATE")] == [("Virginia",)]
    assert [p.locations for p in preferences.of_type("AVOID", "STATE")] == [("Alaska",)]
    assert preferences.of_type("WILLING", "CITY") == ()
    assert GeographicPreferences().is_empty
    assert not GeographicPreferences(work_from_home=True).is_empty


def test_sam_gov_registration_requires_uei_and_cage() -> None:
    assert not Profile(uei="UEI123").sam_gov_registered
    assert Profile(uei="UEI123", cage_code="1ABC2").sam_gov_registered
    assert not Profile(uei="UEI123", cage_code="1ABC2").sam_gov_verified
    assert Profile(uei="UEI123", cage_code="1ABC2", sam_gov_status="Verified").sam_gov_verified


def test_address_has_any() -> None:
    assert not Address().has_any
    assert not Address(country="USA").has_any
    assert Address(city="Austin").has_any
