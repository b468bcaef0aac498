"""Canonical contractor profile and opportunity records.

Inbound payloads arrive in several historical shapes (flat certification lists,
grouped certification objects, list or narrative past performance, flat or
grouped geographic preferences). ``govcon_match.infrastructure.io.validation``
resolves all of them into the single shape defined here, so scoring code never
branches on payload layout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

GovernmentLevel = Literal["FEDERAL", "STATE", "LOCAL"]
PreferenceType = Literal["PREFERRED", "WILLING", "AVOID"]
LocationGranularity = Literal["COUNTRY", "STATE", "COUNTY", "CITY", "ZIP"]

GOVERNMENT_LEVELS: tuple[GovernmentLevel, ...] = ("FEDERAL", "STATE", "LOCAL")
PREFERENCE_TYPES: tuple[PreferenceType, ...] = ("PREFERRED", "WILLING", "AVOID")
LOCATION_GRANULARITIES: tuple[LocationGranularity, ...] = (
    "COUNTRY",
    "STATE",
    "COUNTY",
    "CITY",
    "ZIP",
)

_ACTIVE_STATUSES = frozenset({"", "active", "valid"})
_SAM_IDENTIFIER_TYPES = frozenset({"UEI", "CAGE", "DUNS"})


@dataclass(frozen=True)
class CertificationRecord:
    """A single credential or set-aside certification held by a contractor."""

    type: str = ""
    name: str = ""
    status: str = ""
    certification_id: str = ""
    tags: tuple[str, ...] = ()

    @property
    def is_active(self) -> bool:
        return self.status.strip().lower() in _ACTIVE_STATUSES


@dataclass(frozen=True)
class Certifications:
    """All certification data for a profile, including SAM.gov identifiers."""

    records: tuple[CertificationRecord, ...] = ()
    set_asides: tuple[str, ...] = ()
    uei: str = ""
    cage_code: str = ""
    duns: str = ""

    @property
    def has_any(self) -> bool:
        return bool(self.records or self.set_asides)

    @property
    def active_records(self) -> tuple[CertificationRecord, ...]:
        return tuple(record for record in self.records if record.is_active)

    def has_identifier(self, kind: str) -> bool:
        """Return True when a UEI, CAGE or DUNS identifier appears anywhere."""
        kind = kind.upper()
        if kind not in _SAM_IDENTIFIER_TYPES:
            return False
        direct = {"UEI": self.uei, "CAGE": self.cage_code, "DUNS": self.duns}[kind]
        if direct:
            return True
        return any(record.type.upper() == kind for record in self.records)

    @property
    def has_sam_registration_record(self) -> bool:
        return any(record.type.upper() == "SAM_GOV_REGISTRATION" for record in self.records)


@dataclass(frozen=True)
class ContractRecord:
    """A completed or ongoing contract in a profile's past performance."""

    contract_number: str = ""
    agency: str = ""
    client: str = ""
    value: float | None = None
    performance: str = ""
    end_date: str = ""


@dataclass(frozen=True)
class KeyProject:
    """A narrative project highlight."""

    title: str = ""
    client: str = ""
    customer_type: str = ""
    value: float | None = None
    completed_year: int | None = None


@dataclass(frozen=True)
class PastPerformance:
    """Structured contract records and narrative past performance."""

    records: tuple[ContractRecord, ...] = ()
    description: str = ""
    key_projects: tuple[KeyProject, ...] = ()
    total_contract_value: float | None = None
    years_in_business: int | None = None

    @property
    def has_narrative(self) -> bool:
        return bool(
            self.description
            or self.key_projects
            or self.total_contract_value
            or self.years_in_business
        )

    @property
    def is_empty(self) -> bool:
        return not self.records and not self.has_narrative


@dataclass(frozen=True)
class Address:
    """A postal address; every part is optional."""

    line1: str = ""
    line2: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""

    @property
    def has_any(self) -> bool:
        return bool(self.line1 or self.city or self.state or self.zip_code)


@dataclass(frozen=True)
class ContactInfo:
    """Primary contact and presentation details."""

    name: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    logo_url: str = ""
    banner_url: str = ""


@dataclass(frozen=True)
class LocationPreference:
    """A tagged list of locations at one granularity."""

    granularity: LocationGranularity
    type: PreferenceType
    locations: tuple[str, ...]


@dataclass(frozen=True)
class GeographicPreferences:
    """Work-location preferences grouped by granularity."""

    preferences: tuple[LocationPreference, ...] = ()
    work_from_home: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.preferences and not self.work_from_home

    def of_type(
        self, preference_type: PreferenceType, granularity: LocationGranularity
    ) -> tuple[LocationPreference, ...]:
        return tuple(
            preference
            for preference in self.preferences
            if preference.type == preference_type and preference.granularity == granularity
        )


@dataclass(frozen=True)
class Profile:
    """A contractor's capability record as seen by the scoring engine."""

    id: str = ""
    company_name: str = ""
    dba_name: str = ""
    company_description: str = ""
    primary_naics: str = ""
    secondary_naics: tuple[str, ...] = ()
    core_competencies: tuple[str, ...] = ()
    certifications: Certifications | None = None
    past_performance: PastPerformance | None = None
    address: Address = field(default_factory=Address)
    contact: ContactInfo = field(default_factory=ContactInfo)
    government_levels: tuple[GovernmentLevel, ...] = ()
    geographic_preferences: GeographicPreferences | None = None
    uei: str = ""
    cage_code: str = ""
    sam_gov_status: str = ""
    business_type: str = ""
    year_established: int | None = None
    employee_count: int | None = None
    annual_revenue: float | None = None
    security_clearance: str = ""

    @property
    def sam_gov_registered(self) -> bool:
        return bool(self.uei and self.cage_code)

    @property
    def sam_gov_verified(self) -> bool:
        return self.sam_gov_registered and self.sam_gov_status.strip().lower() == "verified"


@dataclass(frozen=True)
class Location:
    """Place of performance."""

    state: str = ""
    city: str = ""
    zip_code: str = ""


@dataclass(frozen=True)
class Opportunity:
    """A government solicitation, read-only input to scoring."""

    id: str = ""
    title: str = ""
    description: str = ""
    naics_codes: tuple[str, ...] = ()
    set_aside_type: str = ""
    required_certifications: tuple[str, ...] = ()
    agency: str = ""
    location: Location | None = None
    estimated_value: float | None = None
    security_clearance: str = ""


@dataclass(frozen=True)
class MatchScoreInput:
    """A bundled ``(opportunity, profile)`` pair."""

    opportunity: Opportunity
    profile: Profile | None
