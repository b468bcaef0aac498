"""Pydantic-based validation and shape normalisation for inbound payloads.

Profiles and opportunities arrive as JSON in several historical layouts, with
either camelCase or snake_case keys. The ``parse_*`` functions accept every
known layout and return canonical domain records. Only a non-object top level
is rejected; malformed nested values degrade to empty defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar, cast

from typing_extensions import TypedDict

from pydantic import TypeAdapter, ValidationError

from ...domain.certification_taxonomy import CertificationTaxonomy, TaxonomyCertification
from ...domain.records import (
    GOVERNMENT_LEVELS,
    LOCATION_GRANULARITIES,
    PREFERENCE_TYPES,
    Address,
    CertificationRecord,
    Certifications,
    ContactInfo,
    ContractRecord,
    GeographicPreferences,
    GovernmentLevel,
    KeyProject,
    Location,
    LocationGranularity,
    LocationPreference,
    MatchScoreInput,
    Opportunity,
    PastPerformance,
    PreferenceType,
    Profile,
)
from ...exceptions import InvalidPayloadError

SchemaT = TypeVar("SchemaT")


class IncomingDataError(ValueError):
    """Raised when inbound data fails validation."""


class CertificationTaxonomyEntryInput(TypedDict, total=False):
    id: str
    name: str
    category: str
    tags: list[str]
    isActive: bool


class CertificationCategoryInput(TypedDict, total=False):
    name: str
    certifications: list[object]


class TaxonomyMetadataInput(TypedDict, total=False):
    version: str


class CertificationTaxonomyInput(TypedDict, total=False):
    version: str
    metadata: TaxonomyMetadataInput
    certifications: list[object]
    certificationCategories: list[object]


def validate_as(schema: type[SchemaT], payload: object) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_python(payload)
    except ValidationError as exc:
        message = f"Invalid payload for {schema}."
        raise IncomingDataError(message) from exc


def validate_json_as(schema: type[SchemaT], payload: str | bytes | bytearray) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_json(payload)
    except ValidationError as exc:
        message = f"Invalid JSON payload for {schema}."
        raise IncomingDataError(message) from exc


def _as_str(value: object) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return ""


def _as_str_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.replace(";", ",").split(",") if part.strip()]
    try:
        items = validate_as(list[object], value)
    except IncomingDataError:
        return []
    cleaned: list[str] = []
    for item in items:
        text = _as_str(item)
        if text:
            cleaned.append(text)
    return cleaned


def _as_float(value: object) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        cleaned = value.replace(",", "").replace("$", "").strip()
        try:
            return float(cleaned) if cleaned else None
        except ValueError:
            return None
    return None


def _as_int(value: object) -> int | None:
    number = _as_float(value)
    return int(number) if number is not None else None


def _as_mapping(value: object) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        return cast(Mapping[str, object], value)
    return {}


def _as_list(value: object) -> list[object]:
    return list(value) if isinstance(value, list | tuple) else []


def _get(payload: Mapping[str, object], *keys: str) -> object:
    """Return the first present, non-null value among alternative key spellings."""
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def _top_level(kind: str, payload: object) -> Mapping[str, object]:
    try:
        return validate_as(dict[str, object], payload)
    except IncomingDataError as exc:
        raise InvalidPayloadError(kind, "expected a JSON object") from exc


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


def _naics_code(value: object) -> str:
    if isinstance(value, Mapping):
        return _as_str(_as_mapping(value).get("code"))
    return _as_str(value)


def _parse_certification_record(value: object) -> CertificationRecord | None:
    if isinstance(value, str):
        return CertificationRecord(type=value.strip(), name=value.strip()) if value.strip() else None
    item = _as_mapping(value)
    if not item:
        return None
    cert_type = _as_str(_get(item, "type", "certificationType", "certification_type"))
    name = _as_str(item.get("name"))
    if not cert_type and not name:
        return None
    return CertificationRecord(
        type=cert_type,
        name=name,
        status=_as_str(item.get("status")),
        certification_id=_as_str(_get(item, "certificationId", "certification_id", "id")),
        tags=tuple(tag.lower() for tag in _as_str_list(item.get("tags"))),
    )


def parse_certifications(value: object) -> Certifications | None:
    """Normalise a flat certification list or a grouped certification object."""
    if value is None:
        return None
    if isinstance(value, list | tuple):
        records = [_parse_certification_record(item) for item in value]
        return Certifications(records=tuple(record for record in records if record is not None))
    grouped = _as_mapping(value)
    if not grouped:
        return None
    records = [
        _parse_certification_record(item) for item in _as_list(grouped.get("certifications"))
    ]
    return Certifications(
        records=tuple(record for record in records if record is not None),
        set_asides=tuple(_as_str_list(_get(grouped, "setAsides", "set_asides"))),
        uei=_as_str(_get(grouped, "uei", "ueiNumber")),
        cage_code=_as_str(_get(grouped, "cageCode", "cage_code")),
        duns=_as_str(_get(grouped, "duns", "dunsNumber")),
    )


def _parse_contract_record(value: object) -> ContractRecord | None:
    item = _as_mapping(value)
    if not item:
        return None
    return ContractRecord(
        contract_number=_as_str(_get(item, "contractNumber", "contract_number")),
        agency=_as_str(item.get("agency")),
        client=_as_str(_get(item, "client", "customer")),
        value=_as_float(_get(item, "value", "contractValue", "contract_value")),
        performance=_as_str(_get(item, "performance", "rating")),
        end_date=_as_str(_get(item, "endDate", "end_date")),
    )


def _parse_key_project(value: object) -> KeyProject | None:
    item = _as_mapping(value)
    if not item:
        return None
    return KeyProject(
        title=_as_str(_get(item, "title", "name")),
        client=_as_str(item.get("client")),
        customer_type=_as_str(_get(item, "customerType", "customer_type")),
        value=_as_float(_get(item, "value", "contractValue", "contract_value")),
        completed_year=_as_int(
            _get(item, "completedYear", "completed_year", "year", "endYear")
        ),
    )


def parse_past_performance(value: object) -> PastPerformance | None:
    """Normalise a contract-record list or a narrative past performance object."""
    if value is None:
        return None
    if isinstance(value, list | tuple):
        records = [_parse_contract_record(item) for item in value]
        return PastPerformance(records=tuple(record for record in records if record is not None))
    narrative = _as_mapping(value)
    if not narrative:
        return None
    records = [
        _parse_contract_record(item)
        for item in _as_list(_get(narrative, "records", "contracts"))
    ]
    projects = [
        _parse_key_project(item)
        for item in _as_list(_get(narrative, "keyProjects", "key_projects", "projects"))
    ]
    return PastPerformance(
        records=tuple(record for record in records if record is not None),
        description=_as_str(narrative.get("description")),
        key_projects=tuple(project for project in projects if project is not None),
        total_contract_value=_as_float(
            _get(narrative, "totalContractValue", "total_contract_value", "contractValue")
        ),
        years_in_business=_as_int(_get(narrative, "yearsInBusiness", "years_in_business")),
    )


def _preference_type(value: object) -> PreferenceType | None:
    text = _as_str(value).upper()
    for preference_type in PREFERENCE_TYPES:
        if preference_type == text:
            return preference_type
    return None


_GRANULARITY_KEYS: dict[LocationGranularity, tuple[str, ...]] = {
    "COUNTRY": ("countries", "country"),
    "STATE": ("states", "state"),
    "COUNTY": ("counties", "county"),
    "CITY": ("cities", "city"),
    "ZIP": ("zipCodes", "zip_codes", "zipCode", "zip_code", "zip"),
}


def _locations_for(item: Mapping[str, object], granularity: LocationGranularity) -> list[str]:
    locations = _as_str_list(item.get("locations"))
    for key in _GRANULARITY_KEYS[granularity]:
        locations.extend(_as_str_list(item.get(key)))
    return locations


def parse_geographic_preferences(value: object) -> GeographicPreferences | None:
    """Normalise grouped or flat geographic preferences.

    The grouped layout keys lists by granularity
    (``{"preferences": {"state": [{"type": "PREFERRED", "locations": [...]}]}}``).
    The flat layout is a list of tagged entries carrying ``states``/``cities``/``zipCodes``.
    """
    if value is None:
        return None
    container = _as_mapping(value)
    work_from_home = bool(_get(container, "workFromHome", "work_from_home"))
    raw = container.get("preferences") if container else value
    if raw is None:
        return None

    preferences: list[LocationPreference] = []
    if isinstance(raw, list | tuple):
        for entry in raw:
            item = _as_mapping(entry)
            preference_type = _preference_type(item.get("type"))
            if preference_type is None:
                continue
            for granularity in LOCATION_GRANULARITIES:
                locations = [
                    location
                    for key in _GRANULARITY_KEYS[granularity]
                    for location in _as_str_list(item.get(key))
                ]
                if locations:
                    preferences.append(
                        LocationPreference(granularity, preference_type, tuple(locations))
                    )
    else:
        grouped = _as_mapping(raw)
        for granularity in LOCATION_GRANULARITIES:
            entries = _as_list(grouped.get(granularity.lower()))
            for entry in entries:
                item = _as_mapping(entry)
                preference_type = _preference_type(item.get("type"))
                if preference_type is None:
                    continue
                locations = _locations_for(item, granularity)
                if locations:
                    preferences.append(
                        LocationPreference(granularity, preference_type, tuple(locations))
                    )

    return GeographicPreferences(preferences=tuple(preferences), work_from_home=work_from_home)


def _parse_government_levels(value: object) -> tuple[GovernmentLevel, ...]:
    levels: list[GovernmentLevel] = []
    for raw in _as_str_list(value):
        for level in GOVERNMENT_LEVELS:
            if raw.upper() == level and level not in levels:
                levels.append(level)
    return tuple(levels)


def _parse_address(payload: Mapping[str, object]) -> Address:
    nested = _as_mapping(_get(payload, "businessAddress", "business_address", "address"))
    source = nested or payload
    return Address(
        line1=_as_str(_get(source, "addressLine1", "address_line1", "line1")),
        line2=_as_str(_get(source, "addressLine2", "address_line2", "line2")),
        city=_as_str(source.get("city")),
        state=_as_str(source.get("state")),
        zip_code=_as_str(_get(source, "zipCode", "zip_code", "zip")),
        country=_as_str(source.get("country")),
    )


def _parse_contact(payload: Mapping[str, object]) -> ContactInfo:
    nested = _as_mapping(payload.get("contact"))
    return ContactInfo(
        name=_as_str(
            _get(nested, "name") or _get(payload, "primaryContactName", "contact_name")
        ),
        email=_as_str(
            _get(nested, "email") or _get(payload, "primaryContactEmail", "contact_email")
        ),
        phone=_as_str(
            _get(nested, "phone") or _get(payload, "primaryContactPhone", "contact_phone")
        ),
        website=_as_str(_get(payload, "website")),
        logo_url=_as_str(_get(payload, "logoUrl", "logo_url")),
        banner_url=_as_str(_get(payload, "bannerUrl", "banner_url")),
    )


def parse_profile(payload: object) -> Profile:
    """Build a canonical profile from any supported payload layout.

    Raises:
        InvalidPayloadError: If the payload is not a JSON object.
    """
    data = _top_level("profile", payload)
    secondary = [
        _naics_code(item) for item in _as_list(_get(data, "secondaryNaics", "secondary_naics"))
    ]
    if not secondary:
        secondary = _as_str_list(_get(data, "secondaryNaics", "secondary_naics"))
    return Profile(
        id=_as_str(data.get("id")),
        company_name=_as_str(_get(data, "companyName", "company_name")),
        dba_name=_as_str(_get(data, "dbaName", "dba_name")),
        company_description=_as_str(_get(data, "companyDescription", "company_description")),
        primary_naics=_naics_code(_get(data, "primaryNaics", "primary_naics")),
        secondary_naics=tuple(code for code in secondary if code),
        core_competencies=tuple(_as_str_list(_get(data, "coreCompetencies", "core_competencies"))),
        certifications=parse_certifications(data.get("certifications")),
        past_performance=parse_past_performance(_get(data, "pastPerformance", "past_performance")),
        address=_parse_address(data),
        contact=_parse_contact(data),
        government_levels=_parse_government_levels(
            _get(data, "governmentLevels", "government_levels")
        ),
        geographic_preferences=parse_geographic_preferences(
            _get(data, "geographicPreferences", "geographic_preferences")
        ),
        uei=_as_str(_get(data, "uei", "ueiNumber")),
        cage_code=_as_str(_get(data, "cageCode", "cage_code")),
        sam_gov_status=_as_str(_get(data, "samGovStatus", "sam_gov_status")),
        business_type=_as_str(_get(data, "businessType", "business_type")),
        year_established=_as_int(_get(data, "yearEstablished", "year_established")),
        employee_count=_as_int(_get(data, "employeeCount", "employee_count")),
        annual_revenue=_as_float(_get(data, "annualRevenue", "annual_revenue")),
        security_clearance=_as_str(_get(data, "securityClearance", "security_clearance")),
    )


# ---------------------------------------------------------------------------
# Opportunity
# ---------------------------------------------------------------------------


def _parse_estimated_value(value: object) -> float | None:
    """A number, or a ``{min, max}`` range resolved to its midpoint."""
    if isinstance(value, Mapping):
        bounds = _as_mapping(value)
        low = _as_float(bounds.get("min"))
        high = _as_float(bounds.get("max"))
        if low is not None and high is not None:
            return (low + high) / 2
        return high if high is not None else low
    return _as_float(value)


def _parse_location(data: Mapping[str, object]) -> Location | None:
    nested = _as_mapping(_get(data, "location", "placeOfPerformance", "place_of_performance"))
    state = _as_str(nested.get("state")) or _as_str(data.get("state"))
    city = _as_str(nested.get("city")) or _as_str(data.get("city"))
    zip_code = _as_str(_get(nested, "zipCode", "zip_code", "zip")) or _as_str(
        _get(data, "zipCode", "zip_code")
    )
    if not (state or city or zip_code):
        return None
    return Location(state=state, city=city, zip_code=zip_code)


def parse_opportunity(payload: object) -> Opportunity:
    """Build a canonical opportunity from any supported payload layout.

    Raises:
        InvalidPayloadError: If the payload is not a JSON object.
    """
    data = _top_level("opportunity", payload)
    agency = _get(data, "agency", "agencyName")
    if isinstance(agency, Mapping):
        agency_name = _as_str(_as_mapping(agency).get("name"))
    else:
        agency_name = _as_str(agency)
    codes = [_naics_code(item) for item in _as_list(_get(data, "naicsCodes", "naics_codes"))]
    if not codes:
        codes = _as_str_list(_get(data, "naicsCodes", "naics_codes", "naicsCode"))
    return Opportunity(
        id=_as_str(data.get("id")),
        title=_as_str(data.get("title")),
        description=_as_str(data.get("description")),
        naics_codes=tuple(code for code in codes if code),
        set_aside_type=_as_str(_get(data, "setAsideType", "set_aside_type", "setAside")),
        required_certifications=tuple(
            _as_str_list(_get(data, "requiredCertifications", "required_certifications"))
        ),
        agency=agency_name,
        location=_parse_location(data),
        estimated_value=_parse_estimated_value(
            _get(data, "estimatedValue", "estimated_value", "contractValue")
        ),
        security_clearance=_as_str(_get(data, "securityClearance", "security_clearance")),
    )


def parse_match_input(payload: object) -> MatchScoreInput:
    """Parse ``{"opportunity": {...}, "profile": {...} | null}``."""
    data = _top_level("match input", payload)
    profile_payload = data.get("profile")
    return MatchScoreInput(
        opportunity=parse_opportunity(data.get("opportunity")),
        profile=parse_profile(profile_payload) if profile_payload is not None else None,
    )


def parse_opportunity_list(payload: object) -> list[Opportunity]:
    """Parse a JSON array of opportunities, or an object with an ``opportunities`` array."""
    if isinstance(payload, Mapping):
        payload = _as_mapping(payload).get("opportunities")
    try:
        items = validate_as(list[object], payload)
    except IncomingDataError as exc:
        raise InvalidPayloadError("opportunity list", "expected a JSON array") from exc
    return [parse_opportunity(item) for item in items]


def _parse_taxonomy_entry(raw_entry: object, category: str) -> TaxonomyCertification | None:
    entry = validate_as(CertificationTaxonomyEntryInput, raw_entry)
    entry_id = _as_str(entry.get("id"))
    if not entry_id or entry.get("isActive") is False:
        return None
    return TaxonomyCertification(
        id=entry_id,
        name=_as_str(entry.get("name")),
        category=_as_str(entry.get("category")) or category,
        tags=tuple(tag.lower() for tag in _as_str_list(entry.get("tags"))),
    )


def parse_certification_taxonomy(payload: object) -> CertificationTaxonomy:
    """Parse a taxonomy dataset, either grouped by category or as a flat list.

    Grouped datasets take each entry's category from its parent group name and
    skip entries flagged ``isActive: false``.
    """
    taxonomy = validate_as(CertificationTaxonomyInput, payload)
    parsed: list[TaxonomyCertification | None] = []
    for raw_category in taxonomy.get("certificationCategories", []):
        group = validate_as(CertificationCategoryInput, raw_category)
        category = _as_str(group.get("name"))
        parsed.extend(
            _parse_taxonomy_entry(raw_entry, category)
            for raw_entry in group.get("certifications", [])
        )
    parsed.extend(
        _parse_taxonomy_entry(raw_entry, "") for raw_entry in taxonomy.get("certifications", [])
    )
    version = _as_str(taxonomy.get("version")) or _as_str(
        taxonomy.get("metadata", {}).get("version")
    )
    return CertificationTaxonomy(
        version=version,
        certifications=tuple(entry for entry in parsed if entry is not None),
    )
