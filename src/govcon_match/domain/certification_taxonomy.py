"""Certification taxonomy lookup and set-aside relevance rules.

A taxonomy maps certification ids, names and tags to categorised entries. When
no taxonomy is available, set-aside eligibility falls back to a basic string
match on the certification type.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from .records import CertificationRecord


@dataclass(frozen=True)
class TaxonomyCertification:
    """One certification definition from the taxonomy dataset."""

    id: str
    name: str
    category: str
    tags: tuple[str, ...]


@dataclass(frozen=True)
class CertificationTaxonomy:
    """Searchable certification definitions."""

    version: str
    certifications: tuple[TaxonomyCertification, ...]

    def resolve(self, record: CertificationRecord) -> TaxonomyCertification | None:
        """Find the first entry matching a record by id, then name, then tag."""
        record_id = (record.certification_id or record.type).strip().lower()
        record_name = record.name.strip().lower()
        record_tags = {tag.strip().lower() for tag in record.tags if tag.strip()}
        for entry in self.certifications:
            entry_name = entry.name.lower()
            if record_id and record_id == entry.id.lower():
                return entry
            if record_name and (
                record_name == entry_name or record_name in entry_name or entry_name in record_name
            ):
                return entry
            if record_tags and record_tags.intersection(entry.tags):
                return entry
        return None


SET_ASIDE_RELEVANT_TAGS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "small_business": ("small_business", "sba", "general"),
        "woman_owned": ("woman_owned", "small_business", "diversity"),
        "veteran_owned": ("veteran_owned", "small_business", "service"),
        "service_disabled_veteran": ("service_disabled_veteran", "veteran_owned", "small_business"),
        "8a": ("8a", "sba", "small_business", "disadvantaged"),
        "hubzone": ("hubzone", "sba", "small_business", "geographic"),
        "economically_disadvantaged": (
            "economically_disadvantaged",
            "disadvantaged",
            "small_business",
        ),
    }
)

SET_ASIDE_VARIANTS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "8a": ("8a", "eight_a", "eighta"),
        "hubzone": ("hubzone", "hub_zone"),
        "woman_owned": ("wosb", "woman_owned", "edwosb"),
        "veteran_owned": ("vosb", "veteran_owned"),
        "service_disabled_veteran": ("sdvosb", "service_disabled_veteran"),
        "small_business": ("small_business", "sb"),
    }
)

RELATED_TERMS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "small_business": ("small", "sba", "business"),
        "woman_owned": ("woman", "female", "wosb", "edwosb"),
        "veteran_owned": ("veteran", "vosb", "military", "service"),
        "service_disabled_veteran": ("disabled", "sdvosb", "service"),
        "8a": ("8a", "eight", "disadvantaged", "minority"),
        "hubzone": ("hubzone", "hub", "zone", "historic"),
    }
)


def _set_aside_key(set_aside_type: str) -> str:
    return set_aside_type.strip().lower()


def is_relevant_for_set_aside(entry: TaxonomyCertification, set_aside_type: str) -> bool:
    tags = SET_ASIDE_RELEVANT_TAGS.get(_set_aside_key(set_aside_type), ())
    category = entry.category.lower()
    name = entry.name.lower()
    return any(tag in entry.tags or tag in category or tag in name for tag in tags)


def basic_set_aside_match(cert_type: str, set_aside_type: str) -> bool:
    """Match a certification or set-aside label against a set-aside type."""
    label = cert_type.strip().lower()
    if not label:
        return False
    key = _set_aside_key(set_aside_type)
    variants = SET_ASIDE_VARIANTS.get(key, (key,))
    return any(variant in label or label in variant for variant in variants)


def is_related_certification(record: CertificationRecord, set_aside_type: str) -> bool:
    if not record.name:
        return False
    name = record.name.lower()
    terms = RELATED_TERMS.get(_set_aside_key(set_aside_type), ())
    return any(term in name for term in terms)


def record_qualifies_for_set_aside(
    record: CertificationRecord,
    set_aside_type: str,
    taxonomy: CertificationTaxonomy | None,
) -> bool:
    """Decide whether one held certification satisfies a set-aside type."""
    if taxonomy is not None:
        entry = taxonomy.resolve(record)
        if entry is not None:
            return is_relevant_for_set_aside(entry, set_aside_type)
    return basic_set_aside_match(record.type or record.name, set_aside_type)
