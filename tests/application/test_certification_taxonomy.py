"""Tests for certification taxonomy loading."""

import json
from pathlib import Path

import pytest

from govcon_match.application import certification_taxonomy
from govcon_match.application.certification_taxonomy import (
    load_certification_taxonomy,
    load_taxonomy_or_fallback,
)
from govcon_match.exceptions import CertificationTaxonomyError
from tests.fakes import InMemoryFileSystem

TAXONOMY_PATH = Path("data/reference/certifications.json")


def _write_taxonomy(fs: InMemoryFileSystem, certifications: list[dict[str, object]]) -> None:
    fs.write_text(
        json.dumps({"version": "2025.1", "certifications": certifications}), TAXONOMY_PATH
    )


def test_load_certification_taxonomy(in_memory_fs: InMemoryFileSystem) -> None:
    _write_taxonomy(
        in_memory_fs,
        [{"id": "sdvosb", "name": "SDVOSB", "category": "veteran", "tags": ["service"]}],
    )

    taxonomy = load_certification_taxonomy(path=TAXONOMY_PATH, fs=in_memory_fs)

    assert taxonomy.version == "2025.1"
    assert taxonomy.certifications[0].id == "sdvosb"


@pytest.mark.parametrize(
    ("content", "detail"),
    [
        (None, "file not found"),
        ("{broken", "invalid JSON"),
        ('{"certifications": "sdvosb"}', "Invalid payload"),
        ('{"version": "1", "certifications": []}', "no certifications defined"),
    ],
)
def test_unusable_taxonomy_raises(
    in_memory_fs: InMemoryFileSystem, content: str | None, detail: str
) -> None:
    if content is not None:
        in_memory_fs.write_text(content, TAXONOMY_PATH)

    with pytest.raises(CertificationTaxonomyError) as exc_info:
        load_certification_taxonomy(path=TAXONOMY_PATH, fs=in_memory_fs)

    assert detail in str(exc_info.value)


def test_fallback_returns_none_and_warns(
    in_memory_fs: InMemoryFileSystem, monkeypatch: pytest.MonkeyPatch
) -> None:
    warnings: list[str] = []

    def record_warning(message: str, *args: object) -> None:
        warnings.append(message % args)

    monkeypatch.setattr(certification_taxonomy.logger, "warning", record_warning)

    assert load_taxonomy_or_fallback(path=None, fs=in_memory_fs) is None
    assert load_taxonomy_or_fallback(path=TAXONOMY_PATH, fs=in_memory_fs) is None

    assert len(warnings) == 1
    assert warnings[0].startswith("Falling back to basic certification matching")


def test_fallback_returns_loaded_taxonomy(in_memory_fs: InMemoryFileSystem) -> None:
    _write_taxonomy(in_memory_fs, [{"id": "wosb", "name": "WOSB"}])

    taxonomy = load_taxonomy_or_fallback(path=TAXONOMY_PATH, fs=in_memory_fs)

    assert taxonomy is not None
    assert [entry.id for entry in taxonomy.certifications] == ["wosb"]


def test_load_categorised_taxonomy(in_memory_fs: InMemoryFileSystem) -> None:
    payload = {
        "metadata": {"version": "2024.3", "totalCertifications": 3},
        "certificationCategories": [
            {
                "name": "SBA Programs",
                "certifications": [
                    {"id": "sba-8a", "name": "8(a) Business Development", "tags": ["8a", "SBA"]},
                    {"id": "sba-legacy", "name": "Retired Program", "isActive": False},
                ],
            },
            {
                "name": "Veteran Programs",
                "certifications": [{"id": "sdvosb", "name": "SDVOSB", "isActive": True}],
            },
        ],
    }
    in_memory_fs.write_text(json.dumps(payload), TAXONOMY_PATH)

    taxonomy = load_taxonomy_or_fallback(path=TAXONOMY_PATH, fs=in_memory_fs)

    assert taxonomy is not None
    assert taxonomy.version == "2024.3"
    assert [(entry.id, entry.category) for entry in taxonomy.certifications] == [
        ("sba-8a", "SBA Programs"),
        ("sdvosb", "Veteran Programs"),
    ]
    assert taxonomy.certifications[0].tags == ("8a", "sba")
