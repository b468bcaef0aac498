"""Certification taxonomy loading."""

from __future__ import annotations

import json
from pathlib import Path

from ..domain.certification_taxonomy import CertificationTaxonomy
from ..exceptions import CertificationTaxonomyError
from ..infrastructure.io.validation import IncomingDataError, parse_certification_taxonomy
from ..observability.logging import get_logger
from ..protocols import FileSystem

logger = get_logger("govcon_match.certification_taxonomy")


def load_certification_taxonomy(*, path: Path, fs: FileSystem) -> CertificationTaxonomy:
    """Load a certification taxonomy dataset from JSON.

    Raises:
        CertificationTaxonomyError: If the file is missing, unreadable, or malformed.
    """
    if not fs.exists(path):
        raise CertificationTaxonomyError(str(path), "file not found")
    try:
        payload: object = json.loads(fs.read_text(path))
    except json.JSONDecodeError as exc:
        raise CertificationTaxonomyError(str(path), f"invalid JSON: {exc.msg}") from exc
    try:
        taxonomy = parse_certification_taxonomy(payload)
    except IncomingDataError as exc:
        raise CertificationTaxonomyError(str(path), str(exc)) from exc
    if not taxonomy.certifications:
        raise CertificationTaxonomyError(str(path), "no certifications defined")
    return taxonomy


def load_taxonomy_or_fallback(*, path: Path | None, fs: FileSystem) -> CertificationTaxonomy | None:
    """Load a taxonomy, or return None so set-aside checks use basic matching."""
    if path is None:
        return None
    try:
        return load_certification_taxonomy(path=path, fs=fs)
    except CertificationTaxonomyError as exc:
        logger.warning("Falling back to basic certification matching: %s", exc)
        return None
