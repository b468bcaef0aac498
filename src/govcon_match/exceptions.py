"""Custom exceptions for govcon match scoring.

The scoring functions themselves are total and never raise for missing or
malformed profile data. These exceptions cover the boundaries around them:
configuration files, weight tables, taxonomy datasets, and inbound payloads.
"""

from __future__ import annotations


class GovconMatchError(Exception):
    """Base exception for all govcon match scoring errors."""

    pass


class ConfigFileNotFoundError(GovconMatchError):
    """Raised when a TOML config file is missing."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(GovconMatchError):
    """Raised when a TOML config file cannot be parsed."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Config file {path} is not valid TOML: {detail}")


class ConfigFileValidationError(GovconMatchError):
    """Raised when a TOML config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Config file {path} failed validation: {detail}")


class ScoringConfigFileNotFoundError(GovconMatchError):
    """Raised when a weight table file is missing."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Scoring config file not found: {path}")


class ScoringConfigValidationError(GovconMatchError):
    """Raised when a weight table breaks its schema or sum-to-100 rules."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Scoring config {path} failed validation: {detail}")


class UnknownCategoryError(KeyError):
    """Raised when a sub-factor lookup names a category that does not exist."""

    def __init__(self, category: str, available: tuple[str, ...]) -> None:
        self.category = category
        self.available = available
        super().__init__(
            f"Unknown scoring category {category!r}. Available: {', '.join(available)}"
        )


class CertificationTaxonomyError(GovconMatchError):
    """Raised when a certification taxonomy file cannot be used."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Certification taxonomy {path} is unusable: {detail}")


class InvalidPayloadError(GovconMatchError):
    """Raised when a profile or opportunity payload has an unusable top-level shape."""

    def __init__(self, kind: str, detail: str) -> None:
        self.kind = kind
        super().__init__(f"Invalid {kind} payload: {detail}")
