"""Exports for test fakes."""

from .filesystem import InMemoryFileSystem
from .progress import FakeProgressReporter

__all__ = [
    "FakeProgressReporter",
    "InMemoryFileSystem",
]
