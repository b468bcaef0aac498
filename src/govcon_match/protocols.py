"""Protocol definitions for dependency injection.

These protocols define the seams that application services depend on, so that
loaders and batch runs can be tested with in-memory implementations.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import pandas as pd


@runtime_checkable
class FileSystem(Protocol):
    """Abstract filesystem for reading inputs and writing score reports."""

    def read_text(self, path: Path) -> str:
        """Read a UTF-8 text file."""
        ...

    def write_text(self, content: str, path: Path) -> None:
        """Write a UTF-8 text file, creating parent directories."""
        ...

    def write_csv(self, df: pd.DataFrame, path: Path) -> None:
        """Write a DataFrame to CSV."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """Progress reporting for long-running batch work."""

    def start(self, label: str, total: int | None) -> None:
        """Begin a progress task."""
        ...

    def advance(self, count: int) -> None:
        """Advance the current task."""
        ...

    def finish(self) -> None:
        """Finish the current task."""
        ...
