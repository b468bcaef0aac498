"""Local filesystem implementation.

Usage example:
    from pathlib import Path

    import pandas as pd

    from govcon_match.infrastructure.filesystem import LocalFileSystem

    fs = LocalFileSystem()
    fs.write_csv(pd.DataFrame({"opportunity_id": ["opp-1"]}), Path("reports/scores.csv"))
"""

from __future__ import annotations

from pathlib import Path
from typing_extensions import override

import pandas as pd

from ..protocols import FileSystem


class LocalFileSystem(FileSystem):
    """Disk-backed filesystem."""

    @override
    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    @override
    def write_text(self, content: str, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    @override
    def write_csv(self, df: pd.DataFrame, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)

    @override
    def exists(self, path: Path) -> bool:
        return path.exists()
