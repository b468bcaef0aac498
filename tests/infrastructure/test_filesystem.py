"""Tests for filesystem infrastructure components."""

from pathlib import Path

import pandas as pd

from govcon_match.infrastructure import LocalFileSystem


class TestLocalFileSystem:
    """Tests for LocalFileSystem."""

    def test_write_text_creates_parent_directories(self, tmp_path: Path) -> None:
        fs = LocalFileSystem()
        path = tmp_path / "nested" / "profile.json"

        fs.write_text('{"id": "p-1"}', path)

        assert fs.exists(path)
        assert fs.read_text(path) == '{"id": "p-1"}'

    def test_write_csv_omits_index(self, tmp_path: Path) -> None:
        fs = LocalFileSystem()
        path = tmp_path / "reports" / "match_scores.csv"

        fs.write_csv(pd.DataFrame({"opportunity_id": ["opp-1"], "score": [86]}), path)

        out = pd.read_csv(path, dtype=str)
        assert out.columns.tolist() == ["opportunity_id", "score"]
        assert out["score"].tolist() == ["86"]

    def test_exists_is_false_for_missing_path(self, tmp_path: Path) -> None:
        assert not LocalFileSystem().exists(tmp_path / "missing.json")
