"""Tests for the command line entry points."""

import json
from pathlib import Path

from moviesim.scripts.recommend import main
from moviesim.scripts.serve import validate_environment

SAMPLE_CATALOG = Path(__file__).resolve().parent.parent / "data" / "movies.json"

def run(capsys, *argv):
    code = main(["--catalog", str(SAMPLE_CATALOG), *argv])
    return code, capsys.readouterr().out

class TestRecommendCli:
    """Test the query CLI."""

    def test_recommend_by_title(self, capsys):
        """Test recommendations for a resolved title."""
        code, out = run(capsys, "recommend", "--title", "toy story", "--top-n", "2")
        data = json.loads(out)
        assert code == 0
        assert data["selected"]["title"] == "Toy Story"
        assert [m["title"] for m in data["recommendations"]][0] == "Toy Story 2"
        assert len(data["recommendations"]) == 2

    def test_recommend_by_id(self, capsys):
        """Test recommendations for a catalog id."""
        code, out = run(capsys, "recommend", "--id", "8", "--algorithm", "cosine")
        assert code == 0
        assert json.loads(out)["selected"]["title"] == "The Godfather"

    def test_unknown_title(self, capsys):
        """Test an unresolved title exits 1 without output."""
        code, out = run(capsys, "recommend", "--title", "asdjklqwe123")
        assert code == 1
        assert out == ""

    def test_search(self, capsys):
        """Test search output honours --max-results."""
        code, out = run(capsys, "search", "matrix", "--max-results", "1")
        assert code == 0
        assert [m["title"] for m in json.loads(out)] == ["The Matrix"]

    def test_match(self, capsys):
        """Test a misspelled title resolves."""
        code, out = run(capsys, "match", "the matrx")
        assert code == 0
        assert json.loads(out)["movie"]["id"] == "1"

    def test_missing_catalog(self, tmp_path):
        """Test a missing catalog exits 1."""
        assert main(["--catalog", str(tmp_path / "none.json"), "search", "matrix"]) == 1

    def test_empty_catalog_file(self, tmp_path):
        """Test an empty CSV catalog exits 1."""
        path = tmp_path / "movies.csv"
        path.write_text("")
        assert main(["--catalog", str(path), "search", "matrix"]) == 1

class TestServe:
    """Test startup validation."""

    def test_validate_environment(self, tmp_path):
        """Test validation passes only for a loadable catalog."""
        assert validate_environment(str(SAMPLE_CATALOG))
        assert not validate_environment(str(tmp_path / "none.json"))
