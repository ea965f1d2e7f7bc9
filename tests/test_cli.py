"""Tests for the command-line entry point."""

import pytest

from kb_search.presentation.cli import main


class TestCli:
    def test_ingest(self, kb_dir):
        assert main(["--docs-path", str(kb_dir), "ingest"]) == 0

    def test_search_prints_context(self, kb_dir, capsys):
        assert main(["--docs-path", str(kb_dir), "search", "card"]) == 0
        out = capsys.readouterr().out
        assert "## Card Services (banking)" in out

    def test_search_with_category_filter(self, kb_dir, capsys):
        code = main(
            ["--docs-path", str(kb_dir), "search", "card", "--category", "cybersecurity"]
        )
        assert code == 1
        assert "No matching documents" in capsys.readouterr().out

    def test_search_without_fuzzy(self, kb_dir, capsys):
        assert main(["--docs-path", str(kb_dir), "search", "frud", "--no-fuzzy"]) == 1
        assert main(["--docs-path", str(kb_dir), "search", "frud"]) == 0

    def test_search_zero_max_results(self, kb_dir, capsys):
        assert main(["--docs-path", str(kb_dir), "search", "card", "--max-results", "0"]) == 1
        assert "No matching documents" in capsys.readouterr().out

    def test_suggest(self, kb_dir, capsys):
        assert main(["--docs-path", str(kb_dir), "suggest", "debit"]) == 0
        assert capsys.readouterr().out.strip() == "debit card"

    def test_unknown_command(self):
        with pytest.raises(SystemExit) as exc:
            main(["explode"])
        assert exc.value.code == 2
