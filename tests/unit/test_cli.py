"""Unit tests for the command line interface."""

import json

import pytest

from reviewguide import cli

VALID = "# Guide\n\n## Table of Contents\n\n- [Basics](#basics)\n\n## Basics\n"
STALE = "# Guide\n\n## Table of Contents\n\n- [Old](#old)\n\n## Basics\n"


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every CLI test in an empty directory without project config."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestCheckCommand:
    """Tests for 'reviewguide check'."""

    def test_clean_document(self, tmp_path, capsys) -> None:
        (tmp_path / "guide.md").write_text(VALID, encoding="utf-8")

        exit_code = cli.main(["check", "guide.md"])

        assert exit_code == 0
        assert "1 document(s) checked: 0 error(s)" in capsys.readouterr().out

    def test_findings_fail(self, tmp_path, capsys) -> None:
        (tmp_path / "guide.md").write_text(STALE, encoding="utf-8")

        exit_code = cli.main(["check", "guide.md"])

        out = capsys.readouterr().out
        assert exit_code == 1
        assert "guide.md:5: error RG001" in out

    def test_fail_on_warning(self, tmp_path) -> None:
        """Test warnings only fail with --fail-on warning."""
        (tmp_path / "guide.md").write_text("```\nx\n```\n", encoding="utf-8")

        assert cli.main(["check", "guide.md"]) == 0
        assert cli.main(["check", "guide.md", "--fail-on", "warning"]) == 1

    def test_json_format(self, tmp_path, capsys) -> None:
        (tmp_path / "guide.md").write_text(STALE, encoding="utf-8")

        cli.main(["check", "guide.md", "--format", "json"])

        data = json.loads(capsys.readouterr().out)
        assert data["documents"][0]["findings"][0]["rule_id"] == "RG001"

    def test_documents_from_config(self, tmp_path, capsys) -> None:
        """Test paths default to the configured documents."""
        (tmp_path / "guide.md").write_text(STALE, encoding="utf-8")
        (tmp_path / "other.md").write_text(STALE, encoding="utf-8")
        (tmp_path / ".reviewguide.yaml").write_text("documents: [guide.md]\n", encoding="utf-8")

        cli.main(["check"])

        out = capsys.readouterr().out
        assert "guide.md:5" in out
        assert "other.md" not in out

    def test_missing_config_file(self, capsys) -> None:
        """Test an explicit missing config is a usage error."""
        assert cli.main(["check", "--config", "nope.yaml"]) == 2
        assert "nope.yaml" in capsys.readouterr().err

    def test_write_and_use_baseline(self, tmp_path, capsys) -> None:
        """Test accepted findings stop failing the run."""
        (tmp_path / "guide.md").write_text(STALE, encoding="utf-8")

        assert cli.main(["check", "guide.md", "--write-baseline", "--baseline", "base.json"]) == 0
        assert (tmp_path / "base.json").exists()
        assert cli.main(["check", "guide.md", "--baseline", "base.json"]) == 0

        out = capsys.readouterr().out
        assert "2 suppressed" in out


class TestTocCommand:
    """Tests for 'reviewguide toc'."""

    def test_prints_updated_document(self, tmp_path, capsys) -> None:
        (tmp_path / "guide.md").write_text(STALE, encoding="utf-8")

        assert cli.main(["toc", "guide.md"]) == 0
        assert "- [Basics](#basics)" in capsys.readouterr().out

    def test_check_mode(self, tmp_path) -> None:
        (tmp_path / "stale.md").write_text(STALE, encoding="utf-8")
        (tmp_path / "valid.md").write_text(VALID, encoding="utf-8")

        assert cli.main(["toc", "stale.md", "--check"]) == 1
        assert cli.main(["toc", "valid.md", "--check"]) == 0

    def test_write_mode(self, tmp_path) -> None:
        path = tmp_path / "guide.md"
        path.write_text(STALE, encoding="utf-8")

        assert cli.main(["toc", "guide.md", "--write"]) == 0
        assert path.read_text(encoding="utf-8") == VALID

    def test_unreadable_file(self, capsys) -> None:
        assert cli.main(["toc", "missing.md"]) == 2
        assert "cannot read" in capsys.readouterr().err


class TestRulesCommand:
    """Tests for 'reviewguide rules'."""

    def test_lists_rules(self, capsys) -> None:
        assert cli.main(["rules"]) == 0

        out = capsys.readouterr().out
        assert "RG001  toc-anchor-unresolved" in out
        assert len(out.strip().splitlines()) == 8
