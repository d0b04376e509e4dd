"""Unit tests for the internal-link-broken rule."""

from reviewguide.rules import RuleContext
from reviewguide.rules.links import check_internal_links
from reviewguide.services.parser import parse_document


def _violations(text: str, base_dir=None):
    return list(check_internal_links(parse_document(text), RuleContext(base_dir=base_dir)))


class TestInPageLinks:
    """Tests for '#fragment' links."""

    def test_resolving_link(self) -> None:
        """Test a link to an existing heading passes."""
        assert _violations("## Limits\n\nSee [limits](#limits).\n") == []

    def test_broken_link(self) -> None:
        """Test a link to a missing anchor is reported on its line."""
        violations = _violations("## Limits\n\nSee [limits](#limitz).\n")

        assert len(violations) == 1
        assert violations[0].line == 3
        assert "did you mean '#limits'" in violations[0].message

    def test_toc_links_are_left_to_toc_rule(self) -> None:
        """Test ToC entries are not double-reported."""
        assert _violations("## TOC\n\n- [Gone](#gone)\n") == []

    def test_external_links_are_ignored(self) -> None:
        """Test URLs are never fetched or checked."""
        text = "[site](https://example.com/#nope) [mail](mailto:a@example.com)\n"
        assert _violations(text) == []

    def test_bare_hash_is_ignored(self) -> None:
        """Test '#' alone (back to top) is accepted."""
        assert _violations("[top](#)\n") == []


class TestRelativeLinks:
    """Tests for links to other files."""

    def test_skipped_without_base_dir(self) -> None:
        """Test relative links are not checked for in-memory documents."""
        assert _violations("[setup](missing.md)\n") == []

    def test_missing_file(self, tmp_path) -> None:
        """Test a link to a file that does not exist is reported."""
        violations = _violations("[setup](docs/missing.md)\n", base_dir=tmp_path)

        assert len(violations) == 1
        assert "docs/missing.md" in violations[0].message

    def test_existing_file_and_anchor(self, tmp_path) -> None:
        """Test a link into another document's section resolves."""
        (tmp_path / "setup.md").write_text("# Setup\n\n## Install\n", encoding="utf-8")

        assert _violations("[install](setup.md#install)\n", base_dir=tmp_path) == []

    def test_missing_anchor_in_other_file(self, tmp_path) -> None:
        """Test a link to a missing section of another document is reported."""
        (tmp_path / "setup.md").write_text("# Setup\n", encoding="utf-8")

        violations = _violations("[install](setup.md#install)\n", base_dir=tmp_path)

        assert len(violations) == 1
        assert "setup.md" in violations[0].message

    def test_link_to_directory(self, tmp_path) -> None:
        """Test links to existing directories pass."""
        (tmp_path / "docs").mkdir()
        assert _violations("[docs](docs/)\n", base_dir=tmp_path) == []

    def test_root_relative_links_are_ignored(self, tmp_path) -> None:
        """Test '/path' links depend on the site and are skipped."""
        assert _violations("[home](/index.md)\n", base_dir=tmp_path) == []
