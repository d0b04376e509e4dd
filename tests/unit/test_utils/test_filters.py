"""Unit tests for document filtering."""

import pytest

from reviewguide.utils.filters import collect_documents, is_markdown_file, should_check_file


class TestIsMarkdownFile:
    """Tests for is_markdown_file function."""

    @pytest.mark.parametrize("path", ["GUIDE.md", "docs/intro.markdown", "a.MDOWN"])
    def test_markdown_extensions(self, path: str) -> None:
        assert is_markdown_file(path)

    @pytest.mark.parametrize("path", ["setup.py", "README", "notes.txt"])
    def test_other_extensions(self, path: str) -> None:
        assert not is_markdown_file(path)


class TestShouldCheckFile:
    """Tests for should_check_file function."""

    @pytest.mark.parametrize(
        "path",
        [
            "node_modules/pkg/README.md",
            ".venv/lib/site-packages/x/README.md",
            "build/docs/index.md",
            ".git/description.md",
        ],
    )
    def test_excluded_directories(self, path: str) -> None:
        """Test dependency and build directories are skipped."""
        assert not should_check_file(path)

    def test_regular_documents(self) -> None:
        assert should_check_file("docs/guide.md")

    def test_configured_exclude(self) -> None:
        """Test globs from configuration exclude matching files."""
        assert not should_check_file("docs/_drafts/idea.md", exclude=["docs/_drafts/*"])
        assert should_check_file("docs/idea.md", exclude=["docs/_drafts/*"])


class TestCollectDocuments:
    """Tests for collect_documents function."""

    def test_walks_directories(self, tmp_path) -> None:
        """Test Markdown files below a directory are collected, excluded ones dropped."""
        (tmp_path / "docs").mkdir()
        (tmp_path / "docs" / "b.md").write_text("# B\n")
        (tmp_path / "a.md").write_text("# A\n")
        (tmp_path / "script.py").write_text("print()\n")
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "node_modules" / "c.md").write_text("# C\n")

        documents, skipped = collect_documents([tmp_path])

        assert [p.relative_to(tmp_path).as_posix() for p in documents] == ["a.md", "docs/b.md"]
        assert skipped == []

    def test_explicit_non_markdown_is_skipped(self, tmp_path) -> None:
        """Test an explicitly named non-Markdown file is reported as skipped."""
        script = tmp_path / "script.py"
        script.write_text("print()\n")

        documents, skipped = collect_documents([script])

        assert documents == []
        assert skipped == [str(script)]

    def test_missing_paths_are_passed_through(self, tmp_path) -> None:
        """Test missing files are returned for the caller to report."""
        missing = tmp_path / "missing.md"
        documents, _ = collect_documents([missing])
        assert documents == [missing]

    def test_deduplicates(self, tmp_path) -> None:
        """Test a file named twice is checked once."""
        doc = tmp_path / "a.md"
        doc.write_text("# A\n")
        documents, _ = collect_documents([doc, tmp_path])
        assert documents == [doc]

    def test_exclude_matches_from_working_directory(self, tmp_path, monkeypatch) -> None:
        """Test an exclude glob applies whichever directory is walked."""
        tmp_path = tmp_path.resolve()
        (tmp_path / "docs" / "_drafts").mkdir(parents=True)
        (tmp_path / "docs" / "a.md").write_text("# A\n")
        (tmp_path / "docs" / "_drafts" / "x.md").write_text("# X\n")
        monkeypatch.chdir(tmp_path)

        from_root, _ = collect_documents(["."], exclude=["docs/_drafts/*"])
        from_docs, _ = collect_documents(["docs"], exclude=["docs/_drafts/*"])
        from_abs, _ = collect_documents([tmp_path / "docs"], exclude=["docs/_drafts/*"])

        assert [p.as_posix() for p in from_root] == ["docs/a.md"]
        assert [p.as_posix() for p in from_docs] == ["docs/a.md"]
        assert from_abs == [tmp_path / "docs" / "a.md"]
