"""Unit tests for fence and heading rules."""

from reviewguide.rules import RuleContext
from reviewguide.rules.fences import check_fence_language, check_fences_closed
from reviewguide.rules.headings import check_duplicate_headings, check_heading_increments
from reviewguide.services.parser import parse_document


def _violations(detector, text: str):
    return list(detector(parse_document(text), RuleContext()))


class TestFencesClosed:
    """Tests for the fence-unbalanced rule."""

    def test_balanced_fences(self) -> None:
        """Test matched fences produce nothing."""
        text = "```javascript\na();\n```\n\n~~~python\nb()\n~~~\n"
        assert _violations(check_fences_closed, text) == []

    def test_unclosed_fence_reported_at_opening_line(self) -> None:
        """Test an unclosed fence is reported where it opens."""
        text = "# Title\n\n```javascript\na();\n\n## Swallowed heading\n"

        violations = _violations(check_fences_closed, text)

        assert len(violations) == 1
        assert violations[0].line == 3
        assert "```" in violations[0].message


class TestFenceLanguage:
    """Tests for the fence-language-missing rule."""

    def test_tagged_fence(self) -> None:
        """Test a language-tagged fence passes."""
        assert _violations(check_fence_language, "```javascript\nx\n```\n") == []

    def test_untagged_fence(self) -> None:
        """Test a fence without a language is reported."""
        violations = _violations(check_fence_language, "text\n\n```\nx\n```\n")
        assert [v.line for v in violations] == [3]


class TestDuplicateHeadings:
    """Tests for the duplicate-heading rule."""

    def test_same_text_same_level(self) -> None:
        """Test a repeated heading at the same level is reported."""
        text = "## Testing\n\ntext\n\n## Testing\n"

        violations = _violations(check_duplicate_headings, text)

        assert len(violations) == 1
        assert violations[0].line == 5
        assert "'#testing-1'" in violations[0].message

    def test_same_slug_different_spelling(self) -> None:
        """Test headings that render the same base anchor count as duplicates."""
        text = "## Side Effects\n\n## Side effects!\n"
        assert len(_violations(check_duplicate_headings, text)) == 1

    def test_different_levels_are_allowed(self) -> None:
        """Test the same text at different levels is not reported."""
        text = "## Example\n\n### Example\n"
        assert _violations(check_duplicate_headings, text) == []

    def test_guide_style_repeats_under_sections(self) -> None:
        """Test repeats at the same level under different parents are reported."""
        text = "## Security\n\n### Examples\n\n## Testing\n\n### Examples\n"
        assert len(_violations(check_duplicate_headings, text)) == 1


class TestHeadingIncrements:
    """Tests for the heading-level-skipped rule."""

    def test_single_steps(self) -> None:
        """Test one-level steps pass, including steps back up."""
        text = "# A\n## B\n### C\n## D\n# E\n"
        assert _violations(check_heading_increments, text) == []

    def test_skipped_level(self) -> None:
        """Test a jump from level 2 to 4 is reported."""
        violations = _violations(check_heading_increments, "## A\n#### B\n")
        assert [v.line for v in violations] == [2]
