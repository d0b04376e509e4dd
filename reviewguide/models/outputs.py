"""Output models for check results."""

import hashlib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, computed_field

Severity = Literal["error", "warning", "info"]

SEVERITY_ORDER: dict[str, int] = {"info": 0, "warning": 1, "error": 2}


def normalize_path(path: str | Path) -> str:
    """Return ``path`` in POSIX form, relative to the working directory when below it."""
    candidate = Path(path)
    cwd = Path.cwd()
    if candidate.is_absolute() and candidate.is_relative_to(cwd):
        candidate = candidate.relative_to(cwd)
    return candidate.as_posix()


class Finding(BaseModel):
    """A single integrity problem found in a document.

    Suppressed findings stay in the report so that reviewers can see what
    was silenced and why.
    """

    rule_id: str
    rule_name: str
    severity: Severity
    message: str
    path: str
    line: int | None = None
    suppressed: bool = False
    suppressed_by: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def fingerprint(self) -> str:
        """Stable identifier used by baseline files.

        Line numbers are left out so that edits elsewhere in the document
        do not invalidate a baseline, and the path is normalized so that
        `GUIDE.md` and `./GUIDE.md` match.
        """
        path = normalize_path(self.path)
        digest = hashlib.sha256(
            f"{self.rule_id}\0{path}\0{self.message}".encode()
        ).hexdigest()
        return digest[:16]

    @property
    def is_blocking(self) -> bool:
        """Check if this finding is an unsuppressed error."""
        return not self.suppressed and self.severity == "error"

    def location(self) -> str:
        if self.line is None:
            return self.path
        return f"{self.path}:{self.line}"


class DocumentReport(BaseModel):
    """Findings and structure counts for one document."""

    path: str
    findings: list[Finding] = Field(default_factory=list)
    headings: int = 0
    toc_entries: int = 0
    fences: int = 0

    @property
    def active_findings(self) -> list[Finding]:
        return [f for f in self.findings if not f.suppressed]

    @property
    def suppressed_findings(self) -> list[Finding]:
        return [f for f in self.findings if f.suppressed]

    def count(self, severity: Severity) -> int:
        return sum(1 for f in self.active_findings if f.severity == severity)


class CheckReport(BaseModel):
    """Complete result of checking one or more documents.

    Contains per-document reports plus the paths that were skipped or
    could not be read.
    """

    documents: list[DocumentReport] = Field(default_factory=list)
    skipped_paths: list[str] = Field(default_factory=list)
    error_paths: dict[str, str] = Field(default_factory=dict)

    @property
    def findings(self) -> list[Finding]:
        return [f for doc in self.documents for f in doc.findings]

    @property
    def errors(self) -> int:
        return sum(doc.count("error") for doc in self.documents)

    @property
    def warnings(self) -> int:
        return sum(doc.count("warning") for doc in self.documents)

    @property
    def infos(self) -> int:
        return sum(doc.count("info") for doc in self.documents)

    @property
    def suppressed(self) -> int:
        return sum(len(doc.suppressed_findings) for doc in self.documents)

    @property
    def has_errors(self) -> bool:
        """Check if there are unsuppressed errors or unreadable documents."""
        return self.errors > 0 or len(self.error_paths) > 0

    def exit_code(self, fail_on: Literal["error", "warning"] = "error") -> int:
        """Return the process exit status for this report.

        Args:
            fail_on: Lowest unsuppressed severity that fails the run

        Returns:
            0 when clean, 1 when a finding at or above ``fail_on`` exists
            or a document could not be read
        """
        threshold = SEVERITY_ORDER[fail_on]
        failing = [
            f
            for f in self.findings
            if not f.suppressed and SEVERITY_ORDER[f.severity] >= threshold
        ]
        return 1 if failing or self.error_paths else 0

    def format_summary_markdown(self) -> str:
        """Format the report as GitHub-flavored markdown.

        Returns:
            Markdown suitable for a pull request comment or job summary
        """
        lines = ["# Document Check Summary\n"]

        status = ":x: Failed" if self.has_errors else ":white_check_mark: Passed"
        lines.append(f"## Result: {status}\n")

        lines.append("## Statistics\n")
        lines.append(f"- **Documents Checked:** {len(self.documents)}")
        lines.append(f"- **Errors:** {self.errors}")
        lines.append(f"- **Warnings:** {self.warnings}")
        lines.append(f"- **Info:** {self.infos}")
        lines.append(f"- **Suppressed:** {self.suppressed}\n")

        active = [f for f in self.findings if not f.suppressed]
        if active:
            lines.append("## Findings\n")
            lines.append("| Location | Severity | Rule | Message |")
            lines.append("|----------|----------|------|---------|")
            for finding in active:
                message = finding.message.replace("|", "\\|")
                lines.append(
                    f"| `{finding.location()}` | {finding.severity} "
                    f"| {finding.rule_id} {finding.rule_name} | {message} |"
                )
            lines.append("")

        if self.skipped_paths:
            lines.append("## Skipped Files\n")
            for path in self.skipped_paths:
                lines.append(f"- `{path}`")
            lines.append("")

        if self.error_paths:
            lines.append("## Files with Errors\n")
            for path, reason in self.error_paths.items():
                lines.append(f"- `{path}`: {reason}")
            lines.append("")

        return "\n".join(lines)
