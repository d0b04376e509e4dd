"""Run the integrity rules over documents and build reports."""

import logging
from collections.abc import Iterable
from pathlib import Path

from reviewguide.config.project import ProjectConfig
from reviewguide.config.settings import settings
from reviewguide.models.document import MarkdownDocument
from reviewguide.models.outputs import CheckReport, DocumentReport, Finding, Severity
from reviewguide.rules import RuleContext, RuleRegistry, registry  # registers the rules
from reviewguide.services.parser import parse_document
from reviewguide.utils.baseline import load_baseline
from reviewguide.utils.filters import collect_documents
from reviewguide.utils.suppression import apply_suppressions

logger = logging.getLogger(__name__)


class DocumentChecker:
    """Checks Markdown documents against every registered rule.

    Args:
        config: Project configuration (ignores, severities, baseline)
        rules: Rule registry, the global one by default
        baseline: Accepted finding fingerprints; loaded from
            ``config.baseline`` when not given
    """

    def __init__(
        self,
        config: ProjectConfig | None = None,
        rules: RuleRegistry | None = None,
        baseline: set[str] | None = None,
    ) -> None:
        self.config = config or ProjectConfig()
        self.rules = rules if rules is not None else registry
        if baseline is None and self.config.baseline:
            baseline = load_baseline(self.config.baseline)
        self.baseline = baseline or set()
        self.toc_titles = self.config.toc_titles or settings.toc_titles
        self.toc_level = self.config.toc_level or settings.toc_level

        self._severity: dict[str, Severity] = {}
        for key, severity in self.config.severity.items():
            rule = self.rules.get(key)
            if rule is None:
                logger.warning(f"Severity override for unknown rule '{key}' ignored")
                continue
            self._severity[rule.id] = severity

    def parse(self, text: str, path: str) -> MarkdownDocument:
        return parse_document(text, path=path, toc_titles=self.toc_titles)

    def check_document(
        self, document: MarkdownDocument, base_dir: Path | None = None
    ) -> DocumentReport:
        """Run every rule over one parsed document.

        Args:
            document: The parsed document
            base_dir: Directory that relative links resolve against; relative
                file links are not checked when None

        Returns:
            Report with findings sorted by line
        """
        context = RuleContext(toc_level=self.toc_level, base_dir=base_dir)
        findings: list[Finding] = []
        for rule in self.rules:
            findings.extend(
                rule.run(document, context, severity=self._severity.get(rule.id))
            )

        findings = apply_suppressions(
            findings,
            document,
            self.rules,
            ignore=self.config.ignore,
            per_file_ignores=self.config.per_file_ignores,
            baseline=self.baseline,
        )
        findings.sort(key=lambda f: (f.line or 0, f.rule_id))

        logger.debug(
            f"{document.path}: {len(document.headings)} headings, "
            f"{len(document.toc)} toc entries, {len(findings)} findings"
        )
        return DocumentReport(
            path=document.path,
            findings=findings,
            headings=len(document.headings),
            toc_entries=len(document.toc),
            fences=len(document.fences),
        )

    def check_text(
        self, text: str, path: str = "<string>", base_dir: Path | None = None
    ) -> DocumentReport:
        return self.check_document(self.parse(text, path), base_dir=base_dir)

    def check_paths(self, paths: Iterable[str | Path]) -> CheckReport:
        """Check files and directories.

        Unreadable documents are recorded in ``error_paths`` and do not stop
        the run.
        """
        documents, skipped = collect_documents(paths, exclude=self.config.exclude)
        report = CheckReport(skipped_paths=skipped)

        for path in documents:
            try:
                text = path.read_text(encoding="utf-8")
            except FileNotFoundError:
                logger.error(f"Document not found: {path}")
                report.error_paths[str(path)] = "file not found"
                continue
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Failed to read {path}: {e}")
                report.error_paths[str(path)] = str(e)
                continue

            logger.info(f"Checking {path}")
            report.documents.append(
                self.check_text(text, path=str(path), base_dir=path.parent)
            )

        return report


def check_text(text: str, path: str = "<string>", config: ProjectConfig | None = None) -> DocumentReport:
    """Check a Markdown string with the global rule registry."""
    return DocumentChecker(config).check_text(text, path=path)


def check_paths(paths: Iterable[str | Path], config: ProjectConfig | None = None) -> CheckReport:
    """Check files and directories with the global rule registry."""
    return DocumentChecker(config).check_paths(paths)
