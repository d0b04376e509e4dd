"""Suppression of findings through inline comments, configuration and baselines.

Inline directives are hidden HTML comments, so they never show up in the
rendered document::

    <!-- reviewguide-disable RG006 -->
    ...
    <!-- reviewguide-enable RG006 -->

    <!-- reviewguide-disable-next-line internal-link-broken -->
    See [the old section](#removed).

    Some text with a [link](#gone). <!-- reviewguide-disable-line RG004 -->

A directive without rule ids applies to every rule.
"""

import fnmatch
import logging
from collections.abc import Iterable
from pathlib import Path

from reviewguide.models.document import Directive, MarkdownDocument
from reviewguide.models.outputs import Finding
from reviewguide.rules.registry import RuleRegistry

logger = logging.getLogger(__name__)

ALL_RULES = "*"


class _State:
    """Rules disabled by block directives at some point in the document."""

    def __init__(self) -> None:
        self.all_disabled = False
        self.disabled: set[str] = set()
        self.reenabled: set[str] = set()

    def apply(self, action: str, ids: set[str]) -> None:
        if action == "disable":
            if ids:
                self.disabled |= ids
                self.reenabled -= ids
            else:
                self.all_disabled = True
                self.reenabled.clear()
        elif action == "enable":
            if ids:
                self.disabled -= ids
                if self.all_disabled:
                    self.reenabled |= ids
            else:
                self.all_disabled = False
                self.disabled.clear()
                self.reenabled.clear()

    def covers(self, rule_id: str) -> bool:
        if rule_id in self.disabled:
            return True
        return self.all_disabled and rule_id not in self.reenabled


class InlineSuppressions:
    """Resolves the suppression directives of one document."""

    def __init__(self, document: MarkdownDocument, registry: RuleRegistry) -> None:
        self._registry = registry
        self._blocks: list[tuple[int, str, set[str]]] = []
        self._lines: dict[int, set[str]] = {}

        for directive in sorted(document.directives, key=lambda d: d.line):
            ids = self._resolve(directive)
            if directive.rule_ids and not ids:
                continue
            if directive.action in ("disable", "enable"):
                self._blocks.append((directive.line, directive.action, ids))
                continue

            target = directive.line
            if directive.action == "disable-next-line":
                target = self._next_content_line(document, directive.line)
                if target is None:
                    continue
            self._lines.setdefault(target, set()).update(ids or {ALL_RULES})

    def _resolve(self, directive: Directive) -> set[str]:
        return self._registry.resolve_ids(directive.rule_ids)

    @staticmethod
    def _next_content_line(document: MarkdownDocument, line: int) -> int | None:
        for number in range(line + 1, len(document.lines) + 1):
            if document.lines[number - 1].strip():
                return number
        return None

    def reason_for(self, finding: Finding) -> str | None:
        """Return why the finding is suppressed, or None if it is not."""
        if finding.line is None:
            return None

        line_ids = self._lines.get(finding.line, set())
        if ALL_RULES in line_ids or finding.rule_id in line_ids:
            return f"inline directive (line {finding.line})"

        state = _State()
        directive_line = None
        for line, action, ids in self._blocks:
            if line > finding.line:
                break
            state.apply(action, ids)
            directive_line = line
        if state.covers(finding.rule_id):
            return f"inline directive (line {directive_line})"
        return None


def ignored_for_path(
    path: str, per_file_ignores: dict[str, list[str]]
) -> list[str]:
    """Collect the per-file ignore entries whose glob matches ``path``."""
    normalized = Path(path).as_posix()
    keys: list[str] = []
    for pattern, rules in per_file_ignores.items():
        if fnmatch.fnmatch(normalized, pattern) or fnmatch.fnmatch(
            Path(normalized).name, pattern
        ):
            keys.extend(rules)
    return keys


def apply_suppressions(
    findings: Iterable[Finding],
    document: MarkdownDocument,
    registry: RuleRegistry,
    ignore: Iterable[str] = (),
    per_file_ignores: dict[str, list[str]] | None = None,
    baseline: set[str] | None = None,
) -> list[Finding]:
    """Mark findings as suppressed.

    Inline directives win over configuration, which wins over the baseline;
    the first mechanism that matches is recorded in ``suppressed_by``.

    Args:
        findings: Findings produced by the rules
        document: The document the findings belong to
        registry: Used to translate rule names into ids
        ignore: Rule ids or names ignored everywhere
        per_file_ignores: Glob to rule ids or names ignored for matching paths
        baseline: Fingerprints of accepted findings

    Returns:
        New Finding objects with the suppression fields filled in
    """
    inline = InlineSuppressions(document, registry)
    ignored = registry.resolve_ids(ignore)
    file_ignored = registry.resolve_ids(
        ignored_for_path(document.path, per_file_ignores or {})
    )
    baseline = baseline or set()

    result = []
    for finding in findings:
        reason = inline.reason_for(finding)
        if reason is None and finding.rule_id in ignored:
            reason = "config: ignore"
        if reason is None and finding.rule_id in file_ignored:
            reason = "config: per_file_ignores"
        if reason is None and finding.fingerprint in baseline:
            reason = "baseline"

        if reason is not None:
            logger.debug(f"Suppressed {finding.rule_id} at {finding.location()}: {reason}")
            finding = finding.model_copy(update={"suppressed": True, "suppressed_by": reason})
        result.append(finding)
    return result
