"""Registry mapping rule identifiers to descriptions and detectors."""

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from reviewguide.models.document import MarkdownDocument
from reviewguide.models.outputs import Finding, Severity

logger = logging.getLogger(__name__)


@dataclass
class RuleContext:
    """Settings a detector may need beyond the document itself."""

    toc_level: int = 2
    base_dir: Path | None = None  # Directory relative links resolve against


@dataclass
class Violation:
    """Raw detector output, turned into a Finding by the registry."""

    line: int | None
    message: str


Detector = Callable[[MarkdownDocument, RuleContext], Iterable[Violation]]


@dataclass
class Rule:
    """A registered integrity rule."""

    id: str
    name: str
    summary: str
    default_severity: Severity
    detector: Detector = field(repr=False)

    def run(
        self,
        document: MarkdownDocument,
        context: RuleContext,
        severity: Severity | None = None,
    ) -> list[Finding]:
        """Run the detector and wrap each violation in a Finding."""
        return [
            Finding(
                rule_id=self.id,
                rule_name=self.name,
                severity=severity or self.default_severity,
                message=violation.message,
                path=document.path,
                line=violation.line,
            )
            for violation in self.detector(document, context)
        ]


class RuleRegistry:
    """Ordered collection of rules, looked up by id or name."""

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}
        self._names: dict[str, str] = {}

    def register(
        self, rule_id: str, name: str, summary: str, severity: Severity = "error"
    ) -> Callable[[Detector], Detector]:
        """Decorator registering a detector function as a rule.

        Raises:
            ValueError: If the id or name is already registered
        """

        def decorator(detector: Detector) -> Detector:
            self.add(
                Rule(
                    id=rule_id,
                    name=name,
                    summary=summary,
                    default_severity=severity,
                    detector=detector,
                )
            )
            return detector

        return decorator

    def add(self, rule: Rule) -> None:
        if rule.id in self._rules:
            raise ValueError(f"Rule id already registered: {rule.id}")
        if rule.name in self._names:
            raise ValueError(f"Rule name already registered: {rule.name}")
        self._rules[rule.id] = rule
        self._names[rule.name] = rule.id
        logger.debug(f"Registered rule {rule.id} ({rule.name})")

    def get(self, key: str) -> Rule | None:
        """Look up a rule by id (``RG001``) or name (``toc-anchor-unresolved``)."""
        key = key.strip()
        rule_id = key.upper() if key.upper() in self._rules else self._names.get(key.lower())
        return self._rules.get(rule_id) if rule_id else None

    def resolve_ids(self, keys: Iterable[str]) -> set[str]:
        """Translate ids or names into rule ids, ignoring unknown keys."""
        resolved = set()
        for key in keys:
            rule = self.get(key)
            if rule is None:
                logger.warning(f"Unknown rule '{key}' ignored")
                continue
            resolved.add(rule.id)
        return resolved

    def __iter__(self) -> Iterator[Rule]:
        return iter(sorted(self._rules.values(), key=lambda rule: rule.id))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


# Global registry populated by the rule modules
registry = RuleRegistry()
