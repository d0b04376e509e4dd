"""Document integrity rules.

Importing this package registers every rule with the global registry.
"""

from .registry import Rule, RuleContext, RuleRegistry, Violation, registry

from . import fences, headings, links, toc  # noqa: E402,F401  isort: skip

__all__ = ["Rule", "RuleContext", "RuleRegistry", "Violation", "registry"]
