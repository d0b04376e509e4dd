"""Baseline files: accepted findings recorded by fingerprint.

Example format:
[
  {"fingerprint": "3f2a9c0d1b7e4a55", "rule": "RG005", "path": "GUIDE.md",
   "message": "Section 'Appendix' is not listed in the table of contents"}
]
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from reviewguide.models.outputs import Finding

logger = logging.getLogger(__name__)


def load_baseline(path: str | Path) -> set[str]:
    """Load fingerprints from a baseline file.

    A missing or malformed baseline is logged and treated as empty, so a
    broken baseline never hides findings.

    Args:
        path: Baseline JSON file

    Returns:
        Set of finding fingerprints
    """
    baseline_path = Path(path)
    if not baseline_path.is_file():
        logger.warning(f"Baseline file not found: {baseline_path}")
        return set()

    try:
        data = json.loads(baseline_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error(f"Failed to read baseline {baseline_path}: {e}")
        return set()

    if not isinstance(data, list):
        logger.error(f"Baseline {baseline_path} must contain a JSON list")
        return set()

    fingerprints = set()
    for entry in data:
        if isinstance(entry, str):
            fingerprints.add(entry)
        elif isinstance(entry, dict) and isinstance(entry.get("fingerprint"), str):
            fingerprints.add(entry["fingerprint"])
    logger.info(f"Loaded {len(fingerprints)} baseline fingerprints from {baseline_path}")
    return fingerprints


def write_baseline(path: str | Path, findings: Iterable[Finding]) -> int:
    """Write the unsuppressed findings to a baseline file.

    Returns:
        Number of entries written
    """
    entries = {
        finding.fingerprint: {
            "fingerprint": finding.fingerprint,
            "rule": finding.rule_id,
            "path": finding.path,
            "message": finding.message,
        }
        for finding in findings
        if not finding.suppressed or finding.suppressed_by == "baseline"
    }
    ordered = sorted(entries.values(), key=lambda e: (e["path"], e["rule"], e["fingerprint"]))
    Path(path).write_text(json.dumps(ordered, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Wrote {len(ordered)} findings to baseline {path}")
    return len(ordered)
