"""Render check reports for terminals, machines and pull request comments."""

from reviewguide.models.outputs import CheckReport

FORMATS = ("text", "json", "markdown")


def render_text(report: CheckReport, show_suppressed: bool = False) -> str:
    lines = []
    for document in report.documents:
        for finding in document.findings:
            if finding.suppressed and not show_suppressed:
                continue
            line = (
                f"{finding.location()}: {finding.severity} "
                f"{finding.rule_id} {finding.message}"
            )
            if finding.suppressed:
                line += f" [suppressed: {finding.suppressed_by}]"
            lines.append(line)

    for path in report.skipped_paths:
        lines.append(f"{path}: skipped (not a Markdown document)")
    for path, reason in report.error_paths.items():
        lines.append(f"{path}: cannot check: {reason}")

    lines.append(
        f"{len(report.documents)} document(s) checked: "
        f"{report.errors} error(s), {report.warnings} warning(s), "
        f"{report.infos} info, {report.suppressed} suppressed"
    )
    return "\n".join(lines)


def render(report: CheckReport, fmt: str = "text", show_suppressed: bool = False) -> str:
    """Render a report in the requested format.

    Args:
        report: The check result
        fmt: One of ``text``, ``json`` or ``markdown``
        show_suppressed: Include suppressed findings in text output

    Returns:
        The rendered report

    Raises:
        ValueError: If the format is unknown
    """
    if fmt == "text":
        return render_text(report, show_suppressed=show_suppressed)
    if fmt == "json":
        return report.model_dump_json(indent=2)
    if fmt == "markdown":
        return report.format_summary_markdown()
    raise ValueError(f"Unknown report format: {fmt} (expected one of {', '.join(FORMATS)})")
