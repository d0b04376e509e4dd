"""Command line interface: check documents, list rules, refresh tables of contents."""

import argparse
import logging
import sys
from pathlib import Path

from reviewguide import __version__
from reviewguide.config.project import ConfigError, load_project_config
from reviewguide.config.settings import settings
from reviewguide.rules import registry
from reviewguide.services.checker import DocumentChecker
from reviewguide.services.toc import update_toc
from reviewguide.utils.baseline import load_baseline, write_baseline
from reviewguide.utils.logging import setup_observability
from reviewguide.utils.reporters import FORMATS, render

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2


def cmd_check(args: argparse.Namespace) -> int:
    config = load_project_config(args.config, default_path=settings.config_file)

    baseline_path = args.baseline or config.baseline
    baseline: set[str] = set()
    if baseline_path and not args.write_baseline:
        baseline = load_baseline(baseline_path)

    paths = args.paths or config.documents or ["."]
    checker = DocumentChecker(config, baseline=baseline)
    report = checker.check_paths(paths)

    if args.write_baseline:
        target = baseline_path or ".reviewguide-baseline.json"
        count = write_baseline(target, report.findings)
        print(f"Wrote {count} finding(s) to {target}")
        return EXIT_OK

    print(render(report, args.format, show_suppressed=args.show_suppressed))
    return report.exit_code(args.fail_on)


def cmd_rules(args: argparse.Namespace) -> int:
    for rule in registry:
        print(f"{rule.id}  {rule.name:<24} {rule.default_severity:<8} {rule.summary}")
    return EXIT_OK


def cmd_toc(args: argparse.Namespace) -> int:
    path = Path(args.path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {path}: {e}", file=sys.stderr)
        return EXIT_USAGE

    updated = update_toc(
        text, level=args.level, max_level=args.max_level, toc_titles=settings.toc_titles
    )

    if args.check:
        if updated != text:
            print(f"{path}: table of contents is out of date")
            return EXIT_FINDINGS
        print(f"{path}: table of contents is up to date")
        return EXIT_OK

    if args.write:
        if updated != text:
            path.write_text(updated, encoding="utf-8")
            logger.info(f"Updated table of contents in {path}")
        return EXIT_OK

    sys.stdout.write(updated)
    return EXIT_OK


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "reviewguide.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reviewguide",
        description="Integrity checks for Markdown guides",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check the guide with the project configuration
  reviewguide check GUIDE.md

  # Check every Markdown file below docs/ and fail on warnings too
  reviewguide check docs --fail-on warning

  # Accept the current findings, then only report new ones
  reviewguide check --write-baseline
  reviewguide check --baseline .reviewguide-baseline.json

  # Regenerate the table of contents in place
  reviewguide toc GUIDE.md --write
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Check Markdown documents")
    check.add_argument("paths", nargs="*", help="Files or directories (default: configured documents)")
    check.add_argument("-c", "--config", help="Project configuration file (YAML)")
    check.add_argument(
        "-f", "--format", choices=FORMATS, default=settings.output_format, help="Report format"
    )
    check.add_argument(
        "--fail-on",
        choices=("error", "warning"),
        default=settings.fail_on,
        help="Lowest severity that makes the command fail",
    )
    check.add_argument("--baseline", help="Baseline file of accepted findings")
    check.add_argument(
        "--write-baseline",
        action="store_true",
        help="Record current findings in the baseline file instead of reporting them",
    )
    check.add_argument(
        "--show-suppressed", action="store_true", help="List suppressed findings in text output"
    )
    check.set_defaults(handler=cmd_check)

    rules = subparsers.add_parser("rules", help="List the available rules")
    rules.set_defaults(handler=cmd_rules)

    toc = subparsers.add_parser("toc", help="Regenerate a document's table of contents")
    toc.add_argument("path", help="Markdown document")
    toc.add_argument("--level", type=int, default=settings.toc_level, help="Heading level to list")
    toc.add_argument("--max-level", type=int, help="Deepest heading level to include")
    mode = toc.add_mutually_exclusive_group()
    mode.add_argument("--write", action="store_true", help="Rewrite the file in place")
    mode.add_argument("--check", action="store_true", help="Fail if the table of contents is stale")
    toc.set_defaults(handler=cmd_toc)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Bind port")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(handler=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_observability()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        return args.handler(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
