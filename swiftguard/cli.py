"""Command-line entry point for swiftguard."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from . import __version__
from .config import load_configuration
from .errors import ConfigurationError
from .linter import Linter, known_rule_ids, load_rules
from .result import LintResult, format_summary_table
from .rules import is_correctable
from .verification import verify_rule

CONFIG_ERROR_EXIT_CODE = 3


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "paths",
        nargs="*",
        help="Swift files or directories to inspect (defaults to 'included' or the current directory).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML configuration file (defaults to ./.swiftguard.yml when present).",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report format (defaults to text).",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the JSON report (e.g., artifacts/lint.json).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output to stderr.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swiftguard",
        description="Pattern-based style linter and autocorrector for Swift sources",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lint = subparsers.add_parser("lint", help="Report style violations.")
    _add_common_arguments(lint)
    lint.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when only warnings are found.",
    )

    autocorrect = subparsers.add_parser("autocorrect", help="Rewrite files to remove correctable violations.")
    _add_common_arguments(autocorrect)

    rules = subparsers.add_parser("rules", help="List available rules.")
    rules.add_argument(
        "--verify",
        action="store_true",
        help="Run each rule against its own example corpus.",
    )
    rules.add_argument("--verbose", "-v", action="store_true", help=argparse.SUPPRESS)
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def write_output(result: LintResult, output_path: str | None, report_format: str) -> None:
    if report_format == "text":
        for correction in result.corrections:
            print(correction.format())
        for violation in result.violations:
            print(violation.format())
        print(format_summary_table(result))

    payload = json.dumps(result.to_dict(), indent=2)
    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(payload, encoding="utf-8")
        if report_format == "text":
            print(f"\nReport written to {output_path}")
    elif report_format == "json":
        print(payload)


def list_rules(verify: bool) -> int:
    failures = 0
    header = f"{'identifier':<28} | {'opt-in':<6} | {'correctable':<11} | {'severity':<8} | name"
    print(header)
    print("-" * len(header))
    for rule_type in load_rules():
        rule = rule_type()
        description = rule.description
        print(
            f"{description.identifier:<28} | {'yes' if rule.opt_in else 'no':<6} | "
            f"{'yes' if is_correctable(rule) else 'no':<11} | {rule.severity.value:<8} | {description.name}"
        )
        if not verify:
            continue
        for check in verify_rule(rule):
            if check.passed:
                continue
            failures += 1
            print(f"  FAIL [{check.kind}] {check.example!r}: {check.detail}")
    if verify:
        print(f"\nExample verification: {'PASS' if failures == 0 else f'FAIL ({failures})'}")
    return 1 if failures else 0


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "rules":
        return list_rules(args.verify)

    try:
        configuration = load_configuration(args.config, known_rules=known_rule_ids())
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return CONFIG_ERROR_EXIT_CODE

    linter = Linter(configuration)
    if args.command == "autocorrect":
        result = linter.correct_paths(args.paths)
        write_output(result, args.output_path, args.format)
        return 2 if result.errors else 0

    result = linter.lint_paths(args.paths)
    write_output(result, args.output_path, args.format)
    return result.exit_code(strict=args.strict)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
