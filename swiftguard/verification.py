"""Check a rule against the examples carried by its description."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .rules import CorrectableRule, LintContext, Rule, is_correctable
from .source import SourceFile


@dataclass(frozen=True)
class ExampleCheck:
    """Outcome of running one example through a rule."""

    kind: str
    example: str
    passed: bool
    detail: str = ""


def _context(example: str) -> LintContext:
    # Examples have no path, so corrections never reach the writer.
    return LintContext.build(SourceFile(example))


def verify_non_triggering(rule: Rule, examples: Optional[Iterable[str]] = None) -> List[ExampleCheck]:
    if examples is None:
        examples = rule.description.non_triggering_examples
    checks: List[ExampleCheck] = []
    for example in examples:
        count = len(rule.validate(_context(example)))
        checks.append(
            ExampleCheck(
                kind="non-triggering",
                example=example,
                passed=count == 0,
                detail="" if count == 0 else f"expected no violations, found {count}",
            )
        )
    return checks


def verify_triggering(rule: Rule, examples: Optional[Iterable[str]] = None) -> List[ExampleCheck]:
    if examples is None:
        examples = rule.description.triggering_examples
    checks: List[ExampleCheck] = []
    for example in examples:
        count = len(rule.validate(_context(example)))
        checks.append(
            ExampleCheck(
                kind="triggering",
                example=example,
                passed=count == 1,
                detail="" if count == 1 else f"expected exactly one violation, found {count}",
            )
        )
    return checks


def verify_corrections(rule: CorrectableRule, pairs: Optional[Iterable[Tuple[str, str]]] = None) -> List[ExampleCheck]:
    if pairs is None:
        pairs = rule.description.corrections
    checks: List[ExampleCheck] = []
    for before, expected in pairs:
        actual = rule.correct(_context(before)).contents
        checks.append(
            ExampleCheck(
                kind="correction",
                example=before,
                passed=actual == expected,
                detail="" if actual == expected else f"expected {expected!r}, got {actual!r}",
            )
        )
    return checks


def verify_rule(rule: Rule) -> List[ExampleCheck]:
    """Run every example corpus of ``rule``; corrections only if it is correctable."""

    checks = verify_non_triggering(rule) + verify_triggering(rule)
    if is_correctable(rule):
        checks.extend(verify_corrections(rule))
    return checks
