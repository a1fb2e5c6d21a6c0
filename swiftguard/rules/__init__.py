"""Rule protocol, rule metadata and the per-file lint context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List, Optional, Protocol, Tuple

from swiftguard.correction import Writer
from swiftguard.regions import RegionMap
from swiftguard.result import CorrectionResult, StyleViolation
from swiftguard.severity import Severity
from swiftguard.source import SourceFile
from swiftguard.utils.fileio import write_text_atomic
from swiftguard.utils.syntax import ExcludedSpanSet, SpanClassifier, SwiftSyntaxClassifier


@dataclass(frozen=True)
class RuleDescription:
    """Static identity and example corpus of a rule.

    ``triggering_examples`` must each produce exactly one violation,
    ``non_triggering_examples`` none, and every ``corrections`` pair maps an
    input to the exact text the correction pipeline must produce.
    """

    identifier: str
    name: str
    description: str
    severity: Severity = Severity.WARNING
    non_triggering_examples: Tuple[str, ...] = ()
    triggering_examples: Tuple[str, ...] = ()
    corrections: Tuple[Tuple[str, str], ...] = ()


@dataclass
class LintContext:
    """Bundle the inputs shared by every rule that runs over one file."""

    file: SourceFile
    syntax: ExcludedSpanSet
    regions: RegionMap
    writer: Writer = write_text_atomic

    @classmethod
    def build(
        cls,
        file: SourceFile,
        classifier: Optional[SpanClassifier] = None,
        writer: Writer = write_text_atomic,
    ) -> "LintContext":
        classifier = classifier or SwiftSyntaxClassifier()
        syntax = classifier.classify(file.contents)
        return cls(file=file, syntax=syntax, regions=RegionMap.from_file(file, syntax), writer=writer)


class Rule(Protocol):
    """Protocol implemented by all rules."""

    description: ClassVar[RuleDescription]
    opt_in: ClassVar[bool]
    severity: Severity

    def validate(self, context: LintContext) -> List[StyleViolation]:
        """Return the violations found in ``context.file``, in source order."""


class CorrectableRule(Rule, Protocol):
    """A rule that can also rewrite the file to remove its violations."""

    def correct(self, context: LintContext) -> CorrectionResult:
        """Rewrite every enabled violation and return what was corrected."""


def is_correctable(rule: Rule) -> bool:
    return callable(getattr(rule, "correct", None))
