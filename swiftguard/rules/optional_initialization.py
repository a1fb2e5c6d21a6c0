"""Flag optional variables that are explicitly initialized to ``nil``."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from swiftguard.correction import Rewrite, apply_corrections
from swiftguard.matching import Match, match_pattern
from swiftguard.result import CorrectionResult, StyleViolation
from swiftguard.severity import Severity
from swiftguard.utils.syntax import ExcludedSpanSet

from . import LintContext, RuleDescription

logger = logging.getLogger(__name__)

# Any character, as long as it is not the last one before another var/let declarator.
_WITHIN_DECLARATOR = r"(?:.(?!\s(?:var|let)\s))"
# The name segment stops at the first colon, which is always the type annotation.
_BEFORE_ANNOTATION = r"(?:[^:](?!\s(?:var|let)\s))"

OPTIONAL_INITIALIZATION_PATTERN = re.compile(
    r"\bvar\b"
    + _BEFORE_ANNOTATION + r"*?:"
    + _WITHIN_DECLARATOR + r"*?\?"
    + r"(?P<tail>\s*=\s*nil[ \t]*)(?=\r?$)",
    re.MULTILINE | re.DOTALL,
)

# "=" and "nil" become blanks of the same width; surrounding whitespace stays.
NIL_ASSIGNMENT_REWRITE = Rewrite(pattern=r"(\s*)=(\s*)nil", replacement=r"\1 \2   ")


def find_violations(contents: str, excluded: ExcludedSpanSet) -> List[Match]:
    """Return the ``= nil`` tails of optional declarations outside comments and strings."""

    return match_pattern(contents, OPTIONAL_INITIALIZATION_PATTERN, excluded, group="tail")


class OptionalInitializationRule:
    """Optionals already default to ``nil``; spelling it out is noise."""

    description = RuleDescription(
        identifier="optional_initialization",
        name="Optional Initialization",
        description="Optionals do not need to be initialized to nil",
        severity=Severity.WARNING,
        non_triggering_examples=(
            "var obj: Bool? = nil, obj1: Bool?",
            "var boolean0: Bool? = nil, boolean1: Bool?",
            "var boolean: Bool? /**this is a comment*/= nil",
            "var boolean: /**this is a comment*/Bool? = nil",
            "var image: UIImage?",
            "let image: UIImage? = nil",
            "// var image: UIImage? = nil",
            'let sample = """\nvar image: UIImage? = nil\n"""',
        ),
        triggering_examples=(
            "var image: UIImage? = nil",
            "var onCallback: ((UIImage?) -> Void)? = nil",
            "var onCallback: ((NSData) -> Void)?\n= nil",
            "var first: Bool?, second: Bool? = nil",
        ),
        corrections=(
            ("var image: UIImage? = nil", "var image: UIImage?      "),
            ("var variable: ((UIImage?) -> Void)? = nil", "var variable: ((UIImage?) -> Void)?      "),
            ("var onCallback: ((NSData) -> Void)?\n= nil", "var onCallback: ((NSData) -> Void)?\n     "),
            ("var count: Int?=nil", "var count: Int?    "),
            ("var first: Bool?, second: Bool? = nil", "var first: Bool?, second: Bool?      "),
        ),
    )
    opt_in = True

    def __init__(self, severity: Optional[Severity] = None) -> None:
        self.severity = severity or self.description.severity

    def _enabled_matches(self, context: LintContext) -> List[Match]:
        matches = find_violations(context.file.contents, context.syntax)
        enabled = context.regions.filter(
            self.description.identifier,
            matches,
            key=lambda match: match.span.start,
        )
        if len(enabled) != len(matches):
            logger.debug(
                "%d %s match(es) disabled by directives in %s",
                len(matches) - len(enabled),
                self.description.identifier,
                context.file.path,
            )
        return enabled

    def validate(self, context: LintContext) -> List[StyleViolation]:
        return [
            StyleViolation(
                rule_id=self.description.identifier,
                rule_name=self.description.name,
                reason=self.description.description,
                severity=self.severity,
                location=context.file.location(match.span.start),
            )
            for match in self._enabled_matches(context)
        ]

    def correct(self, context: LintContext) -> CorrectionResult:
        spans = [match.span for match in self._enabled_matches(context)]
        return apply_corrections(
            context.file,
            spans,
            NIL_ASSIGNMENT_REWRITE,
            rule_id=self.description.identifier,
            rule_name=self.description.name,
            writer=context.writer,
        )


def get_rule() -> OptionalInitializationRule:
    return OptionalInitializationRule()
