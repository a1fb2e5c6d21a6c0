"""Run the enabled rules over files and collect their results."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Type

from .config import Configuration
from .correction import Writer
from .errors import CorrectionError, SourceWriteError, SwiftGuardError
from .result import Correction, LintResult, StyleViolation
from .rules import CorrectableRule, LintContext, Rule, is_correctable
from .rules.optional_initialization import OptionalInitializationRule
from .source import SourceFile
from .utils import iter_code_files, write_text_atomic
from .utils.syntax import SpanClassifier, SwiftSyntaxClassifier

logger = logging.getLogger(__name__)

SWIFT_EXTENSIONS = (".swift",)


def load_rules() -> List[Type[Rule]]:
    return [
        OptionalInitializationRule,
    ]


def known_rule_ids() -> List[str]:
    return [rule_type.description.identifier for rule_type in load_rules()]


class Linter:
    """Apply a set of rules to one file at a time."""

    def __init__(
        self,
        configuration: Optional[Configuration] = None,
        rules: Optional[Sequence[Rule]] = None,
        classifier: Optional[SpanClassifier] = None,
        writer: Writer = write_text_atomic,
    ) -> None:
        self.configuration = configuration or Configuration()
        self.rules = list(rules) if rules is not None else self.configuration.enabled_rules(load_rules())
        self._classifier = classifier or SwiftSyntaxClassifier()
        self._writer = writer

    def _context(self, file: SourceFile) -> LintContext:
        return LintContext.build(file, classifier=self._classifier, writer=self._writer)

    def iter_files(self, paths: Iterable[str]) -> Iterable[Path]:
        roots = self.configuration.resolve_paths(paths)
        return iter_code_files(roots, extensions=SWIFT_EXTENSIONS, excluded=self.configuration.excluded)

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------
    def lint_file(self, file: SourceFile) -> List[StyleViolation]:
        context = self._context(file)
        violations: List[StyleViolation] = []
        for rule in self.rules:
            violations.extend(rule.validate(context))
        violations.sort(key=lambda violation: violation.location.offset)
        return violations

    def lint_paths(self, paths: Iterable[str]) -> LintResult:
        result = LintResult()
        for path in self.iter_files(paths):
            result.files_inspected += 1
            try:
                file = SourceFile.from_path(path)
                violations = self.lint_file(file)
            except SwiftGuardError as exc:
                logger.error("%s", exc)
                result.add_error(str(exc))
                continue
            for violation in violations:
                result.add_violation(violation)
        return result

    # ------------------------------------------------------------------
    # Correction
    # ------------------------------------------------------------------
    def correctable_rules(self) -> List[CorrectableRule]:
        return [rule for rule in self.rules if is_correctable(rule)]

    def correct_file(self, file: SourceFile) -> List[Correction]:
        """Run every correctable rule, re-reading the buffer between rules.

        A rule whose rewrite is rejected is skipped with a warning. A failed
        write-back raises :class:`SourceWriteError` and leaves the file as it was.
        """

        corrections: List[Correction] = []
        for rule in self.correctable_rules():
            rule_id = rule.description.identifier
            try:
                outcome = rule.correct(self._context(file))
            except CorrectionError as exc:
                logger.warning("No %s corrections applied to %s: %s", rule_id, file.path or "<memory>", exc)
                continue
            corrections.extend(outcome.corrections)
            if outcome.contents != file.contents:
                file = SourceFile(outcome.contents, path=file.path)
        return corrections

    def correct_paths(self, paths: Iterable[str]) -> LintResult:
        """Correct every file, then report whatever violations remain."""

        result = LintResult()
        for path in self.iter_files(paths):
            result.files_inspected += 1
            try:
                file = SourceFile.from_path(path)
            except SwiftGuardError as exc:
                logger.error("%s", exc)
                result.add_error(str(exc))
                continue
            try:
                for correction in self.correct_file(file):
                    result.add_correction(correction)
            except SourceWriteError as exc:
                logger.error("No corrections applied: %s", exc)
                result.add_error(str(exc))
            try:
                remaining = self.lint_file(SourceFile.from_path(path))
            except SwiftGuardError as exc:
                logger.error("%s", exc)
                result.add_error(str(exc))
                continue
            for violation in remaining:
                result.add_violation(violation)
        return result
