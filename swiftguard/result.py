"""Core result data structures for lint and correction runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .severity import Severity
from .source import Location

SEVERITY_ORDER: Sequence[Severity] = (
    Severity.ERROR,
    Severity.WARNING,
)


@dataclass(frozen=True)
class StyleViolation:
    """Capture a single rule violation at a source location."""

    rule_id: str
    rule_name: str
    reason: str
    severity: Severity
    location: Location

    def format(self) -> str:
        return (
            f"{self.location}: {self.severity.value}: "
            f"{self.rule_name} Violation: {self.reason} ({self.rule_id})"
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "rule_id": self.rule_id,
            "rule_name": self.rule_name,
            "reason": self.reason,
            "severity": self.severity.value,
            "location": self.location.to_dict(),
        }


@dataclass(frozen=True)
class Correction:
    """Record one violation that was rewritten in place."""

    rule_id: str
    rule_name: str
    location: Location

    def format(self) -> str:
        return f"{self.location} Corrected {self.rule_name} ({self.rule_id})"

    def to_dict(self) -> Dict[str, object]:
        return {
            "rule_id": self.rule_id,
            "rule_name": self.rule_name,
            "location": self.location.to_dict(),
        }


@dataclass(frozen=True)
class CorrectionResult:
    """Rewritten contents plus the corrections applied to produce them."""

    contents: str
    corrections: Tuple[Correction, ...] = ()

    @property
    def applied(self) -> bool:
        return bool(self.corrections)


@dataclass
class Summary:
    """Aggregate violation counts by severity."""

    error: int = 0
    warning: int = 0

    def increment(self, severity: Severity) -> None:
        attr = severity.value
        setattr(self, attr, getattr(self, attr) + 1)

    def to_dict(self) -> Dict[str, int]:
        return {severity.value: getattr(self, severity.value) for severity in SEVERITY_ORDER}

    def as_rows(self) -> List[Tuple[str, int]]:
        """Return severity/count pairs ordered for reporting."""

        return [(severity.value, getattr(self, severity.value)) for severity in SEVERITY_ORDER]

    @property
    def total(self) -> int:
        return sum(getattr(self, severity.value) for severity in SEVERITY_ORDER)


@dataclass
class LintResult:
    """Bundle the summary, violations, corrections and per-file errors of a run."""

    summary: Summary = field(default_factory=Summary)
    violations: List[StyleViolation] = field(default_factory=list)
    corrections: List[Correction] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    files_inspected: int = 0

    @property
    def passed(self) -> bool:
        return self.summary.error == 0 and not self.errors

    def add_violation(self, violation: StyleViolation) -> None:
        self.summary.increment(violation.severity)
        self.violations.append(violation)

    def add_correction(self, correction: Correction) -> None:
        self.corrections.append(correction)

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def to_dict(self) -> Dict[str, object]:
        return {
            "summary": self.summary.to_dict(),
            "violations": [violation.to_dict() for violation in self.violations],
            "corrections": [correction.to_dict() for correction in self.corrections],
            "errors": list(self.errors),
            "files_inspected": self.files_inspected,
            "passed": self.passed,
        }

    def exit_code(self, strict: bool = False) -> int:
        if self.errors:
            return 2
        worst = max((violation.severity.exit_priority for violation in self.violations), default=0)
        if worst >= Severity.ERROR.exit_priority:
            return 2
        if strict and worst > 0:
            return 1
        return 0

    def top_violations(self, limit: int = 5) -> List[StyleViolation]:
        """Return violations ordered by severity, then by position."""

        severity_rank = {severity: idx for idx, severity in enumerate(SEVERITY_ORDER)}
        ordered = sorted(
            self.violations,
            key=lambda violation: (
                severity_rank[violation.severity],
                violation.location.file or "",
                violation.location.offset,
            ),
        )
        return ordered[:limit]


def format_summary_table(result: LintResult, max_violations: int = 5) -> str:
    """Create a human-readable summary table for console output."""

    lines: List[str] = []
    lines.append("Lint Summary")
    lines.append("=" * 40)
    header = f"{'Severity':<10} | {'Count':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    for severity, count in result.summary.as_rows():
        lines.append(f"{severity:<10} | {count:>5}")
    lines.append("-" * len(header))
    status = "PASS" if result.passed else "FAIL"
    lines.append(f"Status    : {status}")
    lines.append(f"Files     : {result.files_inspected}")
    lines.append(f"Violations: {result.summary.total}")
    if result.corrections:
        lines.append(f"Corrected : {len(result.corrections)}")
    if result.errors:
        lines.append(f"Errors    : {len(result.errors)}")

    violations = result.top_violations(max_violations)
    if violations:
        lines.append("")
        lines.append("Top Violations")
        lines.append("-" * 40)
        for violation in violations:
            lines.append(f"[{violation.severity.value}] {violation.rule_name} ({violation.rule_id})")
            lines.append(f"  Location: {violation.location}")
    return "\n".join(lines)
