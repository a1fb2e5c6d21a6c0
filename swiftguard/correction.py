"""Width-preserving rewrites of matched spans.

Every rewrite must produce exactly as many characters as it replaces. That
keeps the offsets of all other violations in the file valid, so a whole batch
is computed against the original buffer and joined in a single pass.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Pattern, Sequence

from .errors import CorrectionError
from .result import Correction, CorrectionResult
from .source import SourceFile, Span
from .utils.fileio import write_text_atomic

logger = logging.getLogger(__name__)

Writer = Callable[[Path, str], None]


@dataclass(frozen=True)
class Rewrite:
    """A substitution applied once inside each corrected span."""

    pattern: str
    replacement: str
    flags: int = 0

    def compile(self) -> Pattern[str]:
        try:
            return re.compile(self.pattern, self.flags)
        except re.error as exc:
            raise CorrectionError(f"Cannot compile correction pattern {self.pattern!r}: {exc}") from exc


def rewrite_contents(contents: str, spans: Sequence[Span], rewrite: Rewrite) -> str:
    """Return ``contents`` with every span rewritten; all or nothing."""

    regex = rewrite.compile()
    pieces: List[str] = []
    cursor = 0
    for span in sorted(spans):
        if span.start < cursor:
            raise CorrectionError(f"Overlapping correction spans at offset {span.start}")
        if span.end > len(contents):
            raise CorrectionError(f"Span [{span.start}, {span.end}) exceeds buffer of length {len(contents)}")
        original = contents[span.start:span.end]
        try:
            replaced, count = regex.subn(rewrite.replacement, original, count=1)
        except (re.error, IndexError) as exc:
            raise CorrectionError(f"Cannot expand replacement {rewrite.replacement!r}: {exc}") from exc
        if count == 0:
            raise CorrectionError(f"Correction pattern does not match text at offset {span.start}: {original!r}")
        if len(replaced) != span.length:
            raise CorrectionError(
                f"Correction at offset {span.start} would change length from {span.length} to {len(replaced)}"
            )
        pieces.append(contents[cursor:span.start])
        pieces.append(replaced)
        cursor = span.end
    pieces.append(contents[cursor:])
    return "".join(pieces)


def apply_corrections(
    file: SourceFile,
    spans: Sequence[Span],
    rewrite: Rewrite,
    rule_id: str,
    rule_name: str,
    writer: Writer = write_text_atomic,
) -> CorrectionResult:
    """Rewrite ``spans`` of ``file`` and write the result back through ``writer``.

    Returns the corrected contents and one :class:`Correction` per span, in
    the order the spans were given. Nothing is written when ``spans`` is
    empty, when the rewrite leaves the text unchanged, or when ``file`` has no
    path. Raises :class:`CorrectionError` without writing if any span cannot be
    rewritten.
    """

    if not spans:
        return CorrectionResult(contents=file.contents)

    corrected = rewrite_contents(file.contents, spans, rewrite)
    if file.path is not None and corrected != file.contents:
        writer(file.path, corrected)
        logger.info("Corrected %d %s violation(s) in %s", len(spans), rule_id, file.path)

    corrections = tuple(
        Correction(rule_id=rule_id, rule_name=rule_name, location=file.location(span.start))
        for span in spans
    )
    return CorrectionResult(contents=corrected, corrections=corrections)
