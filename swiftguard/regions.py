"""Inline ``swiftguard:disable`` / ``swiftguard:enable`` directives.

Directives live in comments and name one or more rule identifiers (or
``all``)::

    // swiftguard:disable optional_initialization
    var a: Int? = nil  // swiftguard:disable:this optional_initialization
    // swiftguard:disable:next all

A plain directive switches the rule from its own offset onwards. The
``previous``, ``this`` and ``next`` modifiers override a single line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, List, Optional, Sequence, TypeVar

from .source import SourceFile
from .utils.syntax import ExcludedSpanSet, SyntaxKind

logger = logging.getLogger(__name__)

DIRECTIVE_PATTERN = re.compile(
    r"swiftguard:(?P<action>enable|disable)"
    r"(?::(?P<modifier>previous|this|next))?"
    r"(?P<rules>(?:[ \t]+[A-Za-z0-9_-]+)+)"
)
ALL_RULES = "all"
LINE_OFFSETS = {"previous": -1, "this": 0, "next": 1}

T = TypeVar("T")


@dataclass(frozen=True)
class Directive:
    action: str
    rules: FrozenSet[str]
    line: int
    offset: int
    modifier: Optional[str] = None

    @property
    def enables(self) -> bool:
        return self.action == "enable"

    @property
    def target_line(self) -> Optional[int]:
        if self.modifier is None:
            return None
        return self.line + LINE_OFFSETS[self.modifier]

    def applies_to(self, rule_id: str) -> bool:
        return ALL_RULES in self.rules or rule_id in self.rules


def parse_directives(file: SourceFile, syntax: ExcludedSpanSet) -> List[Directive]:
    """Collect the directives that appear inside comments, in source order."""

    directives: List[Directive] = []
    for comment in syntax.of_kind(SyntaxKind.COMMENT):
        text = file.text(comment)
        for found in DIRECTIVE_PATTERN.finditer(text):
            offset = comment.start + found.start()
            directive = Directive(
                action=found.group("action"),
                rules=frozenset(found.group("rules").split()),
                line=file.line_for_offset(offset),
                offset=offset,
                modifier=found.group("modifier"),
            )
            logger.debug("Found directive %s at line %d", directive, directive.line)
            directives.append(directive)
    return directives


class RegionMap:
    """Answer whether a rule is enabled at a given offset of one file."""

    def __init__(self, file: SourceFile, directives: Sequence[Directive] = ()) -> None:
        self._file = file
        self._directives = sorted(directives, key=lambda directive: directive.offset)

    @classmethod
    def from_file(cls, file: SourceFile, syntax: ExcludedSpanSet) -> "RegionMap":
        return cls(file, parse_directives(file, syntax))

    def __bool__(self) -> bool:
        return bool(self._directives)

    def is_enabled(self, rule_id: str, offset: int) -> bool:
        enabled = True
        for directive in self._directives:
            if directive.modifier is None and directive.offset <= offset and directive.applies_to(rule_id):
                enabled = directive.enables

        line = self._file.line_for_offset(offset)
        for directive in self._directives:
            if directive.target_line == line and directive.applies_to(rule_id):
                enabled = directive.enables
        return enabled

    def filter(self, rule_id: str, items: Iterable[T], key: Callable[[T], int]) -> List[T]:
        """Keep the items whose ``key(item)`` offset has ``rule_id`` enabled."""

        if not self._directives:
            return list(items)
        return [item for item in items if self.is_enabled(rule_id, key(item))]
