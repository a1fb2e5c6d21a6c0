"""Lexical classification of comment and string spans in Swift source.

Rules never parse Swift. They match text and then discard anything that
overlaps a span reported here, so the classifier only has to be precise
about where comments and string literals begin and end.
"""

from __future__ import annotations

import re
from bisect import bisect_left
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Protocol

from swiftguard.source import Span


class SyntaxKind(str, Enum):
    """Syntax kinds that rules exclude from matching."""

    COMMENT = "comment"
    STRING = "string"


@dataclass(frozen=True)
class SyntaxSpan:
    kind: SyntaxKind
    span: Span


class ExcludedSpanSet:
    """Read-only, ordered collection of comment and string spans."""

    def __init__(self, spans: Iterable[SyntaxSpan] = ()) -> None:
        self._spans = tuple(sorted(spans, key=lambda item: (item.span.start, item.span.end)))
        self._starts = [item.span.start for item in self._spans]
        self._max_ends: List[int] = []
        running = 0
        for item in self._spans:
            running = max(running, item.span.end)
            self._max_ends.append(running)

    def __iter__(self) -> Iterator[SyntaxSpan]:
        return iter(self._spans)

    def __len__(self) -> int:
        return len(self._spans)

    def _candidates(self, span: Span) -> Iterator[SyntaxSpan]:
        index = bisect_left(self._starts, span.end) - 1
        if span.start == span.end:
            # an empty span sitting on a start offset still lies inside that item
            index = bisect_left(self._starts, span.end + 1) - 1
        while index >= 0 and self._max_ends[index] > span.start:
            yield self._spans[index]
            index -= 1

    def intersects(self, span: Span) -> bool:
        """Return True when ``span`` overlaps any member."""

        return any(item.span.intersects(span) for item in self._candidates(span))

    def of_kind(self, kind: SyntaxKind) -> List[Span]:
        return [item.span for item in self._spans if item.kind is kind]


class SpanClassifier(Protocol):
    """Capability that reports the comment and string spans of a buffer."""

    def classify(self, contents: str) -> ExcludedSpanSet:
        """Return every comment and string literal span in ``contents``."""


_TOKEN_START = re.compile(r'//|/\*|#*"')


def _scan_block_comment(contents: str, start: int) -> int:
    depth = 0
    cursor = start
    length = len(contents)
    while cursor < length:
        if contents.startswith("/*", cursor):
            depth += 1
            cursor += 2
        elif contents.startswith("*/", cursor):
            depth -= 1
            cursor += 2
            if depth == 0:
                return cursor
        else:
            cursor += 1
    return length


def _skip_interpolation(contents: str, cursor: int) -> int:
    depth = 1
    length = len(contents)
    while cursor < length:
        char = contents[cursor]
        if char in '"#':
            end = _scan_string(contents, cursor)
            if end is not None:
                cursor = end
                continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return cursor + 1
        cursor += 1
    return length


def _scan_string(contents: str, start: int) -> Optional[int]:
    """Return the end offset of the string literal at ``start``, if there is one."""

    length = len(contents)
    cursor = start
    while cursor < length and contents[cursor] == "#":
        cursor += 1
    hashes = cursor - start

    if contents.startswith('"""', cursor):
        multiline = True
        cursor += 3
    elif cursor < length and contents[cursor] == '"':
        multiline = False
        cursor += 1
    else:
        return None

    closing = ('"""' if multiline else '"') + "#" * hashes
    escape = "\\" + "#" * hashes
    while cursor < length:
        if contents.startswith(closing, cursor):
            return cursor + len(closing)
        if contents.startswith(escape, cursor):
            cursor += len(escape)
            if cursor < length and contents[cursor] == "(":
                cursor = _skip_interpolation(contents, cursor + 1)
            else:
                cursor += 1
            continue
        if not multiline and contents[cursor] == "\n":
            # unterminated literal ends with its line
            return cursor
        cursor += 1
    return length


class SwiftSyntaxClassifier:
    """Default :class:`SpanClassifier` for Swift sources.

    Recognizes ``//`` and nested ``/* */`` comments, ``"..."`` and
    ``\"\"\"...\"\"\"`` literals (including ``#"raw"#`` delimiters and
    ``\\(...)`` interpolation). Unterminated constructs run to the end of
    their line (single-line strings) or of the buffer.
    """

    def classify(self, contents: str) -> ExcludedSpanSet:
        spans: List[SyntaxSpan] = []
        cursor = 0
        length = len(contents)
        while cursor < length:
            found = _TOKEN_START.search(contents, cursor)
            if found is None:
                break
            start = found.start()
            token = found.group()
            if token == "//":
                end = contents.find("\n", start)
                end = length if end == -1 else end
                spans.append(SyntaxSpan(SyntaxKind.COMMENT, Span(start, end)))
            elif token == "/*":
                end = _scan_block_comment(contents, start)
                spans.append(SyntaxSpan(SyntaxKind.COMMENT, Span(start, end)))
            else:
                end = _scan_string(contents, start)
                if end is None:  # pragma: no cover - the token regex always ends in a quote
                    end = start + 1
                else:
                    spans.append(SyntaxSpan(SyntaxKind.STRING, Span(start, end)))
            cursor = max(end, start + 1)
        return ExcludedSpanSet(spans)
