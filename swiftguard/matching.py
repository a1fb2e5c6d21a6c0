"""Regex matching restricted to code, outside comments and string literals."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Pattern, Union

from .source import Span
from .utils.syntax import ExcludedSpanSet

logger = logging.getLogger(__name__)

DEFAULT_FLAGS = re.MULTILINE | re.DOTALL


@dataclass(frozen=True)
class Match:
    """One accepted occurrence of a pattern.

    ``extent`` is the whole matched text and is what gets checked against the
    excluded spans. ``span`` is the part the rule reports and rewrites; it is
    always contained in ``extent``.
    """

    span: Span
    extent: Span


def compile_pattern(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern, DEFAULT_FLAGS)
    return pattern


def match_pattern(
    contents: str,
    pattern: Union[str, Pattern[str]],
    excluded: ExcludedSpanSet,
    group: Union[int, str] = 0,
) -> List[Match]:
    """Return the non-overlapping matches of ``pattern`` that avoid ``excluded``.

    A candidate whose extent overlaps an excluded span is dropped and the scan
    resumes one character after its start, so a later genuine occurrence is
    still found. Results are ordered by start offset.
    """

    regex = compile_pattern(pattern)
    matches: List[Match] = []
    position = 0
    length = len(contents)
    while position <= length:
        found = regex.search(contents, position)
        if found is None:
            break
        extent = Span(found.start(), found.end())
        if excluded.intersects(extent):
            logger.debug("Discarding match at [%d, %d) inside comment or string", extent.start, extent.end)
            position = extent.start + 1
            continue
        start, end = found.span(group)
        if start < 0:
            # the reported group did not take part in this match
            position = extent.start + 1
            continue
        matches.append(Match(span=Span(start, end), extent=extent))
        position = max(extent.end, extent.start + 1)
    return matches
