"""In-memory source buffers, character spans and locations."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import List, Optional, Union

from .utils.fileio import read_text_file


@dataclass(frozen=True, order=True)
class Span:
    """Half-open interval ``[start, end)`` of character offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    def intersects(self, other: "Span") -> bool:
        return self.start < other.end and other.start < self.end

    def contains(self, other: "Span") -> bool:
        return self.start <= other.start and other.end <= self.end


@dataclass(frozen=True)
class Location:
    """A 1-based line/column position, plus the absolute offset it came from."""

    file: Optional[str]
    line: int
    character: int
    offset: int

    def __str__(self) -> str:
        return f"{self.file or '<nopath>'}:{self.line}:{self.character}"

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "line": self.line,
            "character": self.character,
            "offset": self.offset,
        }


class SourceFile:
    """Immutable snapshot of one file's contents."""

    def __init__(self, contents: str, path: Optional[Union[str, Path]] = None) -> None:
        self._contents = contents
        self._path = Path(path) if path is not None else None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SourceFile":
        path = Path(path)
        return cls(read_text_file(path), path=path)

    @property
    def contents(self) -> str:
        return self._contents

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def __len__(self) -> int:
        return len(self._contents)

    def __repr__(self) -> str:
        return f"SourceFile(path={self._path!s}, length={len(self._contents)})"

    @cached_property
    def line_starts(self) -> List[int]:
        """Offsets at which each line begins; index 0 is line 1."""

        starts = [0]
        for index, char in enumerate(self._contents):
            if char == "\n":
                starts.append(index + 1)
        return starts

    def line_for_offset(self, offset: int) -> int:
        if offset < 0 or offset > len(self._contents):
            raise ValueError(f"Offset {offset} outside buffer of length {len(self._contents)}")
        return bisect_right(self.line_starts, offset)

    def location(self, offset: int) -> Location:
        line = self.line_for_offset(offset)
        character = offset - self.line_starts[line - 1] + 1
        return Location(
            file=str(self._path) if self._path is not None else None,
            line=line,
            character=character,
            offset=offset,
        )

    def text(self, span: Span) -> str:
        return self._contents[span.start:span.end]
