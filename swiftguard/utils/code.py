"""Source code helper utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Generator, Iterable


def _is_excluded(path: Path, excluded: tuple[Path, ...]) -> bool:
    resolved = path.resolve()
    for root in excluded:
        if resolved == root or root in resolved.parents:
            return True
    return False


def iter_code_files(
    root_paths: Iterable[str],
    extensions: tuple[str, ...] = (".swift",),
    excluded: Iterable[str] = (),
) -> Generator[Path, None, None]:
    """Yield code files beneath the provided paths in a stable order.

    A root that names a file is yielded as-is when its suffix matches.
    Anything at or below an ``excluded`` path is skipped.
    """

    excluded_roots = tuple(Path(item).resolve() for item in excluded)
    seen: set[Path] = set()
    for root in root_paths:
        root_path = Path(root)
        if root_path.is_file():
            candidates = [root_path]
        else:
            candidates = sorted(root_path.rglob("*"))
        for path in candidates:
            if path.suffix not in extensions or not path.is_file():
                continue
            if _is_excluded(path, excluded_roots):
                continue
            key = path.resolve()
            if key in seen:
                continue
            seen.add(key)
            yield path
