"""Basic file IO helpers."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

from swiftguard.errors import ConfigurationError, SourceReadError, SourceWriteError

logger = logging.getLogger(__name__)


def read_yaml_file(path: Path) -> Any:
    """Return the parsed YAML if the file exists, otherwise ``None``."""

    if not path.exists():
        return None
    try:
        with path.open("r", encoding="utf-8") as handle:
            return yaml.load(handle, Loader=yaml.SafeLoader)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc


def read_text_file(path: Path) -> str:
    """Return the file contents as UTF-8 text.

    Missing or undecodable files raise :class:`SourceReadError` so that the
    caller can abort the single file without touching the rest of the run.
    """

    try:
        # newline="" keeps CRLF intact so offsets match the bytes on disk
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise SourceReadError(path, "file does not exist") from exc
    except UnicodeDecodeError as exc:
        raise SourceReadError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise SourceReadError(path, exc.strerror or str(exc)) from exc


def write_text_atomic(path: Path, contents: str) -> None:
    """Replace ``path`` with ``contents`` or leave it untouched on failure."""

    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(contents)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o7777)
        os.replace(tmp_name, path)
    except OSError as exc:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise SourceWriteError(path, exc.strerror or str(exc)) from exc
    logger.debug("Wrote %d characters to %s", len(contents), path)
