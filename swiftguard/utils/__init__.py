"""Utility helpers for swiftguard."""

from .fileio import read_yaml_file, read_text_file, write_text_atomic
from .code import iter_code_files

__all__ = [
    "read_yaml_file",
    "read_text_file",
    "write_text_atomic",
    "iter_code_files",
]
