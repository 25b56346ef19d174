"""Small helpers for files and strings."""

from __future__ import annotations

from hcc.errors import HccError


def read_file(filename: str) -> str:
    """Return the whole text of a file, raising HccError if it cannot be opened."""
    try:
        with open(filename, encoding="utf-8", newline="") as handle:
            return handle.read()
    except OSError as exc:
        raise HccError(f"could not open {filename}") from exc


def replace_first(text: str, old: str, new: str) -> str:
    """Replace the first occurrence of ``old`` in ``text``; return text unchanged if absent."""
    return text.replace(old, new, 1)