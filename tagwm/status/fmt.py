"""Shared helpers for status components: warnings, human sizes, small file reads."""

from __future__ import annotations

import os
import re
import sys

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_WORD_RE = re.compile(r"\s*(\S+)")
_WORD_LIMIT = 12


def warn(message: str) -> None:
    """Write a warning to stderr, prefixed with the program name."""
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""
    if prog and not message.startswith("usage"):
        message = f"{prog}: {message}"
    print(message, file=sys.stderr)


def fmt_human(num: float, base: int) -> str:
    """Format ``num`` with an SI (base 1000) or IEC (base 1024) prefix."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        raise ValueError(f"fmt_human: invalid base {base!r}") from None
    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"


def _read_text(path: str) -> str | None:
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return handle.read()
    except OSError as exc:
        warn(f"fopen '{path}': {exc.strerror or exc}")
        return None


def read_int(path: str) -> int | None:
    """Read the leading integer of a file, or None if it cannot be read."""
    text = _read_text(path)
    if text is None:
        return None
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else None


def read_word(path: str) -> str | None:
    """Read the first whitespace-delimited word of a file (at most 12 chars)."""
    text = _read_text(path)
    if text is None:
        return None
    match = _WORD_RE.match(text)
    return match.group(1)[:_WORD_LIMIT] if match else None