"""RAM usage components read from /proc/meminfo."""

from __future__ import annotations

import re

from tagwm.status.fmt import fmt_human, warn

MEMINFO_PATH = "/proc/meminfo"

_ORDER = ("MemTotal", "MemFree", "MemAvailable", "Buffers", "Cached")
_LINE_RE = re.compile(r"\s*(\w+):\s*(\d+)\s*kB")


def _read_meminfo(count: int) -> list[int] | None:
    """The first ``count`` meminfo values, which must appear in the usual order."""
    try:
        with open(MEMINFO_PATH, encoding="utf-8") as handle:
            lines = handle.read().splitlines()
    except OSError as exc:
        warn(f"fopen '{MEMINFO_PATH}': {exc.strerror or exc}")
        return None
    values = []
    for name, line in zip(_ORDER[:count], lines):
        match = _LINE_RE.match(line)
        if not match or match.group(1) != name:
            return None
        values.append(int(match.group(2)))
    return values if len(values) == count else None


def ram_free() -> str | None:
    """Available memory."""
    values = _read_meminfo(3)
    if values is None:
        return None
    return fmt_human(values[2] * 1024, 1024)


def ram_perc() -> str | None:
    """Memory in use, excluding buffers and cache, in percent."""
    values = _read_meminfo(5)
    if values is None:
        return None
    total, free, _, buffers, cached = values
    if total == 0:
        return None
    return str(100 * ((total - free) - (buffers + cached)) // total)


def ram_total() -> str | None:
    """Total memory."""
    values = _read_meminfo(1)
    if values is None:
        return None
    return fmt_human(values[0] * 1024, 1024)


def ram_used() -> str | None:
    """Memory in use, excluding buffers and cache."""
    values = _read_meminfo(5)
    if values is None:
        return None
    total, free, _, buffers, cached = values
    return fmt_human((total - free - buffers - cached) * 1024, 1024)