"""Swap usage components read from /proc/meminfo."""

from __future__ import annotations

import re

from tagwm.status.fmt import fmt_human, warn

MEMINFO_PATH = "/proc/meminfo"

_FIELDS = ("SwapTotal", "SwapFree", "SwapCached")
_VALUE_RE = re.compile(r"\s*([+-]?\d+)")


def _swap_info(*wanted: str) -> dict[str, int] | None:
    """Read the requested swap fields from the meminfo file."""
    found: dict[str, int] = {}
    try:
        with open(MEMINFO_PATH, encoding="utf-8") as handle:
            for line in handle:
                if len(found) == len(wanted):
                    break
                for name in _FIELDS:
                    if name in wanted and line.startswith(name):
                        match = _VALUE_RE.match(line[len(name) + 1 :])
                        if match:
                            found[name] = int(match.group(1))
                        break
    except OSError as exc:
        warn(f"fopen '{MEMINFO_PATH}': {exc.strerror or exc}")
        return None
    if any(name not in found for name in wanted):
        return None
    return found


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def swap_free() -> str | None:
    """Free swap space."""
    info = _swap_info("SwapFree")
    if info is None:
        return None
    return fmt_human(info["SwapFree"] * 1024, 1024)


def swap_perc() -> str | None:
    """Swap in use, excluding cached pages, in percent."""
    info = _swap_info(*_FIELDS)
    if info is None or info["SwapTotal"] == 0:
        return None
    used = info["SwapTotal"] - info["SwapFree"] - info["SwapCached"]
    return str(_trunc_div(100 * used, info["SwapTotal"]))


def swap_total() -> str | None:
    """Total swap space."""
    info = _swap_info("SwapTotal")
    if info is None:
        return None
    return fmt_human(info["SwapTotal"] * 1024, 1024)


def swap_used() -> str | None:
    """Swap in use, excluding cached pages."""
    info = _swap_info(*_FIELDS)
    if info is None:
        return None
    used = info["SwapTotal"] - info["SwapFree"] - info["SwapCached"]
    return fmt_human(used * 1024, 1024)