"""The status bar program: render components and publish the line."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from tagwm.status import cpu, memory, network, power, system
from tagwm.status.fmt import warn

INTERVAL = 1000
UNKNOWN_STR = "n/a"
MAXLEN = 2048


class UsageError(Exception):
    """The command line is not understood."""


class _SinkError(Exception):
    pass


@dataclass(frozen=True)
class Component:
    """One status item: a function, a printf-style format and an argument."""

    func: Callable[..., Optional[str]]
    fmt: str
    argument: Optional[str] = None


def default_components() -> list[Component]:
    """The configured status items, left to right."""
    return [
        Component(network.wifi_perc, "  %s", "wlp3s0"),
        Component(network.wifi_essid, " %s ", "wlp3s0"),
        Component(cpu.cpu_perc, "| Cpu %s%% "),
        Component(power.temp, "| Temp %sC ", "/sys/class/thermal/thermal_zone0/temp"),
        Component(memory.ram_used, "| Ram %s "),
        Component(system.datetime, "| %s ", "%a, %d %b %Y | %T"),
    ]


def render_status(
    components: Iterable[Component], unknown: str = UNKNOWN_STR, maxlen: int = MAXLEN
) -> str:
    """Join the formatted values of ``components`` into one status line.

    The line holds fewer than ``maxlen`` bytes; output past that is cut off.
    """
    parts: list[bytes] = []
    used = 0
    for component in components:
        if component.argument is None:
            value = component.func()
        else:
            value = component.func(component.argument)
        if value is None:
            value = unknown
        piece = (component.fmt % value).encode("utf-8")
        room = maxlen - used
        if len(piece) >= room:
            warn("vsnprintf: Output truncated")
            parts.append(piece[: max(room - 1, 0)])
            break
        parts.append(piece)
        used += len(piece)
    return b"".join(parts).decode("utf-8", errors="ignore")


def parse_args(argv: Sequence[str]) -> bool:
    """Parse the arguments after the program name; True means print to stdout."""
    args = list(argv)
    sflag = False
    while args and args[0].startswith("-") and len(args[0]) > 1:
        arg = args.pop(0)
        if arg == "--":
            break
        for flag in arg[1:]:
            if flag == "s":
                sflag = True
            else:
                raise UsageError(f"unknown option -{flag}")
    if args:
        raise UsageError("unexpected arguments")
    return sflag


def run(
    components: Sequence[Component],
    interval: int,
    sink: Callable[[str], None],
    should_stop: Callable[[], bool],
) -> None:
    """Render and publish the status every ``interval`` ms until told to stop."""
    while not should_stop():
        start = time.monotonic()
        sink(render_status(components))
        if not should_stop():
            wait = interval / 1000 - (time.monotonic() - start)
            if wait > 0:
                time.sleep(wait)


def _print_status(status: str) -> None:
    try:
        print(status, flush=True)
    except OSError as exc:
        raise _SinkError(f"puts: {exc.strerror or exc}") from exc


def _store_root_name(status: str) -> None:
    try:
        subprocess.run(["xsetroot", "-name", status], check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise _SinkError("XStoreName: Failed to store root window name") from exc


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of the status program."""
    args = sys.argv[1:] if argv is None else list(argv)
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "slstatus"
    try:
        sflag = parse_args(args)
    except UsageError:
        warn(f"usage: {prog} [-s]")
        return 1

    if sflag:
        sink = _print_status
    else:
        if not os.environ.get("DISPLAY"):
            warn("XOpenDisplay: Failed to open display")
            return 1
        sink = _store_root_name

    stop = threading.Event()

    def terminate(signo, frame):
        stop.set()

    previous = {sig: signal.signal(sig, terminate) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        try:
            run(default_components(), INTERVAL, sink, stop.is_set)
        except _SinkError as exc:
            warn(str(exc))
            return 1
        if not sflag:
            try:
                _store_root_name("")
            except _SinkError as exc:
                warn(str(exc))
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return 0