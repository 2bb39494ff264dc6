"""Simple system status components: time, disks, host, network, users."""

from __future__ import annotations

import os
import pwd
import socket
import subprocess
import sys
import time

import psutil

from tagwm.status.fmt import fmt_human, read_int, warn

BUFFER_SIZE = 1024
ENTROPY_PATH = "/proc/sys/kernel/random/entropy_avail"
_INVALID_SYMBOLS = ("evdev", "inet", "pc", "base")


def datetime(fmt: str) -> str | None:
    """Current local time formatted with strftime."""
    result = time.strftime(fmt, time.localtime())
    if not result or len(result) >= BUFFER_SIZE:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def _statvfs(path: str) -> os.statvfs_result | None:
    try:
        return os.statvfs(path)
    except OSError as exc:
        warn(f"statvfs '{path}': {exc.strerror or exc}")
        return None


def disk_free(path: str) -> str | None:
    """Space available to unprivileged users on the filesystem at ``path``."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * fs.f_bavail, 1024)


def disk_perc(path: str) -> str | None:
    """Percentage of the filesystem at ``path`` that is in use."""
    fs = _statvfs(path)
    if fs is None or fs.f_blocks == 0:
        return None
    return str(int(100 * (1.0 - fs.f_bavail / fs.f_blocks)))


def disk_total(path: str) -> str | None:
    """Total size of the filesystem at ``path``."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * fs.f_blocks, 1024)


def disk_used(path: str) -> str | None:
    """Used space on the filesystem at ``path``."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * (fs.f_blocks - fs.f_bfree), 1024)


def entropy() -> str | None:
    """Available kernel entropy; infinite on systems without a pool count."""
    if not sys.platform.startswith("linux"):
        return "\u221e"
    value = read_int(ENTROPY_PATH)
    return None if value is None else str(value)


def hostname() -> str | None:
    """The host name of this machine."""
    try:
        return socket.gethostname()
    except OSError as exc:
        warn(f"gethostname: {exc}")
        return None


def _ip(interface: str, family: int) -> str | None:
    try:
        addresses = psutil.net_if_addrs()
    except OSError as exc:
        warn(f"getifaddrs: {exc}")
        return None
    for addr in addresses.get(interface, []):
        if addr.family == family:
            return addr.address
    return None


def ipv4(interface: str) -> str | None:
    """First IPv4 address of ``interface``."""
    return _ip(interface, socket.AF_INET)


def ipv6(interface: str) -> str | None:
    """First IPv6 address of ``interface``."""
    return _ip(interface, socket.AF_INET6)


def kernel_release() -> str | None:
    """The kernel release, as ``uname -r`` prints it."""
    return os.uname().release


def keyboard_indicators(fmt: str, led_mask: int) -> str:
    """Render caps/num lock state from an LED mask.

    ``fmt`` holds 'c' (caps lock) and/or 'n' (num lock), in any case, each
    optionally followed by '?'.  With '?' the letter appears as written only
    when the indicator is on; otherwise it always appears, upper case when on.
    """
    fmt = fmt[:4]
    out = []
    for i, char in enumerate(fmt):
        key = char.lower()
        if key not in ("c", "n"):
            continue
        togglecase = i + 1 >= len(fmt) or fmt[i + 1] != "?"
        isset = bool(led_mask & (1 << (key == "n")))
        if togglecase:
            out.append(key.upper() if isset else key)
        elif isset:
            out.append(char)
    return "".join(out)


def _valid_layout_or_variant(symbol: str) -> bool:
    return not any(symbol.startswith(bad) for bad in _INVALID_SYMBOLS)


def keymap_layout(symbols: str, group: int) -> str | None:
    """Pick the layout of keyboard group ``group`` from an XKB symbols string."""
    tokens = (tok for tok in symbols.replace(":", "+").split("+") if tok)
    layout = None
    grp = 0
    for tok in tokens:
        if grp > group:
            break
        if not _valid_layout_or_variant(tok):
            continue
        if len(tok) == 1 and tok.isdigit():
            continue
        layout = tok
        grp += 1
    return layout


def load_avg() -> str | None:
    """The 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def num_files(path: str) -> str | None:
    """Number of entries in the directory ``path``."""
    try:
        return str(len(os.listdir(path)))
    except OSError as exc:
        warn(f"opendir '{path}': {exc.strerror or exc}")
        return None


def run_command(cmd: str) -> str | None:
    """First line of output of a shell command, without its newline."""
    try:
        result = subprocess.run(cmd, shell=True, stdout=subprocess.PIPE, check=False)
    except OSError as exc:
        warn(f"popen '{cmd}': {exc}")
        return None
    out = result.stdout.decode(errors="replace")
    newline = out.find("\n")
    line = out if newline < 0 else out[: newline + 1]
    line = line[: BUFFER_SIZE - 2]
    last = line.rfind("\n")
    if last >= 0:
        line = line[:last]
    return line or None


def uptime() -> str | None:
    """Time since boot as hours and minutes."""
    clock = getattr(time, "CLOCK_BOOTTIME", None)
    if clock is None:
        clock = getattr(time, "CLOCK_UPTIME", None)
    if clock is None:
        clock = time.CLOCK_MONOTONIC
    try:
        seconds = int(time.clock_gettime(clock))
    except OSError:
        warn(f"clock_gettime {clock}")
        return None
    return f"{seconds // 3600}h {seconds % 3600 // 60}m"


def gid() -> str:
    """Group id of the current process."""
    return str(os.getgid())


def username() -> str | None:
    """Name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError:
        warn(f"getpwuid '{euid}'")
        return None


def uid() -> str:
    """Effective user id of the current process."""
    return str(os.geteuid())