"""Network speed and wireless components."""

from __future__ import annotations

import array
import fcntl
import os
import re
import socket
import struct

from tagwm.status.fmt import fmt_human, read_int, warn

NET_DIR = "/sys/class/net"
WIRELESS_PATH = "/proc/net/wireless"
DEFAULT_INTERVAL = 1000

SIOCGIWESSID = 0x8B1B
IW_ESSID_MAX_SIZE = 32
_IFNAMSIZ = 16
_IWREQ_SIZE = 32
_LINE_LIMIT = 1023
_INT_RE = re.compile(r"[+-]?\d+")


class NetSpeed:
    """Bytes per second received or sent on an interface since the last call.

    The first call only records a sample and yields None.
    """

    def __init__(self, direction: str, interval: int = DEFAULT_INTERVAL) -> None:
        if direction not in ("rx", "tx"):
            raise ValueError(f"direction must be 'rx' or 'tx', not {direction!r}")
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.direction = direction
        self.interval = interval
        self._bytes = 0

    def __call__(self, interface: str) -> str | None:
        previous = self._bytes
        path = os.path.join(NET_DIR, interface, "statistics", f"{self.direction}_bytes")
        current = read_int(path)
        if current is None:
            return None
        self._bytes = current
        if previous == 0:
            return None
        return fmt_human((current - previous) * 1000 // self.interval, 1024)


_rx = NetSpeed("rx")
_tx = NetSpeed("tx")


def netspeed_rx(interface: str) -> str | None:
    """Receive speed of ``interface``."""
    return _rx(interface)


def netspeed_tx(interface: str) -> str | None:
    """Transmit speed of ``interface``."""
    return _tx(interface)


def rssi_to_perc(rssi: int) -> int:
    """Map a signal strength in dBm to a 0..100 quality."""
    if rssi >= -50:
        return 100
    if rssi <= -100:
        return 0
    return 2 * (rssi + 100)


def wifi_perc(interface: str) -> str | None:
    """Link quality of a wireless interface in percent."""
    state_path = os.path.join(NET_DIR, interface, "operstate")
    try:
        with open(state_path, encoding="utf-8", errors="replace") as handle:
            status = handle.readline(4)
    except OSError as exc:
        warn(f"fopen '{state_path}': {exc.strerror or exc}")
        return None
    if status != "up\n":
        return None

    try:
        with open(WIRELESS_PATH, encoding="utf-8", errors="replace") as handle:
            lines = [handle.readline(_LINE_LIMIT) for _ in range(3)]
    except OSError as exc:
        warn(f"fopen '{WIRELESS_PATH}': {exc.strerror or exc}")
        return None
    line = lines[2]
    if not line:
        return None

    start = line.find(interface)
    if start < 0:
        return None
    fields = line[start + len(interface) + 2 :].split()
    if len(fields) < 2:
        return None
    match = _INT_RE.match(fields[1])
    if not match:
        return None
    cur = int(match.group())
    # 70 is the maximum link quality reported by the kernel
    return str(int(cur / 70 * 100))


def wifi_essid(interface: str) -> str | None:
    """ESSID the wireless interface is associated with."""
    name = interface.encode()
    if len(name) >= _IFNAMSIZ:
        warn("snprintf: Output truncated")
        return None
    essid = array.array("B", bytes(IW_ESSID_MAX_SIZE + 1))
    address = essid.buffer_info()[0]
    request = bytearray(_IWREQ_SIZE)
    struct.pack_into("16sPHH", request, 0, name, address, IW_ESSID_MAX_SIZE + 1, 0)
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as exc:
        warn(f"socket 'AF_INET': {exc.strerror or exc}")
        return None
    with sock:
        try:
            fcntl.ioctl(sock.fileno(), SIOCGIWESSID, request, True)
        except OSError as exc:
            warn(f"ioctl 'SIOCGIWESSID': {exc.strerror or exc}")
            return None
    value = essid.tobytes().split(b"\0", 1)[0]
    return value.decode(errors="replace") or None