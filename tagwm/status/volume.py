"""Master volume component read from an OSS mixer device."""

from __future__ import annotations

import fcntl
import os
import struct
from typing import Callable

from tagwm.status.fmt import warn

SOUND_DEVICE_NAMES = (
    "vol", "bass", "treble", "synth", "pcm", "speaker", "line", "mic", "cd",
    "mix", "pcm2", "rec", "igain", "ogain", "line1", "line2", "line3",
    "dig1", "dig2", "dig3", "phin", "phout", "video", "radio", "monitor",
)


def _ior(group: str, number: int, size: int = 4) -> int:
    return (2 << 30) | (size << 16) | (ord(group) << 8) | number


SOUND_MIXER_READ_DEVMASK = _ior("M", 0xFE)


def _mixer_read(device: int) -> int:
    return _ior("M", device)


def _read_int_ioctl(fd: int, request: int) -> int:
    buffer = bytearray(4)
    fcntl.ioctl(fd, request, buffer, True)
    return struct.unpack("i", buffer)[0]


def _volume_level(devmask: int, read_level: Callable[[int], int]) -> int | None:
    """Level of the master control, or None if the mixer has none."""
    level = None
    for index, name in enumerate(SOUND_DEVICE_NAMES):
        if devmask & (1 << index) and name == "vol":
            level = read_level(index)
    return None if level is None else level & 0xFF


def vol_perc(card: str) -> str | None:
    """Master volume of the mixer device ``card`` in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError as exc:
        warn(f"open '{card}': {exc.strerror or exc}")
        return None
    try:
        try:
            devmask = _read_int_ioctl(fd, SOUND_MIXER_READ_DEVMASK)
        except OSError as exc:
            warn(f"ioctl 'SOUND_MIXER_READ_DEVMASK': {exc.strerror or exc}")
            return None
        try:
            level = _volume_level(devmask, lambda dev: _read_int_ioctl(fd, _mixer_read(dev)))
        except OSError as exc:
            warn(f"ioctl 'MIXER_READ({SOUND_DEVICE_NAMES.index('vol')})': {exc.strerror or exc}")
            return None
    finally:
        os.close(fd)
    if level is None:
        warn("vol_perc: mixer has no master volume control")
        return None
    return str(level)