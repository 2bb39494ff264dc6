"""Battery and temperature components."""

from __future__ import annotations

import os

from tagwm.status.fmt import read_int, read_word

POWER_SUPPLY_DIR = "/sys/class/power_supply"

_STATE_SYMBOLS = {"Charging": "+", "Discharging": "-"}


def _battery_file(bat: str, name: str) -> str:
    return os.path.join(POWER_SUPPLY_DIR, bat, name)


def _pick(bat: str, first: str, second: str) -> str | None:
    """The first of two battery files that is readable."""
    for name in (first, second):
        path = _battery_file(bat, name)
        if os.access(path, os.R_OK):
            return path
    return None


def battery_perc(bat: str) -> str | None:
    """Battery charge in percent."""
    value = read_int(_battery_file(bat, "capacity"))
    return None if value is None else str(value)


def battery_state(bat: str) -> str | None:
    """'+' when charging, '-' when discharging, '?' otherwise."""
    state = read_word(_battery_file(bat, "status"))
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat: str) -> str | None:
    """Time left on battery as hours and minutes; empty unless discharging."""
    state = read_word(_battery_file(bat, "status"))
    if state is None:
        return None
    path = _pick(bat, "charge_now", "energy_now")
    if path is None:
        return None
    charge_now = read_int(path)
    if charge_now is None:
        return None
    if state != "Discharging":
        return ""
    path = _pick(bat, "current_now", "power_now")
    if path is None:
        return None
    current_now = read_int(path)
    if not current_now:
        return None
    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"


def temp(file: str) -> str | None:
    """Temperature in degrees Celsius from a millidegree sensor file."""
    value = read_int(file)
    if value is None:
        return None
    return str(int(value / 1000))