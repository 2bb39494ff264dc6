"""CPU frequency and usage components."""

from __future__ import annotations

from tagwm.status.fmt import fmt_human, read_int, warn

STAT_PATH = "/proc/stat"
FREQ_PATH = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"

_FIELDS = 7


class CpuUsage:
    """CPU usage in percent since the previous call.

    The first call only records a sample and yields None.
    """

    def __init__(self, path: str | None = None) -> None:
        self.path = path
        self._previous = [0.0] * _FIELDS

    def _sample(self) -> list[float] | None:
        path = self.path or STAT_PATH
        try:
            with open(path, encoding="utf-8") as handle:
                fields = handle.readline().split()
        except OSError as exc:
            warn(f"fopen '{path}': {exc.strerror or exc}")
            return None
        try:
            return [float(v) for v in fields[1 : 1 + _FIELDS]] if len(fields) > _FIELDS else None
        except ValueError:
            return None

    def __call__(self) -> str | None:
        before = self._previous
        now = self._sample()
        if now is None:
            return None
        self._previous = now
        if before[0] == 0:
            return None
        total = sum(before) - sum(now)
        if total == 0:
            return None
        # user nice system idle iowait irq softirq: idle and iowait are not busy
        busy_before = before[0] + before[1] + before[2] + before[5] + before[6]
        busy_now = now[0] + now[1] + now[2] + now[5] + now[6]
        return str(int(100 * (busy_before - busy_now) / total))


_cpu_usage = CpuUsage()


def cpu_freq() -> str | None:
    """Current frequency of the first CPU."""
    khz = read_int(FREQ_PATH)
    if khz is None:
        return None
    return fmt_human(khz * 1000, 1000)


def cpu_perc() -> str | None:
    """CPU usage since the last call, in percent."""
    return _cpu_usage()