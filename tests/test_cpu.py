from tagwm.status import cpu
from tagwm.status.cpu import CpuUsage


def _write(path, values):
    path.write_text("cpu  " + " ".join(str(v) for v in values) + " 0 0 0\ncpu0 1 2 3\n")


def test_first_sample_is_none(tmp_path):
    stat = tmp_path / "stat"
    _write(stat, [100, 0, 100, 800, 0, 0, 0])
    assert CpuUsage(str(stat))() is None


def test_all_busy(tmp_path):
    stat = tmp_path / "stat"
    usage = CpuUsage(str(stat))
    _write(stat, [100, 0, 100, 800, 0, 0, 0])
    usage()
    _write(stat, [300, 0, 100, 800, 0, 0, 0])
    assert usage() == "100"


def test_all_idle(tmp_path):
    stat = tmp_path / "stat"
    usage = CpuUsage(str(stat))
    _write(stat, [100, 0, 100, 800, 0, 0, 0])
    usage()
    _write(stat, [100, 0, 100, 1800, 0, 0, 0])
    assert usage() == "0"


def test_mixed_in_range(tmp_path):
    stat = tmp_path / "stat"
    usage = CpuUsage(str(stat))
    _write(stat, [100, 0, 100, 800, 0, 0, 0])
    usage()
    _write(stat, [200, 0, 200, 1600, 0, 0, 0])
    assert usage() == "20"


def test_unchanged_sample_is_none(tmp_path):
    stat = tmp_path / "stat"
    usage = CpuUsage(str(stat))
    _write(stat, [100, 0, 100, 800, 0, 0, 0])
    usage()
    assert usage() is None


def test_missing_file(tmp_path):
    assert CpuUsage(str(tmp_path / "nope"))() is None


def test_cpu_perc_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(cpu, "STAT_PATH", str(tmp_path / "nope"))
    monkeypatch.setattr(cpu._cpu_usage, "path", None)
    assert cpu.cpu_perc() is None


def test_cpu_freq(tmp_path, monkeypatch):
    freq = tmp_path / "freq"
    freq.write_text("1800000\n")
    monkeypatch.setattr(cpu, "FREQ_PATH", str(freq))
    assert cpu.cpu_freq() == "1.8 G"


def test_cpu_freq_missing(tmp_path, monkeypatch):
    monkeypatch.setattr(cpu, "FREQ_PATH", str(tmp_path / "nope"))
    assert cpu.cpu_freq() is None