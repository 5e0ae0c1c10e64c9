import contextlib
import io

import pytest

from assoccache.cache import AssociativeCache
from assoccache import plot, simulator, trace


def test_simulator_single_scenario(capsys):
    assert simulator.main(["--scenario", "spatial-read"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Scenario: spatial-read"
    assert "Cache Misses: 63" in out
    assert "Cache Searches: 1000" in out


def test_simulator_stats_are_cumulative(capsys):
    simulator.main(["--scenario", "spatial-read", "spatial-read"])
    records = plot.parseStats(capsys.readouterr().out.splitlines())
    assert [r["totalAccesses"] for r in records] == [1000, 2000]
    assert [r["totalMisses"] for r in records] == [63, 63]


def test_simulator_default_runs_everything(capsys):
    simulator.main([])
    records = plot.parseStats(capsys.readouterr().out.splitlines())
    assert [r["scenario"] for r in records] == simulator.scenarios.DEFAULT_ORDER
    last = records[-1]
    assert last["totalMisses"] == last["readMisses"] + last["writeMisses"]


def test_simulator_verbose_and_dump(capsys):
    simulator.main(["--scenario", "random", "--seed", "1", "--blocks", "2", "-v", "--dump"])
    out = capsys.readouterr().out.splitlines()
    assert out[1].startswith(("R 0x", "W 0x"))
    assert "miss block 1" in out[1]
    assert out[-2].startswith("Block 0:")
    assert out[-1].startswith("Block 1:")


def test_simulator_bad_configuration(capsys):
    with pytest.raises(SystemExit) as e:
        simulator.main(["--block-size", "3"])
    assert e.value.code == 2
    assert "power of two" in capsys.readouterr().err


def test_parse_line():
    assert trace.parseLine("R 1f\n") == (0x1f, False)
    assert trace.parseLine("W 0x10") == (0x10, True)
    with pytest.raises(ValueError):
        trace.parseLine("X 10")
    with pytest.raises(ValueError):
        trace.parseLine("R")


def test_trace_replay_skips_bad_lines():
    cache = AssociativeCache(numBlocks=4, blockSizeWords=16)
    err = io.StringIO()
    lines = ["R 0\n", "W 1\n", "junk\n", "\n", "R -10\n", "R 10\n"]
    assert trace.replay(cache, lines, err=err) == 2
    s = cache.stats()
    assert s["totalAccesses"] == 3
    assert s["totalMisses"] == 2
    assert "line 3:" in err.getvalue()
    assert "line 5:" in err.getvalue()


def test_trace_replay_window():
    cache = AssociativeCache(numBlocks=4, blockSizeWords=1)
    lines = ["R %x\n"%i for i in range(10)]
    trace.replay(cache, lines, nLines=3, skip=2)
    assert cache.stats()["totalAccesses"] == 3
    assert sorted(line.tag for line in cache.dump() if line.valid) == [2, 3, 4]


def test_trace_replay_nothing():
    cache = AssociativeCache(numBlocks=4, blockSizeWords=1)
    lines = ["R %x\n"%i for i in range(10)]
    assert trace.replay(cache, lines, nLines=0) == 0
    assert cache.stats()["totalAccesses"] == 0


def test_trace_replay_window_ignores_blank_lines():
    cache = AssociativeCache(numBlocks=4, blockSizeWords=1)
    lines = ["R 1\n", "\n", "\n", "R 2\n", "R 3\n"]
    trace.replay(cache, lines, nLines=2)
    assert cache.stats()["totalAccesses"] == 2
    assert sorted(line.tag for line in cache.dump() if line.valid) == [1, 2]


def test_trace_replay_reports_to_redirected_stderr():
    cache = AssociativeCache(numBlocks=4, blockSizeWords=1)
    err = io.StringIO()
    with contextlib.redirect_stderr(err):
        assert trace.replay(cache, ["junk\n"]) == 1
    assert err.getvalue().startswith("line 1:")


def test_simulator_follows_redirected_stdout():
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        simulator.main(["--scenario", "spatial-read"])
    lines = out.getvalue().splitlines()
    assert lines[0] == "Scenario: spatial-read"
    assert "Cache Misses: 63" in lines


def test_trace_main(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("R 0\nR 10\nR 0\n"))
    assert trace.main(["-1", "0", "1", "16"]) == 0
    records = plot.parseStats(capsys.readouterr().out.splitlines())
    assert records == [{
        "scenario": "trace",
        "totalMisses": 3,
        "totalAccesses": 3,
        "hitRate": 0.0,
        "readMisses": 3,
        "writeMisses": 0,
    }]


def test_trace_main_bad_arguments(capsys):
    assert trace.main(["-1", "0", "0"]) == 2
    assert "numBlocks" in capsys.readouterr().err


def test_parse_stats_undefined_and_noise():
    lines = [
        "Block 0: tag=-1, valid=0, dirty=0, lastAccessTime=0",
        "Scenario: empty",
        "Cache Misses: 0",
        "Cache Hit Rate: undefined",
        "R 0x1 miss block 0",
    ]
    assert plot.parseStats(lines) == [{"scenario": "empty", "totalMisses": 0, "hitRate": None}]


def test_plot_stats():
    records = [
        {"scenario": "a", "hitRate": 0.9, "readMisses": 10, "writeMisses": 0},
        {"scenario": "b", "hitRate": None, "readMisses": 0, "writeMisses": 0},
    ]
    fig = plot.plotStats(records)
    assert len(fig.axes) == 2
    labels = [t.get_text() for t in fig.axes[1].get_xticklabels()]
    assert labels == ["a", "b"]
