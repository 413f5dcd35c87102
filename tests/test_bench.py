import importlib.util
from pathlib import Path

from tictactoe.board import Player

_BENCH = Path(__file__).resolve().parent.parent / "tools" / "bench.py"


def _load_bench():
    spec = importlib.util.spec_from_file_location("bench", _BENCH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_bench_positions_are_playable():
    bench = _load_bench()
    assert len(bench.POSITIONS) == 10
    for label, text, player in bench.POSITIONS:
        assert len(text) == 9
        assert isinstance(player, Player)


def test_run_position_reports_metrics():
    bench = _load_bench()
    row = bench.run_position("Win ready", "XX.OO....", Player.X, None)
    assert row["move"] == "0,2"
    assert row["mode"] == "immediate"
    assert row["nodes"] == 0

    row = bench.run_position("Endgame", "XOX.O..X.", Player.O, 3)
    assert row["mode"] == "direct"
    assert row["depth"] == 3
    assert row["nodes"] > 0
