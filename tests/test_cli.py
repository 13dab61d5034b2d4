"""Tests for the console commands."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from shogi_position.cli import main, run_command
from shogi_position.errors import IllegalMove, SfenError
from shogi_position.position import Shogi
from shogi_position.usi import UsiRecord

HIRATE_SFEN = "lnsgkgsnl/1r5b1/ppppppppp/9/9/9/PPPPPPPPP/1B5R1/LNSGKGSNL b - 1"


class TestConsole:
    def test_move_and_undo(self) -> None:
        position = Shogi()
        history: list[UsiRecord] = []
        output = run_command(position, history, "7g7f")
        assert output is not None and output.endswith("手番: 後手")
        assert len(history) == 1
        run_command(position, history, "undo")
        assert position.to_sfen() == HIRATE_SFEN
        assert run_command(position, history, "undo") == "Nothing to undo."

    def test_queries(self) -> None:
        position = Shogi()
        history: list[UsiRecord] = []
        assert run_command(position, history, "moves 7g") == "7f"
        assert run_command(position, history, "moves 5e") == "(none)"
        assert run_command(position, history, "sfen") == HIRATE_SFEN
        assert run_command(position, history, "csa").endswith("\n+")
        assert run_command(position, history, "check") == "BLACK: -\nWHITE: -"
        assert run_command(position, history, "") == ""
        assert run_command(position, history, "quit") is None

    def test_engine_errors_propagate(self) -> None:
        with pytest.raises(IllegalMove):
            run_command(Shogi(), [], "7g7e")

    def test_main_reports_errors_and_quits(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        inputs: Iterator[str] = iter(["7g7f", "7g7e", "quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))
        main([])
        out = capsys.readouterr().out
        assert "=== 将棋盤 ===" in out
        assert "Error: no piece found at 7, 7" in out

    def test_main_stops_at_end_of_input(
        self,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def _eof(prompt: str = "") -> str:
            raise EOFError

        monkeypatch.setattr("builtins.input", _eof)
        main(["--sfen", "4k4/9/9/9/9/9/9/9/4K4 b - 1"])

    def test_main_rejects_bad_sfen(self) -> None:
        with pytest.raises(SystemExit):
            main(["--sfen", "nonsense"])
