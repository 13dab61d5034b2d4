"""CLI entry point for shogi-position: a two-player console board.

コマンドラインで局面を動かして確認するためのプログラム。
USI 形式で先手・後手の手を交互に入力し、undo で1手戻せる。

起動方法: `uv run shogi-cli [--sfen SFEN] [--verbose]`

コマンド:
  7g7f / 8h2b+ / P*5e  指し手（USI形式）
  undo                 1手戻す
  moves 7g             そのマスの駒の動ける先を表示
  check                両者の王手状態を表示
  sfen / csa           局面を文字列で出力
  quit                 終了
"""

from __future__ import annotations

import argparse
import logging

from shogi_position.config import PositionSetting
from shogi_position.errors import ShogiError
from shogi_position.position import Shogi
from shogi_position.types import Color
from shogi_position.usi import (
    UsiRecord,
    apply_usi,
    format_square,
    parse_square,
    undo_usi,
)

logger = logging.getLogger(__name__)


def _format_targets(position: Shogi, square: str) -> str:
    """マスの駒の移動先を "7f 7e" のような文字列にする。"""
    x, y = parse_square(square)
    targets = [format_square(m.to_x, m.to_y) for m in position.moves_from(x, y)]
    return " ".join(targets) if targets else "(none)"


def run_command(position: Shogi, history: list[UsiRecord], line: str) -> str | None:
    """Execute one console command and return the text to print.

    エンジンの例外（ShogiError）はそのまま送出する。quit なら None を返す。
    """
    words = line.split()
    if not words:
        return ""
    command = words[0]
    if command == "quit":
        return None
    if command == "undo":
        if not history:
            return "Nothing to undo."
        undo_usi(position, history.pop())
        return str(position)
    if command == "moves" and len(words) == 2:
        return _format_targets(position, words[1])
    if command == "check":
        return "\n".join(
            f"{color.name}: {'check' if position.is_check(color) else '-'}"
            for color in Color
        )
    if command == "sfen":
        return position.to_sfen(len(history) + 1)
    if command == "csa":
        return position.to_csa()

    history.append(apply_usi(position, command))
    return str(position)


def main(argv: list[str] | None = None) -> None:
    """Run the console board until quit or end of input."""
    parser = argparse.ArgumentParser(prog="shogi-cli", description="Two-player console shogi board.")
    parser.add_argument("--sfen", help="start from this SFEN instead of 平手")
    parser.add_argument("--verbose", action="store_true", help="log engine operations")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        position = Shogi(PositionSetting(sfen=args.sfen))
    except ShogiError as e:
        parser.error(str(e))

    history: list[UsiRecord] = []
    print("=== 将棋盤 ===")
    print(position)
    print()

    while True:
        try:
            line = input(f"{position.turn.name.lower()}> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return
        try:
            output = run_command(position, history, line)
        except ShogiError as e:
            logger.debug("rejected %r", line, exc_info=True)
            print(f"Error: {e}")
            continue
        if output is None:
            return
        if output:
            print(output)
            print()


if __name__ == "__main__":
    main()
