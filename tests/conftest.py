"""Shared fixtures for shogi_position tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from shogi_position.piece import Piece
from shogi_position.position import Shogi
from shogi_position.types import FILES, RANKS, Color, Kind

MakePosition = Callable[..., Shogi]


def _make_position(
    pieces: list[tuple[int, int, Kind, Color]],
    black_hand: tuple[Kind, ...] = (),
    white_hand: tuple[Kind, ...] = (),
    turn: Color = Color.BLACK,
) -> Shogi:
    position = Shogi()
    position.board = [[None] * RANKS for _ in range(FILES)]
    for x, y, kind, color in pieces:
        position.board[x - 1][y - 1] = Piece(kind, color)
    position.hands = (sorted(black_hand), sorted(white_hand))
    position.turn = turn
    return position


@pytest.fixture
def make_position() -> MakePosition:
    """盤面を空にして、指定の駒・持ち駒・手番だけを置いた局面を作る。

    pieces: (x, y, Kind, Color) のリスト
    """
    return _make_position
