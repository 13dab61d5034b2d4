"""Move geometry for every piece kind.

駒ごとの動きの定義（先手視点）。
前方 = 段が減る方向（dy = -1）。後手の場合は (dx, dy) の両方の符号を反転して使う。

just: 1回だけ移動できるオフセット（桂馬のジャンプを含む）
fly:  同方向に何マスでも移動できる方向
"""

from __future__ import annotations

from typing import NamedTuple

from shogi_position.types import Color, Kind


class MoveDefinition(NamedTuple):
    just: tuple[tuple[int, int], ...] = ()
    fly: tuple[tuple[int, int], ...] = ()


_ORTHOGONAL = ((0, -1), (-1, 0), (1, 0), (0, 1))
_DIAGONAL = ((-1, -1), (1, -1), (-1, 1), (1, 1))
# 金: 前3方向 + 横 + 真後ろ
_GOLD = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (0, 1))

MOVE_DEFINITIONS: dict[Kind, MoveDefinition] = {
    Kind.PAWN: MoveDefinition(just=((0, -1),)),
    Kind.LANCE: MoveDefinition(fly=((0, -1),)),
    Kind.KNIGHT: MoveDefinition(just=((-1, -2), (1, -2))),
    # 銀: 前3方向 + 斜め後
    Kind.SILVER: MoveDefinition(just=((-1, -1), (0, -1), (1, -1), (-1, 1), (1, 1))),
    Kind.GOLD: MoveDefinition(just=_GOLD),
    Kind.BISHOP: MoveDefinition(fly=_DIAGONAL),
    Kind.ROOK: MoveDefinition(fly=_ORTHOGONAL),
    Kind.KING: MoveDefinition(just=_DIAGONAL + _ORTHOGONAL),
    # 成り駒（と・成香・成桂・成銀）は金と同じ動き
    Kind.PRO_PAWN: MoveDefinition(just=_GOLD),
    Kind.PRO_LANCE: MoveDefinition(just=_GOLD),
    Kind.PRO_KNIGHT: MoveDefinition(just=_GOLD),
    Kind.PRO_SILVER: MoveDefinition(just=_GOLD),
    # 馬: 斜め遠距離 + 縦横1マス、龍: 縦横遠距離 + 斜め1マス
    Kind.HORSE: MoveDefinition(just=_ORTHOGONAL, fly=_DIAGONAL),
    Kind.DRAGON: MoveDefinition(just=_DIAGONAL, fly=_ORTHOGONAL),
}

# 行き所のない駒になる段数（相手側の端から数える）
ILLEGAL_UNPROMOTED_ROW: dict[Kind, int] = {
    Kind.PAWN: 1,
    Kind.LANCE: 1,
    Kind.KNIGHT: 2,
}


def get_move_definition(kind: Kind) -> MoveDefinition:
    return MOVE_DEFINITIONS[kind]


def illegal_unpromoted_row(kind: Kind) -> int:
    """Depth of the dead-end zone for an unpromoted kind (0 if none).

    未成のまま置けない段の深さ。歩・香は1段、桂は2段、その他は0。
    """
    return ILLEGAL_UNPROMOTED_ROW.get(kind, 0)


def row_to_opposite_end(y: int, color: Color) -> int:
    """手番の相手側の端から数えた段数。先手は y、後手は 10 - y。"""
    return y if color == Color.BLACK else 10 - y


def is_dead_end(kind: Kind, y: int, color: Color) -> bool:
    """True if a `kind` piece of `color` would have no future move on rank `y`."""
    return illegal_unpromoted_row(kind) >= row_to_opposite_end(y, color)
