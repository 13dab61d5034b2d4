"""USI move notation on top of Shogi.

USI 形式の指し手文字列の解析・生成と、局面への適用・取り消し。
例: "7g7f"（移動）、"8h2b+"（成り）、"P*5e"（打ち）
筋は数字 1〜9、段は a〜i（a = 一段目）。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from shogi_position.errors import NoPieceAtSource, SfenError
from shogi_position.piece import kind_from_sfen, kind_to_sfen
from shogi_position.position import Shogi
from shogi_position.types import HAND_KINDS, Kind

logger = logging.getLogger(__name__)

_RANK_CHARS = "abcdefghi"


@dataclass(frozen=True)
class UsiMove:
    """A parsed USI move. drop_kind is set for drops, from_x/from_y for moves."""

    to_x: int
    to_y: int
    from_x: int | None = None
    from_y: int | None = None
    promote: bool = False
    drop_kind: Kind | None = None

    @property
    def is_drop(self) -> bool:
        return self.drop_kind is not None


@dataclass(frozen=True)
class UsiRecord:
    """What apply_usi() did, enough for undo_usi() to revert it.

    promote は実際に成ったかどうか（行き所のない駒の強制成りも含む）。
    captured は取った駒の盤上での駒種。
    """

    move: UsiMove
    promote: bool = False
    captured: Kind | None = None


def parse_square(text: str) -> tuple[int, int]:
    """Parse "7g" into (7, 7)."""
    if len(text) != 2 or text[0] not in "123456789" or text[1] not in _RANK_CHARS:
        raise SfenError(f"invalid USI square: {text!r}")
    return int(text[0]), _RANK_CHARS.index(text[1]) + 1


def format_square(x: int, y: int) -> str:
    return f"{x}{_RANK_CHARS[y - 1]}"


def parse_usi(text: str) -> UsiMove:
    s = text.strip()
    if len(s) == 4 and s[1] == "*":
        kind = kind_from_sfen(s[0])
        if kind not in HAND_KINDS or not s[0].isupper():
            raise SfenError(f"invalid drop piece: {s!r}")
        to_x, to_y = parse_square(s[2:4])
        return UsiMove(to_x, to_y, drop_kind=kind)
    if len(s) not in (4, 5) or (len(s) == 5 and s[4] != "+"):
        raise SfenError(f"invalid USI move: {s!r}")
    from_x, from_y = parse_square(s[0:2])
    to_x, to_y = parse_square(s[2:4])
    return UsiMove(to_x, to_y, from_x, from_y, promote=len(s) == 5)


def format_usi(move: UsiMove) -> str:
    to = format_square(move.to_x, move.to_y)
    if move.drop_kind is not None:
        return f"{kind_to_sfen(move.drop_kind)}*{to}"
    assert move.from_x is not None and move.from_y is not None
    return format_square(move.from_x, move.from_y) + to + ("+" if move.promote else "")


def apply_usi(position: Shogi, text: str) -> UsiRecord:
    """Play a USI move on `position` and return the record needed to undo it."""
    move = parse_usi(text)
    if move.drop_kind is not None:
        position.drop(move.to_x, move.to_y, move.drop_kind)
        logger.debug("applied %s", text)
        return UsiRecord(move)

    assert move.from_x is not None and move.from_y is not None
    piece = position.get(move.from_x, move.from_y)
    if piece is None:
        raise NoPieceAtSource(f"no piece found at {move.from_x}, {move.from_y}")
    target = position.get(move.to_x, move.to_y)
    position.move(move.from_x, move.from_y, move.to_x, move.to_y, move.promote)
    moved = position.get(move.to_x, move.to_y)
    assert moved is not None
    logger.debug("applied %s", text)
    return UsiRecord(
        move,
        promote=moved.kind != piece.kind,
        captured=target.kind if target is not None else None,
    )


def undo_usi(position: Shogi, record: UsiRecord) -> None:
    """Revert a move previously played by apply_usi()."""
    move = record.move
    if move.drop_kind is not None:
        position.undrop(move.to_x, move.to_y)
        return
    assert move.from_x is not None and move.from_y is not None
    position.unmove(
        move.from_x,
        move.from_y,
        move.to_x,
        move.to_y,
        record.promote,
        record.captured,
    )
