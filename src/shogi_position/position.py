"""Mutable shogi position with reversible moves and drops.

将棋盤（盤面・持ち駒・手番）を管理するクラス。

探索などで使えるよう、局面をコピーせずに move / unmove, drop / undrop で
進めたり戻したりできる。合法性のチェックは疑似合法まで：
  - チェックする: 盤外、自分の駒の上、二歩、行き所のない駒
  - チェックしない: 王手放置、打ち歩詰め、駒数の整合性

座標は (x, y) = (筋, 段)、どちらも 1〜9。
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import NamedTuple

import torch

from shogi_position.config import PositionSetting
from shogi_position.definitions import get_move_definition, is_dead_end
from shogi_position.display import format_board
from shogi_position.errors import (
    EditModeRequired,
    HandShortage,
    IllegalDrop,
    IllegalMove,
    NoPieceAtSource,
    OccupiedDestination,
    OffBoard,
    TurnViolation,
)
from shogi_position.piece import Piece
from shogi_position.serialization import from_csa, from_preset, from_sfen, to_csa, to_sfen
from shogi_position.types import (
    FILES,
    HAND_KINDS,
    RANKS,
    Color,
    Kind,
    unpromote,
)

logger = logging.getLogger(__name__)


class Move(NamedTuple):
    """A board move from (from_x, from_y) to (to_x, to_y)."""

    from_x: int
    from_y: int
    to_x: int
    to_y: int

    @property
    def frm(self) -> tuple[int, int]:
        return (self.from_x, self.from_y)

    @property
    def to(self) -> tuple[int, int]:
        return (self.to_x, self.to_y)


class Drop(NamedTuple):
    """Placing a `kind` from `color`'s hand on (to_x, to_y)."""

    to_x: int
    to_y: int
    kind: Kind
    color: Color

    @property
    def to(self) -> tuple[int, int]:
        return (self.to_x, self.to_y)


def _on_board(x: int, y: int) -> bool:
    return 1 <= x <= FILES and 1 <= y <= RANKS


class Shogi:
    """Board, hands and side to move of one shogi game.

    board[x - 1][y - 1] がマス (x, y) の駒（空なら None）。
    hands[color] は color の持ち駒（未成の駒種のソート済みリスト）。
    ソートしておくことで、取って戻す操作の前後でリストが完全に一致する。

    edit_mode が True の間は手番・動きのチェックをせず、手番も進めない。
    """

    board: list[list[Piece | None]]
    hands: tuple[list[Kind], list[Kind]]
    turn: Color

    def __init__(self, setting: PositionSetting | None = None) -> None:
        self.initialize(setting)

    # ------------------------------------------------------------------
    # 初期化・入出力
    # ------------------------------------------------------------------

    def initialize(self, setting: PositionSetting | None = None) -> None:
        """盤面を初期化する。setting がなければ平手。"""
        from_preset(self, setting or PositionSetting())
        self.edit_mode = False

    def initialize_from_sfen(self, sfen: str) -> int:
        """SFEN 文字列で盤面を初期化し、その手数を返す。"""
        return from_sfen(self, sfen)

    def initialize_from_csa(self, text: str) -> None:
        """CSA 形式の局面で盤面を初期化する。"""
        from_csa(self, text)

    def to_sfen(self, move_count: int = 1) -> str:
        return to_sfen(self, move_count)

    def to_csa(self) -> str:
        return to_csa(self)

    def copy(self) -> Shogi:
        """Return an independent copy (pieces are values, so lists suffice)."""
        other = Shogi.__new__(Shogi)
        other.board = [list(column) for column in self.board]
        other.hands = (list(self.hands[0]), list(self.hands[1]))
        other.turn = self.turn
        other.edit_mode = self.edit_mode
        return other

    def __str__(self) -> str:
        return format_board(self)

    # ------------------------------------------------------------------
    # 編集モード
    # ------------------------------------------------------------------

    @contextmanager
    def editing(self) -> Iterator[Shogi]:
        """Enable edit mode for the block, restoring the previous flag after."""
        previous = self.edit_mode
        self.edit_mode = True
        try:
            yield self
        finally:
            self.edit_mode = previous

    def capture_by_color(self, x: int, y: int, color: Color) -> None:
        """(x, y) の駒を取って color の持ち駒に加える（編集モード専用）。"""
        self._require_edit_mode()
        piece = self.get(x, y)
        if piece is None:
            raise NoPieceAtSource(f"no piece found at {x}, {y}")
        self._set(x, y, None)
        self._push_to_hand(Piece(piece.kind, color))

    def flip(self, x: int, y: int) -> bool:
        """(x, y) の駒を 先手→先手成→後手→後手成→… と循環させる（編集モード専用）。

        駒がなければ False を返す。
        """
        self._require_edit_mode()
        piece = self.get(x, y)
        if piece is None:
            return False
        if piece.is_promoted:
            piece = piece.unpromoted().inverted()
        elif piece.can_promote:
            piece = piece.promoted()
        else:
            piece = piece.inverted()
        self._set(x, y, piece)
        return True

    def set_turn(self, color: Color) -> None:
        """手番を設定する（編集モード専用）。"""
        if not self.edit_mode:
            raise EditModeRequired("cannot set turn without edit mode")
        self.turn = color

    # ------------------------------------------------------------------
    # 着手と取り消し
    # ------------------------------------------------------------------

    def move(
        self,
        fromx: int,
        fromy: int,
        tox: int,
        toy: int,
        promote: bool = False,
    ) -> None:
        """Move the piece at (fromx, fromy) to (tox, toy).

        駒を取っていれば成りを外して持ち駒に加える。
        promote が True か、行き所のない段に入る場合は成る。
        """
        piece = self.get(fromx, fromy)
        if piece is None:
            raise NoPieceAtSource(f"no piece found at {fromx}, {fromy}")
        target = self.get(tox, toy)
        self._check_turn(piece.color)
        if not self.edit_mode and Move(fromx, fromy, tox, toy) not in self.moves_from(fromx, fromy):
            raise IllegalMove(f"cannot move from {fromx}, {fromy} to {tox}, {toy}")

        if target is not None:
            self._capture(tox, toy)
        if promote or is_dead_end(piece.kind, toy, piece.color):
            piece = piece.promoted()
        self._set(tox, toy, piece)
        self._set(fromx, fromy, None)
        logger.debug("move %d%d-%d%d %s", fromx, fromy, tox, toy, piece.kind.name)
        self._next_turn()

    def unmove(
        self,
        fromx: int,
        fromy: int,
        tox: int,
        toy: int,
        promote: bool = False,
        capture: Kind | None = None,
    ) -> None:
        """Revert move(fromx, fromy, tox, toy, promote).

        (tox, toy) の駒を (fromx, fromy) へ戻す。promote なら成りを戻し、
        capture（取った駒の盤上での駒種）があれば持ち駒から盤上へ戻す。
        引数は move() と同じものを渡すこと。局面との整合性は検査しない。
        """
        piece = self.get(tox, toy)
        if piece is None:
            raise NoPieceAtSource(f"no piece found at {tox}, {toy}")
        self._check_on_board(fromx, fromy)
        self._check_turn(piece.color.opponent)

        captured: Piece | None = None
        if capture is not None:
            self._pop_from_hand(unpromote(capture), piece.color)
            captured = Piece(capture, piece.color.opponent)

        with self.editing():
            self.move(tox, toy, fromx, fromy)
            if promote:
                self._set(fromx, fromy, piece.unpromoted())
            if captured is not None:
                self._set(tox, toy, captured)
        logger.debug("unmove %d%d-%d%d", fromx, fromy, tox, toy)
        self._prev_turn()

    def drop(self, tox: int, toy: int, kind: Kind, color: Color | None = None) -> None:
        """(tox, toy) へ color（省略時は手番側）の持ち駒 kind を打つ。"""
        if color is None:
            color = self.turn
        self._check_turn(color)
        if self.get(tox, toy) is not None:
            raise OccupiedDestination(f"there is a piece at {tox}, {toy}")
        if not self.edit_mode and Drop(tox, toy, kind, color) not in self.drops_by(color):
            raise IllegalDrop(f"cannot drop {kind.name} at {tox}, {toy}")

        self._pop_from_hand(kind, color)
        self._set(tox, toy, Piece(kind, color))
        logger.debug("drop %s*%d%d", kind.name, tox, toy)
        self._next_turn()

    def undrop(self, tox: int, toy: int) -> None:
        """drop の逆。(tox, toy) の駒を打った側の駒台に戻す。"""
        piece = self.get(tox, toy)
        if piece is None:
            raise NoPieceAtSource(f"there is no piece at {tox}, {toy}")
        self._check_turn(piece.color.opponent)
        self._push_to_hand(piece)
        self._set(tox, toy, None)
        logger.debug("undrop %d%d", tox, toy)
        self._prev_turn()

    # ------------------------------------------------------------------
    # 動きの生成
    # ------------------------------------------------------------------

    def moves_from(self, x: int, y: int) -> list[Move]:
        """All pseudo-legal moves of the piece at (x, y).

        盤外と自分の駒取りは除外する。手番・二歩・王手放置などは見ない。
        """
        piece = self.get(x, y)
        if piece is None:
            return []

        definition = get_move_definition(piece.kind)
        unit = 1 if piece.color == Color.BLACK else -1
        moves: list[Move] = []

        for dx, dy in definition.just:
            tx, ty = x + dx * unit, y + dy * unit
            if self._can_enter(tx, ty, piece.color):
                moves.append(Move(x, y, tx, ty))

        for dx, dy in definition.fly:
            tx, ty = x + dx * unit, y + dy * unit
            while self._can_enter(tx, ty, piece.color):
                moves.append(Move(x, y, tx, ty))
                if self.get(tx, ty) is not None:
                    break  # 相手の駒を取ったらそこで止まる
                tx, ty = tx + dx * unit, ty + dy * unit

        return moves

    def drops_by(self, color: Color) -> list[Drop]:
        """All pseudo-legal drops for `color`, honouring nifu and dead ends."""
        places: list[tuple[int, int]] = []
        pawn_files: set[int] = set()
        for x in range(1, FILES + 1):
            for y in range(1, RANKS + 1):
                piece = self.get(x, y)
                if piece is None:
                    places.append((x, y))
                elif piece.color == color and piece.kind == Kind.PAWN:
                    pawn_files.add(x)

        drops: list[Drop] = []
        for kind in dict.fromkeys(self.hands[color]):
            for x, y in places:
                if kind == Kind.PAWN and x in pawn_files:
                    continue  # 二歩
                if is_dead_end(kind, y, color):
                    continue  # 行き所のない駒
                drops.append(Drop(x, y, kind, color))
        return drops

    def moves_to(
        self,
        x: int,
        y: int,
        kind: Kind,
        color: Color | None = None,
    ) -> list[Move]:
        """(x, y) に行ける color 側の kind の駒の動きを返す（棋譜の曖昧さ解消用）。"""
        if color is None:
            color = self.turn
        moves: list[Move] = []
        for i in range(1, FILES + 1):
            for j in range(1, RANKS + 1):
                piece = self.get(i, j)
                if piece is None or piece.kind != kind or piece.color != color:
                    continue
                if any(m.to == (x, y) for m in self.moves_from(i, j)):
                    moves.append(Move(i, j, x, y))
        return moves

    # ------------------------------------------------------------------
    # 参照
    # ------------------------------------------------------------------

    def get(self, x: int, y: int) -> Piece | None:
        """(x, y) の駒を返す。盤外なら OffBoard。"""
        self._check_on_board(x, y)
        return self.board[x - 1][y - 1]

    def hands_summary(self, color: Color) -> dict[Kind, int]:
        """color の持ち駒を駒種ごとの枚数で返す（7種すべてのキーを含む）。"""
        summary = dict.fromkeys(HAND_KINDS, 0)
        for kind in self.hands[color]:
            summary[kind] += 1
        return summary

    def is_check(self, color: Color) -> bool:
        """True if `color`'s king is attacked by any opposing piece.

        王がいなければ False。毎回全駒の効きを調べ直す（キャッシュしない）。
        """
        king = self._find_king(color)
        if king is None:
            return False
        for x in range(1, FILES + 1):
            for y in range(1, RANKS + 1):
                piece = self.get(x, y)
                if piece is None or piece.color == color:
                    continue
                if any(m.to == king for m in self.moves_from(x, y)):
                    return True
        return False

    def to_tensor_planes(self) -> torch.Tensor:
        """Encode the position as a 43x9x9 float tensor for a learning model.

        チャンネルは手番側を基準に振り分けるが、盤そのものは回転しない。
        後手番でも行 = 段 - 1、列 = 9 - 筋（先手から見た並び）のまま。

        ch.0-13:  手番側の駒（Kind の値ごと）
        ch.14-27: 相手側の駒
        ch.28-34: 手番側の持ち駒数（HAND_KINDS の順、全マス同じ値）
        ch.35-41: 相手側の持ち駒数
        ch.42:    先手番なら全1、後手番なら全0
        """
        planes = torch.zeros(43, RANKS, FILES)
        side = self.turn

        for x, y, piece in self._pieces():
            base = 0 if piece.color == side else 14
            planes[base + piece.kind, y - 1, FILES - x] = 1.0

        for base, color in ((28, side), (35, side.opponent)):
            for i, count in enumerate(self.hands_summary(color).values()):
                planes[base + i].fill_(count)

        if side == Color.BLACK:
            planes[42].fill_(1.0)
        return planes

    # ------------------------------------------------------------------
    # 以下 private
    # ------------------------------------------------------------------

    def _set(self, x: int, y: int, piece: Piece | None) -> None:
        self._check_on_board(x, y)
        self.board[x - 1][y - 1] = piece

    @staticmethod
    def _check_on_board(x: int, y: int) -> None:
        # 負のインデックスで反対側のマスを読み書きしないように
        if not _on_board(x, y):
            raise OffBoard(f"{x}, {y} is off the board")

    def _can_enter(self, x: int, y: int, color: Color) -> bool:
        """盤外かもしれない (x, y) に color の駒が移動できるか。"""
        if not _on_board(x, y):
            return False
        piece = self.get(x, y)
        return piece is None or piece.color != color

    def _pieces(self) -> Iterator[tuple[int, int, Piece]]:
        """盤上の駒を (x, y, piece) で列挙する。"""
        for x, column in enumerate(self.board, start=1):
            for y, piece in enumerate(column, start=1):
                if piece is not None:
                    yield x, y, piece

    def _find_king(self, color: Color) -> tuple[int, int] | None:
        for x, y, piece in self._pieces():
            if piece.kind == Kind.KING and piece.color == color:
                return (x, y)
        return None

    def _capture(self, x: int, y: int) -> None:
        """(x, y) の駒を取って反対側の持ち駒に加える。"""
        piece = self.get(x, y)
        assert piece is not None
        self._set(x, y, None)
        self._push_to_hand(piece.inverted())

    def _push_to_hand(self, piece: Piece) -> None:
        """駒を成りを外して piece.color の持ち駒に加える。"""
        bisect.insort(self.hands[piece.color], unpromote(piece.kind))

    def _pop_from_hand(self, kind: Kind, color: Color) -> Kind:
        """color の持ち駒から kind を1枚取り除いて返す。"""
        hand = self.hands[color]
        try:
            hand.remove(kind)
        except ValueError:
            raise HandShortage(f"{color.name} has no {kind.name}") from None
        return kind

    def _next_turn(self) -> None:
        if self.edit_mode:
            return
        self.turn = self.turn.opponent

    def _prev_turn(self) -> None:
        self._next_turn()

    def _check_turn(self, color: Color) -> None:
        """color の手番で問題ないか確認する。編集モードなら常に OK。"""
        if not self.edit_mode and color != self.turn:
            raise TurnViolation(f"cannot move {color.name} piece on {self.turn.name}'s turn")

    def _require_edit_mode(self) -> None:
        if not self.edit_mode:
            raise EditModeRequired("cannot edit board without edit mode")
