"""Piece value for the shogi position.

盤上・駒台の駒。種類と所有者だけを持つ値オブジェクト。
成り・成り戻し・先後反転は新しい Piece を返す（元の駒は変化しない）。
"""

from __future__ import annotations

from dataclasses import dataclass

from shogi_position.errors import SfenError
from shogi_position.types import (
    Color,
    Kind,
    can_promote,
    is_promoted,
    promote,
    unpromote,
)

# SFEN の駒文字（先手の大文字表記、成り駒は "+" を前置）
_SFEN_LETTERS: dict[Kind, str] = {
    Kind.PAWN: "P",
    Kind.LANCE: "L",
    Kind.KNIGHT: "N",
    Kind.SILVER: "S",
    Kind.GOLD: "G",
    Kind.BISHOP: "B",
    Kind.ROOK: "R",
    Kind.KING: "K",
}
_LETTER_KINDS: dict[str, Kind] = {v: k for k, v in _SFEN_LETTERS.items()}


@dataclass(frozen=True)
class Piece:
    """A piece on the board.

    盤面上の駒。種類と所有者を持つ。
    """

    kind: Kind
    color: Color

    @staticmethod
    def opposite_color(color: Color) -> Color:
        return color.opponent

    @property
    def is_promoted(self) -> bool:
        return is_promoted(self.kind)

    @property
    def can_promote(self) -> bool:
        return can_promote(self.kind)

    def promoted(self) -> Piece:
        """成った駒を返す。成れない駒はそのまま。"""
        return Piece(promote(self.kind), self.color)

    def unpromoted(self) -> Piece:
        """成りを外した駒を返す。"""
        return Piece(unpromote(self.kind), self.color)

    def inverted(self) -> Piece:
        """先後を入れ替えた駒を返す。"""
        return Piece(self.kind, self.color.opponent)

    def to_csa(self) -> str:
        sign = "+" if self.color == Color.BLACK else "-"
        return sign + self.kind.csa

    def to_sfen(self) -> str:
        letter = kind_to_sfen(unpromote(self.kind))
        if self.color == Color.WHITE:
            letter = letter.lower()
        return "+" + letter if self.is_promoted else letter

    @classmethod
    def from_sfen(cls, token: str) -> Piece:
        """Parse a board token such as "P", "+r" or "k"."""
        promoted = token.startswith("+")
        letter = token[1:] if promoted else token
        if len(letter) != 1 or letter.upper() not in _LETTER_KINDS:
            raise SfenError(f"invalid piece token: {token!r}")
        kind = _LETTER_KINDS[letter.upper()]
        if promoted:
            if not can_promote(kind):
                raise SfenError(f"piece cannot be promoted: {token!r}")
            kind = promote(kind)
        color = Color.BLACK if letter.isupper() else Color.WHITE
        return cls(kind, color)


def kind_to_sfen(kind: Kind) -> str:
    """未成の駒種を SFEN の大文字1文字に変換する。"""
    return _SFEN_LETTERS[kind]


def kind_from_sfen(letter: str) -> Kind:
    try:
        return _LETTER_KINDS[letter.upper()]
    except KeyError:
        raise SfenError(f"invalid piece letter: {letter!r}") from None
