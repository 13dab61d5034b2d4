"""Types and constants for the shogi position.

本将棋（9×9盤）の基本型・定数定義。
駒は14種類（未成7種 + 成り6種 + 王将）。

座標は (筋, 段) = (x, y) で、どちらも 1〜9。
先手から見て筋は右から左へ、段は上から下へ増える（7六歩 = (7, 6)）。
"""

from __future__ import annotations

from enum import IntEnum, unique

from shogi_position.errors import CsaError

FILES = 9
RANKS = 9
NUM_SQUARES = FILES * RANKS  # 81マス


@unique
class Color(IntEnum):
    """Side identifiers.

    先手（BLACK）は段の小さい方（一段目）へ向かって進む。
    後手（WHITE）は段の大きい方（九段目）へ向かって進む。
    """

    BLACK = 0  # 先手
    WHITE = 1  # 後手

    @property
    def opponent(self) -> Color:
        """相手側を返す。"""
        return Color(1 - self.value)


@unique
class Kind(IntEnum):
    """Piece kinds（14種類）.

    値は to_tensor_planes() でのチャンネルインデックスに対応する。
    0〜6: 未成駒、7: 王将、8〜13: 成り駒
    """

    PAWN = 0         # 歩
    LANCE = 1        # 香
    KNIGHT = 2       # 桂
    SILVER = 3       # 銀
    GOLD = 4         # 金
    BISHOP = 5       # 角
    ROOK = 6         # 飛
    KING = 7         # 玉/王
    PRO_PAWN = 8     # と
    PRO_LANCE = 9    # 成香
    PRO_KNIGHT = 10  # 成桂
    PRO_SILVER = 11  # 成銀
    HORSE = 12       # 馬
    DRAGON = 13      # 龍

    @property
    def csa(self) -> str:
        """CSA形式の2文字コード（例: FU, RY）。"""
        return _CSA_CODES[self]

    @classmethod
    def from_csa(cls, code: str) -> Kind:
        try:
            return _CSA_KINDS[code]
        except KeyError:
            raise CsaError(f"unknown CSA piece code: {code!r}") from None


_CSA_CODES: dict[Kind, str] = {
    Kind.PAWN: "FU",
    Kind.LANCE: "KY",
    Kind.KNIGHT: "KE",
    Kind.SILVER: "GI",
    Kind.GOLD: "KI",
    Kind.BISHOP: "KA",
    Kind.ROOK: "HI",
    Kind.KING: "OU",
    Kind.PRO_PAWN: "TO",
    Kind.PRO_LANCE: "NY",
    Kind.PRO_KNIGHT: "NK",
    Kind.PRO_SILVER: "NG",
    Kind.HORSE: "UM",
    Kind.DRAGON: "RY",
}
_CSA_KINDS: dict[str, Kind] = {v: k for k, v in _CSA_CODES.items()}


# 成り変換テーブル: 未成駒 → 成り駒
PROMOTION_MAP: dict[Kind, Kind] = {
    Kind.PAWN: Kind.PRO_PAWN,
    Kind.LANCE: Kind.PRO_LANCE,
    Kind.KNIGHT: Kind.PRO_KNIGHT,
    Kind.SILVER: Kind.PRO_SILVER,
    Kind.BISHOP: Kind.HORSE,
    Kind.ROOK: Kind.DRAGON,
}

# 逆変換: 成り駒 → 元の駒種（取られた駒を持ち駒に戻す際に使用）
UNPROMOTION_MAP: dict[Kind, Kind] = {v: k for k, v in PROMOTION_MAP.items()}

# 持ち駒として使える駒種（未成の非玉駒、7種）
HAND_KINDS = [
    Kind.PAWN, Kind.LANCE, Kind.KNIGHT,
    Kind.SILVER, Kind.GOLD, Kind.BISHOP, Kind.ROOK,
]

# SFEN の持ち駒表記順（飛角金銀桂香歩）
SFEN_HAND_ORDER = [
    Kind.ROOK, Kind.BISHOP, Kind.GOLD,
    Kind.SILVER, Kind.KNIGHT, Kind.LANCE, Kind.PAWN,
]


def promote(kind: Kind) -> Kind:
    """成った駒種を返す。成れない駒種はそのまま返す。"""
    return PROMOTION_MAP.get(kind, kind)


def unpromote(kind: Kind) -> Kind:
    """成りを外した駒種を返す。未成の駒種はそのまま返す。"""
    return UNPROMOTION_MAP.get(kind, kind)


def is_promoted(kind: Kind) -> bool:
    return kind in UNPROMOTION_MAP


def can_promote(kind: Kind) -> bool:
    return kind in PROMOTION_MAP
