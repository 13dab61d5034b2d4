"""Exceptions raised by the position engine and its codecs.

すべて呼び出し側の誤用か壊れた入力を表す。再試行で回復するものはない。
"""

from __future__ import annotations


class ShogiError(ValueError):
    """Base class for every error raised by shogi_position."""


class NoPieceAtSource(ShogiError):
    """駒があるはずのマスが空だった。"""


class IllegalMove(ShogiError):
    """移動先が駒の動ける範囲にない（編集モード外）。"""


class IllegalDrop(ShogiError):
    """打てない場所・駒種の打ち（二歩、行き所のない駒など）。"""


class OccupiedDestination(ShogiError):
    """打ち先に既に駒がある。"""


class OffBoard(ShogiError):
    """座標が盤外（筋・段が 1〜9 の範囲にない）。"""


class TurnViolation(ShogiError):
    """手番でない側の駒を動かそうとした（編集モード外）。"""


class HandShortage(ShogiError):
    """持ち駒にない駒種を取り出そうとした。"""


class EditModeRequired(ShogiError):
    """編集モード専用の操作を通常モードで呼んだ。"""


class SfenError(ShogiError):
    """SFEN / USI 文字列の形式が不正。"""


class CsaError(ShogiError):
    """CSA 形式の局面が不正。"""


class UnknownPreset(ShogiError):
    """存在しない初期局面プリセット名。"""
