"""将棋の局面エンジン: 9x9 board, hands, reversible moves and drops."""

from shogi_position.config import PRESETS, PositionSetting
from shogi_position.errors import (
    CsaError,
    EditModeRequired,
    HandShortage,
    IllegalDrop,
    IllegalMove,
    NoPieceAtSource,
    OccupiedDestination,
    OffBoard,
    SfenError,
    ShogiError,
    TurnViolation,
    UnknownPreset,
)
from shogi_position.piece import Piece
from shogi_position.position import Drop, Move, Shogi
from shogi_position.types import Color, Kind

__all__ = [
    "Color",
    "CsaError",
    "Drop",
    "EditModeRequired",
    "HandShortage",
    "IllegalDrop",
    "IllegalMove",
    "Kind",
    "Move",
    "NoPieceAtSource",
    "OccupiedDestination",
    "OffBoard",
    "PRESETS",
    "Piece",
    "PositionSetting",
    "SfenError",
    "Shogi",
    "ShogiError",
    "TurnViolation",
    "UnknownPreset",
]
