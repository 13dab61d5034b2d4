"""Terminal display for Shogi positions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shogi_position.types import FILES, HAND_KINDS, RANKS, Color, Kind

if TYPE_CHECKING:
    from shogi_position.position import Shogi

# Display characters for pieces
PIECE_CHARS: dict[Kind, str] = {
    Kind.PAWN: "歩",
    Kind.LANCE: "香",
    Kind.KNIGHT: "桂",
    Kind.SILVER: "銀",
    Kind.GOLD: "金",
    Kind.BISHOP: "角",
    Kind.ROOK: "飛",
    Kind.KING: "玉",
    Kind.PRO_PAWN: "と",
    Kind.PRO_LANCE: "杏",
    Kind.PRO_KNIGHT: "圭",
    Kind.PRO_SILVER: "全",
    Kind.HORSE: "馬",
    Kind.DRAGON: "龍",
}

_RANK_LABELS = ["一", "二", "三", "四", "五", "六", "七", "八", "九"]


def format_board(position: Shogi) -> str:
    """Format the position for terminal display."""
    lines: list[str] = []

    lines.append(f"後手持駒: {format_hand(position, Color.WHITE)}")
    lines.append("  ９ ８ ７ ６ ５ ４ ３ ２ １")
    lines.append("+--+--+--+--+--+--+--+--+--+")

    for y in range(1, RANKS + 1):
        row_str = "|"
        for x in range(FILES, 0, -1):
            piece = position.get(x, y)
            if piece is None:
                row_str += "  |"
            elif piece.color == Color.WHITE:
                row_str += f"v{PIECE_CHARS[piece.kind]}|"
            else:
                row_str += f" {PIECE_CHARS[piece.kind]}|"
        lines.append(f"{row_str} {_RANK_LABELS[y - 1]}")
        lines.append("+--+--+--+--+--+--+--+--+--+")

    lines.append(f"先手持駒: {format_hand(position, Color.BLACK)}")
    lines.append("手番: " + ("先手" if position.turn == Color.BLACK else "後手"))

    return "\n".join(lines)


def format_hand(position: Shogi, color: Color) -> str:
    summary = position.hands_summary(color)
    pieces: list[str] = []
    for kind in HAND_KINDS:
        count = summary[kind]
        if count == 1:
            pieces.append(PIECE_CHARS[kind])
        elif count > 1:
            pieces.append(f"{PIECE_CHARS[kind]}{count}")
    return " ".join(pieces) if pieces else "なし"
