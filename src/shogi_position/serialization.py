"""SFEN / CSA codecs and preset loading for Shogi positions.

局面の文字列表現（SFEN・CSA）との相互変換。
読み込みは Shogi の board / hands / turn をまとめて置き換える。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shogi_position.config import PRESETS, PositionSetting
from shogi_position.errors import CsaError, SfenError, UnknownPreset
from shogi_position.piece import Piece, kind_from_sfen, kind_to_sfen
from shogi_position.types import (
    FILES,
    HAND_KINDS,
    RANKS,
    SFEN_HAND_ORDER,
    Color,
    Kind,
)

if TYPE_CHECKING:
    from shogi_position.position import Shogi

logger = logging.getLogger(__name__)

# 空きマス数は 1〜9、持ち駒の枚数は ASCII の数字のみ
_RUN_DIGITS = "123456789"
_COUNT_DIGITS = "0123456789"


def from_preset(position: Shogi, setting: PositionSetting) -> None:
    """Initialize `position` from a PositionSetting.

    sfen が指定されていればそれを、なければプリセット名の局面を読み込む。
    """
    if setting.sfen is not None:
        from_sfen(position, setting.sfen)
        return
    try:
        sfen = PRESETS[setting.preset]
    except KeyError:
        raise UnknownPreset(f"unknown preset: {setting.preset!r}") from None
    logger.debug("loading preset %s", setting.preset)
    from_sfen(position, sfen)


def from_sfen(position: Shogi, sfen: str) -> int:
    """Load an SFEN string into `position` and return its move number.

    例: "lnsgkgsnl/1r5b1/ppppppppp/9/9/9/PPPPPPPPP/1B5R1/LNSGKGSNL b - 1"
    手数フィールドは省略可能（省略時は 1）。
    """
    parts = sfen.strip().split()
    if len(parts) not in (3, 4):
        raise SfenError(f"SFEN must have 3 or 4 fields: {sfen!r}")

    board = _parse_board(parts[0])
    turn = _parse_turn(parts[1])
    hands = _parse_hands(parts[2])
    move_count = 1
    if len(parts) == 4:
        if not parts[3] or parts[3].strip(_COUNT_DIGITS) or int(parts[3]) < 1:
            raise SfenError(f"invalid move number: {parts[3]!r}")
        move_count = int(parts[3])

    position.board = board
    position.hands = hands
    position.turn = turn
    logger.debug("loaded SFEN %r", sfen)
    return move_count


def to_sfen(position: Shogi, move_count: int = 1) -> str:
    """Return the SFEN representation of `position`."""
    rows: list[str] = []
    for y in range(1, RANKS + 1):
        row = ""
        empty = 0
        for x in range(FILES, 0, -1):
            piece = position.get(x, y)
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += piece.to_sfen()
        if empty:
            row += str(empty)
        rows.append(row)

    hands = ""
    for color in Color:
        summary = position.hands_summary(color)
        for kind in SFEN_HAND_ORDER:
            count = summary[kind]
            if count == 0:
                continue
            letter = kind_to_sfen(kind)
            if color == Color.WHITE:
                letter = letter.lower()
            hands += (str(count) if count > 1 else "") + letter

    turn = "b" if position.turn == Color.BLACK else "w"
    return f"{'/'.join(rows)} {turn} {hands or '-'} {move_count}"


def to_csa(position: Shogi) -> str:
    """Return the CSA representation of `position`.

    P1〜P9 の盤面行、P+ / P- の持ち駒行、最後に手番（+ / -）。
    """
    lines: list[str] = []
    for y in range(1, RANKS + 1):
        line = f"P{y}"
        for x in range(FILES, 0, -1):
            piece = position.get(x, y)
            line += " * " if piece is None else piece.to_csa()
        lines.append(line)
    for color in Color:
        line = "P+" if color == Color.BLACK else "P-"
        for kind in position.hands[color]:
            line += "00" + kind.csa
        lines.append(line)
    lines.append("+" if position.turn == Color.BLACK else "-")
    return "\n".join(lines)


def from_csa(position: Shogi, text: str) -> None:
    """Load a CSA position (the format written by to_csa) into `position`.

    P1〜P9 の盤面行は9行すべて必要。P+ / P- の持ち駒行は省略可。
    最後に手番行（+ / -）が必要。空行、コメント（'）と
    V / N / $ で始まるヘッダ行は読み飛ばす。
    """
    board: list[list[Piece | None]] = [[None] * RANKS for _ in range(FILES)]
    hands: tuple[list[Kind], list[Kind]] = ([], [])
    seen_ranks: set[int] = set()
    turn: Color | None = None

    for line in text.splitlines():
        line = line.rstrip()
        if not line or line[0] in "'VN$":
            continue
        if turn is not None:
            raise CsaError(f"unexpected line after side to move: {line!r}")
        if line in ("+", "-"):
            turn = Color.BLACK if line == "+" else Color.WHITE
        elif line[:2] in ("P+", "P-"):
            color = Color.BLACK if line[1] == "+" else Color.WHITE
            hands[color].extend(_parse_csa_hand(line[2:]))
        elif len(line) >= 2 and line[0] == "P" and line[1] in _RUN_DIGITS:
            y = int(line[1])
            if y in seen_ranks:
                raise CsaError(f"rank {y} given twice")
            seen_ranks.add(y)
            for x, piece in zip(range(FILES, 0, -1), _parse_csa_rank(line)):
                board[x - 1][y - 1] = piece
        else:
            raise CsaError(f"unsupported CSA line: {line!r}")

    if len(seen_ranks) != RANKS:
        raise CsaError(f"position must have {RANKS} rank lines")
    if turn is None:
        raise CsaError("missing side to move")

    for hand in hands:
        hand.sort()
    position.board = board
    position.hands = hands
    position.turn = turn
    logger.debug("loaded CSA position")


def _parse_csa_rank(line: str) -> list[Piece | None]:
    cells = line[2:].ljust(FILES * 3)
    if len(cells) != FILES * 3:
        raise CsaError(f"rank line must have {FILES} cells: {line!r}")
    pieces: list[Piece | None] = []
    for i in range(0, len(cells), 3):
        cell = cells[i:i + 3]
        if cell == " * ":
            pieces.append(None)
        elif cell[0] in "+-":
            color = Color.BLACK if cell[0] == "+" else Color.WHITE
            pieces.append(Piece(Kind.from_csa(cell[1:]), color))
        else:
            raise CsaError(f"invalid cell {cell!r} in {line!r}")
    return pieces


def _parse_csa_hand(text: str) -> list[Kind]:
    if len(text) % 4:
        raise CsaError(f"invalid hand entries: {text!r}")
    kinds: list[Kind] = []
    for i in range(0, len(text), 4):
        square, code = text[i:i + 2], text[i + 2:i + 4]
        if square != "00":
            raise CsaError(f"only hand pieces (00) are supported: {text!r}")
        kind = Kind.from_csa(code)
        if kind not in HAND_KINDS:
            raise CsaError(f"{code!r} cannot be held in hand")
        kinds.append(kind)
    return kinds


def _parse_board(text: str) -> list[list[Piece | None]]:
    rows = text.split("/")
    if len(rows) != RANKS:
        raise SfenError(f"board must have {RANKS} ranks: {text!r}")

    # board[x - 1][y - 1]
    board: list[list[Piece | None]] = [[None] * RANKS for _ in range(FILES)]
    for y, row in enumerate(rows, start=1):
        x = FILES
        i = 0
        while i < len(row):
            ch = row[i]
            if ch in _RUN_DIGITS:
                x -= int(ch)
                i += 1
                continue
            token = ch
            if ch == "+":
                if i + 1 >= len(row):
                    raise SfenError(f"dangling '+' in rank {y}: {row!r}")
                token = row[i:i + 2]
                i += 1
            if x < 1:
                raise SfenError(f"rank {y} overflows the board: {row!r}")
            board[x - 1][y - 1] = Piece.from_sfen(token)
            x -= 1
            i += 1
        if x != 0:
            raise SfenError(f"rank {y} does not cover {FILES} files: {row!r}")
    return board


def _parse_turn(text: str) -> Color:
    if text == "b":
        return Color.BLACK
    if text == "w":
        return Color.WHITE
    raise SfenError(f"invalid side to move: {text!r}")


def _parse_hands(text: str) -> tuple[list[Kind], list[Kind]]:
    hands: tuple[list[Kind], list[Kind]] = ([], [])
    if text == "-":
        return hands

    count = ""
    for ch in text:
        if ch in _COUNT_DIGITS:
            count += ch
            continue
        if count.startswith("0"):
            raise SfenError(f"invalid count {count!r} in hands: {text!r}")
        kind = kind_from_sfen(ch)
        if kind not in HAND_KINDS:
            raise SfenError(f"{ch!r} cannot be held in hand")
        color = Color.BLACK if ch.isupper() else Color.WHITE
        hands[color].extend([kind] * int(count or "1"))
        count = ""
    if count:
        raise SfenError(f"dangling count in hands: {text!r}")

    for hand in hands:
        hand.sort()
    return hands
