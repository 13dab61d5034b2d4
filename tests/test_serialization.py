"""Tests for SFEN / CSA codecs and preset settings."""

from __future__ import annotations

import pytest

from shogi_position.config import PRESETS, PositionSetting
from shogi_position.errors import CsaError, SfenError, UnknownPreset
from shogi_position.piece import Piece
from shogi_position.position import Shogi
from shogi_position.types import Color, Kind

HIRATE_SFEN = "lnsgkgsnl/1r5b1/ppppppppp/9/9/9/PPPPPPPPP/1B5R1/LNSGKGSNL b - 1"
HIRATE_CSA_LINES = Shogi().to_csa().split("\n")


def _piece_count(position: Shogi) -> int:
    return sum(piece is not None for column in position.board for piece in column)


class TestPresets:
    def test_default_is_hirate(self) -> None:
        position = Shogi()
        assert position.to_sfen() == HIRATE_SFEN
        assert position.turn == Color.BLACK
        assert _piece_count(position) == 40

    def test_initial_pieces(self) -> None:
        position = Shogi()
        assert position.get(5, 9) == Piece(Kind.KING, Color.BLACK)
        assert position.get(5, 1) == Piece(Kind.KING, Color.WHITE)
        assert position.get(2, 8) == Piece(Kind.ROOK, Color.BLACK)
        assert position.get(8, 2) == Piece(Kind.ROOK, Color.WHITE)
        assert position.get(2, 2) == Piece(Kind.BISHOP, Color.WHITE)
        assert position.hands == ([], [])

    def test_bishop_handicap(self) -> None:
        position = Shogi(PositionSetting(preset="KA"))
        assert position.turn == Color.WHITE
        assert position.get(2, 2) is None
        assert _piece_count(position) == 39

    def test_ten_piece_handicap(self) -> None:
        position = Shogi(PositionSetting(preset="10"))
        white = [p for column in position.board for p in column if p is not None and p.color == Color.WHITE]
        assert len(white) == 10  # 玉と歩9枚

    def test_every_preset_loads(self) -> None:
        for name in PRESETS:
            position = Shogi(PositionSetting(preset=name))
            assert position.get(5, 1) == Piece(Kind.KING, Color.WHITE)

    def test_unknown_preset(self) -> None:
        with pytest.raises(UnknownPreset):
            Shogi(PositionSetting(preset="NOPE"))

    def test_sfen_setting_wins_over_preset(self) -> None:
        sfen = "4k4/9/9/9/9/9/9/9/4K4 w - 1"
        position = Shogi(PositionSetting(preset="KA", sfen=sfen))
        assert position.to_sfen() == sfen


class TestSfen:
    @pytest.mark.parametrize(
        "sfen",
        [
            HIRATE_SFEN,
            "4k4/9/9/9/4+R4/9/9/9/4K4 w 2Pb 12",
            "4k4/9/9/9/4+r4/9/9/9/4K4 b S2p 3",
            "ln1g5/1r2S1k2/p2pppn2/2ps2p2/1p7/2P6/PPSPPPPLP/2G2K1pr/LN4G1b w BGSLPnp 62",
        ],
    )
    def test_export_matches_import(self, sfen: str) -> None:
        position = Shogi()
        position.initialize_from_sfen(sfen)
        move_count = int(sfen.split()[3])
        assert position.to_sfen(move_count) == sfen

    def test_move_number_is_returned(self) -> None:
        position = Shogi()
        assert position.initialize_from_sfen("4k4/9/9/9/9/9/9/9/4K4 b - 42") == 42

    def test_move_number_is_optional(self) -> None:
        position = Shogi()
        assert position.initialize_from_sfen("4k4/9/9/9/9/9/9/9/4K4 b -") == 1

    def test_hands_are_sorted_kinds(self) -> None:
        position = Shogi()
        position.initialize_from_sfen("4k4/9/9/9/9/9/9/9/4K4 b R2Pg10p 1")
        assert position.hands[Color.BLACK] == [Kind.PAWN, Kind.PAWN, Kind.ROOK]
        assert position.hands[Color.WHITE] == [Kind.PAWN] * 10 + [Kind.GOLD]
        assert position.hands_summary(Color.WHITE)[Kind.PAWN] == 10

    @pytest.mark.parametrize(
        "sfen",
        [
            "",
            "9/9/9 b - 1",
            "lnsgkgsnl/1r5b1/ppppppppp/9/9/9/PPPPPPPPP/1B5R1/LNSGKGSNL x - 1",
            "lnsgkgsnlp/1r5b1/ppppppppp/9/9/9/PPPPPPPPP/1B5R1/LNSGKGSNL b - 1",
            "lnsgkgsn/1r5b1/ppppppppp/9/9/9/PPPPPPPPP/1B5R1/LNSGKGSNL b - 1",
            "lnsgkgsnl/1r5b1/ppppppppp/9/9/9/PPPPPPPPP/1B5R1/LNSGKGSN+ b - 1",
            "4k4/9/9/9/9/9/9/9/4K4 b K 1",
            "4k4/9/9/9/9/9/9/9/4K4 b 2 1",
            "4k4/9/9/9/9/9/9/9/4K4 b - one",
            "4k4/9/9/9/9/9/9/9/4K4 b - 0",
            "lnsgkgsnl/1r5b1/ppppppppp/9/9/9/PPPPPPPPP/1B5R1/LNSGKGSN² b - 1",
            "lnsgkgsnl/1r5b1/ppppppppp/9/9/9/PPPPPPPPP/1B5R1/LNSGKGSNL0 b - 1",
            "lnsgkgsnl/1r5b1/ppppppppp/9/09/9/PPPPPPPPP/1B5R1/LNSGKGSNL b - 1",
            "4k4/9/9/9/9/9/9/9/4K4 b ²P 1",
            "4k4/9/9/9/9/9/9/9/4K4 b 0P 1",
            "4k4/9/9/9/9/9/9/9/4K4 b 02P 1",
        ],
    )
    def test_malformed(self, sfen: str) -> None:
        with pytest.raises(SfenError):
            Shogi().initialize_from_sfen(sfen)

    def test_failed_load_keeps_previous_position(self) -> None:
        position = Shogi()
        with pytest.raises(SfenError):
            position.initialize_from_sfen("4k4/9/9/9/9/9/9/9/4K4 b - one")
        assert position.to_sfen() == HIRATE_SFEN


class TestCsa:
    def test_starting_position(self) -> None:
        lines = Shogi().to_csa().split("\n")
        assert lines[0] == "P1-KY-KE-GI-KI-OU-KI-GI-KE-KY"
        assert lines[1] == "P2 * -HI *  *  *  *  * -KA * "
        assert lines[6] == "P7+FU+FU+FU+FU+FU+FU+FU+FU+FU"
        assert lines[9:] == ["P+", "P-", "+"]

    def test_hands_and_turn(self) -> None:
        position = Shogi()
        position.initialize_from_sfen("4k4/9/9/9/9/9/9/9/4K4 w 2Pb 1")
        lines = position.to_csa().split("\n")
        assert lines[0] == "P1 *  *  *  * -OU *  *  *  * "
        assert lines[9] == "P+00FU00FU"
        assert lines[10] == "P-00KA"
        assert lines[11] == "-"

    @pytest.mark.parametrize(
        "sfen",
        [
            HIRATE_SFEN,
            "4k4/9/9/9/4+R4/9/9/9/4K4 w 2Pb 1",
            "ln1g5/1r2S1k2/p2pppn2/2ps2p2/1p7/2P6/PPSPPPPLP/2G2K1pr/LN4G1b w BGSLPnp 1",
        ],
    )
    def test_import_reads_export(self, sfen: str) -> None:
        exported = Shogi()
        exported.initialize_from_sfen(sfen)
        position = Shogi()
        position.initialize_from_csa(exported.to_csa())
        assert position.to_sfen() == sfen

    def test_headers_and_comments_are_skipped(self) -> None:
        text = "V2.2\nN+sente\nN-gote\n' 平手\n" + Shogi().to_csa() + "\n"
        position = Shogi()
        position.initialize_from_sfen("4k4/9/9/9/9/9/9/9/4K4 w - 1")
        position.initialize_from_csa(text)
        assert position.to_sfen() == HIRATE_SFEN

    def test_trailing_spaces_may_be_stripped(self) -> None:
        text = "\n".join(line.rstrip() for line in Shogi().to_csa().split("\n"))
        position = Shogi()
        position.initialize_from_csa(text)
        assert position.get(1, 2) is None
        assert position.get(8, 2) == Piece(Kind.ROOK, Color.WHITE)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "P1-KY-KE-GI-KI-OU-KI-GI-KE-KY\n+",
            "\n".join(HIRATE_CSA_LINES[:9] + ["P+00FU"]),
            "\n".join(HIRATE_CSA_LINES[:8] + [HIRATE_CSA_LINES[0], "+"]),
            "\n".join(HIRATE_CSA_LINES[:8] + ["P9+KY+KE+GI+KI+OU+KI+GI+KE+KY+FU", "+"]),
            "\n".join(HIRATE_CSA_LINES[:8] + ["P9+KY+KE+GI+KI+XX+KI+GI+KE+KY", "+"]),
            "\n".join(HIRATE_CSA_LINES[:9] + ["P+00OU", "+"]),
            "\n".join(HIRATE_CSA_LINES[:9] + ["P+55FU", "+"]),
            "\n".join(HIRATE_CSA_LINES[:9] + ["+", "+7776FU"]),
        ],
    )
    def test_malformed_import(self, text: str) -> None:
        position = Shogi()
        with pytest.raises(CsaError):
            position.initialize_from_csa(text)
        assert position.to_sfen() == HIRATE_SFEN
