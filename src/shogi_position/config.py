"""Initial-position settings.

初期局面の設定定義。
平手・駒落ちのプリセットは SFEN 文字列で持ち、PositionSetting で選ぶ。
"""

from __future__ import annotations

from dataclasses import dataclass

_BLACK_CAMP = "ppppppppp/9/9/9/PPPPPPPPP/1B5R1/LNSGKGSNL"

# プリセット名 → SFEN
# 駒落ちは上手（後手）が駒を落とし、上手から指す
PRESETS: dict[str, str] = {
    "HIRATE": f"lnsgkgsnl/1r5b1/{_BLACK_CAMP} b - 1",  # 平手
    "KY": f"lnsgkgsn1/1r5b1/{_BLACK_CAMP} w - 1",      # 香落ち
    "KY_R": f"1nsgkgsnl/1r5b1/{_BLACK_CAMP} w - 1",    # 右香落ち
    "KA": f"lnsgkgsnl/1r7/{_BLACK_CAMP} w - 1",        # 角落ち
    "HI": f"lnsgkgsnl/7b1/{_BLACK_CAMP} w - 1",        # 飛車落ち
    "HIKY": f"lnsgkgsn1/7b1/{_BLACK_CAMP} w - 1",      # 飛香落ち
    "2": f"lnsgkgsnl/9/{_BLACK_CAMP} w - 1",           # 二枚落ち
    "3": f"lnsgkgsn1/9/{_BLACK_CAMP} w - 1",           # 三枚落ち
    "4": f"1nsgkgsn1/9/{_BLACK_CAMP} w - 1",           # 四枚落ち
    "5": f"2sgkgsn1/9/{_BLACK_CAMP} w - 1",            # 五枚落ち
    "5_L": f"1nsgkgs2/9/{_BLACK_CAMP} w - 1",          # 左五枚落ち
    "6": f"2sgkgs2/9/{_BLACK_CAMP} w - 1",             # 六枚落ち
    "8": f"3gkg3/9/{_BLACK_CAMP} w - 1",               # 八枚落ち
    "10": f"4k4/9/{_BLACK_CAMP} w - 1",                # 十枚落ち
}


@dataclass(frozen=True)
class PositionSetting:
    """Configuration for Shogi.initialize().

    Attributes:
        preset: PRESETS のキー（"HIRATE" など）
        sfen:   指定されていればプリセットより優先して使う SFEN 文字列
    """

    preset: str = "HIRATE"
    sfen: str | None = None


# 平手の設定（Shogi() のデフォルト）
HIRATE_SETTING = PositionSetting()
