"""
どこで: `src/smolcanvas/core/color.py`。
何を: 0..1 の単位レンジで指定した色を、描画面のチャンネルレンジ（RGB 0..255 / alpha 0..1）へ変換する。
なぜ: fill/stroke/background が同じ変換規則を共有し、Surface 実装側はレンジだけを意識すれば済むようにするため。
"""

from __future__ import annotations

from smolcanvas.core.mathutil import map_range

RGBA = tuple[float, float, float, float]

CHANNEL_MAX = 255.0


def rgba(r: float, g: float, b: float, a: float = 1.0) -> RGBA:
    """単位レンジの RGBA を描画面レンジ `(r255, g255, b255, a01)` に変換して返す。

    Notes
    -----
    clamp はしない。レンジ外の値はそのまま写像される。
    """

    return (
        map_range(r, 0.0, 1.0, 0.0, CHANNEL_MAX),
        map_range(g, 0.0, 1.0, 0.0, CHANNEL_MAX),
        map_range(b, 0.0, 1.0, 0.0, CHANNEL_MAX),
        float(a),
    )


def gray(value: float, a: float = 1.0) -> RGBA:
    """グレースケール値を `rgba(value, value, value, a)` として返す。"""

    return rgba(value, value, value, a)


def rgba_to_unit(color: RGBA) -> RGBA:
    """描画面レンジの RGBA を GPU 向けの 0..1 RGBA に戻す。"""

    r, g, b, a = color
    return (
        float(r) / CHANNEL_MAX,
        float(g) / CHANNEL_MAX,
        float(b) / CHANNEL_MAX,
        float(a),
    )


def css_rgba(color: RGBA) -> str:
    """`rgba(r,g,b,a)` 形式の文字列を返す（ログ/デバッグ表示用）。"""

    r, g, b, a = color
    return f"rgba({r:g},{g:g},{b:g},{a:g})"


__all__ = ["CHANNEL_MAX", "RGBA", "css_rgba", "gray", "rgba", "rgba_to_unit"]
