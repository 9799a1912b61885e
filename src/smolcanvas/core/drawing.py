"""
どこで: `src/smolcanvas/core/drawing.py`。
何を: fill/stroke の有効フラグと色・線幅を保持する描画状態機械（DrawingState / Painter）を提供する。
なぜ: 「どの図形が塗り/線のフラグを見るか」という描画規則を Surface 実装から独立させるため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from smolcanvas.core.color import RGBA, gray, rgba
from smolcanvas.core.surface import BLACK, Surface


@dataclass(slots=True)
class DrawingState:
    """ホスト 1 つにつき 1 つ持つ描画状態。

    Notes
    -----
    `fill_active` / `stroke_active` は Surface の save/restore 対象外。
    `fill_color` / `stroke_color` / `stroke_weight` は「最後に設定した値」の記録で、
    描画には使わない。実際の描画スタイルは Surface 側の状態で、そちらだけが restore で戻る。
    """

    fill_color: RGBA = BLACK
    stroke_color: RGBA = BLACK
    fill_active: bool = False
    stroke_active: bool = False
    stroke_weight: float = 1.0


class Painter:
    """DrawingState と Surface を束ね、図形命令をフラグに従って発行する。"""

    def __init__(self, surface: Surface, state: DrawingState | None = None) -> None:
        self.surface = surface
        self.state = state if state is not None else DrawingState()

    # --- 塗り / 線 ---

    def fill_rgb(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        self._set_fill(rgba(r, g, b, a))

    def fill(self, value: float, a: float = 1.0) -> None:
        self._set_fill(gray(value, a))

    def _set_fill(self, color: RGBA) -> None:
        self.state.fill_color = color
        self.state.fill_active = True
        self.surface.set_fill_style(color)

    def no_fill(self) -> None:
        self.state.fill_active = False

    def stroke_rgb(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        color = rgba(r, g, b, a)
        self.state.stroke_color = color
        self.state.stroke_active = True
        self.surface.set_stroke_style(color)

    def no_stroke(self) -> None:
        self.state.stroke_active = False

    def stroke_weight(self, weight: float) -> None:
        self.state.stroke_weight = float(weight)
        self.surface.set_line_width(weight)

    # --- 背景 ---

    def background(self, value: float) -> None:
        """描画面全体をグレー `value` で塗る。"""

        self.background_rgb(value, value, value)

    def background_rgb(self, r: float, g: float, b: float) -> None:
        """描画面全体を RGB で塗る。

        Notes
        -----
        実装上 `fill_rgb()` を経由するため、塗り色が背景色に変わり `fill_active` も True になる。
        """

        self.fill_rgb(r, g, b)
        self.surface.fill_rect(0.0, 0.0, float(self.surface.width), float(self.surface.height))

    # --- 図形 ---

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """線分を描く。`stroke_active` に関係なく常に線を引く。"""

        self.surface.stroke_line(x1, y1, x2, y2)

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        """矩形を塗る。`fill_active` に関係なく常に塗る。"""

        self.surface.fill_rect(x, y, width, height)

    def circle(self, x: float, y: float, radius: float) -> None:
        """円を描く。線 → 塗りの順で、それぞれ有効な場合だけ発行する。"""

        # 塗りが線の内側半分を覆う。既存スケッチの見た目はこの順序が前提。
        if self.state.stroke_active:
            self.surface.stroke_circle(x, y, radius)
        if self.state.fill_active:
            self.surface.fill_circle(x, y, radius)

    def text(self, x: float, y: float, text: str) -> None:
        self.surface.fill_text(str(text), x, y)

    def font(self, name: str, size: float) -> None:
        """フォントを設定する（ベースラインは上端）。"""

        self.surface.set_font(name, size, baseline="top")

    # --- 変換 ---

    def transform_push(self) -> None:
        self.surface.save()

    def transform_pop(self) -> None:
        self.surface.restore()

    def translate(self, x: float, y: float) -> None:
        self.surface.translate(x, y)

    def rotate(self, degrees: float) -> None:
        """回転する。角度は度で受け取り、ラジアンへ変換して Surface へ渡す。"""

        self.surface.rotate(float(degrees) * math.pi / 180.0)

    def scale(self, x: float, y: float | None = None) -> None:
        self.surface.scale(x, x if y is None else y)


__all__ = ["DrawingState", "Painter"]
