"""
どこで: `src/smolcanvas/core/surface.py`。
何を: 描画面（Surface）の抽象と、描画命令を記録するヘッドレス実装 `RecordingSurface` を定義する。
なぜ: 描画状態機械を GPU/ウィンドウから切り離し、テストやオフスクリーン実行でも同じ契約で動かすため。
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace

import numpy as np

from smolcanvas.core.color import RGBA, css_rgba
from smolcanvas.core.transform import Affine2D

BLACK: RGBA = (0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True, slots=True)
class SurfaceState:
    """save/restore の単位となる描画面の状態。"""

    transform: Affine2D = field(default_factory=Affine2D.identity)
    fill_style: RGBA = BLACK
    stroke_style: RGBA = BLACK
    line_width: float = 1.0
    font_name: str = "sans-serif"
    font_size: float = 10.0
    text_baseline: str = "alphabetic"


class Surface(ABC):
    """キャンバス 2D 風の状態スタックを持つ描画面。

    Notes
    -----
    - `save()` は現在の状態（変換/塗り/線/線幅/フォント）を積み、`restore()` で戻す。
    - 空スタックでの `restore()` は何もしない。
    - `resize()` は状態を初期値へ戻す（キャンバス要素のサイズ変更と同じ挙動）。
    """

    def __init__(self, width: int = 300, height: int = 150) -> None:
        self._width = 0
        self._height = 0
        self._state = SurfaceState()
        self._stack: list[SurfaceState] = []
        self._set_size(width, height)

    def _set_size(self, width: int, height: int) -> None:
        w = int(width)
        h = int(height)
        if w < 0 or h < 0:
            raise ValueError(f"サイズは 0 以上である必要がある: got=({width}, {height})")
        self._width = w
        self._height = h

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def state(self) -> SurfaceState:
        """現在の状態を返す。"""

        return self._state

    @property
    def depth(self) -> int:
        """save スタックの深さを返す。"""

        return len(self._stack)

    def resize(self, width: int, height: int) -> None:
        """描画面のサイズを変更し、状態を初期化する。"""

        self._set_size(width, height)
        self._state = SurfaceState()
        self._stack.clear()

    # --- 状態スタック ---

    def save(self) -> None:
        self._stack.append(self._state)

    def restore(self) -> None:
        if self._stack:
            self._state = self._stack.pop()

    def restore_to(self, depth: int) -> None:
        """スタック深さが `depth` になるまで restore する。"""

        while len(self._stack) > max(int(depth), 0):
            self.restore()

    # --- 変換 ---

    def translate(self, x: float, y: float) -> None:
        self._state = replace(self._state, transform=self._state.transform.translated(x, y))

    def rotate(self, radians: float) -> None:
        self._state = replace(self._state, transform=self._state.transform.rotated(radians))

    def scale(self, x: float, y: float) -> None:
        self._state = replace(self._state, transform=self._state.transform.scaled(x, y))

    # --- スタイル ---

    def set_fill_style(self, color: RGBA) -> None:
        self._state = replace(self._state, fill_style=color)

    def set_stroke_style(self, color: RGBA) -> None:
        self._state = replace(self._state, stroke_style=color)

    def set_line_width(self, width: float) -> None:
        self._state = replace(self._state, line_width=float(width))

    def set_font(self, name: str, size: float, *, baseline: str = "top") -> None:
        self._state = replace(
            self._state,
            font_name=str(name),
            font_size=float(size),
            text_baseline=str(baseline),
        )

    # --- ラスタ命令（実装側） ---

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        """現在の塗り色で矩形を塗る。"""

    @abstractmethod
    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """現在の線色/線幅で線分を描く。"""

    @abstractmethod
    def fill_circle(self, x: float, y: float, radius: float) -> None:
        """現在の塗り色で円を塗る。"""

    @abstractmethod
    def stroke_circle(self, x: float, y: float, radius: float) -> None:
        """現在の線色/線幅で円周を描く。"""

    @abstractmethod
    def fill_text(self, text: str, x: float, y: float) -> None:
        """現在のフォント/塗り色で文字列を描く。"""


@dataclass(frozen=True, slots=True)
class DrawCommand:
    """RecordingSurface が記録する 1 命令。

    `points` は変換適用後（デバイス座標）の点列。
    `size` は円なら半径、線なら線幅、文字ならフォントサイズ（いずれもスケール適用後）。
    """

    op: str
    points: tuple[tuple[float, float], ...]
    color: RGBA
    size: float = 0.0
    text: str | None = None

    def describe(self) -> str:
        pts = " ".join(f"({x:.3g},{y:.3g})" for x, y in self.points)
        suffix = f" {self.text!r}" if self.text is not None else ""
        return f"{self.op} {pts} {css_rgba(self.color)} size={self.size:g}{suffix}"


class RecordingSurface(Surface):
    """描画命令をリストへ記録するヘッドレス Surface。"""

    def __init__(self, width: int = 300, height: int = 150) -> None:
        super().__init__(width, height)
        self.commands: list[DrawCommand] = []

    def _points(self, *xy: tuple[float, float]) -> tuple[tuple[float, float], ...]:
        out = self._state.transform.apply(np.array(xy, dtype=np.float64))
        return tuple((float(px), float(py)) for px, py in out)

    def _record(self, op: str, points, color: RGBA, size: float = 0.0, text: str | None = None) -> None:
        self.commands.append(DrawCommand(op=op, points=points, color=color, size=float(size), text=text))

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        pts = self._points((x, y), (x + width, y), (x + width, y + height), (x, y + height))
        self._record("fill_rect", pts, self._state.fill_style)

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        t = self._state.transform
        self._record(
            "stroke_line",
            self._points((x1, y1), (x2, y2)),
            self._state.stroke_style,
            size=self._state.line_width * t.scale_factor,
        )

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        t = self._state.transform
        self._record("fill_circle", self._points((x, y)), self._state.fill_style, size=abs(radius) * t.scale_factor)

    def stroke_circle(self, x: float, y: float, radius: float) -> None:
        t = self._state.transform
        self._record("stroke_circle", self._points((x, y)), self._state.stroke_style, size=abs(radius) * t.scale_factor)

    def fill_text(self, text: str, x: float, y: float) -> None:
        t = self._state.transform
        self._record(
            "fill_text",
            self._points((x, y)),
            self._state.fill_style,
            size=self._state.font_size * t.scale_factor,
            text=str(text),
        )

    def ops(self) -> list[str]:
        """記録済み命令名の列を返す。"""

        return [cmd.op for cmd in self.commands]

    def clear_commands(self) -> None:
        self.commands.clear()

    def dump(self) -> str:
        """記録済み命令を 1 行 1 命令のテキストで返す。"""

        return "\n".join(cmd.describe() for cmd in self.commands)


def circle_outline(x: float, y: float, radius: float, segments: int) -> np.ndarray:
    """円周を `segments` 分割した `(segments, 2)` の点列を返す。"""

    n = max(int(segments), 3)
    theta = np.linspace(0.0, 2.0 * math.pi, n, endpoint=False)
    return np.stack([x + radius * np.cos(theta), y + radius * np.sin(theta)], axis=1)


__all__ = [
    "BLACK",
    "DrawCommand",
    "RecordingSurface",
    "Surface",
    "SurfaceState",
    "circle_outline",
]
