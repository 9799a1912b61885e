# どこで: `src/smolcanvas/interactive/gl/surface.py`。
# 何を: ModernGL で三角形を描き、pyglet のラベルで文字を描く Surface 実装を提供する。
# なぜ: core の描画状態機械が発行する命令を、pyglet ウィンドウ上でリアルタイムに表示するため。

from __future__ import annotations

from collections import OrderedDict
from typing import Any

import moderngl
import numpy as np
import pyglet

from smolcanvas.core.color import RGBA, rgba_to_unit
from smolcanvas.core.surface import Surface
from smolcanvas.interactive.gl import utils as render_utils
from smolcanvas.interactive.gl.shader import Shader
from smolcanvas.interactive.gl.tessellate import (
    fan_triangles,
    line_triangles,
    rect_triangles,
    ring_triangles,
)

# pyglet の font_size は pt（96dpi 前提）なので px から換算する。
_PX_TO_PT = 72.0 / 96.0


class GLSurface(Surface):
    """ModernGL コンテキスト上の描画面。"""

    def __init__(
        self,
        ctx: moderngl.Context,
        width: int,
        height: int,
        *,
        circle_segments: int = 64,
        initial_reserve: int = 1024 * 1024,
    ) -> None:
        self.ctx = ctx
        self.program = Shader.create_shader(ctx)
        self._circle_segments = int(circle_segments)
        self._initial_reserve = int(initial_reserve)
        self._vbo = ctx.buffer(reserve=self._initial_reserve, dynamic=True)
        self._vao = ctx.simple_vertex_array(self.program, self._vbo, "in_vert")
        # 同じ文字列を毎フレーム作り直さないよう、ラベルを LRU で使い回す。
        self._labels: OrderedDict[tuple[Any, ...], Any] = OrderedDict()
        self._labels_max_items = 256
        super().__init__(width, height)
        self._apply_viewport()

    def resize(self, width: int, height: int) -> None:
        super().resize(width, height)
        self._apply_viewport()

    def _apply_viewport(self) -> None:
        # 射影行列はサイズにのみ依存するため、初期化時とリサイズ時だけ書き込む。
        projection = render_utils.build_projection(float(self.width), float(self.height))
        self.program["projection"].write(projection.tobytes())
        self.ctx.viewport = (0, 0, int(self.width), int(self.height))

    def _ensure_capacity(self, nbytes: int) -> None:
        if nbytes <= self._vbo.size:
            return
        self._vbo.release()
        self._vbo = self.ctx.buffer(reserve=max(nbytes, self._initial_reserve), dynamic=True)
        self._vao.release()
        self._vao = self.ctx.simple_vertex_array(self.program, self._vbo, "in_vert")

    def _draw_triangles(self, vertices: np.ndarray, color: RGBA) -> None:
        if vertices.size == 0:
            return
        data = np.ascontiguousarray(vertices, dtype=np.float32)
        self._ensure_capacity(data.nbytes)
        self._vbo.orphan()
        self._vbo.write(data)

        # pyglet のラベル描画がブレンド設定を変えるため、毎回張り直す。
        self.ctx.enable(moderngl.BLEND)
        self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA
        self.program["color"].value = rgba_to_unit(color)
        self._vao.render(mode=moderngl.TRIANGLES, vertices=int(data.shape[0]))

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        s = self.state
        self._draw_triangles(rect_triangles(s.transform, x, y, width, height), s.fill_style)

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        s = self.state
        self._draw_triangles(line_triangles(s.transform, x1, y1, x2, y2, s.line_width), s.stroke_style)

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        s = self.state
        self._draw_triangles(
            fan_triangles(s.transform, x, y, radius, self._circle_segments), s.fill_style
        )

    def stroke_circle(self, x: float, y: float, radius: float) -> None:
        s = self.state
        self._draw_triangles(
            ring_triangles(s.transform, x, y, radius, s.line_width, self._circle_segments),
            s.stroke_style,
        )

    def fill_text(self, text: str, x: float, y: float) -> None:
        s = self.state
        (px, py), = s.transform.apply(np.array([(x, y)], dtype=np.float64))
        r, g, b, a = s.fill_style
        color = (int(r), int(g), int(b), int(round(float(a) * 255.0)))
        size_pt = s.font_size * s.transform.scale_factor * _PX_TO_PT
        anchor_y = "top" if s.text_baseline == "top" else "baseline"
        key = (text, s.font_name, size_pt, anchor_y)

        label = self._labels.get(key)
        if label is None:
            label = pyglet.text.Label(
                text,
                font_name=s.font_name,
                font_size=size_pt,
                anchor_x="left",
                anchor_y=anchor_y,
            )
            self._labels[key] = label
            while len(self._labels) > int(self._labels_max_items):
                _, evicted = self._labels.popitem(last=False)
                evicted.delete()
        else:
            self._labels.move_to_end(key)

        # pyglet は左下原点・y 上向きなので y を反転する。
        label.x = float(px)
        label.y = float(self.height) - float(py)
        label.rotation = s.transform.rotation_degrees
        label.color = color
        label.draw()

    def release(self) -> None:
        """GPU リソースを解放する。"""
        for label in self._labels.values():
            label.delete()
        self._labels.clear()
        self._vao.release()
        self._vbo.release()
        self.program.release()


__all__ = ["GLSurface"]
