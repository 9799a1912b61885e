# どこで: `src/smolcanvas/interactive/gl/shader.py`。
# 何を: 単色三角形を描くシェーダプログラムを生成する。
# なぜ: 塗り/線/円をすべて三角形列に落とし、1 種類のプログラムで描けるようにするため。

from __future__ import annotations

from typing import Any

VERTEX_SHADER = """
#version 330
uniform mat4 projection;
in vec2 in_vert;
void main() {
    gl_Position = projection * vec4(in_vert, 0.0, 1.0);
}
"""

FRAGMENT_SHADER = """
#version 330
uniform vec4 color;
out vec4 frag_color;
void main() {
    frag_color = color;
}
"""


class Shader:
    """シェーダ生成のまとめ役。"""

    @staticmethod
    def create_shader(ctx: Any) -> Any:
        return ctx.program(vertex_shader=VERTEX_SHADER, fragment_shader=FRAGMENT_SHADER)
