"""
どこで: `sketch/example.py`。
何を: 回転する円・矩形・水平線と FPS 表示を描く最小スケッチ。
なぜ: update/draw/mouse_pressed/key_pressed の契約をひと通り動かして確認するため。
"""

import logging

from smolcanvas import SmolCanvas

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("example")

c = SmolCanvas()

angle = 0.0
dist = 0.0
line_y = 0.0


@c.setup
def setup() -> None:
    global line_y
    c.set_title("Hello world")
    c.size(500)
    c.font("monospace", 15)
    line_y = c.height() / 2


def update(dt: float) -> None:
    global angle, dist
    angle = (angle + 90 * dt) % 360
    dist = (dist + 15 * dt) % 150


def mouse_pressed() -> None:
    global line_y
    line_y -= 40
    if line_y < 0:
        line_y = c.height()


def key_pressed(key: str) -> None:
    logger.info("key: %s", key)


def draw() -> None:
    c.background(0)
    c.fill_rgb(1, 1, 1)
    c.text(10, 10, f"FPS: {round(c.fps)}")
    c.stroke_rgb(1, 1, 1)
    c.line(0, line_y, c.width(), line_y)
    c.translate(c.width() / 2, c.height() / 2)
    c.fill_rgb(0.8, 0.2, 0.2)
    c.rect(-25, -25, 50, 50)
    c.rotate(angle)
    c.translate(dist, dist)
    c.fill_rgb(1, 1, 1)
    c.circle(-15, -15, 30)


c.update = update
c.mouse_pressed = mouse_pressed
c.key_pressed = key_pressed
c.draw = draw

if __name__ == "__main__":
    c.run()
