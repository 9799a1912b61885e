"""
どこで: `sketch/stupid_sort.py`。
何を: ランダムな 2 要素入れ替えで少しずつ整列していく棒グラフを描くスケッチ。
なぜ: shuffle / random / map_range と、クリックでの再シャッフルを示すため。
"""

import math

from smolcanvas import SmolCanvas, map_range, random, shuffle

c = SmolCanvas()

values: list[int] = []


@c.setup
def setup() -> None:
    c.fill_window()
    c.font("monospace", 20)
    values.extend(range(700))
    shuffle(values)


def mouse_pressed() -> None:
    shuffle(values)


def update(dt: float) -> None:
    for _ in range(len(values) // 4):
        index1 = math.floor(random(len(values)))
        index2 = math.floor(random(index1))
        if values[index1] > values[index2]:
            values[index1], values[index2] = values[index2], values[index1]


def draw() -> None:
    c.background(0)
    c.fill_rgb(1, 1, 1)
    c.stroke_rgb(1, 1, 1)
    each = c.width() / len(values)
    for i, value in enumerate(values):
        c.rect(each * i, 0, each + 1, map_range(value, 0, len(values), 0, c.height()))
    c.fill(0, 0.5)
    c.rect(10, 10, 100, 20)
    c.fill_rgb(1, 1, 1)
    c.text(10, 10, f"FPS: {round(c.fps)}")


c.mouse_pressed = mouse_pressed
c.update = update
c.draw = draw

if __name__ == "__main__":
    c.run()
