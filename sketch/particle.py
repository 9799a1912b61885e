"""
どこで: `sketch/particle.py`。
何を: マウス位置から飛び散る半透明の粒子を描くスケッチ。
なぜ: Vector と random、ウィンドウ全面サイズ指定の使い方を示すため。
"""

from smolcanvas import SmolCanvas, Vector, random

c = SmolCanvas()


class Particle:
    def __init__(self) -> None:
        self.vel = Vector(2)
        self.x = 0.0
        self.y = 0.0
        self.r = self.g = self.b = 0.0
        self.radius = 0.0
        self.reset()

    def reset(self) -> None:
        self.vel.x = random(-80, 80)
        self.vel.y = random(-80, 80)
        self.x = c.mouse_x
        self.y = c.mouse_y
        self.r = random(0.7, 1)
        self.g = random(0.7, 1)
        self.b = random(0.7, 1)
        self.radius = random(20)

    @property
    def dead(self) -> bool:
        return (
            self.x < 0
            or self.x > c.width()
            or self.y < 0
            or self.y > c.height()
            or self.radius < 0
        )

    def update(self, dt: float) -> None:
        self.x += self.vel.x * dt
        self.y += self.vel.y * dt
        self.radius -= 5 * dt
        if self.dead:
            self.reset()

    def draw(self) -> None:
        c.fill_rgb(self.r, self.g, self.b, 0.6)
        c.circle(self.x - self.radius / 2, self.y - self.radius / 2, self.radius)


particles: list[Particle] = []


@c.setup
def setup() -> None:
    c.fill_window()
    c.font("monospace", 20)
    particles.extend(Particle() for _ in range(150))


def update(dt: float) -> None:
    for particle in particles:
        particle.update(dt)


def draw() -> None:
    c.background(0)
    c.fill_rgb(1, 1, 1)
    c.stroke_rgb(1, 1, 1)
    c.text(10, 10, f"FPS: {round(c.fps)}")
    c.stroke_weight(0.5)
    for particle in particles:
        particle.draw()


c.update = update
c.draw = draw

if __name__ == "__main__":
    c.run()
