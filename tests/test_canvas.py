import logging

import pytest

from smolcanvas import SmolCanvas, Vector, map_range
from smolcanvas.core.surface import RecordingSurface
from smolcanvas.interactive.host import HeadlessHost
from smolcanvas.interactive.input import TouchPoint


@pytest.fixture
def host() -> HeadlessHost:
    return HeadlessHost(viewport=(640, 480), offset=(8, 8))


@pytest.fixture
def canvas(host: HeadlessHost) -> SmolCanvas:
    return SmolCanvas(host)


def _surface(canvas: SmolCanvas) -> RecordingSurface:
    surface = canvas.host.surface
    assert isinstance(surface, RecordingSurface)
    return surface


def test_construction_requests_first_frame(host: HeadlessHost, canvas: SmolCanvas):
    assert host.pending_frames == 1
    assert host.input is canvas.input
    assert canvas.fps == 0.0
    assert (canvas.mouse_x, canvas.mouse_y) == (0.0, 0.0)
    assert (canvas.width(), canvas.height()) == (300, 150)
    assert not canvas.fill_active
    assert not canvas.stroke_active


def test_draw_runs_once_per_delivered_frame(host: HeadlessHost, canvas: SmolCanvas):
    calls: list[int] = []
    canvas.draw = lambda: calls.append(canvas.scheduler.frame_count)

    host.run([0, 16, 32])

    assert calls == [1, 2, 3]
    assert canvas.fps > 0.0
    assert canvas.scheduler.last_timestamp == 32.0


def test_update_receives_dt_in_seconds(host: HeadlessHost, canvas: SmolCanvas):
    dts: list[float] = []
    canvas.update = dts.append
    host.run([0, 16, 32])
    assert dts == [0.0, pytest.approx(0.016), pytest.approx(0.016)]


def test_setup_runs_immediately_and_works_as_decorator(canvas: SmolCanvas):
    seen: list[str] = []

    @canvas.setup
    def setup() -> None:
        seen.append("setup")
        canvas.set_title("demo")
        canvas.size(200, 100)

    assert seen == ["setup"]
    assert callable(setup)
    assert canvas.host.title == "demo"  # type: ignore[attr-defined]
    assert (canvas.width(), canvas.height()) == (200, 100)


def test_size_square_and_negative(canvas: SmolCanvas):
    canvas.size(64)
    assert (canvas.width(), canvas.height()) == (64, 64)
    with pytest.raises(ValueError):
        canvas.size(-1, 10)


def test_fill_window_matches_viewport(host: HeadlessHost, canvas: SmolCanvas):
    canvas.fill_window()
    assert host.margin_cleared
    assert (canvas.width(), canvas.height()) == (640, 480)


def test_drawing_goes_through_state_machine(host: HeadlessHost, canvas: SmolCanvas):
    def draw() -> None:
        canvas.background(0.5)
        canvas.no_fill()
        canvas.stroke_rgb(1, 0, 0)
        canvas.stroke_weight(2)
        canvas.translate(10, 20)
        canvas.circle(0, 0, 5)
        canvas.line(0, 0, 1, 1)
        canvas.rect(0, 0, 1, 1)
        canvas.text(0, 0, "hi")

    canvas.draw = draw
    host.advance(0)

    surface = _surface(canvas)
    assert surface.ops() == [
        "fill_rect",
        "stroke_circle",
        "stroke_line",
        "fill_rect",
        "fill_text",
    ]
    assert surface.commands[1].points == ((10.0, 20.0),)
    assert surface.commands[1].color == (255.0, 0.0, 0.0, 1.0)
    assert not canvas.fill_active
    # フレーム終了で変換は戻る。
    assert surface.depth == 0
    assert surface.state.transform.apply([(0.0, 0.0)]).tolist() == [[0.0, 0.0]]


def test_rotate_takes_degrees(host: HeadlessHost, canvas: SmolCanvas):
    def draw() -> None:
        canvas.rotate(90)
        canvas.rect(1, 0, 1, 1)

    canvas.draw = draw
    host.advance(0)
    x, y = _surface(canvas).commands[0].points[0]
    assert (x, y) == (pytest.approx(0.0, abs=1e-12), pytest.approx(1.0))


def test_pointer_and_key_input(canvas: SmolCanvas):
    pressed: list[tuple[float, float]] = []
    keys: list[str] = []
    canvas.mouse_pressed = lambda: pressed.append((canvas.mouse_x, canvas.mouse_y))
    canvas.key_pressed = keys.append

    canvas.input.pointer_move(30, 40)
    canvas.input.pointer_down()
    canvas.input.touch_move([TouchPoint(18, 28)])
    canvas.input.pointer_down()
    canvas.input.key_up("SPACE")

    assert pressed == [(30.0, 40.0), (10.0, 20.0)]
    assert keys == ["SPACE"]


def test_failing_draw_keeps_loop_alive(host: HeadlessHost, canvas: SmolCanvas, caplog: pytest.LogCaptureFixture):
    def draw() -> None:
        canvas.transform_push()
        canvas.translate(5, 5)
        raise RuntimeError("sketch bug")

    canvas.draw = draw
    with caplog.at_level(logging.ERROR):
        host.run([0, 16])

    assert canvas.scheduler.failures == 2
    assert _surface(canvas).depth == 0
    assert host.pending_frames == 1


def test_stop_prevents_further_frames(host: HeadlessHost, canvas: SmolCanvas):
    calls: list[int] = []
    canvas.draw = lambda: calls.append(1)
    host.advance(0)
    canvas.stop()
    host.run([16, 32])
    assert calls == [1]
    assert host.pending_frames == 0


def test_run_drives_host_then_cancels(host: HeadlessHost, canvas: SmolCanvas):
    canvas.run()
    assert not canvas.scheduler.running


def test_particle_like_sketch_runs_headless(host: HeadlessHost, canvas: SmolCanvas):
    pos = Vector.create(0, 0)
    vel = Vector.create(10, 5)

    def update(dt: float) -> None:
        pos.x += vel.x * dt
        pos.y += vel.y * dt

    def draw() -> None:
        canvas.background(0)
        canvas.fill(map_range(pos.x, 0, 10, 0, 1))
        canvas.circle(pos.x, pos.y, 2)

    canvas.update = update
    canvas.draw = draw
    host.run([0, 1000, 2000])

    assert pos == Vector.create(20, 10)
    assert _surface(canvas).ops().count("fill_circle") == 3


def test_direct_ticks_keep_one_tick_per_host_frame(host: HeadlessHost, canvas: SmolCanvas):
    dts: list[float] = []
    canvas.update = dts.append
    canvas.tick(0)
    canvas.tick(16)

    host.advance(32)
    host.advance(48)

    assert dts == [0.0, pytest.approx(0.016), pytest.approx(0.016), pytest.approx(0.016)]
    assert host.pending_frames == 1


def test_stop_then_start_does_not_double_the_frame_rate(host: HeadlessHost, canvas: SmolCanvas):
    draws: list[int] = []
    canvas.draw = lambda: draws.append(1)
    canvas.stop()
    canvas.scheduler.start()

    host.advance(0)
    host.advance(16)

    assert len(draws) == 2
    assert host.pending_frames == 1
