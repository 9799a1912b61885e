from pathlib import Path

import pytest

from smolcanvas.core.runtime_config import runtime_config, set_config_path


def test_packaged_defaults_are_loaded():
    cfg = runtime_config()
    assert cfg.config_path is None
    assert cfg.canvas_size == (300, 150)
    assert cfg.canvas_title == "smolcanvas"
    assert cfg.target_fps == 60.0
    assert cfg.fps_smoothing == pytest.approx(0.9)
    assert cfg.msaa_samples == 4
    assert cfg.circle_segments == 64
    assert cfg.headless_viewport == (800, 600)


def test_runtime_config_is_cached():
    assert runtime_config() is runtime_config()


def test_discovered_config_overrides_only_given_keys(tmp_path: Path):
    discovered = tmp_path / ".smolcanvas" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text("canvas:\n  size: [640, 480]\n", encoding="utf-8")

    cfg = runtime_config()
    assert cfg.config_path == discovered
    assert cfg.canvas_size == (640, 480)
    # 同じセクションの他キーは同梱既定値のまま残る。
    assert cfg.canvas_title == "smolcanvas"


def test_explicit_config_wins_over_discovered(tmp_path: Path):
    discovered = tmp_path / ".smolcanvas" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text("loop:\n  target_fps: 30\n", encoding="utf-8")

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("loop:\n  target_fps: 120\n  fps_smoothing: 0.5\n", encoding="utf-8")
    set_config_path(explicit)

    cfg = runtime_config()
    assert cfg.config_path == explicit
    assert cfg.target_fps == 120.0
    assert cfg.fps_smoothing == pytest.approx(0.5)


def test_missing_explicit_config_raises(tmp_path: Path):
    set_config_path(tmp_path / "missing.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


@pytest.mark.parametrize(
    "text, exc",
    [
        ("loop:\n  fps_smoothing: 1.0\n", ValueError),
        ("loop:\n  target_fps: 0\n", ValueError),
        ("render:\n  circle_segments: 2\n", ValueError),
        ("canvas:\n  size: [1, 2, 3]\n", RuntimeError),
        ("canvas: 3\n", RuntimeError),
        ("version: 2\n", RuntimeError),
        ("- a\n- b\n", RuntimeError),
    ],
)
def test_invalid_config_values_raise(tmp_path: Path, text: str, exc: type[Exception]):
    path = tmp_path / "bad.yaml"
    path.write_text(text, encoding="utf-8")
    set_config_path(path)
    with pytest.raises(exc):
        runtime_config()
