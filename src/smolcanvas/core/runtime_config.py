# どこで: `src/smolcanvas/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: ウィンドウ/ループ/描画品質の既定値をコード外から調整できるようにするため。

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """smolcanvas の実行時設定。"""

    config_path: Path | None
    canvas_size: tuple[int, int]
    canvas_title: str
    target_fps: float
    fps_smoothing: float
    msaa_samples: int
    circle_segments: int
    headless_viewport: tuple[int, int]


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _EXPLICIT_CONFIG_PATH = None if path is None else Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".smolcanvas" / "config.yaml",
        home / ".config" / "smolcanvas" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int]:
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    try:
        x = int(seq[0])
        y = int(seq[1])
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の整数配列である必要があります: got={value!r}") from exc
    if x < 0 or y < 0:
        raise ValueError(f"{key} は 0 以上である必要があります: got={value!r}")
    return (x, y)


def _as_float(value: Any, *, key: str) -> float:
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_int(value: Any, *, key: str) -> int:
    try:
        return int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    import yaml  # type: ignore[import-untyped]

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("smolcanvas")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="smolcanvas/resource/default_config.yaml")


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """トップレベルのセクション単位で 1 段だけ深くマージする。"""

    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            merged = dict(out[key])
            merged.update(value)
            out[key] = merged
        else:
            out[key] = value
    return out


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.smolcanvas/config.yaml` / `~/.config/smolcanvas/config.yaml`
    3) `set_config_path()` で指定したパス
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    for path in (discovered_path, explicit_path):
        if path is not None:
            text = path.read_text(encoding="utf-8")
            payload = _merge(payload, _load_yaml_text(text, source=str(path)))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    version_i = _as_int(version, key="version")
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    canvas = _as_mapping(payload.get("canvas"), key="canvas")
    loop = _as_mapping(payload.get("loop"), key="loop")
    render = _as_mapping(payload.get("render"), key="render")
    headless = _as_mapping(payload.get("headless"), key="headless")

    target_fps = _as_float(loop.get("target_fps"), key="loop.target_fps")
    if target_fps <= 0:
        raise ValueError(f"loop.target_fps は正の値である必要があります: got={target_fps}")

    smoothing = _as_float(loop.get("fps_smoothing"), key="loop.fps_smoothing")
    if not 0.0 <= smoothing < 1.0:
        raise ValueError(f"loop.fps_smoothing は [0, 1) である必要があります: got={smoothing}")

    segments = _as_int(render.get("circle_segments"), key="render.circle_segments")
    if segments < 3:
        raise ValueError(f"render.circle_segments は 3 以上である必要があります: got={segments}")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        canvas_size=_as_int_pair(canvas.get("size"), key="canvas.size"),
        canvas_title=str(canvas.get("title") or ""),
        target_fps=float(target_fps),
        fps_smoothing=float(smoothing),
        msaa_samples=_as_int(render.get("msaa_samples"), key="render.msaa_samples"),
        circle_segments=int(segments),
        headless_viewport=_as_int_pair(headless.get("viewport"), key="headless.viewport"),
    )
    _CONFIG_CACHE = cfg
    return cfg


__all__ = ["RuntimeConfig", "runtime_config", "set_config_path"]
