# どこで: `src/smolcanvas/interactive/runtime/frame_scheduler.py`。
# 何を: ホストから届くフレームごとに dt/平滑化 fps を計算し、update(dt) → push → draw() → pop を実行して次フレームを要求する。
# なぜ: フレーム時刻の規則とコールバック実行順を 1 箇所に固定し、壊れたコールバックでループが止まらないようにするため。

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from dataclasses import dataclass
from typing import Any

from smolcanvas.core.surface import Surface
from smolcanvas.interactive.runtime.perf import PerfCollector
from smolcanvas.interactive.state import Callbacks

_logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]
RequestFrame = Callable[[FrameCallback], None]

DEFAULT_SMOOTHING = 0.9


@dataclass(frozen=True, slots=True)
class FrameTiming:
    """1 tick 分の時刻計算結果。

    `timestamp` はホスト時刻（ミリ秒）、`dt` は前フレームからの経過秒。
    `instant_fps` は dt > 0 のときだけ値を持つ。
    """

    timestamp: float
    dt: float
    instant_fps: float | None
    fps: float


class FrameScheduler:
    """ホストのフレーム提示機構に自分自身を再登録し続けるスケジューラ。"""

    def __init__(
        self,
        request_frame: RequestFrame,
        callbacks: Callbacks,
        surface: Surface,
        *,
        smoothing: float = DEFAULT_SMOOTHING,
        perf: PerfCollector | None = None,
    ) -> None:
        """スケジューラを初期化する。

        Parameters
        ----------
        request_frame : Callable[[Callable[[float], None]], None]
            次のフレームで 1 度だけ `callback(timestamp_ms)` を呼ぶようホストへ依頼する関数。
        callbacks : Callbacks
            update/draw を毎 tick 参照するコールバック枠。
        surface : Surface
            draw() を囲む変換スコープ（save/restore）を張る描画面。
        smoothing : float
            fps の指数移動平均の係数 k（`fps = fps*k + instant*(1-k)`）。
        perf : PerfCollector | None
            区間計測。None の場合は環境変数から作る。
        """

        k = float(smoothing)
        if not 0.0 <= k < 1.0:
            raise ValueError(f"smoothing は [0, 1) である必要がある: got={smoothing!r}")

        self._request_frame = request_frame
        self._callbacks = callbacks
        self._surface = surface
        self._smoothing = k
        self._perf = perf if perf is not None else PerfCollector.from_env()

        self.fps = 0.0
        # None は「前フレーム無し」。時刻 0 のフレームも正規のフレームとして扱う。
        self.last_timestamp: float | None = None
        self.frame_count = 0
        self.failures = 0
        self._running = False
        # ホストへ出した要求は常に高々 1 つ。start ごとに世代を進め、古い世代の要求は無視する。
        self._frame_requested = False
        self._generation = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """最初のフレームを要求する（実行中なら何もしない）。"""

        if self._running:
            return
        self._running = True
        self._request_next()

    def cancel(self) -> None:
        """以後の再登録を止める。既に要求済みのフレームが届いても tick しない。"""

        self._running = False
        self._generation += 1
        self._frame_requested = False

    def _request_next(self) -> None:
        self._frame_requested = True
        self._request_frame(partial(self._on_frame, self._generation))

    def _on_frame(self, generation: int, timestamp: float) -> None:
        if generation != self._generation or not self._running:
            return
        self._frame_requested = False
        self.tick(timestamp)

    def tick(self, timestamp: float) -> FrameTiming:
        """1 フレーム分の処理を行い、時刻計算結果を返す。

        Notes
        -----
        update/draw の例外はログに残して握りつぶし、push/pop の対応と次フレームの要求は必ず行う。
        ホストへの未処理の要求が残っている間は再要求しない（1 ホストフレームにつき 1 tick）。
        """

        with self._perf.frame():
            timing = self._advance_clock(float(timestamp))
            self.frame_count += 1

            callbacks = self._callbacks
            update = callbacks.update
            if update is not None:
                with self._perf.section("update"):
                    self._guarded("update", update, timing.dt)

            depth = self._surface.depth
            self._surface.save()
            try:
                draw = callbacks.draw
                if draw is not None:
                    with self._perf.section("draw"):
                        self._guarded("draw", draw)
            finally:
                # draw が push したまま戻っても、この tick の push より前の深さへ戻す。
                self._surface.restore_to(depth)

        if self._running and not self._frame_requested:
            self._request_next()
        return timing

    def _advance_clock(self, timestamp: float) -> FrameTiming:
        last = self.last_timestamp
        dt = 0.0
        if last is not None:
            dt = (timestamp - last) / 1000.0
            if dt < 0.0:
                _logger.warning(
                    "フレーム時刻が逆行しました（dt=0 として扱う）: last=%s, now=%s",
                    last,
                    timestamp,
                )
                dt = 0.0

        instant: float | None = None
        if dt > 0.0:
            instant = 1.0 / dt
            k = self._smoothing
            self.fps = self.fps * k + instant * (1.0 - k)

        self.last_timestamp = timestamp
        return FrameTiming(timestamp=timestamp, dt=dt, instant_fps=instant, fps=self.fps)

    def _guarded(self, name: str, fn: Callable[..., Any], *args: Any) -> None:
        try:
            fn(*args)
        except Exception:
            self.failures += 1
            self._perf.count_failure(name)
            _logger.exception("%s コールバックで例外が発生しました（frame=%d）", name, self.frame_count)


__all__ = ["DEFAULT_SMOOTHING", "FrameScheduler", "FrameTiming", "RequestFrame"]
