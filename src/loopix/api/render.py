"""
どこで: `src/loopix/api/render.py`。ヘッドレス出力の公開 API。
何を: ウィンドウを開かずにスケッチを動画（max_frames で自動停止）または PNG として書き出す。
なぜ: 同じ seed と増分から、実時間に依存しないフレーム正確な出力を得るため。
"""

from __future__ import annotations

import logging
from pathlib import Path

from loopix.api.sketches import get_sketch
from loopix.core.output_paths import output_path_for_sketch
from loopix.core.runtime_config import runtime_config
from loopix.core.sketch_registry import SketchSpec, build_scene
from loopix.export.image import default_png_output_path, save_png
from loopix.render.canvas import RasterCanvas
from loopix.runtime.frame_driver import FrameDriver
from loopix.runtime.recorder import EncoderFactory, Recorder, RecordingResult

_logger = logging.getLogger(__name__)


def create_recorder(
    spec: SketchSpec,
    *,
    max_frames: int | None = None,
    out: str | Path | None = None,
    run_id: str | None = None,
    encoder_factory: EncoderFactory | None = None,
) -> Recorder:
    """SketchSpec と config.yaml の録画既定値から Recorder を作る。

    Notes
    -----
    スケッチ側の fps / bitrate / container 指定が config より優先される。
    """

    cfg = runtime_config()
    container = spec.container or cfg.recording_container
    path = (
        Path(out)
        if out is not None
        else output_path_for_sketch(kind="video", ext=container, name=spec.output_stem, run_id=run_id)
    )
    return Recorder(
        output_path=path,
        size=spec.canvas_size,
        fps=spec.fps or cfg.recording_fps,
        max_frames=int(max_frames) if max_frames is not None else cfg.recording_max_frames,
        bitrate=spec.bitrate or cfg.recording_bitrate,
        container=container,
        keyframe_interval=cfg.keyframe_interval,
        encoder_factory=encoder_factory,
    )


def render_video(
    name: str,
    *,
    frames: int | None = None,
    seed: int = 0,
    out: str | Path | None = None,
    run_id: str | None = None,
    encoder_factory: EncoderFactory | None = None,
) -> RecordingResult | None:
    """スケッチを frames（既定は recording.max_frames）フレーム録画して保存する。

    Returns
    -------
    RecordingResult | None
        保存結果。エンコーダ障害で Failed になった場合は None。

    Raises
    ------
    UnsupportedEncoder
        ffmpeg / コーデックが使えず録画を開始できない場合。
    """

    spec = get_sketch(name)
    scene = build_scene(spec, seed=seed)
    canvas = RasterCanvas(spec.canvas_size)
    recorder = create_recorder(
        spec,
        max_frames=frames,
        out=out,
        run_id=run_id,
        encoder_factory=encoder_factory,
    )
    driver = FrameDriver.for_sketch(spec, scene, canvas, recorder=recorder)

    driver.start_recording()
    # capture_frame が max_frames で自動停止するか、障害で Failed になるまで回す
    while recorder.is_recording:
        driver.on_frame()

    if recorder.last_result is None:
        _logger.error("録画に失敗しました: %s (%s)", spec.name, recorder.last_error)
    return recorder.last_result


def render_still(
    name: str,
    *,
    frames: int = 1,
    seed: int = 0,
    out: str | Path | None = None,
    run_id: str | None = None,
) -> Path:
    """スケッチを frames フレーム進めた時点の画像を PNG として保存し、パスを返す。"""

    if int(frames) < 1:
        raise ValueError(f"frames は 1 以上である必要がある: got={frames!r}")
    spec = get_sketch(name)
    scene = build_scene(spec, seed=seed)
    canvas = RasterCanvas(spec.canvas_size)
    driver = FrameDriver.for_sketch(spec, scene, canvas)
    driver.run(int(frames))

    path = Path(out) if out is not None else default_png_output_path(spec.output_stem, run_id=run_id)
    saved = save_png(canvas.image, path)
    print(f"Saved PNG: {saved}")
    return saved


__all__ = ["create_recorder", "render_still", "render_video"]
