# どこで: `src/loopix/render/canvas.py`。
# 何を: Mark を Pillow の RGB 画像へ描き、RGB24 フレームとして取り出す描画面を提供する。
# なぜ: ヘッドレス録画・PNG 保存・プレビュー表示で同じフレームバッファを共有するため。

from __future__ import annotations

from typing import Protocol

import numpy as np
from PIL import Image, ImageDraw

from loopix.core.camera import FLAT, Camera
from loopix.core.marks import Backdrop, Dot, Mark, Ring, Stroke
from loopix.core.palette import RGB
from loopix.render.projection import Projector


class Canvas(Protocol):
    """FrameDriver が要求する描画面。"""

    @property
    def size(self) -> tuple[int, int]: ...

    def begin(self, background: RGB, fade: float | None = None) -> None: ...

    def draw(self, mark: Mark, *, camera: Camera = FLAT) -> bool: ...

    def frame_rgb24(self) -> bytes: ...


def _rgba(color: RGB, alpha: float) -> tuple[int, int, int, int]:
    a = int(round(min(max(float(alpha), 0.0), 255.0)))
    return int(color[0]), int(color[1]), int(color[2]), a


class RasterCanvas:
    """Pillow ベースの描画面。

    Notes
    -----
    RGB 画像に RGBA モードの ImageDraw で描くため、alpha はブレンドとして効く。
    行は上から下の順で、`frame_rgb24()` はそのまま ffmpeg（vflip なし）へ渡せる。
    """

    def __init__(self, size: tuple[int, int]) -> None:
        w, h = size
        if int(w) <= 0 or int(h) <= 0:
            raise ValueError("size は正の (width, height) である必要がある")
        self._size = (int(w), int(h))
        self._image = Image.new("RGB", self._size, (0, 0, 0))
        self._draw = ImageDraw.Draw(self._image, "RGBA")
        self._projectors: dict[Camera, Projector] = {}

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    @property
    def image(self) -> Image.Image:
        """現在のフレーム画像（描画面と共有）を返す。"""

        return self._image

    def _projector(self, camera: Camera) -> Projector:
        proj = self._projectors.get(camera)
        if proj is None:
            # カメラは t ごとに変わりうるので直近分だけ保持する
            if len(self._projectors) > 8:
                self._projectors.clear()
            proj = Projector(self._size, camera)
            self._projectors[camera] = proj
        return proj

    def begin(self, background: RGB, fade: float | None = None) -> None:
        """フレームを開始する。fade が None なら背景で塗りつぶし、数値なら半透明で重ねる。"""

        if fade is None:
            self._image.paste(tuple(int(c) for c in background), (0, 0, *self._size))
            return
        w, h = self._size
        self._draw.rectangle((0, 0, w, h), fill=_rgba(background, fade))

    def draw(self, mark: Mark, *, camera: Camera = FLAT) -> bool:
        """Mark を 1 つ描く。画面外・視点の後ろで描かなかった場合は False を返す。"""

        if isinstance(mark, Backdrop):
            return self._draw_backdrop(mark)
        proj = self._projector(camera)
        if isinstance(mark, Dot):
            hit = proj.project_point(mark.center)
            if hit is None:
                return False
            x, y, s = hit
            r = max(0.5 * float(mark.size) * s, 0.5)
            self._draw.ellipse((x - r, y - r, x + r, y + r), fill=_rgba(mark.color, mark.alpha))
            return True
        if isinstance(mark, Ring):
            hit = proj.project_point(mark.center)
            if hit is None:
                return False
            x, y, s = hit
            r = max(float(mark.radius) * s, 0.5)
            width = max(int(round(float(mark.weight) * s)), 1)
            self._draw.ellipse(
                (x - r, y - r, x + r, y + r),
                outline=_rgba(mark.color, mark.alpha),
                width=width,
            )
            return True
        if isinstance(mark, Stroke):
            return self._draw_stroke(mark, proj)
        raise TypeError(f"未対応の Mark: {type(mark).__name__}")

    def _draw_stroke(self, mark: Stroke, proj: Projector) -> bool:
        pts = mark.points
        if mark.closed and pts.shape[0] > 2:
            pts = np.concatenate([pts, pts[:1]], axis=0)
        if pts.shape[0] < 2:
            return False
        xy, scale, visible = proj.project(pts)
        fill = _rgba(mark.color, mark.alpha)
        width = max(int(round(float(mark.weight) * float(np.median(scale)))), 1)

        drawn = False
        run: list[tuple[float, float]] = []
        # 不可視点で区切った連続区間ごとに描く
        for i in range(xy.shape[0]):
            if bool(visible[i]):
                run.append((float(xy[i, 0]), float(xy[i, 1])))
                continue
            if len(run) >= 2:
                self._draw.line(run, fill=fill, width=width, joint="curve" if width > 2 else None)
                drawn = True
            run = []
        if len(run) >= 2:
            self._draw.line(run, fill=fill, width=width, joint="curve" if width > 2 else None)
            drawn = True
        return drawn

    def _draw_backdrop(self, mark: Backdrop) -> bool:
        w, h = (int(v) for v in mark.size)
        src = Image.frombytes("RGB", (w, h), mark.rgb)
        if src.size != self._size:
            src = src.resize(self._size, Image.Resampling.BILINEAR)
        self._image.paste(src, (0, 0))
        return True

    def frame_rgb24(self) -> bytes:
        """現在のフレームを RGB24（行は上から下）で返す。"""

        return self._image.tobytes()


__all__ = ["Canvas", "RasterCanvas"]
