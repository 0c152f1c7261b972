# どこで: `src/loopix/core/sketch_registry.py`。
# 何を: スケッチ名から「エンティティ生成関数 + 描画/録画設定」を引けるレジストリを提供する。
# なぜ: スケッチごとに複製されていたフレームループを 1 つにし、差分（生成規則と定数）だけを登録させるため。

from __future__ import annotations

from collections.abc import Callable, ItemsView
from dataclasses import dataclass

import numpy as np

from loopix.core.camera import Camera
from loopix.core.clock import FrameClock
from loopix.core.palette import RGB, TWILIGHT, Palette
from loopix.core.scene import SceneState

PopulateFunc = Callable[[SceneState, np.random.Generator], None]
CameraFunc = Callable[[float], Camera]


@dataclass(frozen=True, slots=True)
class SketchSpec:
    """登録済みスケッチの定義。

    Notes
    -----
    `fps` / `bitrate` / `container` が None の項目は config.yaml の recording 既定値を使う。
    `fade` が None なら毎フレーム背景で塗りつぶし、0..255 なら半透明で重ねて残像を残す。
    `modes` が正なら M キーで `scene.controls["mode"]` を 0..modes-1 で巡回させる。
    """

    name: str
    populate: PopulateFunc
    canvas_size: tuple[int, int] = (720, 1280)
    increment: float = 0.008
    background: RGB = (0, 0, 0)
    fade: float | None = None
    palette: Palette = TWILIGHT
    camera: CameraFunc | None = None
    fps: float | None = None
    bitrate: int | None = None
    container: str | None = None
    export_name: str | None = None
    requires_gl: bool = False
    modes: int = 0
    description: str = ""

    @property
    def output_stem(self) -> str:
        """動画/PNG の既定ファイル名（拡張子なし）を返す。"""

        return self.export_name or self.name


class SketchRegistry:
    """スケッチ名と SketchSpec を対応付けるレジストリ。"""

    def __init__(self) -> None:
        self._items: dict[str, SketchSpec] = {}

    def _register(self, spec: SketchSpec, *, overwrite: bool = True) -> None:
        """スケッチを登録する（内部用）。

        Notes
        -----
        登録は `@sketch` デコレータ経由に統一する。
        """

        if not overwrite and spec.name in self._items:
            raise ValueError(f"sketch '{spec.name}' は既に登録されている")
        self._items[spec.name] = spec

    def get(self, name: str) -> SketchSpec:
        """名前に対応する SketchSpec を返す。

        Raises
        ------
        KeyError
            未登録の名前が指定された場合。
        """

        try:
            return self._items[name]
        except KeyError:
            known = ", ".join(sorted(self._items)) or "(none)"
            raise KeyError(f"未登録の sketch: {name!r}（登録済み: {known}）") from None

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __getitem__(self, name: str) -> SketchSpec:
        return self.get(name)

    def items(self) -> ItemsView[str, SketchSpec]:
        return self._items.items()

    def names(self) -> list[str]:
        return sorted(self._items)


sketch_registry = SketchRegistry()
"""グローバルな sketch レジストリインスタンス。"""


def sketch(
    func: PopulateFunc | None = None,
    *,
    name: str | None = None,
    canvas_size: tuple[int, int] = (720, 1280),
    increment: float = 0.008,
    background: RGB = (0, 0, 0),
    fade: float | None = None,
    palette: Palette = TWILIGHT,
    camera: CameraFunc | None = None,
    fps: float | None = None,
    bitrate: int | None = None,
    container: str | None = None,
    export_name: str | None = None,
    requires_gl: bool = False,
    modes: int = 0,
    overwrite: bool = True,
):
    """populate 関数をスケッチとして登録するデコレータ。

    関数名（または name）をスケッチ名として登録する。

    Examples
    --------
    @sketch(canvas_size=(720, 1280), increment=0.008)
    def orbit_dust(scene, rng):
        scene.add_layer("dust", create_entities(30, config, rng=rng), render_dust)
    """

    if not float(increment) > 0:
        raise ValueError(f"increment は正の値である必要がある: got={increment!r}")
    w, h = canvas_size
    if int(w) <= 0 or int(h) <= 0:
        raise ValueError(f"canvas_size は正の (width, height) である必要がある: got={canvas_size!r}")

    def decorator(f: PopulateFunc) -> PopulateFunc:
        doc = (f.__doc__ or "").strip().splitlines()
        spec = SketchSpec(
            name=str(name or f.__name__),
            populate=f,
            canvas_size=(int(w), int(h)),
            increment=float(increment),
            background=background,
            fade=fade,
            palette=palette,
            camera=camera,
            fps=fps,
            bitrate=bitrate,
            container=container,
            export_name=export_name,
            requires_gl=bool(requires_gl),
            modes=int(modes),
            description=doc[0] if doc else "",
        )
        sketch_registry._register(spec, overwrite=overwrite)
        return f

    if func is None:
        return decorator
    return decorator(func)


def build_scene(spec: SketchSpec, *, seed: int = 0) -> SceneState:
    """SketchSpec から時計とパレットを用意し、初期集団を生成した SceneState を返す。"""

    scene = SceneState(clock=FrameClock(increment=spec.increment), palette=spec.palette, seed=int(seed))
    spec.populate(scene, scene.rng())
    return scene


def regenerate(spec: SketchSpec, scene: SceneState) -> None:
    """エンティティ集団を丸ごと作り直す（クリック / R キー）。時計は維持する。"""

    scene.clear()
    spec.populate(scene, scene.rng())


__all__ = [
    "CameraFunc",
    "PopulateFunc",
    "SketchRegistry",
    "SketchSpec",
    "build_scene",
    "regenerate",
    "sketch",
    "sketch_registry",
]
