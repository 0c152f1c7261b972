"""
どこで: `src/loopix/export/image.py`。
何を: 描画面の現在フレームを PNG（Pillow）として保存する関数を提供する。
なぜ: P キー保存と `loopix still` で、同じ出力先規則と拡大率を使うため。
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from loopix.core.output_paths import output_path_for_sketch
from loopix.core.runtime_config import runtime_config


def default_png_output_path(name: str, *, run_id: str | None = None) -> Path:
    """スケッチ名に基づく PNG の既定保存パス `{output_root}/png/{name}[_run_id].png` を返す。"""

    return output_path_for_sketch(kind="png", ext="png", name=name, run_id=run_id)


def png_output_size(canvas_size: tuple[int, int]) -> tuple[int, int]:
    """canvas_size を基準に PNG 出力ピクセルサイズを返す。"""

    canvas_w, canvas_h = canvas_size
    if int(canvas_w) <= 0 or int(canvas_h) <= 0:
        raise ValueError("canvas_size は正の (width, height) である必要がある")
    scale = float(runtime_config().png_scale)
    return max(int(int(canvas_w) * scale), 1), max(int(int(canvas_h) * scale), 1)


def save_png(image: Image.Image, path: str | Path, *, scale_to_config: bool = True) -> Path:
    """画像を PNG として保存する。

    Parameters
    ----------
    image : PIL.Image.Image
        保存するフレーム（RGB）。
    path : str or Path
        出力パス。拡張子は `.png` である必要がある。
    scale_to_config : bool
        True なら `export.png.scale` に従ってリサイズしてから保存する。

    Returns
    -------
    Path
        出力 PNG パス。
    """

    _path = Path(path)
    if _path.suffix.lower() != ".png":
        raise ValueError(f"未対応の画像フォーマット: {_path.suffix!r}")
    _path.parent.mkdir(parents=True, exist_ok=True)

    out = image
    if scale_to_config:
        size = png_output_size(image.size)
        if size != image.size:
            out = image.resize(size, Image.Resampling.LANCZOS)
    out.save(_path, format="PNG")
    return _path


def save_rgb24_png(frame: bytes, size: tuple[int, int], path: str | Path) -> Path:
    """RGB24 バイト列（行は上から下）を PNG として保存する。"""

    w, h = size
    return save_png(Image.frombytes("RGB", (int(w), int(h)), frame), path)


__all__ = ["default_png_output_path", "png_output_size", "save_png", "save_rgb24_png"]
