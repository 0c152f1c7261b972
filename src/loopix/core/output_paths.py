# どこで: `src/loopix/core/output_paths.py`。
# 何を: スケッチ名に基づき、出力ファイル（動画 / PNG）の保存先パスを決める。
# なぜ: `output/{kind}/` 配下にスケッチごとの固定ファイル名で整理するため。

from __future__ import annotations

import re
from pathlib import Path

from loopix.core.runtime_config import output_root_dir


def _sanitize_run_id(run_id: str) -> str:
    """run_id をファイル名の一部として使える形に正規化して返す。"""

    return re.sub(r"[^A-Za-z0-9._-]+", "_", str(run_id))


def _run_id_suffix(run_id: str | None) -> str:
    """run_id の接尾辞（例: `_v1`）を返す。未指定なら空文字を返す。"""

    if run_id is None:
        return ""
    s = str(run_id).strip()
    if not s:
        return ""
    return f"_{_sanitize_run_id(s)}"


def output_path_for_sketch(
    *,
    kind: str,
    ext: str,
    name: str,
    run_id: str | None = None,
) -> Path:
    """スケッチの出力ファイルパス `output_root/{kind}/{name}[_run_id].{ext}` を返す。

    Notes
    -----
    name に拡張子が付いていれば取り除く（`metallic_ratios_3d.mp4` → `metallic_ratios_3d`）。
    """

    ext_norm = str(ext).lstrip(".").strip()
    if not ext_norm:
        raise ValueError("ext は空でない必要がある")

    stem = Path(str(name)).stem.strip()
    if not stem:
        raise ValueError("name は空でない必要がある")

    filename = f"{_sanitize_run_id(stem)}{_run_id_suffix(run_id)}.{ext_norm}"
    return output_root_dir() / str(kind) / filename


__all__ = ["output_path_for_sketch"]
