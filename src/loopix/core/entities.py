"""
どこで: `src/loopix/core/entities.py`。エンティティ（粒子・曲線上の点・周回要素）の生成。
何を: 乱数分布または閉形式の配置規則（黄金角螺旋・フィボナッチ球・等間隔リング）から初期集団を作る。
なぜ: 各スケッチで重複していた初期化ループを、設定値 + seed だけで再現できる形にまとめるため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from loopix.core.curves.spiral import GOLDEN_ANGLE
from loopix.core.errors import InvalidEntityConfig

Range = tuple[float, float]
Vec3 = tuple[float, float, float]


@dataclass(frozen=True, slots=True)
class Entity:
    """生成時に確定する不変のエンティティ。

    Notes
    -----
    フレームごとの位置や見た目は `t` とこれらの値だけから算出する。
    他エンティティの状態は参照しない。
    """

    position: Vec3 = (0.0, 0.0, 0.0)
    velocity: Vec3 = (0.0, 0.0, 0.0)
    radius: float = 0.0
    angle: float = 0.0
    speed: float = 0.0
    phase: float = 0.0
    size: float = 1.0
    color_index: int = 0
    height: float = 0.0
    seed: int = 0


@dataclass(frozen=True, slots=True)
class EntityConfig:
    """`create_entities()` の分布設定。

    Parameters
    ----------
    radius_range, speed_range, size_range, height_range : tuple[float, float]
        一様分布の [lo, hi]。
    velocity_range : tuple[float, float]
        各軸速度の一様分布 [lo, hi]。
    bounds : tuple[float, float, float]
        初期位置を一様に置く箱の半径（中心原点、各軸 [-b, b]）。
    palette_size : int
        color_index を [0, palette_size) から選ぶ。
    """

    radius_range: Range = (0.0, 0.0)
    speed_range: Range = (0.0, 0.0)
    size_range: Range = (1.0, 1.0)
    height_range: Range = (0.0, 0.0)
    velocity_range: Range = (0.0, 0.0)
    bounds: Vec3 = (0.0, 0.0, 0.0)
    palette_size: int = 1


def _check_range(name: str, value: Range, *, non_negative: bool) -> tuple[float, float]:
    try:
        lo, hi = float(value[0]), float(value[1])
    except Exception as exc:
        raise InvalidEntityConfig(f"{name} は (lo, hi) である必要がある: got={value!r}") from exc
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise InvalidEntityConfig(f"{name} は有限値である必要がある: got={value!r}")
    if lo > hi:
        raise InvalidEntityConfig(f"{name} は lo <= hi である必要がある: got={value!r}")
    if non_negative and lo < 0.0:
        raise InvalidEntityConfig(f"{name} は 0 以上である必要がある: got={value!r}")
    return lo, hi


def validate_config(config: EntityConfig) -> None:
    """設定を検証し、不正なら InvalidEntityConfig を送出する。"""

    _check_range("radius_range", config.radius_range, non_negative=True)
    _check_range("speed_range", config.speed_range, non_negative=False)
    _check_range("size_range", config.size_range, non_negative=True)
    _check_range("height_range", config.height_range, non_negative=False)
    _check_range("velocity_range", config.velocity_range, non_negative=False)
    if len(config.bounds) != 3 or any(float(b) < 0.0 for b in config.bounds):
        raise InvalidEntityConfig(f"bounds は 0 以上の 3 要素である必要がある: got={config.bounds!r}")
    if int(config.palette_size) <= 0:
        raise InvalidEntityConfig(f"palette_size は正の値である必要がある: got={config.palette_size!r}")


def _check_count(count: int) -> int:
    n = int(count)
    if n < 0:
        raise InvalidEntityConfig(f"count は 0 以上である必要がある: got={count!r}")
    return n


def create_entities(count: int, config: EntityConfig, *, rng: np.random.Generator) -> list[Entity]:
    """乱数分布からエンティティ集団を生成する。

    Parameters
    ----------
    count : int
        生成数（0 以上）。
    config : EntityConfig
        各フィールドの分布範囲。
    rng : numpy.random.Generator
        乱数源。同じ seed の Generator からは同じ集団が得られる。

    Returns
    -------
    list[Entity]
        各フィールドが config の範囲内に収まるエンティティ列。

    Raises
    ------
    InvalidEntityConfig
        count が負、または範囲設定が不正な場合。
    """

    n = _check_count(count)
    validate_config(config)
    if n == 0:
        return []

    radius = rng.uniform(*config.radius_range, size=n)
    speed = rng.uniform(*config.speed_range, size=n)
    size = rng.uniform(*config.size_range, size=n)
    height = rng.uniform(*config.height_range, size=n)
    angle = rng.uniform(0.0, 2.0 * math.pi, size=n)
    phase = rng.uniform(0.0, 2.0 * math.pi, size=n)
    velocity = rng.uniform(*config.velocity_range, size=(n, 3))
    bx, by, bz = (float(b) for b in config.bounds)
    position = rng.uniform(-1.0, 1.0, size=(n, 3)) * np.array([bx, by, bz])
    color_index = rng.integers(0, int(config.palette_size), size=n)
    seeds = rng.integers(0, 2**31 - 1, size=n)

    out: list[Entity] = []
    for i in range(n):
        out.append(
            Entity(
                position=(float(position[i, 0]), float(position[i, 1]), float(position[i, 2])),
                velocity=(float(velocity[i, 0]), float(velocity[i, 1]), float(velocity[i, 2])),
                radius=float(radius[i]),
                angle=float(angle[i]),
                speed=float(speed[i]),
                phase=float(phase[i]),
                size=float(size[i]),
                color_index=int(color_index[i]),
                height=float(height[i]),
                seed=int(seeds[i]),
            )
        )
    return out


def seed_phyllotaxis(
    count: int,
    *,
    spacing: float,
    angle_step: float = GOLDEN_ANGLE,
    size: float = 2.0,
    palette_size: int = 1,
) -> list[Entity]:
    """黄金角螺旋（Vogel 配置）でエンティティを並べる。

    i 番目は `radius = spacing * sqrt(i)`、`angle = i * angle_step`。
    """

    n = _check_count(count)
    if float(spacing) < 0.0:
        raise InvalidEntityConfig(f"spacing は 0 以上である必要がある: got={spacing!r}")
    if int(palette_size) <= 0:
        raise InvalidEntityConfig(f"palette_size は正の値である必要がある: got={palette_size!r}")
    out: list[Entity] = []
    for i in range(n):
        r = float(spacing) * math.sqrt(i)
        a = float(i) * float(angle_step)
        out.append(
            Entity(
                position=(r * math.cos(a), r * math.sin(a), 0.0),
                radius=r,
                angle=a,
                size=float(size),
                color_index=i % int(palette_size),
                seed=i,
            )
        )
    return out


def seed_fibonacci_sphere(
    count: int,
    *,
    radius: float,
    size: float = 2.0,
    palette_size: int = 1,
) -> list[Entity]:
    """フィボナッチ球（黄金角で緯度を刻む）で球面上に均等配置する。"""

    n = _check_count(count)
    if float(radius) < 0.0:
        raise InvalidEntityConfig(f"radius は 0 以上である必要がある: got={radius!r}")
    if int(palette_size) <= 0:
        raise InvalidEntityConfig(f"palette_size は正の値である必要がある: got={palette_size!r}")
    out: list[Entity] = []
    for i in range(n):
        # y は (1 - 1/n) .. -(1 - 1/n) を等間隔に取る
        y = 1.0 - (2.0 * i + 1.0) / float(n)
        ring = math.sqrt(max(0.0, 1.0 - y * y))
        a = float(i) * GOLDEN_ANGLE
        out.append(
            Entity(
                position=(
                    float(radius) * ring * math.cos(a),
                    float(radius) * y,
                    float(radius) * ring * math.sin(a),
                ),
                radius=float(radius),
                angle=a,
                size=float(size),
                color_index=i % int(palette_size),
                seed=i,
            )
        )
    return out


def seed_ring(
    count: int,
    *,
    radius: float,
    height: float = 0.0,
    speed: float = 0.0,
    size: float = 4.0,
    color_index: int = 0,
) -> list[Entity]:
    """半径 radius の円周上に count 個を等間隔で並べる。"""

    n = _check_count(count)
    if float(radius) < 0.0:
        raise InvalidEntityConfig(f"radius は 0 以上である必要がある: got={radius!r}")
    out: list[Entity] = []
    for i in range(n):
        a = 2.0 * math.pi * i / float(n)
        out.append(
            Entity(
                position=(float(radius) * math.cos(a), float(height), float(radius) * math.sin(a)),
                radius=float(radius),
                angle=a,
                speed=float(speed),
                phase=float(i),
                size=float(size),
                color_index=int(color_index),
                height=float(height),
                seed=i,
            )
        )
    return out


__all__ = [
    "Entity",
    "EntityConfig",
    "create_entities",
    "seed_fibonacci_sphere",
    "seed_phyllotaxis",
    "seed_ring",
    "validate_config",
]
