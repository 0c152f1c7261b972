"""
どこで: `src/loopix/__main__.py`。`python -m loopix` のエントリポイント。
何を: list / run / render / still のサブコマンドでスケッチを一覧・プレビュー・書き出しする。
なぜ: スケッチごとのスクリプトを書かずに、名前と seed だけで同じ出力を再現できるようにするため。
"""

from __future__ import annotations

import argparse
import logging
import sys

from loopix.core.errors import UnsupportedEncoder
from loopix.core.runtime_config import runtime_config, set_config_path


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    if args.config:
        set_config_path(args.config)
    level = args.log_level or runtime_config().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from loopix import api

    if args.command == "list":
        for name in api.sketch_names():
            spec = api.get_sketch(name)
            print(f"{name:20s} {spec.description}")  # noqa: T201
        return 0

    try:
        api.get_sketch(args.name)
    except KeyError as exc:
        print(exc.args[0])  # noqa: T201
        return 2

    if args.command == "run":
        api.run(args.name, seed=int(args.seed), fps=args.fps)
        return 0

    if args.command == "render":
        try:
            result = api.render_video(
                args.name,
                frames=args.frames,
                seed=int(args.seed),
                out=args.out,
                run_id=args.run_id,
            )
        except UnsupportedEncoder as exc:
            print(f"録画を開始できません: {exc}")  # noqa: T201
            return 1
        return 0 if result is not None else 1

    if args.command == "still":
        api.render_still(
            args.name,
            frames=int(args.frames or 1),
            seed=int(args.seed),
            out=args.out,
            run_id=args.run_id,
        )
        return 0

    raise AssertionError(f"unknown command: {args.command!r}")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="loopix")
    p.add_argument("--config", default="", help="config.yaml のパス（既定の探索より優先）")
    p.add_argument("--log-level", default=None, help="logging レベル（例: DEBUG）")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="登録済みスケッチを一覧する")

    run_p = sub.add_parser("run", help="プレビューウィンドウで表示する")
    run_p.add_argument("name", help="スケッチ名")
    run_p.add_argument("--seed", type=int, default=0, help="エンティティ生成 seed")
    run_p.add_argument("--fps", type=float, default=None, help="プレビューの目標 fps")

    for cmd, help_text in (("render", "動画として書き出す"), ("still", "PNG として書き出す")):
        sp = sub.add_parser(cmd, help=help_text)
        sp.add_argument("name", help="スケッチ名")
        sp.add_argument("--seed", type=int, default=0, help="エンティティ生成 seed")
        sp.add_argument(
            "--frames",
            type=int,
            default=None,
            help="フレーム数（render の既定は recording.max_frames、still の既定は 1）",
        )
        sp.add_argument("--out", default=None, help="出力パス（省略時は output_dir 配下）")
        sp.add_argument("--run-id", default=None, help="出力ファイル名に付ける接尾辞")

    args = p.parse_args(argv)
    if args.log_level is not None:
        level = logging.getLevelName(str(args.log_level).upper())
        if not isinstance(level, int):
            p.error(f"未知の log level: {args.log_level!r}")
        args.log_level = level
    frames = getattr(args, "frames", None)
    if frames is not None and int(frames) < 1:
        p.error(f"--frames は 1 以上である必要がある: got={frames!r}")
    return args


if __name__ == "__main__":
    sys.exit(main())
