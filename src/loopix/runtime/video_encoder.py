# どこで: `src/loopix/runtime/video_encoder.py`。
# 何を: ffmpeg に raw RGB24 フレームを流し、mp4 / webm として保存するエンコーダを提供する。
# なぜ: コーデック本体は外部プロセスに任せ、フレーム列を決まった fps / bitrate で書き出すため。

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from loopix.core.errors import EncoderFault, UnsupportedEncoder

_logger = logging.getLogger(__name__)

# H.264 High profile のレベル（avc1.640028 = 4.0 / avc1.640032 = 5.0）
_H264_LEVEL_4_0_MAX_PIXELS = 1920 * 1088


@dataclass(frozen=True, slots=True)
class VideoCodec:
    """ffmpeg に渡すコーデック設定。"""

    container: str
    encoder: str
    pix_fmt: str = "yuv420p"
    profile: str | None = None
    level: str | None = None

    @property
    def ext(self) -> str:
        return self.container


def h264_level_for(size: tuple[int, int]) -> str:
    """キャンバス画素数から H.264 のレベル（"4.0" / "5.0"）を選ぶ。"""

    w, h = size
    return "4.0" if int(w) * int(h) <= _H264_LEVEL_4_0_MAX_PIXELS else "5.0"


@lru_cache(maxsize=4)
def available_encoders(ffmpeg: str = "ffmpeg") -> frozenset[str]:
    """`ffmpeg -encoders` から利用可能なエンコーダ名の集合を返す。

    Raises
    ------
    UnsupportedEncoder
        ffmpeg が見つからない場合。
    """

    exe = shutil.which(ffmpeg)
    if exe is None:
        raise UnsupportedEncoder("ffmpeg が見つかりません（PATH を確認してください）")
    try:
        proc = subprocess.run(
            [exe, "-hide_banner", "-encoders"],
            capture_output=True,
            check=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise UnsupportedEncoder(f"ffmpeg -encoders の実行に失敗しました: {exc}") from exc

    names: set[str] = set()
    for line in proc.stdout.splitlines():
        parts = line.split()
        # 例: " V....D libx264   libx264 H.264 / AVC ..."
        # 凡例行（" V..... = Video"）は除く
        if len(parts) >= 2 and len(parts[0]) == 6 and parts[0][0] in "VAS" and parts[1] != "=":
            names.add(parts[1])
    return frozenset(names)


def select_codec(container: str, *, size: tuple[int, int], encoders: frozenset[str] | None = None) -> VideoCodec:
    """コンテナ名から利用可能なコーデックを選ぶ。

    Notes
    -----
    - mp4: libx264（High profile / yuv420p、レベルはキャンバスサイズで決める）
    - webm: libvpx-vp9 を優先し、無ければ libvpx（VP8）へフォールバックする

    Raises
    ------
    UnsupportedEncoder
        該当するエンコーダが ffmpeg に無い場合、または未対応のコンテナ。
    """

    name = str(container).strip().lower().lstrip(".")
    found = available_encoders() if encoders is None else encoders
    if name == "mp4":
        if "libx264" not in found:
            raise UnsupportedEncoder("ffmpeg に libx264 がありません（mp4 を書き出せません）")
        return VideoCodec(
            container="mp4",
            encoder="libx264",
            profile="high",
            level=h264_level_for(size),
        )
    if name == "webm":
        for encoder in ("libvpx-vp9", "libvpx"):
            if encoder in found:
                return VideoCodec(container="webm", encoder=encoder)
        raise UnsupportedEncoder("ffmpeg に libvpx-vp9 / libvpx がありません（webm を書き出せません）")
    raise UnsupportedEncoder(f"未対応のコンテナです: {container!r}")


def _ffmpeg_command(
    *,
    output_path: Path,
    size: tuple[int, int],
    fps: float,
    codec: VideoCodec,
    bitrate: int,
    keyframe_interval: int,
    vflip: bool = False,
) -> list[str]:
    width, height = size
    cmd = [
        "ffmpeg",
        "-hide_banner",
        "-loglevel",
        "error",
        "-y",
        "-f",
        "rawvideo",
        "-pix_fmt",
        "rgb24",
        "-video_size",
        f"{int(width)}x{int(height)}",
        "-framerate",
        str(float(fps)),
        "-i",
        "-",
    ]
    if vflip:
        cmd += ["-vf", "vflip"]
    cmd += [
        "-an",
        "-c:v",
        codec.encoder,
        "-b:v",
        str(int(bitrate)),
        "-g",
        str(int(keyframe_interval)),
        "-pix_fmt",
        codec.pix_fmt,
    ]
    if codec.profile is not None:
        cmd += ["-profile:v", codec.profile]
    if codec.level is not None:
        cmd += ["-level:v", codec.level]
    if codec.container == "mp4":
        cmd += ["-movflags", "+faststart"]
    cmd.append(str(output_path))
    return cmd


class VideoEncoder:
    """raw RGB24 フレーム列を動画へ保存するエンコーダ。"""

    def __init__(
        self,
        *,
        output_path: Path,
        size: tuple[int, int],
        fps: float,
        bitrate: int,
        codec: VideoCodec,
        keyframe_interval: int = 60,
        vflip: bool = False,
    ) -> None:
        """エンコーダを初期化して ffmpeg を起動する。"""

        _output_path = Path(output_path)
        _output_path.parent.mkdir(parents=True, exist_ok=True)

        _fps = float(fps)
        if _fps <= 0:
            raise ValueError("fps は正の値である必要がある")
        if int(bitrate) <= 0:
            raise ValueError("bitrate は正の値である必要がある")

        width, height = size
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError("size は正の (width, height) である必要がある")
        if codec.encoder == "libx264" and (int(width) % 2 or int(height) % 2):
            raise UnsupportedEncoder(f"yuv420p には偶数サイズが必要です: got={width}x{height}")

        self.path = _output_path
        self.size = (int(width), int(height))
        self.fps = _fps
        self.codec = codec
        self._frame_bytes = self.size[0] * self.size[1] * 3
        self._proc: subprocess.Popen[bytes] | None = None

        cmd = _ffmpeg_command(
            output_path=self.path,
            size=self.size,
            fps=self.fps,
            codec=codec,
            bitrate=int(bitrate),
            keyframe_interval=int(keyframe_interval),
            vflip=bool(vflip),
        )
        _logger.debug("ffmpeg command: %s", " ".join(cmd))
        try:
            self._proc = subprocess.Popen(
                cmd,
                stdin=subprocess.PIPE,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise UnsupportedEncoder("ffmpeg が見つかりません（PATH を確認してください）") from e

        if self._proc.stdin is None:
            raise EncoderFault("ffmpeg stdin pipe の作成に失敗しました")

    def write_frame_rgb24(self, frame: bytes) -> None:
        """1 フレーム分の RGB24 バイト列を書き込む。"""

        proc = self._proc
        if proc is None:
            raise EncoderFault("エンコーダは終了しています")
        if len(frame) != self._frame_bytes:
            raise ValueError(
                f"frame bytes が想定サイズと一致しません: got={len(frame)}, expected={self._frame_bytes}"
            )
        if proc.poll() is not None:
            raise EncoderFault(f"ffmpeg が途中で終了しました (code={proc.returncode})")
        stdin = proc.stdin
        if stdin is None:
            raise EncoderFault("ffmpeg stdin pipe が閉じられています")
        try:
            stdin.write(frame)
        except (BrokenPipeError, ValueError) as e:
            raise EncoderFault("ffmpeg への書き込みに失敗しました") from e

    def close(self) -> None:
        """入力を閉じ、ffmpeg の終了を待つ。"""

        proc = self._proc
        if proc is None:
            return

        try:
            # communicate() は stdin を flush してから close する
            _stdout, stderr = proc.communicate(input=b"")
        except (BrokenPipeError, ValueError) as e:
            raise EncoderFault("ffmpeg の終了処理に失敗しました") from e
        finally:
            self._proc = None

        if proc.returncode != 0:
            details = ""
            if stderr:
                details = stderr.decode("utf-8", errors="replace").strip()
            raise EncoderFault(
                f"ffmpeg が失敗しました (code={proc.returncode}). {details}".strip()
            )

    def abort(self) -> None:
        """ffmpeg を強制終了する（出力ファイルは不完全なまま残る）。"""

        proc = self._proc
        if proc is None:
            return
        self._proc = None
        proc.kill()
        proc.wait()


def open_video_encoder(
    *,
    output_path: Path,
    size: tuple[int, int],
    fps: float,
    bitrate: int,
    container: str,
    keyframe_interval: int = 60,
) -> VideoEncoder:
    """コンテナ名からコーデックを選んで VideoEncoder を起動する（Recorder の既定 factory）。"""

    codec = select_codec(container, size=size)
    if codec.encoder == "libvpx":
        _logger.warning("libvpx-vp9 が無いため VP8 (libvpx) で書き出します")
    return VideoEncoder(
        output_path=output_path,
        size=size,
        fps=fps,
        bitrate=bitrate,
        codec=codec,
        keyframe_interval=keyframe_interval,
    )


__all__ = [
    "VideoCodec",
    "VideoEncoder",
    "available_encoders",
    "h264_level_for",
    "open_video_encoder",
    "select_codec",
]
