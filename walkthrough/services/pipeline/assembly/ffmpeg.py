"""
ffmpeg command builders and runners

Builders are pure functions returning argv lists so they can be tested
without ffmpeg installed; ``run_ffmpeg`` and ``probe_duration`` execute them.
"""

import asyncio
import re
from typing import Dict, List, Optional, Sequence

from walkthrough.config import VideoConfig, VideoFormat
from walkthrough.core import ExecutionError, get_logger
from walkthrough.models import TextOverlay

logger = get_logger(__name__, component="ffmpeg")

STDERR_TAIL_CHARS = 800
DEFAULT_FADE_DURATION = 0.5

VIDEO_CODECS: Dict[str, List[str]] = {
    VideoFormat.MP4.value: ["-c:v", "libx264", "-preset", "veryfast", "-pix_fmt", "yuv420p"],
    VideoFormat.WEBM.value: ["-c:v", "libvpx-vp9", "-b:v", "0", "-crf", "32"],
}

AUDIO_CODECS: Dict[str, List[str]] = {
    VideoFormat.MP4.value: ["-c:a", "aac"],
    VideoFormat.WEBM.value: ["-c:a", "libopus"],
}

_HEX8_RE = re.compile(r"^#[0-9a-fA-F]{8}$")


def _fmt(value: float) -> str:
    return f"{float(value):.3f}".rstrip("0").rstrip(".")


def _format_key(config: Optional[VideoConfig]) -> str:
    if config is None:
        return VideoFormat.MP4.value
    return VideoFormat(config.format).value


def escape_drawtext_text(text: str) -> str:
    """Escape text for use inside a single-quoted drawtext ``text=`` value."""
    return (
        text.replace("\\", "\\\\")
        .replace("'", "’")
        .replace(":", "\\:")
        .replace("%", "\\%")
        .replace(",", "\\,")
    )


def ffmpeg_color(color: str, default_alpha: Optional[str] = None) -> str:
    """``#RRGGBBAA`` -> ``0xRRGGBB@alpha``; ``#RRGGBB`` gets ``default_alpha`` if given"""
    if _HEX8_RE.match(color):
        alpha = int(color[7:9], 16) / 255
        return f"0x{color[1:7]}@{alpha:.2f}"
    if color.startswith("#"):
        color = "0x" + color[1:]
    if default_alpha:
        return f"{color}@{default_alpha}"
    return color


def build_drawtext_filter(overlay: TextOverlay) -> str:
    """drawtext filter enabled on ``[start_time, end_time)`` at a percent position"""
    style = overlay.style
    parts = [
        f"text='{escape_drawtext_text(overlay.text)}'",
        f"font='{style.font_family}'",
        f"fontsize={style.font_size}",
        f"fontcolor={ffmpeg_color(style.color)}",
        f"x=(w-text_w)*{_fmt(overlay.position.x)}/100",
        f"y=(h-text_h)*{_fmt(overlay.position.y)}/100",
    ]
    if style.background_color:
        parts += [
            "box=1",
            f"boxcolor={ffmpeg_color(style.background_color, default_alpha='0.8')}",
            "boxborderw=10",
        ]
    parts.append(
        f"enable='gte(t,{_fmt(overlay.start_time)})*lt(t,{_fmt(overlay.end_time)})'"
    )
    return "drawtext=" + ":".join(parts)


def build_overlay_cmd(
    video_path: str,
    overlays: Sequence[TextOverlay],
    output_path: str,
    config: Optional[VideoConfig] = None,
) -> List[str]:
    """Burn all overlays in one pass; no overlays re-encodes unchanged."""
    if not overlays:
        return build_copy_cmd(video_path, output_path, config)

    key = _format_key(config)
    video_filter = ",".join(build_drawtext_filter(overlay) for overlay in overlays)
    return [
        "ffmpeg", "-y",
        "-i", video_path,
        "-vf", video_filter,
        *VIDEO_CODECS[key],
        "-c:a", "copy",
        output_path,
    ]


def build_copy_cmd(
    video_path: str,
    output_path: str,
    config: Optional[VideoConfig] = None,
) -> List[str]:
    key = _format_key(config)
    return [
        "ffmpeg", "-y",
        "-i", video_path,
        *VIDEO_CODECS[key],
        "-c:a", "copy",
        output_path,
    ]


def build_mux_cmd(
    video_path: str,
    audio_path: str,
    output_path: str,
    config: Optional[VideoConfig] = None,
) -> List[str]:
    """Copy the video stream, encode the audio, stop at the shorter stream."""
    key = _format_key(config)
    return [
        "ffmpeg", "-y",
        "-i", video_path,
        "-i", audio_path,
        "-c:v", "copy",
        *AUDIO_CODECS[key],
        "-map", "0:v:0",
        "-map", "1:a:0",
        "-shortest",
        output_path,
    ]


def build_fade_filters(transitions: Sequence[Dict]) -> List[str]:
    """``fadeIn``/``fadeOut`` specs -> fade filters; unknown types are skipped."""
    filters = []
    for transition in transitions:
        kind = transition.get("type")
        start = float(transition.get("time", 0.0))
        duration = float(transition.get("duration", DEFAULT_FADE_DURATION))
        if kind == "fadeIn":
            filters.append(f"fade=t=in:st={_fmt(start)}:d={_fmt(duration)}")
        elif kind == "fadeOut":
            filters.append(f"fade=t=out:st={_fmt(start)}:d={_fmt(duration)}")
        else:
            logger.debug(f"Ignoring unknown transition type {kind!r}")
    return filters


def build_transition_cmd(
    video_path: str,
    transitions: Sequence[Dict],
    output_path: str,
    config: Optional[VideoConfig] = None,
) -> List[str]:
    filters = build_fade_filters(transitions)
    if not filters:
        return build_copy_cmd(video_path, output_path, config)
    return [
        "ffmpeg", "-y",
        "-i", video_path,
        "-vf", ",".join(filters),
        *VIDEO_CODECS[_format_key(config)],
        "-c:a", "copy",
        output_path,
    ]


def build_resize_cmd(video_path: str, output_path: str, config: VideoConfig) -> List[str]:
    return [
        "ffmpeg", "-y",
        "-i", video_path,
        "-vf", f"scale={config.width}:{config.height},fps={config.fps}",
        *VIDEO_CODECS[_format_key(config)],
        "-c:a", "copy",
        output_path,
    ]


def build_probe_cmd(media_path: str) -> List[str]:
    return [
        "ffprobe", "-v", "error",
        "-show_entries", "format=duration",
        "-of", "default=noprint_wrappers=1:nokey=1",
        media_path,
    ]


async def run_ffmpeg(cmd: List[str], *, stage: str, timeout: float) -> str:
    """Run a media command; return stdout.

    Raises:
        ExecutionError: non-zero exit, missing binary or timeout
    """
    logger.debug(f"Running {stage}: {' '.join(cmd[:6])} ...")
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise ExecutionError(f"{cmd[0]} is not installed", stage=stage) from exc

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError as exc:
        process.kill()
        await process.wait()
        raise ExecutionError(f"{cmd[0]} timed out after {timeout:.0f}s", stage=stage) from exc

    if process.returncode != 0:
        tail = stderr.decode(errors="replace")[-STDERR_TAIL_CHARS:]
        logger.error(f"{stage} failed with exit code {process.returncode}: {tail}")
        raise ExecutionError(
            f"{cmd[0]} exited with code {process.returncode}",
            stage=stage,
            stderr=tail,
        )
    return stdout.decode(errors="replace")


async def probe_duration(media_path: str, timeout: float = 30.0) -> float:
    output = await run_ffmpeg(build_probe_cmd(media_path), stage="probe", timeout=timeout)
    try:
        return float(output.strip())
    except ValueError as exc:
        raise ExecutionError(f"Could not read duration of {media_path}", stage="probe") from exc
