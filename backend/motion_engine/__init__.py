"""Motion graphic render engine: sanitization, filter graphs and ffmpeg execution."""

from .exceptions import EncodeError, EncodeTimeoutError, MotionEngineError
from .ffmpeg_renderer import FFmpegRenderer
from .filter_graph import FilterGraph, FilterStage, StageKind, build_graph
from .parameters import MotionProfile, frame_count, motion_expression, resolve_duration
from .render_job import RenderJob
from .sanitizer import sanitize_color, sanitize_text

__all__ = [
    "EncodeError",
    "EncodeTimeoutError",
    "MotionEngineError",
    "FFmpegRenderer",
    "FilterGraph",
    "FilterStage",
    "StageKind",
    "build_graph",
    "MotionProfile",
    "frame_count",
    "motion_expression",
    "resolve_duration",
    "RenderJob",
    "sanitize_color",
    "sanitize_text",
]
