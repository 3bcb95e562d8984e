"""
Filter graph construction for the motion graphic pipeline.

The graph is a fixed chain: scale → zoompan (+ pixel format) → drawbox →
title drawtext → tagline drawtext. Stage order is part of the visual result
(the band must be drawn before the text on top of it), so the builder never
reorders stages.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from .parameters import FRAME_RATE, MotionExpression
from .sanitizer import escape_graph_value

PRIMARY_INPUT_PAD = "0:v"

CANVAS_WIDTH = 1920
CANVAS_HEIGHT = 1080
PIXEL_FORMAT = "yuv420p"

BAND_HEIGHT = 260
BAND_COLOR = "black@0.55"

TITLE_FONT_SIZE = 60
TITLE_COLOR = "white@0.97"
TITLE_SHADOW_COLOR = "black@0.4"
TAGLINE_FONT_SIZE = 40
TAGLINE_OPACITY = 0.98
TEXT_MARGIN_X = 80

DEFAULT_TITLE_FONT = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"
DEFAULT_TAGLINE_FONT = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"


class StageKind(str, Enum):
    """Filter stage kinds and the ffmpeg filter each one maps to."""

    SCALE = "scale"
    MOTION = "motion"
    DRAWBOX = "drawbox"
    DRAWTEXT = "drawtext"

    @property
    def filter_name(self) -> str:
        if self is StageKind.MOTION:
            return "zoompan"
        return self.value


class FilterStage(BaseModel):
    """One filter in the chain, with explicit input and output pads."""

    model_config = ConfigDict(frozen=True)

    kind: StageKind
    parameters: tuple[tuple[str, str], ...]
    input_pad: str
    output_pad: str
    pixel_format: Optional[str] = None

    def describe(self) -> str:
        """Render the stage as ``[in]filter=k=v:...[,format=pf][out]``."""
        options = ":".join(
            f"{key}={escape_graph_value(value)}" for key, value in self.parameters
        )
        chain = f"{self.kind.filter_name}={options}"
        if self.pixel_format:
            chain += f",format={self.pixel_format}"
        return f"[{self.input_pad}]{chain}[{self.output_pad}]"


class FilterGraph(BaseModel):
    """Ordered filter stages wired from ``input_pad`` to ``output_pad``."""

    model_config = ConfigDict(frozen=True)

    input_pad: str = PRIMARY_INPUT_PAD
    stages: tuple[FilterStage, ...]

    @model_validator(mode="after")
    def _check_chain(self) -> "FilterGraph":
        if not self.stages:
            raise ValueError("Filter graph needs at least one stage")

        available = {self.input_pad}
        for index, stage in enumerate(self.stages):
            if stage.input_pad not in available:
                raise ValueError(
                    f"Stage {index} ({stage.kind.value}) reads unknown pad "
                    f"'{stage.input_pad}'"
                )
            available.add(stage.output_pad)
        return self

    @property
    def output_pad(self) -> str:
        return self.stages[-1].output_pad

    @property
    def kinds(self) -> list[StageKind]:
        return [stage.kind for stage in self.stages]

    def describe(self) -> str:
        """Serialize to the ``-filter_complex`` argument."""
        return ";".join(stage.describe() for stage in self.stages)


def _params(**options) -> tuple[tuple[str, str], ...]:
    return tuple((key, str(value)) for key, value in options.items() if value is not None)


def build_graph(
    input_pad: str,
    motion: MotionExpression,
    title: str,
    tagline: str,
    accent_color: str,
    *,
    frames: int,
    title_font: str = DEFAULT_TITLE_FONT,
    tagline_font: str = DEFAULT_TAGLINE_FONT,
) -> FilterGraph:
    """
    Assemble the motion graphic filter graph.

    ``title``, ``tagline`` and ``accent_color`` must already be sanitized and
    ``frames`` resolved; this is a pure construction step.

    Args:
        input_pad: Pad of the looped still image (normally ``0:v``)
        motion: zoompan expressions for the selected profile
        title: Sanitized title text
        tagline: Sanitized tagline text
        accent_color: Sanitized ``#RRGGBB`` tagline color
        frames: zoompan frame count
        title_font: Font file for the title
        tagline_font: Font file for the tagline

    Returns:
        FilterGraph: Stages in render order, ending at pad ``out``
    """
    stages = (
        FilterStage(
            kind=StageKind.SCALE,
            parameters=_params(w=CANVAS_WIDTH, h=-1),
            input_pad=input_pad,
            output_pad="scaled",
        ),
        FilterStage(
            kind=StageKind.MOTION,
            parameters=_params(
                z=motion.zoom,
                x=motion.x,
                y=motion.y,
                d=frames,
                s=f"{CANVAS_WIDTH}x{CANVAS_HEIGHT}",
                fps=FRAME_RATE,
            ),
            input_pad="scaled",
            output_pad="video",
            pixel_format=PIXEL_FORMAT,
        ),
        FilterStage(
            kind=StageKind.DRAWBOX,
            parameters=_params(
                x=0,
                y=f"ih-{BAND_HEIGHT}",
                w="iw",
                h=BAND_HEIGHT,
                color=BAND_COLOR,
                t="fill",
            ),
            input_pad="video",
            output_pad="boxed",
        ),
        FilterStage(
            kind=StageKind.DRAWTEXT,
            parameters=_params(
                fontfile=title_font,
                expansion="none",
                text=title,
                fontsize=TITLE_FONT_SIZE,
                fontcolor=TITLE_COLOR,
                x=TEXT_MARGIN_X,
                y="h-200",
                shadowcolor=TITLE_SHADOW_COLOR,
                shadowx=2,
                shadowy=2,
            ),
            input_pad="boxed",
            output_pad="title",
        ),
        # Tagline is stacked above the title (drawn after it) on the lower row, h-120
        FilterStage(
            kind=StageKind.DRAWTEXT,
            parameters=_params(
                fontfile=tagline_font,
                expansion="none",
                text=tagline,
                fontsize=TAGLINE_FONT_SIZE,
                fontcolor=f"{accent_color}@{TAGLINE_OPACITY}",
                x=TEXT_MARGIN_X,
                y="h-120",
            ),
            input_pad="title",
            output_pad="out",
        ),
    )
    return FilterGraph(input_pad=input_pad, stages=stages)
