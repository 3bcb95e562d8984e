"""
Sanitization of user-supplied overlay text and colors.

Values produced here are embedded verbatim into ffmpeg filter options, so
every function is total: malformed input degrades to a safe value instead
of raising.
"""

import re
from typing import Any, Optional

DEFAULT_TITLE = "Cinematic Graphic"
DEFAULT_TAGLINE = "Generated from your upload"
DEFAULT_ACCENT_COLOR = "#f6c344"

TITLE_MAX_LENGTH = 80
TAGLINE_MAX_LENGTH = 120

HEX_COLOR_PATTERN = re.compile(r"#[0-9A-Fa-f]{6}")

# Characters that end an option (":") or the drawtext line
_SEPARATOR_PATTERN = re.compile(r"[:\r\n]")

# Characters the filtergraph parser treats as syntax
_GRAPH_SPECIAL_CHARS = ("\\", "'", "[", "]", ",", ";")


def sanitize_text(value: Any, fallback: str, max_length: Optional[int] = None) -> str:
    """
    Normalize free text for use as a drawtext ``text`` option.

    Trims whitespace, substitutes ``fallback`` for empty input, bounds the
    length, replaces colons and line breaks with spaces and backslash-escapes
    backslashes and single quotes.

    Args:
        value: Raw form value (may be None or a non-string)
        fallback: Text used when the trimmed value is empty
        max_length: Maximum number of characters kept before escaping

    Returns:
        str: Option-safe text
    """
    text = "" if value is None else str(value)
    text = text.strip() or fallback

    if max_length is not None and len(text) > max_length:
        text = text[:max_length].rstrip()

    text = _SEPARATOR_PATTERN.sub(" ", text)
    text = text.replace("\\", "\\\\")
    return text.replace("'", "\\'")


def sanitize_color(value: Any = DEFAULT_ACCENT_COLOR) -> str:
    """Return ``value`` if it is a ``#RRGGBB`` color, else the default accent."""
    if value is None:
        return DEFAULT_ACCENT_COLOR

    color = str(value).strip()
    if HEX_COLOR_PATTERN.fullmatch(color):
        return color
    return DEFAULT_ACCENT_COLOR


def escape_graph_value(value: Any) -> str:
    """
    Escape a filter option value for the ``-filter_complex`` description.

    The graph parser strips one level of backslash escaping before the filter
    sees its options, so each syntax character gets its own backslash.
    """
    escaped = str(value)
    for char in _GRAPH_SPECIAL_CHARS:
        escaped = escaped.replace(char, "\\" + char)
    return escaped
