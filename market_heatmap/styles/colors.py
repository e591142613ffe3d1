"""Heatmap colour scale, label thresholds and sizing constants."""

from enum import Enum
from typing import Tuple


class ChangeBand(Enum):
    """Performance band of a segment's daily change."""

    POSITIVE_DARK = "positive-dark"
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    NEGATIVE_DARK = "negative-dark"


def classify_change(change: float) -> ChangeBand:
    if change > 1.5:
        return ChangeBand.POSITIVE_DARK
    if change > 0.05:
        return ChangeBand.POSITIVE
    if change < -1.5:
        return ChangeBand.NEGATIVE_DARK
    if change < -0.05:
        return ChangeBand.NEGATIVE
    return ChangeBand.NEUTRAL


BAND_COLORS = {
    ChangeBand.POSITIVE_DARK: "#22C55E",
    ChangeBand.POSITIVE: "#15803d",
    ChangeBand.NEUTRAL: "#334155",
    ChangeBand.NEGATIVE: "#B91C1C",
    ChangeBand.NEGATIVE_DARK: "#DC2626",
}

CSS_CLASSES = {
    ChangeBand.POSITIVE_DARK: "mh-positive-dark",
    ChangeBand.POSITIVE: "mh-positive",
    ChangeBand.NEUTRAL: "mh-neutral",
    ChangeBand.NEGATIVE: "mh-negative",
    ChangeBand.NEGATIVE_DARK: "mh-negative-dark",
}

# Legend order: strongest negative to strongest positive
BAND_LABELS = {
    ChangeBand.NEGATIVE_DARK: "Strong Negative (< -1.5%)",
    ChangeBand.NEGATIVE: "Negative",
    ChangeBand.NEUTRAL: "Neutral (-0.05% to +0.05%)",
    ChangeBand.POSITIVE: "Positive",
    ChangeBand.POSITIVE_DARK: "Strong Positive (> +1.5%)",
}


def tooltip_color(change: float) -> str:
    if change > 0.05:
        return "#4ADE80"  # green-400
    if change < -0.05:
        return "#F87171"  # red-400
    return "#D1D5DB"  # gray-300


STROKE_WIDTH = 3
STROKE_COLOR = "rgba(255, 255, 255, 0.8)"
TEXT_COLOR = "#FFFFFF"
DARK_BACKGROUND = "#000000"
LIGHT_BACKGROUND = "#FFFFFF"
LIGHT_CONTAINER_BACKGROUND = "#E5E7EB"
EMPTY_TEXT_COLOR = "#6B7280"
FONT_FAMILY = (
    "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, "
    "sans-serif, 'Apple Color Emoji', 'Segoe UI Emoji', 'Segoe UI Symbol'"
)

LABEL_MIN_DIMENSION = 30
LABEL_MIN_WIDTH = 40
HTML_FONT_DIVISOR = 12
SVG_FONT_DIVISOR = 14
LINE_HEIGHT = 1.2


def can_show_label(width: float, height: float) -> bool:
    """Whether a box is large enough to carry its name and change."""
    return min(width, height) > LABEL_MIN_DIMENSION and width > LABEL_MIN_WIDTH


def label_font_sizes(width: float, divisor: float) -> Tuple[float, float]:
    """Return ``(name_size, change_size)`` in pixels for a box of ``width``."""
    base = width / divisor
    name_size = max(9.0, min(18.0, base))
    change_size = max(10.0, min(18.0, base * 1.05))
    return name_size, change_size
