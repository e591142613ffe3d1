"""Tests for the colour scale and label thresholds."""

import pytest

from market_heatmap.styles.colors import (
    BAND_COLORS,
    BAND_LABELS,
    ChangeBand,
    can_show_label,
    classify_change,
    label_font_sizes,
    tooltip_color,
)


@pytest.mark.parametrize(
    "change,band",
    [
        (2.26, ChangeBand.POSITIVE_DARK),
        (1.51, ChangeBand.POSITIVE_DARK),
        (1.5, ChangeBand.POSITIVE),
        (0.06, ChangeBand.POSITIVE),
        (0.05, ChangeBand.NEUTRAL),
        (0.0, ChangeBand.NEUTRAL),
        (-0.05, ChangeBand.NEUTRAL),
        (-0.06, ChangeBand.NEGATIVE),
        (-1.5, ChangeBand.NEGATIVE),
        (-1.51, ChangeBand.NEGATIVE_DARK),
    ],
)
def test_classify_change_bands(change, band):
    assert classify_change(change) is band


def test_every_band_has_color_and_label():
    for band in ChangeBand:
        assert BAND_COLORS[band].startswith("#")
        assert BAND_LABELS[band]
    assert BAND_COLORS[ChangeBand.POSITIVE_DARK] == "#22C55E"
    assert BAND_COLORS[ChangeBand.NEUTRAL] == "#334155"


def test_legend_order_runs_negative_to_positive():
    assert list(BAND_LABELS)[0] is ChangeBand.NEGATIVE_DARK
    assert list(BAND_LABELS)[-1] is ChangeBand.POSITIVE_DARK


def test_tooltip_color():
    assert tooltip_color(0.5) != tooltip_color(-0.5)
    assert tooltip_color(0.05) == tooltip_color(-0.05) == tooltip_color(0)


@pytest.mark.parametrize(
    "width,height,expected",
    [
        (100, 100, True),
        (41, 31, True),
        (40, 100, False),
        (100, 30, False),
        (31, 31, False),
        (0, 0, False),
    ],
)
def test_can_show_label(width, height, expected):
    assert can_show_label(width, height) is expected


def test_label_font_sizes_clamped():
    assert label_font_sizes(60, 12) == (9.0, 10.0)
    assert label_font_sizes(1200, 12) == (18.0, 18.0)
    name, change = label_font_sizes(168, 12)
    assert name == pytest.approx(14.0)
    assert change == pytest.approx(14.7)
