"""Tests for the HTML and SVG heatmap renderers."""

from unittest.mock import patch

import pytest

from market_heatmap.core.config import AspectRatio
from market_heatmap.core.heatmap import Heatmap, wrap_label
from market_heatmap.core.stock import DEFAULT_STOCK_DATA, StockData


def _make_stocks():
    return [
        StockData("Alpha", 50, 12.5, 2.0),
        StockData("Beta", 30, 1, 0.0),
        StockData("Gamma", 20, 1, -2.0),
    ]


def _square(stocks=None):
    return Heatmap(_make_stocks() if stocks is None else stocks, width=100, aspect_ratio="1:1")


def test_dimensions_follow_aspect_ratio():
    assert Heatmap(width=1600, aspect_ratio="16:9").dimensions == (1600, 900)
    assert Heatmap(width=500, aspect_ratio=AspectRatio.SQUARE).dimensions == (500, 500)


def test_defaults_to_bundled_data():
    hm = Heatmap()
    assert hm.stocks == DEFAULT_STOCK_DATA
    assert len(hm.compute_layout()) == len(DEFAULT_STOCK_DATA)


def test_compute_layout_geometry():
    rects = _square().compute_layout()
    assert [r.name for r in rects] == ["Alpha", "Beta", "Gamma"]
    assert (rects[1].x, rects[1].y, rects[1].width, rects[1].height) == pytest.approx(
        (50, 0, 50, 60)
    )


def test_html_structure():
    h = _square().to_html()
    assert h.count('class="mh-box ') == 3
    assert "mh-legend" in h
    assert "mh-tooltip" in h
    assert "mouseenter" in h
    assert "mouseleave" in h
    assert "Total Categories: 3" in h
    assert "Total Market Cap: $100.00" in h


def test_html_band_classes_and_labels():
    h = _square().to_html()
    assert "mh-positive-dark" in h
    assert "mh-neutral" in h
    assert "mh-negative-dark" in h
    assert "+2.00%" in h
    assert "-2.00%" in h
    # Boxes are inset by half the stroke width
    assert "left:1.5px;top:1.5px;width:47px;height:97px;" in h


def test_html_tooltip_content():
    h = _square().to_html()
    assert "Portfolio Share: 50.0%" in h
    assert "Market Cap: $50" in h
    assert "Price: $12.5" in h


def test_html_hides_labels_on_small_boxes():
    stocks = [StockData("Big", 990, 0, 0.1), StockData("Tiny", 10, 0, 0.1)]
    h = Heatmap(stocks, width=200, aspect_ratio="1:1").to_html()
    assert 'data-name="Tiny"' in h
    assert ">Tiny</div>" not in h
    assert ">Big</div>" in h


def test_html_empty_state():
    h = _square([]).to_html()
    assert "No data to display" in h
    assert 'class="mh-box ' not in h
    assert 'class="mh-legend"' not in h


def test_html_escapes_names():
    h = _square([StockData("<Bad & Co>", 1, 0, 0)]).to_html()
    assert "<Bad & Co>" not in h
    assert "&lt;Bad &amp; Co&gt;" in h


def test_repr_html_matches_to_html_structure():
    hm = _square()
    assert hm._repr_html_().startswith(f'<div id="mh-{hm._uid}"')


def test_display_uses_ipython():
    pytest.importorskip("IPython")
    hm = _square()
    with patch("IPython.display.display") as mock_display:
        hm.display()
    mock_display.assert_called_once()


def test_svg_export():
    svg = _square().to_svg()
    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100"')
    assert '<rect width="100" height="100" fill="#000000" />' in svg
    assert svg.count("<g>") == 3
    assert 'fill="#22C55E"' in svg
    assert 'fill="#334155"' in svg
    assert 'fill="#DC2626"' in svg
    assert '<rect x="1.5" y="1.5" width="47" height="97"' in svg
    assert "+2.00%" in svg
    assert "<tspan" in svg


def test_svg_light_mode_background():
    hm = Heatmap(_make_stocks(), width=100, aspect_ratio="1:1", dark_mode=False)
    assert '<rect width="100" height="100" fill="#FFFFFF" />' in hm.to_svg()


def test_svg_escapes_names():
    svg = _square([StockData("Real Estate Mgmt & Dev't", 1, 0, 0)]).to_svg()
    assert "&amp;" in svg
    assert "Dev't" not in svg


def test_svg_empty():
    assert _square([]).to_svg() == ""


def test_save_svg(tmp_path):
    target = tmp_path / "heatmap.svg"
    assert _square().save_svg(target) is True
    assert target.read_text(encoding="utf-8").startswith("<svg")


def test_save_svg_empty_writes_nothing(tmp_path):
    target = tmp_path / "heatmap.svg"
    assert _square([]).save_svg(target) is False
    assert not target.exists()


def test_save_html(tmp_path):
    target = tmp_path / "heatmap.html"
    _square().save_html(target)
    assert "mh-container" in target.read_text(encoding="utf-8")


def test_wrap_label():
    assert wrap_label("Consumer Durables & Apparel", 100, 10) == [
        "Consumer",
        "Durables &",
        "Apparel",
    ]
    assert wrap_label("Banks", 100, 10) == ["Banks"]


def test_wrap_label_keeps_long_word():
    assert wrap_label("Telecommunication", 20, 10) == ["Telecommunication"]
