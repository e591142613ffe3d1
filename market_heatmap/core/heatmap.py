"""Heatmap — renders market segments as an interactive HTML treemap or a static SVG."""

import html
import json
import uuid
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from market_heatmap.core.config import DEFAULT_WIDTH, AspectRatio, resolve_dimensions
from market_heatmap.core.logging_config import get_logger
from market_heatmap.core.stock import (
    DEFAULT_STOCK_DATA,
    StockData,
    format_change,
    total_market_cap,
)
from market_heatmap.layouts.treemap import LayoutRect, compute_heatmap_layout
from market_heatmap.styles.colors import (
    BAND_COLORS,
    BAND_LABELS,
    CSS_CLASSES,
    DARK_BACKGROUND,
    EMPTY_TEXT_COLOR,
    FONT_FAMILY,
    HTML_FONT_DIVISOR,
    LIGHT_BACKGROUND,
    LIGHT_CONTAINER_BACKGROUND,
    LINE_HEIGHT,
    STROKE_COLOR,
    STROKE_WIDTH,
    SVG_FONT_DIVISOR,
    TEXT_COLOR,
    can_show_label,
    classify_change,
    label_font_sizes,
    tooltip_color,
)

logger = get_logger(__name__)


def _num(value: float) -> str:
    """Compact number formatting for markup attributes."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def wrap_label(name: str, width: float, font_size: float) -> List[str]:
    """Greedy word wrap of ``name`` into lines that fit a box of ``width``.

    Character width is approximated as 0.6 of the font size and lines may
    use 90% of the box width. A single word longer than a line is kept whole.
    """
    available = width * 0.9
    char_width = font_size * 0.6
    lines: List[str] = []
    current = ""
    for word in name.split(" "):
        candidate = f"{current} {word}" if current else word
        if len(candidate) * char_width > available:
            if current:
                lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


class Heatmap:
    """Market heatmap built on the squarified treemap layout.

    Parameters
    ----------
    stocks : Sequence[StockData], optional
        Segments to display. Defaults to the bundled Tadawul sector data.
    width : float
        Canvas width in pixels.
    aspect_ratio : str or AspectRatio
        ``"1:1"`` or ``"16:9"``; resolved into the canvas height.
    dark_mode : bool
        Black background when True, white when False.

    Examples
    --------
    >>> hm = Heatmap(read_csv_file("sectors.csv"), aspect_ratio="1:1")
    >>> hm.display()
    >>> hm.save_svg("stock_heatmap.svg")
    """

    def __init__(
        self,
        stocks: Optional[Sequence[StockData]] = None,
        width: float = DEFAULT_WIDTH,
        aspect_ratio: Union[str, AspectRatio] = AspectRatio.WIDE,
        dark_mode: bool = True,
    ) -> None:
        self.stocks: List[StockData] = list(DEFAULT_STOCK_DATA if stocks is None else stocks)
        self.width = width
        self.height = resolve_dimensions(width, aspect_ratio)[1]
        self.dark_mode = dark_mode
        self._uid = uuid.uuid4().hex[:12]

    @property
    def dimensions(self) -> Tuple[float, float]:
        return self.width, self.height

    def compute_layout(self) -> List[LayoutRect]:
        rects = compute_heatmap_layout(self.stocks, self.width, self.height)
        logger.debug(
            "Computed heatmap layout",
            extra={"items": len(rects), "width": self.width, "height": self.height},
        )
        return rects

    def _repr_html_(self) -> str:
        """Jupyter auto-display."""
        return self.to_html()

    def display(self) -> None:
        """Display in IPython/Jupyter."""
        from IPython.display import HTML
        from IPython.display import display as ipy_display

        ipy_display(HTML(self.to_html()))

    # ---------------------------------------------------------------- HTML
    def to_html(self) -> str:
        """Generate the full HTML string."""
        uid = self._uid
        rects = self.compute_layout()
        parts = [
            f'<div id="mh-{uid}" class="mh-container">',
            f"<style>{self._css(uid)}</style>",
            self._header_html(),
            self._canvas_html(rects),
        ]
        if rects:
            parts.append(self._legend_html())
        parts.append(f'<div id="mh-tooltip-{uid}" class="mh-tooltip" style="display:none;"></div>')
        parts.append(self._tooltip_data_script(uid, rects))
        parts.append(f"<script>{self._js(uid)}</script>")
        parts.append("</div>")
        return "\n".join(parts)

    def _css(self, uid: str) -> str:
        s = f"#mh-{uid}"
        band_css = "\n".join(
            f"{s} .{cls} {{ background: {BAND_COLORS[band]}; }}"
            for band, cls in CSS_CLASSES.items()
        )
        canvas_bg = DARK_BACKGROUND if self.dark_mode else LIGHT_CONTAINER_BACKGROUND
        return f"""
{s} * {{ box-sizing: border-box; margin: 0; padding: 0; }}
{s} {{ font-family: {FONT_FAMILY}; position: relative; }}
{s} .mh-header {{ display: flex; gap: 24px; margin-bottom: 12px; font-weight: 700; }}
{s} .mh-canvas {{
  position: relative; overflow: hidden; background: {canvas_bg};
  border: {STROKE_WIDTH}px solid {STROKE_COLOR};
}}
{s} .mh-box {{
  position: absolute; display: flex; flex-direction: column;
  justify-content: center; align-items: center; text-align: center;
  color: {TEXT_COLOR}; font-weight: 700; overflow: hidden; cursor: pointer;
  transition: filter 0.3s ease-in-out;
}}
{s} .mh-box:hover {{ z-index: 10; filter: brightness(1.25); }}
{s} .mh-name {{ width: 95%; line-height: 1.25; }}
{s} .mh-empty {{
  display: flex; justify-content: center; align-items: center;
  height: 100%; font-size: 20px; color: {EMPTY_TEXT_COLOR};
}}
{s} .mh-legend {{ display: flex; flex-wrap: wrap; justify-content: center; gap: 8px 16px; margin-top: 16px; }}
{s} .mh-legend-item {{ display: flex; align-items: center; gap: 8px; font-size: 12px; }}
{s} .mh-legend-swatch {{ width: 16px; height: 16px; border-radius: 2px; }}
{s} .mh-tooltip {{
  position: fixed; z-index: 50; pointer-events: none; white-space: nowrap;
  background: rgba(0, 0, 0, 0.9); color: #FFFFFF; padding: 16px;
  border: 2px solid {STROKE_COLOR}; border-radius: 8px; font-size: 14px;
}}
{band_css}
"""

    def _header_html(self) -> str:
        total = total_market_cap(self.stocks)
        return (
            f'<div class="mh-header">'
            f'<span class="mh-stat">Total Categories: {len(self.stocks)}</span>'
            f'<span class="mh-stat">Total Market Cap: ${total:,.2f}</span>'
            f"</div>"
        )

    def _canvas_html(self, rects: List[LayoutRect]) -> str:
        style = f"width:{_num(self.width)}px;height:{_num(self.height)}px;"
        parts = [f'<div class="mh-canvas" style="{style}">']
        if not rects:
            parts.append('<div class="mh-empty">No data to display</div>')
        for i, r in enumerate(rects):
            parts.append(self._box_html(i, r))
        parts.append("</div>")
        return "\n".join(parts)

    def _box_html(self, index: int, r: LayoutRect) -> str:
        stock: StockData = r.data
        css_cls = CSS_CLASSES[classify_change(stock.change)]
        half = STROKE_WIDTH / 2
        style = (
            f"left:{_num(r.x + half)}px;top:{_num(r.y + half)}px;"
            f"width:{_num(max(0.0, r.width - STROKE_WIDTH))}px;"
            f"height:{_num(max(0.0, r.height - STROKE_WIDTH))}px;"
        )

        label = ""
        if can_show_label(r.width, r.height):
            name_size, change_size = label_font_sizes(r.width, HTML_FONT_DIVISOR)
            label = (
                f'<div class="mh-name" style="font-size:{_num(name_size)}px;'
                f'margin-bottom:{_num(name_size * 0.4)}px;">{html.escape(r.name)}</div>'
                f'<div class="mh-change" style="font-size:{_num(change_size)}px;">'
                f"{html.escape(format_change(stock.change))}</div>"
            )

        return (
            f'<div class="mh-box {css_cls}" data-index="{index}" '
            f'data-name="{html.escape(r.name)}" style="{style}">{label}</div>'
        )

    def _legend_html(self) -> str:
        items = []
        for band, label in BAND_LABELS.items():
            items.append(
                f'<div class="mh-legend-item">'
                f'<div class="mh-legend-swatch" style="background:{BAND_COLORS[band]};"></div>'
                f'<span class="mh-legend-label">{html.escape(label)}</span>'
                f"</div>"
            )
        return f'<div class="mh-legend">{"".join(items)}</div>'

    @staticmethod
    def _tooltip_html(r: LayoutRect) -> str:
        stock: StockData = r.data
        return (
            f'<div style="font-weight:700;">{html.escape(stock.name)}</div>'
            f"<div>Market Cap: ${stock.market_cap:,}</div>"
            f"<div>Portfolio Share: {r.weight:.1f}%</div>"
            f"<div>Price: ${stock.price:,}</div>"
            f'<div style="font-weight:700;color:{tooltip_color(stock.change)};">'
            f"Change: {html.escape(format_change(stock.change))}</div>"
        )

    def _tooltip_data_script(self, uid: str, rects: List[LayoutRect]) -> str:
        data = [self._tooltip_html(r) for r in rects]
        payload = json.dumps(data, ensure_ascii=False).replace("</", "<\\/")
        return f"<script>var mhTooltips_{uid} = {payload};</script>"

    def _js(self, uid: str) -> str:
        return f"""
(function() {{
  var container = document.getElementById('mh-{uid}');
  if (!container) return;
  var tooltip = document.getElementById('mh-tooltip-{uid}');
  var data = typeof mhTooltips_{uid} !== 'undefined' ? mhTooltips_{uid} : [];
  container.querySelectorAll('.mh-box').forEach(function(el) {{
    el.addEventListener('mouseenter', function() {{
      tooltip.innerHTML = data[parseInt(el.dataset.index, 10)] || '';
      tooltip.style.display = 'block';
    }});
    el.addEventListener('mousemove', function(e) {{
      tooltip.style.left = (e.clientX + 15) + 'px';
      tooltip.style.top = (e.clientY + 15) + 'px';
    }});
    el.addEventListener('mouseleave', function() {{
      tooltip.style.display = 'none';
    }});
  }});
}})();
"""

    # ----------------------------------------------------------------- SVG
    def to_svg(self, rects: Optional[List[LayoutRect]] = None) -> str:
        """Build a standalone SVG image of the heatmap.

        The canvas is the bounding box of the layout. Returns an empty string
        when there is nothing to draw.
        """
        if rects is None:
            rects = self.compute_layout()
        if not rects:
            return ""

        width = max(r.x + r.width for r in rects)
        height = max(r.y + r.height for r in rects)
        bg = DARK_BACKGROUND if self.dark_mode else LIGHT_BACKGROUND

        groups = "\n".join(self._svg_group(r) for r in rects)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{_num(width)}" '
            f'height="{_num(height)}" viewBox="0 0 {_num(width)} {_num(height)}">'
            f'<rect width="{_num(width)}" height="{_num(height)}" fill="{bg}" />'
            f"{groups}</svg>"
        )

    def _svg_group(self, r: LayoutRect) -> str:
        stock: StockData = r.data
        fill = BAND_COLORS[classify_change(stock.change)]
        half = STROKE_WIDTH / 2
        rect = (
            f'<rect x="{_num(r.x + half)}" y="{_num(r.y + half)}" '
            f'width="{_num(max(0.0, r.width - STROKE_WIDTH))}" '
            f'height="{_num(max(0.0, r.height - STROKE_WIDTH))}" '
            f'fill="{fill}" stroke="{STROKE_COLOR}" stroke-width="{STROKE_WIDTH}" />'
        )
        label = self._svg_label(r) if can_show_label(r.width, r.height) else ""
        return f"<g>{rect}{label}</g>"

    @staticmethod
    def _svg_label(r: LayoutRect) -> str:
        stock: StockData = r.data
        name_size, change_size = label_font_sizes(r.width, SVG_FONT_DIVISOR)
        lines = wrap_label(r.name, r.width, name_size)

        name_block = len(lines) * name_size * LINE_HEIGHT
        change_block = change_size * 1.5
        gap = name_size * 0.4
        content_top = r.y + r.height / 2 - (name_block + gap + change_block) / 2
        name_y = content_top + name_size * (LINE_HEIGHT - 1)
        change_y = content_top + name_block + gap + change_size
        cx = _num(r.x + r.width / 2)
        font = html.escape(FONT_FAMILY)

        tspans = "".join(
            f'<tspan x="{cx}" dy="{0 if i == 0 else f"{LINE_HEIGHT}em"}">'
            f"{html.escape(line)}</tspan>"
            for i, line in enumerate(lines)
        )
        return (
            f'<text y="{_num(name_y)}" font-family="{font}" font-weight="700" '
            f'font-size="{_num(name_size)}" fill="{TEXT_COLOR}" text-anchor="middle">'
            f"{tspans}</text>"
            f'<text x="{cx}" y="{_num(change_y)}" font-family="{font}" font-weight="700" '
            f'font-size="{_num(change_size)}" fill="{TEXT_COLOR}" text-anchor="middle">'
            f"{html.escape(format_change(stock.change))}</text>"
        )

    def save_svg(self, path: Union[str, Path]) -> bool:
        """Write the SVG export to ``path``.

        Returns False (and writes nothing) when the layout is empty.
        """
        svg = self.to_svg()
        if not svg:
            logger.info("Nothing to export: heatmap has no data")
            return False
        Path(path).write_text(svg, encoding="utf-8")
        logger.info("Wrote SVG heatmap to %s", path)
        return True

    def save_html(self, path: Union[str, Path]) -> None:
        Path(path).write_text(self.to_html(), encoding="utf-8")
        logger.info("Wrote HTML heatmap to %s", path)
