"""Squarified treemap layout algorithm (Bruls-Huizing-van Wijk)."""

import math
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

from market_heatmap.core.stock import StockData, percentage_of_total


@dataclass(frozen=True)
class WeightedItem:
    """An input record for the layout engine.

    ``data`` is an opaque payload carried through to the output untouched.
    """

    name: str
    weight: float
    data: Any = None


@dataclass(frozen=True)
class ItemWithArea:
    """A weighted item with its absolute area in layout units."""

    item: WeightedItem
    area: float


@dataclass(frozen=True)
class LayoutRect:
    """A rectangle in the treemap layout."""

    item: WeightedItem
    area: float
    x: float
    y: float
    width: float
    height: float

    @property
    def name(self) -> str:
        return self.item.name

    @property
    def weight(self) -> float:
        return self.item.weight

    @property
    def data(self) -> Any:
        return self.item.data

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "weight": self.weight,
            "area": self.area,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


def compute_heatmap_layout(
    stocks: Sequence[StockData],
    width: float,
    height: float,
) -> List[LayoutRect]:
    """Compute the heatmap layout for a list of market segments.

    Parameters
    ----------
    stocks : Sequence[StockData]
        Segments to lay out; each is weighted by its share of the total
        market cap.
    width : float
        Width of the target rectangle.
    height : float
        Height of the target rectangle.

    Returns
    -------
    List[LayoutRect]
        One rectangle per segment, each carrying its ``StockData`` as payload.
    """
    total = sum(s.market_cap for s in stocks)
    items = [
        WeightedItem(name=s.name, weight=percentage_of_total(s.market_cap, total), data=s)
        for s in stocks
    ]
    return squarify(items, 0, 0, width, height)


def squarify(
    items: Sequence[WeightedItem],
    x: float,
    y: float,
    width: float,
    height: float,
) -> List[LayoutRect]:
    """Lay out weighted items as a squarified treemap.

    Parameters
    ----------
    items : Sequence[WeightedItem]
        Items in any order; they are sorted by area internally.
    x, y : float
        Top-left corner of the target rectangle.
    width, height : float
        Size of the target rectangle.

    Returns
    -------
    List[LayoutRect]
        Rectangles in row order, first row first.
        Empty when there are no items, the total weight is zero, or the
        target has no area.
    """
    if not items or width <= 0 or height <= 0:
        return []

    queue = allocate_areas(items, width, height)
    if not queue:
        return []

    result: List[LayoutRect] = []
    _layout_rows(queue, x, y, width, height, result)
    return result


def allocate_areas(
    items: Sequence[WeightedItem],
    width: float,
    height: float,
) -> List[ItemWithArea]:
    """Convert relative weights into absolute areas, largest first."""
    if width <= 0 or height <= 0:
        return []
    # Negative weights count as zero so no geometry can come out negative
    weights = [max(item.weight, 0.0) for item in items]
    total_weight = sum(weights)
    if total_weight <= 0:
        return []

    total_area = width * height
    with_area = [
        ItemWithArea(item=item, area=(weight / total_weight) * total_area)
        for item, weight in zip(items, weights)
    ]
    # sorted() is stable, so equal areas keep their input order
    return sorted(with_area, key=lambda entry: entry.area, reverse=True)


def worst_aspect_ratio(row_areas: Sequence[float], fixed_dimension: float) -> float:
    """Compute worst aspect ratio for a row laid along a side of the given length.

    Returns ``inf`` whenever a denominator is zero, including products of
    tiny positive values that underflow to ``0.0``.
    """
    row_area = sum(row_areas)
    if row_area <= 0 or fixed_dimension <= 0:
        return float("inf")
    max_area = max(row_areas)
    min_area = min(row_areas)

    side_sq = fixed_dimension * fixed_dimension
    row_sq = row_area * row_area
    min_term = side_sq * min_area
    if row_sq == 0 or min_term == 0:
        return float("inf")

    worst = max((side_sq * max_area) / row_sq, row_sq / min_term)
    # inf / inf when both squares overflow
    return float("inf") if math.isnan(worst) else worst


def build_row(
    queue: Sequence[ItemWithArea],
    fixed_dimension: float,
) -> Tuple[List[ItemWithArea], List[ItemWithArea]]:
    """Greedily pick the next row from an area-sorted queue.

    The row always holds at least the first item. Following items are added
    while doing so does not make the worst aspect ratio strictly larger.

    Returns
    -------
    Tuple[List[ItemWithArea], List[ItemWithArea]]
        The row and the items left over.
    """
    row = [queue[0]]
    row_areas = [queue[0].area]
    best = worst_aspect_ratio(row_areas, fixed_dimension)

    i = 1
    while i < len(queue):
        candidate = row_areas + [queue[i].area]
        ratio = worst_aspect_ratio(candidate, fixed_dimension)
        if ratio > best:
            break
        best = ratio
        row.append(queue[i])
        row_areas = candidate
        i += 1

    return row, list(queue[i:])


def _layout_rows(
    queue: List[ItemWithArea],
    x: float,
    y: float,
    w: float,
    h: float,
    result: List[LayoutRect],
) -> None:
    """Squarified treemap layout, one row per pass over the shrinking rectangle."""
    while queue:
        if w <= 0 or h <= 0:
            # Only zero-area items (or rounding residue) can be left here
            for entry in queue:
                result.append(LayoutRect(entry.item, entry.area, x, y, 0.0, 0.0))
            return

        # Lay along shorter side
        vertical_strip = w >= h
        fixed_dimension = h if vertical_strip else w

        row, queue = build_row(queue, fixed_dimension)
        row_area = sum(entry.area for entry in row)
        row_length = row_area / fixed_dimension

        offset = 0.0
        for entry in row:
            extent = entry.area / row_length if row_length > 0 else 0.0
            if vertical_strip:
                result.append(LayoutRect(entry.item, entry.area, x, y + offset, row_length, extent))
            else:
                result.append(LayoutRect(entry.item, entry.area, x + offset, y, extent, row_length))
            offset += extent

        # Continue in the strip the row did not consume
        if vertical_strip:
            x += row_length
            w -= row_length
        else:
            y += row_length
            h -= row_length
