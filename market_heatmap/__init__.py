"""
Market Heatmap — squarified treemap heatmaps of market segments.
"""

__version__ = "0.1.0"

from market_heatmap.core.csv_io import parse_csv, read_csv_file, to_csv
from market_heatmap.core.errors import (
    ConfigurationError,
    InvalidCSVHeaderError,
    MarketHeatmapError,
)
from market_heatmap.core.heatmap import Heatmap
from market_heatmap.core.stock import DEFAULT_STOCK_DATA, StockData
from market_heatmap.layouts.treemap import (
    LayoutRect,
    WeightedItem,
    compute_heatmap_layout,
    squarify,
)

__all__ = [
    "StockData",
    "DEFAULT_STOCK_DATA",
    "WeightedItem",
    "LayoutRect",
    "squarify",
    "compute_heatmap_layout",
    "Heatmap",
    "parse_csv",
    "read_csv_file",
    "to_csv",
    "MarketHeatmapError",
    "InvalidCSVHeaderError",
    "ConfigurationError",
    "__version__",
]
