"""Core data model, I/O and rendering for market heatmaps."""

from market_heatmap.core.stock import (
    DEFAULT_STOCK_DATA,
    StockData,
    format_change,
    total_market_cap,
)
from market_heatmap.core.errors import (
    ConfigurationError,
    InvalidCSVHeaderError,
    MarketHeatmapError,
)
from market_heatmap.core.csv_io import parse_csv, read_csv_file, to_csv

__all__ = [
    "StockData",
    "DEFAULT_STOCK_DATA",
    "format_change",
    "total_market_cap",
    "MarketHeatmapError",
    "InvalidCSVHeaderError",
    "ConfigurationError",
    "parse_csv",
    "read_csv_file",
    "to_csv",
]
