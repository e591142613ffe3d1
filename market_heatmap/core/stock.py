"""
Market segment records.

A segment is sized on the heatmap by its share of the total market cap and
coloured by its daily change.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence


@dataclass(frozen=True)
class StockData:
    """A single market segment (sector, index or stock)."""

    name: str
    market_cap: float
    price: float
    change: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "marketCap": self.market_cap,
            "price": self.price,
            "change": self.change,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StockData":
        return cls(
            name=data["name"],
            market_cap=float(data["marketCap"]),
            price=float(data.get("price", 0)),
            change=float(data.get("change", 0)),
        )


def total_market_cap(stocks: Sequence[StockData]) -> float:
    return sum(s.market_cap for s in stocks)


def percentage_of_total(value: float, total: float) -> float:
    """Share of ``total`` in percent, 0 when the total is not positive."""
    return value / total * 100 if total > 0 else 0.0


def format_change(change: float) -> str:
    """Format a daily change with an explicit sign, e.g. ``+1.76%``."""
    if change > 0:
        return f"+{change:.2f}%"
    return f"{change:.2f}%"


DEFAULT_STOCK_DATA: List[StockData] = [
    StockData("Commercial & Professional Svc", 4284.46, 0, 1.76),
    StockData("Tadawul All Share Index (TASI)", 11302.35, 0, 0.41),
    StockData("Transportation", 5593.49, 0, 0.64),
    StockData("Consumer Durables & Apparel", 4152.07, 0, -0.4),
    StockData("Consumer Services", 4191.26, 0, 1.54),
    StockData("Media and Entertainment", 19626.7, 0, 0.16),
    StockData("Consumer Discretionary Distribution & Retail", 8408.9, 0, 0.48),
    StockData("Consumer Staples Distribution & Retail", 6735.78, 0, -0.28),
    StockData("Food & Beverages", 4871.43, 0, 1.28),
    StockData("Health Care Equipment & Svc", 10671.34, 0, 0.2),
    StockData("Pharma, Biotech & Life Science", 4904.49, 0, 1.36),
    StockData("Banks", 12800.49, 0, 0.57),
    StockData("Financial Services", 6696.19, 0, 0.6),
    StockData("Insurance", 8464.85, 0, 0.92),
    StockData("Telecommunication Services", 8929.69, 0, -0.83),
    StockData("Utilities", 8450.47, 0, -0.08),
    StockData("Household & Personal Products", 4834.25, 0, 2.26),
    StockData("REITs", 3008.32, 0, 0.75),
    StockData("Energy", 4924.57, 0, 0.93),
    StockData("Materials", 5296.5, 0, -0.68),
    StockData("Capital Goods", 15635.25, 0, 1.48),
    StockData("Tadawul Large Cap Index", 4771.61, 0, 0.02),
    StockData("Real Estate Mgmt & Dev't", 3801.76, 0, 0.63),
    StockData("MSCI Tadawul 30 Index", 1468.54, 0, 0.19),
    StockData("Software & Services", 6187.39, 0, -0.16),
    StockData("Tadawul Medium Cap Index", 4549.22, 0, 0.74),
    StockData("Tadawul Small Cap Index", 4808.58, 0, 0.47),
    StockData("TASSI50 Index", 4834.73, 0, 0.31),
]
