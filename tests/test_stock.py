"""Tests for market segment records."""

from market_heatmap.core.stock import (
    DEFAULT_STOCK_DATA,
    StockData,
    format_change,
    percentage_of_total,
    total_market_cap,
)


def test_stock_roundtrip():
    stock = StockData(name="Banks", market_cap=12800.49, price=101.5, change=0.57)
    d = stock.to_dict()
    assert d == {"name": "Banks", "marketCap": 12800.49, "price": 101.5, "change": 0.57}
    assert StockData.from_dict(d) == stock


def test_stock_from_dict_defaults():
    stock = StockData.from_dict({"name": "REITs", "marketCap": "3008.32"})
    assert stock.market_cap == 3008.32
    assert stock.price == 0
    assert stock.change == 0


def test_total_market_cap():
    stocks = [StockData("A", 10, 0, 0), StockData("B", 2.5, 0, 0)]
    assert total_market_cap(stocks) == 12.5
    assert total_market_cap([]) == 0


def test_percentage_of_total():
    assert percentage_of_total(25, 200) == 12.5
    assert percentage_of_total(25, 0) == 0.0


def test_format_change_signs():
    assert format_change(1.76) == "+1.76%"
    assert format_change(-0.4) == "-0.40%"
    assert format_change(0) == "0.00%"


def test_default_data():
    assert len(DEFAULT_STOCK_DATA) == 28
    names = [s.name for s in DEFAULT_STOCK_DATA]
    assert len(set(names)) == len(names)
    assert all(s.market_cap > 0 for s in DEFAULT_STOCK_DATA)
