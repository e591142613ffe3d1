"""CSV import and export of market segment data."""

import csv
import io
import math
import re
from pathlib import Path
from typing import List, Optional, Sequence, Union

from market_heatmap.core.errors import InvalidCSVHeaderError
from market_heatmap.core.logging_config import get_logger
from market_heatmap.core.stock import StockData

logger = get_logger(__name__)

REQUIRED_COLUMNS = ("name", "marketCap", "price", "change")

SAMPLE_CSV = """name,marketCap,price,change
Commercial & Professional Svc,4284.46,0,1.76
Tadawul All Share Index (TASI),11302.35,0,0.41
Transportation,5593.49,0,0.64
Consumer Durables & Apparel,4152.07,0,-0.4
Consumer Services,4191.26,0,1.54
Media and Entertainment,19626.7,0,0.16
"Real Estate Mgmt & Dev't",3801.76,0,0.63
MSCI Tadawul 30 Index,1468.54,0,0.19
Software & Services,6187.39,0,-0.16
"""


def _parse_number(value: str) -> Optional[float]:
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _split_line(line: str) -> List[str]:
    """Split one CSV line, honouring quotes and ``""`` escapes."""
    row = next(csv.reader([line], skipinitialspace=True), [])
    return [value.strip() for value in row]


def parse_csv(content: str) -> List[StockData]:
    """Parse CSV text into market segments.

    The header row must name the columns ``name``, ``marketCap``, ``price``
    and ``change`` in any order. Rows that are too short, have an empty name
    or a non-numeric value are skipped with a warning.

    Parameters
    ----------
    content : str
        The raw CSV text.

    Returns
    -------
    List[StockData]
        Parsed segments. Empty input (or a header with no rows) gives ``[]``.

    Raises
    ------
    InvalidCSVHeaderError
        If a required column is missing from the header.
    """
    if not content:
        return []

    # Only \r\n and \n end a record; other Unicode breaks stay inside fields
    lines = re.split(r"\r\n|\n", content)
    if len(lines) < 2:
        return []

    try:
        headers = _split_line(lines[0])
    except csv.Error:
        headers = []
    missing = [col for col in REQUIRED_COLUMNS if col not in headers]
    if missing:
        logger.error("CSV headers are incorrect", extra={"headers": headers})
        raise InvalidCSVHeaderError(missing)

    indexes = {col: headers.index(col) for col in REQUIRED_COLUMNS}
    min_len = max(indexes.values()) + 1

    stocks: List[StockData] = []
    for line_no, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue

        try:
            values = _split_line(line)
        # A lone \r inside an unquoted field
        except csv.Error:
            logger.warning("Skipping invalid CSV line %d (parsing error): %s", line_no, line)
            continue

        if len(values) < min_len:
            logger.warning("Skipping invalid CSV line %d (parsing error): %s", line_no, line)
            continue

        name = values[indexes["name"]]
        market_cap = _parse_number(values[indexes["marketCap"]])
        price = _parse_number(values[indexes["price"]])
        change = _parse_number(values[indexes["change"]])

        if not name or market_cap is None or price is None or change is None:
            logger.warning(
                "Skipping bad CSV line %d (validation failed): %s", line_no, line
            )
            continue

        stocks.append(StockData(name=name, market_cap=market_cap, price=price, change=change))

    logger.debug("Parsed %d segments from CSV", len(stocks))
    return stocks


def read_csv_file(path: Union[str, Path]) -> List[StockData]:
    """Read and parse a UTF-8 CSV file."""
    return parse_csv(Path(path).read_text(encoding="utf-8-sig"))


def to_csv(stocks: Sequence[StockData]) -> str:
    """Serialize segments to CSV text with the standard header."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(REQUIRED_COLUMNS)
    for s in stocks:
        writer.writerow([s.name, repr(s.market_cap), repr(s.price), repr(s.change)])
    return buf.getvalue()


def write_sample_csv(path: Union[str, Path]) -> Path:
    """Write the sample data file and return its path."""
    target = Path(path)
    target.write_text(SAMPLE_CSV, encoding="utf-8")
    return target
