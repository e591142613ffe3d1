"""Exception hierarchy for market_heatmap."""


class MarketHeatmapError(ValueError):
    """Base class for recoverable, reportable data and configuration errors."""


class InvalidCSVHeaderError(MarketHeatmapError):
    """The CSV header row lacks one or more required columns."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(
            "CSV headers are incorrect. Must include: name, marketCap, price, change "
            f"(missing: {', '.join(self.missing)})"
        )


class ConfigurationError(MarketHeatmapError):
    """A setting could not be parsed."""
