import json
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ..core.config import get_settings, parse_aspect_ratio, resolve_dimensions
from ..core.csv_io import read_csv_file, write_sample_csv
from ..core.errors import MarketHeatmapError
from ..core.heatmap import Heatmap
from ..core.logging_config import get_logger, setup_logging
from ..layouts.treemap import compute_heatmap_layout

app = typer.Typer(help="Market heatmap CLI")

logger = get_logger(__name__)


class OutputFormat(str, Enum):
    svg = "svg"
    html = "html"


@app.callback()
def callback(
    json_logs: bool = typer.Option(False, "--json-logs", help="Output logs in JSON format"),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """Configure global CLI options."""
    setup_logging(json_output=json_logs, log_level=log_level)
    logger.debug("CLI initialized", extra={"json_logs": json_logs, "log_level": log_level})


@app.command()
def version() -> None:
    """Print version."""
    typer.echo(__version__)


@app.command()
def render(
    csv_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV file with name,marketCap,price,change"),  # noqa: B008
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file (default: stock_heatmap.<format>)"),  # noqa: B008
    fmt: OutputFormat = typer.Option(OutputFormat.svg, "--format", "-f", case_sensitive=False, help="svg or html"),  # noqa: B008
    width: Optional[float] = typer.Option(None, min=1.0, help="Canvas width in pixels (default: MH_WIDTH or 960)"),
    aspect_ratio: Optional[str] = typer.Option(None, "--aspect-ratio", help="1:1 or 16:9 (default: MH_ASPECT_RATIO or 16:9)"),
    light: bool = typer.Option(False, "--light", help="Render on a light background"),
) -> None:
    """Render a CSV file as a heatmap image."""
    try:
        settings = get_settings()
        stocks = read_csv_file(csv_path)
        ratio = parse_aspect_ratio(aspect_ratio) if aspect_ratio else settings.aspect_ratio
    except MarketHeatmapError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e

    heatmap = Heatmap(
        stocks,
        width=width or settings.width,
        aspect_ratio=ratio,
        dark_mode=settings.dark_mode and not light,
    )
    target = output or Path(f"stock_heatmap.{fmt.value}")

    if not heatmap.compute_layout():
        typer.echo("No data to display")
        return

    if fmt is OutputFormat.svg:
        heatmap.save_svg(target)
    else:
        heatmap.save_html(target)
    typer.echo(f"Wrote {target}")


@app.command()
def layout(
    csv_path: Path = typer.Argument(..., exists=True, dir_okay=False),  # noqa: B008
    width: Optional[float] = typer.Option(None, min=1.0, help="Canvas width in pixels"),
    aspect_ratio: Optional[str] = typer.Option(None, "--aspect-ratio", help="1:1 or 16:9"),
) -> None:
    """Print the computed layout rectangles as JSON."""
    try:
        settings = get_settings()
        stocks = read_csv_file(csv_path)
        w, h = resolve_dimensions(width or settings.width, aspect_ratio or settings.aspect_ratio)
    except MarketHeatmapError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e

    rects = compute_heatmap_layout(stocks, w, h)
    payload = [{**r.to_dict(), "change": r.data.change} for r in rects]
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def sample(
    output: Path = typer.Option(Path("indices_sample_data.csv"), "--output", "-o", help="Where to write the sample CSV"),  # noqa: B008
) -> None:
    """Write a sample CSV file."""
    path = write_sample_csv(output)
    typer.echo(f"Wrote {path}")


if __name__ == "__main__":
    app()
