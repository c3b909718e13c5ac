"""Click-based CLI for price-reconciler.

Thin wrapper around the prices package. Reads provider payloads from JSON
files, folds them into one PriceSet, and writes the table to stdout.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_config(ctx: click.Context):
    """Load config lazily, caching on first call."""
    if "config" not in ctx.obj:
        from price_reconciler.core import load_config

        ctx.obj["config"] = load_config(config_path=ctx.obj.get("config_path"))
    return ctx.obj["config"]


def _parse_source_spec(spec: str) -> tuple[Path, str | None]:
    """Split ``PATH[:SYMBOL]`` into a path and an optional symbol."""
    path, sep, symbol = spec.rpartition(":")
    if sep and path and symbol and "/" not in symbol and "\\" not in symbol:
        return Path(path), symbol
    return Path(spec), None


def _read_payload(path: Path):
    if not path.exists():
        raise click.BadParameter(f"Payload file not found: {path}", param_hint="SOURCES")
    try:
        with open(path) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{path} is not valid JSON: {e}", param_hint="SOURCES") from e


def _build_sources(specs: tuple[str, ...], provider: str | None) -> list:
    """Turn ``PATH[:SYMBOL]`` arguments into PriceSource objects."""
    from price_reconciler.core.models import ProviderKind
    from price_reconciler.prices import PriceSource, detect_provider

    sources = []
    for spec in specs:
        path, symbol = _parse_source_spec(spec)
        payload = _read_payload(path)
        kind = ProviderKind(provider) if provider else detect_provider(payload)
        sources.append(PriceSource(provider=kind, payload=payload, symbol=symbol))
    return sources


def _parse_dates(values: tuple[str, ...]) -> list[date]:
    dates = []
    for value in values:
        try:
            dates.append(date.fromisoformat(value))
        except ValueError as e:
            raise click.BadParameter(
                f"Expected YYYY-MM-DD, got {value!r}", param_hint="--date"
            ) from e
    return dates


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    envvar="PRICE_RECONCILER_CONFIG",
    default=None,
    help="Path to price-reconciler.yml config file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.version_option(package_name="price-reconciler")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """Price Reconciler: merge multi-provider daily prices into one table."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["console"] = console

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# reconcile
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("sources", nargs=-1, required=True)
@click.option(
    "--provider",
    "-p",
    type=click.Choice(["forex", "history", "chart"], case_sensitive=False),
    default=None,
    help="Provider of every payload. Detected from payload shape if omitted.",
)
@click.option(
    "--date",
    "-d",
    "date_values",
    multiple=True,
    help="Date of interest (YYYY-MM-DD). Repeatable.",
)
@click.option(
    "--interpolate/--no-interpolate",
    default=None,
    help="Fill internal gaps after merging. Defaults to the config setting.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "csv"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.pass_context
def reconcile(
    ctx: click.Context,
    sources: tuple[str, ...],
    provider: str | None,
    date_values: tuple[str, ...],
    interpolate: bool | None,
    output_format: str,
) -> None:
    """Reconcile payload files given as PATH[:SYMBOL] into one price table."""
    from price_reconciler.core.exceptions import PriceReconcilerError
    from price_reconciler.prices import reconcile as run_reconcile

    dates = _parse_dates(date_values)
    try:
        config = _load_config(ctx)
        price_sources = _build_sources(sources, provider.lower() if provider else None)
        if interpolate is None:
            interpolate = config.reconcile.interpolate
        price_set = run_reconcile(
            price_sources,
            dates=dates or None,
            interpolate_gaps=interpolate,
            config=config,
        )
    except PriceReconcilerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if output_format == "json":
        _output_prices_json(price_set)
    elif output_format == "csv":
        _output_prices_csv(price_set)
    else:
        _output_prices_table(price_set)


def _output_prices_table(price_set) -> None:
    """Render the price set as a Rich table, one column per symbol."""
    symbols = price_set.symbols()
    table = Table(title="Reconciled Prices")
    table.add_column("Date", style="bold")
    for symbol in symbols:
        table.add_column(symbol, justify="right")

    for price_date in price_set.dates():
        row = [str(price_date)]
        for symbol in symbols:
            stock_price = price_set.get(price_date, symbol)
            row.append(str(stock_price.price) if stock_price else "[dim]-[/dim]")
        table.add_row(*row)

    console.print(table)


def _output_prices_json(price_set) -> None:
    """Write the price set as JSON to stdout: ``{date: {symbol: price}}``."""
    output = {
        str(price_date): {
            symbol: str(stock_price.price)
            for symbol, stock_price in sorted(price_set[price_date].items())
        }
        for price_date in price_set.dates()
    }
    click.echo(json.dumps(output, indent=2))


def _output_prices_csv(price_set) -> None:
    """Write the price set as CSV to stdout, blank where a price is missing."""
    frame = price_set.to_frame()
    frame.index = frame.index.strftime("%Y-%m-%d")
    click.echo(frame.to_csv(index_label="date", float_format="%.6f"), nl=False)


# ---------------------------------------------------------------------------
# detect
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def detect(path: str) -> None:
    """Print the provider kind of a payload file."""
    from price_reconciler.core.exceptions import PayloadError
    from price_reconciler.prices import detect_provider

    payload = _read_payload(Path(path))
    try:
        kind = detect_provider(payload)
    except PayloadError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)
    click.echo(str(kind))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
