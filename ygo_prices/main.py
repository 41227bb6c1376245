"""
YGO Prices — Application Entrypoint

Command-line front end: reads a CSV or deck list, prices it, writes CSV.

Run via:
    ygo-prices -f collection.csv -o priced.csv --print-total -c EUR
    python -m ygo_prices.main < deck.csv
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Annotated, TextIO

import structlog
import typer

from ygo_prices.config import ArbitrationStrategy, InputFormat, settings
from ygo_prices.errors import OutputExistsError, PricerError
from ygo_prices.models.issue import PricingReport
from ygo_prices.output import open_output, write_records
from ygo_prices.pipeline.runner import report_total, resolve_format, run_pricing


# ---------------------------------------------------------------------------
# Structlog Configuration
# ---------------------------------------------------------------------------


def configure_logging(log_level: str = "WARNING") -> None:
    """
    Set up structured logging with JSON output on stderr.

    stdout is reserved for CSV output and the total line.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    # Configure stdlib logging first (for third-party libraries)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

cli = typer.Typer(
    name="ygo-prices",
    help="Price a Yu-Gi-Oh! card list (CSV or .ydk deck list) and write it back as CSV.",
    add_completion=False,
)


def _open_input(path: str | None) -> TextIO:
    if path is None:
        return sys.stdin
    return open(path, newline="", encoding="utf-8-sig")


def _emit(report: PricingReport, out: str | None) -> None:
    if out is None:
        write_records(report.records, sys.stdout)
        sys.stdout.flush()
        return
    with open_output(out) as stream:
        write_records(report.records, stream)


@cli.command()
def price(
    file: Annotated[
        str | None,
        typer.Option("--file", "-f", help="Path to input file, otherwise input comes from stdin"),
    ] = None,
    out: Annotated[
        str | None,
        typer.Option("--out", "-o", help="Path to output file, otherwise output goes to stdout"),
    ] = None,
    print_total: Annotated[
        bool,
        typer.Option("--print-total", help="Prints total value of cards to stdout"),
    ] = False,
    arbitration_strategy: Annotated[
        str,
        typer.Option(
            "--arbitration-strategy",
            "-a",
            help="Arbitration strategy when result is ambiguous. 'Min' or 'MinValue' to pick "
            "cheapest option. 'Max' or 'MaxValue' to pick most expensive option.",
        ),
    ] = settings.DEFAULT_ARBITRATION_STRATEGY.value,
    currency: Annotated[
        str | None,
        typer.Option("--currency", "-c", help="Currency to use for prices (defaults to USD)"),
    ] = None,
    input_format: Annotated[
        InputFormat,
        typer.Option("--format", help="Input format; 'auto' treats .ydk files as deck lists"),
    ] = InputFormat.AUTO,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
    ] = settings.LOG_LEVEL,
) -> None:
    """Price every card in the input and write the priced CSV."""
    configure_logging(log_level)
    logger = structlog.get_logger(__name__)

    try:
        strategy = ArbitrationStrategy.parse(arbitration_strategy)
        if out is not None and Path(out).exists():
            raise OutputExistsError(out)

        fmt = resolve_format(file, input_format)
        stream = _open_input(file)
        try:
            report = asyncio.run(
                run_pricing(
                    stream,
                    fmt,
                    strategy,
                    currency=currency,
                    with_total=print_total,
                )
            )
        finally:
            if stream is not sys.stdin:
                stream.close()

        for issue in report.issues:
            typer.echo(f"warning: {issue}", err=True)

        _emit(report, out)

        if print_total:
            total = report_total(report)
            typer.echo(f"total value: {total:.2f} {report.currency}")

    except PricerError as e:
        logger.error("ygo_prices_run_failed", error=e.message, error_type=type(e).__name__)
        typer.echo(f"error: {e.message}", err=True)
        raise typer.Exit(code=1) from None
    except OSError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1) from None


def main() -> None:
    cli()


# ---------------------------------------------------------------------------
# CLI Entry
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    main()
