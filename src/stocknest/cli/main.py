"""Typer CLI for stock nesting."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from stocknest.application import (
    BarNestingReport,
    NestingService,
    SheetNestingReport,
)
from stocknest.application.config import (
    ConfigError,
    NestingJobConfiguration,
    config_to_candidates,
    config_to_estimate_config,
    config_to_linear_config,
    config_to_packing_config,
    config_to_parts,
    config_to_stock,
    load_config,
)
from stocknest.cli.commands import display_load_error, validate_command
from stocknest.domain import (
    IncompatiblePiecesError,
    StockBar,
    UtilizationCalculator,
    expand_parts,
    validate_compatibility,
)
from stocknest.infrastructure import (
    ComparisonFormatter,
    EstimateFormatter,
    JsonExporter,
    LinearReportFormatter,
    PackingReportFormatter,
)

# Exit code when nesting ran but left pieces unplaced
EXIT_INCOMPLETE = 3

app = typer.Typer(
    name="stocknest",
    help="Nest sheet and linear parts onto raw stock and estimate cost.",
)

app.command(name="validate")(validate_command)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_job(job_file: Path) -> NestingJobConfiguration:
    try:
        return load_config(job_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)


def _build_service(config: NestingJobConfiguration) -> NestingService:
    return NestingService(
        packing_config=config_to_packing_config(config.packing),
        linear_config=config_to_linear_config(config.linear),
        estimate_config=config_to_estimate_config(config.estimate),
    )


def _echo_incompatible(error: IncompatiblePiecesError) -> None:
    typer.echo("Error: pieces are incompatible with the material", err=True)
    for message in error.errors:
        typer.echo(f"  - {message}", err=True)


@app.command()
def nest(
    job_file: Annotated[Path, typer.Argument(help="Path to the JSON job file")],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    summary: Annotated[
        bool,
        typer.Option("--summary", "-s", help="Omit per-piece placements"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Nest a job onto its stock and report layouts, utilization and cost.

    Exits with code 3 when some pieces could not be placed.
    """
    _configure_logging(verbose)

    if output_format not in ("text", "json"):
        typer.echo(f"Unknown format: {output_format}", err=True)
        raise typer.Exit(code=1)

    config = _load_job(job_file)
    service = _build_service(config)

    try:
        report = service.calculate(
            config_to_parts(config), config_to_stock(config), config.category
        )
    except IncompatiblePiecesError as e:
        _echo_incompatible(e)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if config.name and output_format == "text":
        typer.echo(f"Job: {config.name}")

    if isinstance(report, SheetNestingReport):
        if output_format == "json":
            typer.echo(JsonExporter().export_packing(report))
        else:
            formatter = PackingReportFormatter(show_placements=not summary)
            typer.echo(formatter.format(report.packing))
            typer.echo()
            typer.echo(f"Material cost: {report.material_cost:.2f}")
            typer.echo(f"Cutting cost:  {report.cutting_cost:.2f}")
            typer.echo(f"Total cost:    {report.total_cost:.2f}")
            typer.echo(f"Total weight:  {report.total_weight:.2f} kg")
    elif isinstance(report, BarNestingReport):
        if output_format == "json":
            typer.echo(JsonExporter().export_linear(report))
        else:
            typer.echo(LinearReportFormatter().format(report.result))
            typer.echo(f"Total weight:    {report.total_weight:.2f} kg")

    if not report.is_complete:
        typer.echo(
            "Warning: layout is incomplete; split the order or use larger stock.",
            err=True,
        )
        raise typer.Exit(code=EXIT_INCOMPLETE)


@app.command()
def compare(
    job_file: Annotated[Path, typer.Argument(help="Path to the JSON job file")],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Compare candidate sheet sizes for a sheet job."""
    _configure_logging(verbose)

    config = _load_job(job_file)
    if config.category.is_linear:
        typer.echo("Error: compare only supports sheet jobs", err=True)
        raise typer.Exit(code=1)

    service = _build_service(config)
    try:
        comparison = service.compare_sheets(
            config_to_parts(config), config_to_candidates(config)
        )
    except IncompatiblePiecesError as e:
        _echo_incompatible(e)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output_format == "json":
        typer.echo(JsonExporter().export_comparison(comparison))
    else:
        typer.echo(ComparisonFormatter().format(comparison))
        typer.echo()
        typer.echo(f"Recommended sheet: {comparison.best.sheet.label}")


@app.command()
def estimate(
    job_file: Annotated[Path, typer.Argument(help="Path to the JSON job file")],
) -> None:
    """Show the arithmetic stock estimate without packing."""
    config = _load_job(job_file)
    pieces = expand_parts(config_to_parts(config))

    compatibility = validate_compatibility(pieces, config.category)
    if not compatibility.valid:
        _echo_incompatible(
            IncompatiblePiecesError(config.category, compatibility.errors)
        )
        raise typer.Exit(code=1)

    calculator = UtilizationCalculator(config_to_estimate_config(config.estimate))
    stock = config_to_stock(config)
    try:
        if isinstance(stock, StockBar):
            result = calculator.estimate_bars(pieces, stock)
            unit = "bars"
        else:
            result = calculator.estimate_sheets(pieces, stock)
            unit = "sheets"
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(EstimateFormatter().format(result, unit=unit))


if __name__ == "__main__":
    app()
