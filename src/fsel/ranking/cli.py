"""Typer CLI for entropy-based attribute ranking."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import polars as pl
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from fsel.ranking.discretize import equal_freq_bin
from fsel.ranking.exceptions import RankingError
from fsel.ranking.information_gain import information_gain_frame
from fsel.ranking.results import RankingResult

app = typer.Typer(help="fsel-rank CLI")
console = Console()


@app.command("rank")
def rank(
    data_path: Path = typer.Argument(..., help="CSV or Parquet table holding attributes and class"),
    target: str = typer.Option(..., "--target", "-t", help="Name of the class column"),
    importance_type: str = typer.Option("infogain", "--type", help="infogain|gainratio|symuncert"),
    equal: bool = typer.Option(False, "--equal/--no-equal", help="Equal frequency binning of a numeric class"),
    nbins: int = typer.Option(5, "--nbins", help="Number of bins used with --equal"),
    disc_integers: bool = typer.Option(
        True, "--disc-integers/--no-disc-integers", help="Treat integer attributes as continuous"
    ),
    conf_int: float = typer.Option(0.95, "--conf-int", help="Confidence level of bootstrap bounds"),
    no_conf_int: bool = typer.Option(False, "--no-conf-int", help="Skip bootstrap confidence bounds"),
    n_boot: int = typer.Option(1000, "--n-boot", help="Number of bootstrap draws"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for the bootstrap"),
    jobs: int = typer.Option(1, "--jobs", "-j", help="Worker threads"),
    sort: bool = typer.Option(False, "--sort", help="Order by descending importance"),
    output: Optional[Path] = typer.Option(None, help="Write results to .json, .csv or .parquet"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress"),
) -> None:
    """Rank the attributes of a table by entropy-based importance."""
    if verbose:
        _configure_logging()

    data = _load_table(data_path)
    try:
        result = information_gain_frame(
            data,
            target,
            type=importance_type,
            equal=equal,
            nbins=nbins,
            disc_integers=disc_integers,
            conf_int=None if no_conf_int else conf_int,
            n_boot=n_boot,
            random_state=seed,
            n_jobs=jobs,
        )
    except RankingError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    if output:
        _write_result(result, output, sort=sort)
        console.print(f"[green]Wrote {len(result)} importances to {output}[/green]")
    else:
        console.print(_result_table(result, sort=sort))

    for advisory in result.advisories:
        console.print(f"[yellow]{advisory.code}[/yellow]: {advisory.message} {advisory.context}")


@app.command("bin")
def bin_values(
    values: List[float] = typer.Argument(..., help="Values to discretize"),
    nbins: int = typer.Option(5, "--nbins", "-n", help="Number of bins"),
) -> None:
    """Print equal frequency bin labels for a list of values."""
    try:
        labels = equal_freq_bin(values, nbins)
    except RankingError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(" ".join(str(label) for label in labels.tolist()))


def _configure_logging() -> None:
    logger = logging.getLogger("fsel.ranking")
    logger.setLevel(logging.INFO)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


def _load_table(path: Path) -> pl.DataFrame:
    if path.suffix.lower() == ".parquet":
        return pl.read_parquet(path)
    if path.suffix.lower() == ".csv":
        return pl.read_csv(path)
    raise typer.BadParameter("Unsupported file type; use Parquet or CSV")


def _result_table(result: RankingResult, sort: bool = False) -> Table:
    title = f"{result.importance_type}"
    if result.has_intervals:
        title += f" ({result.confidence:.0%} CI, {result.n_boot} draws)"
    table = Table(title=title)
    table.add_column("Attribute", style="cyan")
    table.add_column("Importance", style="green", justify="right")
    if result.has_intervals:
        table.add_column("Lower", justify="right")
        table.add_column("Upper", justify="right")

    for record in result.ranked() if sort else result.records:
        row = [str(record.attribute), f"{record.importance:.4f}"]
        if result.has_intervals:
            row += [f"{record.lower:.4f}", f"{record.upper:.4f}"]
        table.add_row(*row)
    return table


def _write_result(result: RankingResult, path: Path, sort: bool = False) -> None:
    suffix = path.suffix.lower()
    if suffix == ".json":
        path.write_text(json.dumps(result.to_dict(), indent=2))
    elif suffix == ".csv":
        result.to_frame(sort=sort).write_csv(path)
    elif suffix == ".parquet":
        result.to_frame(sort=sort).write_parquet(path)
    else:
        raise typer.BadParameter("Unsupported output type; use .json, .csv or .parquet")


if __name__ == "__main__":
    app()
