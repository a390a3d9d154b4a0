from __future__ import annotations

import logging
import math
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import load_config
from .ingest import fetch_dataset
from .tasks import run_full_pipeline, save_metrics

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
app = typer.Typer(add_completion=False)
console = Console()


def _fmt(value: float) -> str:
    if math.isnan(value):
        return "undefined"
    return f"{value:.4f}"


@app.command()
def run(
    data_path: Optional[str] = typer.Option(None, help="Semicolon file; defaults to <data_dir>/household_power_consumption.txt"),
    seed: Optional[int] = None,
    nrows: Optional[int] = None,
    download: bool = False,
    save: bool = typer.Option(False, "--save-metrics", help="Write metrics JSON to the artifacts dir"),
):
    try:
        cfg = load_config(seed=seed, nrows=nrows)
        if download and data_path is None:
            data_path = str(fetch_dataset(cfg))
        result = run_full_pipeline(cfg, path=data_path)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[bold red]Pipeline failed:[/bold red] {e}")
        raise typer.Exit(code=1)

    table = Table(title="Household Power Pipeline")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    for k, v in result.as_dict().items():
        table.add_row(str(k), str(v))
    console.print(table)

    metrics = Table(title="Hold-out Metrics")
    metrics.add_column("Model", style="cyan")
    metrics.add_column("MAE", justify="right")
    metrics.add_column("RMSE", justify="right")
    metrics.add_column("R²", justify="right")
    for name, report in result.reports.items():
        metrics.add_row(name, _fmt(report.mae), _fmt(report.rmse), _fmt(report.r2))
    console.print(metrics)

    if save:
        console.print(f"Metrics written to {save_metrics(result, cfg)}")


@app.command()
def download(overwrite: bool = False):
    cfg = load_config(overwrite=overwrite or None)
    path = fetch_dataset(cfg)
    console.print(f"Dataset ready: {path}")


if __name__ == "__main__":
    app()
