from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from axon.core.config import Config
from axon.core.exceptions import AxonError
from axon.core.graph import Graph
from axon.core.paths import normalize_path


app = typer.Typer(help="AXON dependency graph CLI.", add_completion=False, no_args_is_help=True)
console = Console()


def setup_logging(config: Config, debug: bool = False, verbose: bool = False) -> None:
    """Configure the root logger; flags override the configured level."""

    if debug:
        log_level = logging.DEBUG
    elif verbose:
        log_level = logging.INFO
    else:
        log_level = getattr(logging, str(config.logging.get("level", "WARNING")).upper(), logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format=config.logging.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        datefmt="%H:%M:%S",
    )
    logging.getLogger("axon").setLevel(log_level)


@app.callback()
def main() -> None:
    """Build adjacency matrices from vertex descriptor trees."""


@app.command()
def parse(
    path: str = typer.Argument(..., help="Directory of the root vertex"),
    name: str = typer.Argument(..., help="Name of the root vertex"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="Path to a YAML config file"),
    as_json: bool = typer.Option(False, "--json", help="Print the graph as JSON"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable info logging"),
) -> None:
    """Parse the graph rooted at PATH/NAME and print its adjacency matrix."""

    try:
        config = Config(str(config_file) if config_file else None)
        setup_logging(config, debug=debug, verbose=verbose)
        document = Graph(config).parse((path, name))
    except AxonError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(document.to_dict(), indent=2))
        return

    table = Table(title="AXON Vertices", show_lines=False)
    table.add_column("Id", justify="right")
    table.add_column("Path")
    table.add_column("Metadata")
    metadata = document.metadata_paths
    for index, vertex_path in document.index.items():
        table.add_row(str(index), vertex_path, metadata.get(index, "-"))

    console.rule("Vertices")
    console.print(table)
    console.rule("Adjacency")
    for row in document.matrix.to_list():
        console.print(" ".join(str(cell) for cell in row))
    console.print(f"{document.order} vertices, {document.matrix.edge_count()} edges")


@app.command()
def normalize(paths: List[str] = typer.Argument(..., help="Paths to canonicalize")) -> None:
    """Print the canonical form of each PATH."""

    for raw in paths:
        try:
            typer.echo(normalize_path(raw))
        except AxonError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
