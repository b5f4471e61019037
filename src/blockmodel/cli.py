# src/blockmodel/cli.py
"""
blockmodel Command Line Interface (CLI).

Terminal front-end over the CSV loaders and the dependence strategies, built
with `typer` and `rich`.

Commands
--------
- **info**: grid shape, occupied cell count, origin and block size.
- **block**: contents of one cell, or "absent".
- **deps**: dependent indices of one cell under a named strategy.

Every command reads the CSV as unindexed (placing blocks by coordinate)
unless `--indexed` is given, in which case the `i, j, k` columns are used.

Usage
-----
    $ blockmodel info samples/deposit.csv
    $ blockmodel block samples/deposit.csv 3 4 0
    $ blockmodel deps samples/deposit.csv 3 4 0 --strategy preds
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from blockmodel.core.contracts.block import BlockIndex
from blockmodel.core.dependence import Dependence
from blockmodel.core.errors import BlockModelError
from blockmodel.core.loader import load_indexed_csv, load_unindexed_csv
from blockmodel.core.model import BlockModel

# Pick up BLOCKMODEL_* overrides from a local .env before any command runs
load_dotenv()

app = typer.Typer(
    help="blockmodel: inspect regular 3D block models and their precedence neighborhoods.",
    rich_markup_mode="markdown",
)
console = Console()


# --------------------------------------------------------------------------- #
# Shared arguments
# --------------------------------------------------------------------------- #

FileArg = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Path to the block model CSV (header row required).",
    ),
]
IndexedOpt = Annotated[
    bool,
    typer.Option(
        "--indexed/--unindexed",
        help="Read grid indices from the i, j, k columns instead of deriving them.",
    ),
]
IArg = Annotated[int, typer.Argument(min=0, show_default=False, help="Grid column i.")]
JArg = Annotated[int, typer.Argument(min=0, show_default=False, help="Grid row j.")]
KArg = Annotated[
    int, typer.Argument(min=0, show_default=False, help="Grid layer k (grows downward).")
]


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _load(file: Path, indexed: bool) -> BlockModel[Any]:
    """Helper: Load the model or exit with code 1 and a readable error."""
    loader = load_indexed_csv if indexed else load_unindexed_csv
    result = loader(file)
    if result.is_err():
        error = result.unwrap_err()
        kind = type(error).__name__
        console.print(f"[bold red]❌ Load Error ({kind}):[/bold red] {escape(str(error))}")
        raise typer.Exit(code=1)
    return result.unwrap()


def _index_or_exit(model: BlockModel[Any], i: int, j: int, k: int) -> BlockIndex:
    """Helper: Build the index and reject it early if it is off the grid."""
    index = BlockIndex(i=i, j=j, k=k)
    if not model.contains(index):
        console.print(
            f"[bold red]❌ Index Error:[/bold red] {index} is outside grid shape {model.shape}"
        )
        raise typer.Exit(code=1)
    return index


def _fmt_triplet(values: tuple[float, float, float] | None) -> str:
    if values is None:
        return "[dim]n/a (indexed load)[/dim]"
    return ", ".join(f"{v:g}" for v in values)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def info(file: FileArg, indexed: IndexedOpt = False) -> None:
    """Summarize a block model: shape, occupancy, origin and block size."""
    model = _load(file, indexed)
    nx, ny, nz = model.shape
    occupied = len(model)

    table = Table(show_header=False, box=None)
    table.add_row("Shape (i, j, k)", f"{nx} x {ny} x {nz}")
    table.add_row("Cells", str(nx * ny * nz))
    table.add_row("Occupied", str(occupied))
    table.add_row("Absent", str(nx * ny * nz - occupied))
    table.add_row("Origin", _fmt_triplet(model.origin.as_tuple() if model.origin else None))
    table.add_row(
        "Block size", _fmt_triplet(model.block_size.as_tuple() if model.block_size else None)
    )

    console.print(Panel(table, title=f"[bold cyan]{file.name}[/bold cyan]", border_style="cyan"))


@app.command()  # type: ignore[misc]
def block(
    file: FileArg,
    i: IArg,
    j: JArg,
    k: KArg,
    indexed: IndexedOpt = False,
) -> None:
    """Show the contents of the cell at (I, J, K)."""
    model = _load(file, indexed)
    index = _index_or_exit(model, i, j, k)

    payload = model.block(index)
    if payload is None:
        console.print(f"Cell {index}: [dim]absent[/dim]")
        return

    table = Table(title=f"Cell {index}", show_header=True, header_style="bold")
    table.add_column("Field")
    table.add_column("Value")
    fields = payload.model_dump() if hasattr(payload, "model_dump") else vars(payload)
    for name, value in fields.items():
        table.add_row(str(name), str(value))
    console.print(table)


@app.command()  # type: ignore[misc]
def deps(
    file: FileArg,
    i: IArg,
    j: JArg,
    k: KArg,
    strategy: Annotated[
        Dependence,
        typer.Option(
            "--strategy",
            "-s",
            case_sensitive=False,
            help="preds: layer below, succs: layer above, adj: occupied cells on the same layer.",
        ),
    ] = Dependence.PREDS,
    indexed: IndexedOpt = False,
) -> None:
    """List the indices that the cell at (I, J, K) depends on under STRATEGY."""
    model = _load(file, indexed)
    index = _index_or_exit(model, i, j, k)

    try:
        related = model.dependent_block_inds(index, strategy.strategy())
    except BlockModelError as e:
        console.print(f"[bold red]❌ Query Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    table = Table(title=f"{strategy.value} of {index}", header_style="bold")
    table.add_column("i", justify="right")
    table.add_column("j", justify="right")
    table.add_column("k", justify="right")
    table.add_column("occupied")
    for ind in related:
        present = model.block(ind) is not None
        table.add_row(str(ind.i), str(ind.j), str(ind.k), "yes" if present else "no")

    console.print(table)
    console.print(f"[dim]{len(related)} indices[/dim]")


if __name__ == "__main__":
    app()
