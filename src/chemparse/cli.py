"""Command-line entrypoints for chemparse."""

from __future__ import annotations

import logging
from contextlib import closing
from pathlib import Path
from typing import Annotated, Any, Callable

import typer

from chemparse.batch import BatchSummary, process_file
from chemparse.errors import ChemParseError, PeriodicTableError
from chemparse.parser import ChemParser
from chemparse.periodic_table import PeriodicTable
from chemparse.persistence import sqlite_store

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="Parse chemical elements, formulas and equations.",
)


@app.callback()
def main(
    ctx: typer.Context,
    table: Annotated[
        Path | None,
        typer.Option(help="Periodic table CSV to use instead of the bundled one."),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging.")
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"table": table}


def _parser(ctx: typer.Context) -> ChemParser:
    state = ctx.ensure_object(dict)
    if "parser" not in state:
        table_path = state.get("table")
        try:
            table = (
                PeriodicTable.from_csv(table_path)
                if table_path is not None
                else PeriodicTable.default()
            )
        except PeriodicTableError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=1) from exc
        state["parser"] = ChemParser(table)
    return state["parser"]


def _run(action: Callable[[], Any]) -> Any:
    try:
        return action()
    except ChemParseError as exc:
        typer.echo(f"Error: {exc}, try again", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def symbol(
    ctx: typer.Context,
    element: Annotated[str, typer.Argument(help="Element symbol, e.g. Na.")],
) -> None:
    """Parse an element symbol and print its periodic table entry."""
    parser = _parser(ctx)
    record = _run(lambda: parser.parse_element(element))
    typer.echo(f"Element: {record}")


@app.command()
def formula(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Chemical formula, e.g. Cu2(OH)2CO3.")],
) -> None:
    """Parse a formula and print its composition and mass."""
    parser = _parser(ctx)
    parsed = _run(lambda: parser.parse_formula(text))
    typer.echo(f"Formula: {parsed}")


@app.command()
def equation(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help='Chemical equation, e.g. "2H2 + O2 -> 2H2O".')],
) -> None:
    """Parse an equation and print its reactants and products."""
    parser = _parser(ctx)
    parsed = _run(lambda: parser.parse_equation(text))
    typer.echo(f"Equation: {parsed}")


@app.command()
def check(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Chemical equation to check.")],
) -> None:
    """Check whether an equation conserves mass."""
    parser = _parser(ctx)
    parsed = _run(lambda: parser.parse_equation(text))
    typer.echo(f"Equation: \n{parsed}")
    typer.echo(_verdict(parsed.is_balanced()))


@app.command()
def solve(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Chemical equation to solve.")],
) -> None:
    """Confirm an equation's coefficients; unbalanced equations are reported."""
    parser = _parser(ctx)
    parsed = _run(lambda: parser.solve_equation(text))
    typer.echo(f"Equation: \n{parsed}")
    typer.echo(_verdict(True))


@app.command()
def file(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="File with one equation per line.")],
    project_file: Annotated[
        Path | None,
        typer.Option(help="Optional SQLite project file to persist results."),
    ] = None,
) -> None:
    """Parse and check every equation in a file."""
    parser = _parser(ctx)
    try:
        results = process_file(path, parser)
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"Error: Failed to read file: {path}", err=True)
        raise typer.Exit(code=1) from exc

    for result in results:
        if result.ok:
            typer.echo(f"{result.line_number}. {result.equation}")
            typer.echo(_verdict(bool(result.balanced)))
        else:
            typer.echo(f"Error on line {result.line_number}: {result.error}", err=True)

    if project_file is not None:
        with closing(sqlite_store.connect(project_file)) as connection:
            sqlite_store.ensure_schema(connection)
            project_id = sqlite_store.create_project(
                connection,
                name=path.name,
                notes="Autogenerated from chemparse CLI file command.",
            )
            sqlite_store.save_batch(connection, project_id, str(path), results)

    summary = BatchSummary.from_results(results)
    logger.info(
        "%d lines, %d parsed, %d failed", summary.total, summary.succeeded, summary.failed
    )


@app.command()
def credits() -> None:
    """Show credits."""
    typer.echo("Chemistry parser by Liliia Parashchak, @lillydaystar")


def _verdict(balanced: bool) -> str:
    return "Equation is balanced." if balanced else "Equation is not balanced."
