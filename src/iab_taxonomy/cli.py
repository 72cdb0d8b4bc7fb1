"""CLI for the IAB taxonomy browser (browse, lookup, datasets)."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console

from iab_taxonomy import __version__
from iab_taxonomy.config import DEFAULT_LOG_FILE, TAXONOMY_URL, resolve_data_directory
from iab_taxonomy.core.importer.loader import TsvDatasetSource, load_all, load_dataset
from iab_taxonomy.core.search.lookup import LookupField, LookupFilter, lookup
from iab_taxonomy.core.tree.builder import build_forest
from iab_taxonomy.core.tree.details import render_details
from iab_taxonomy.logging_config import configure_logging
from iab_taxonomy.models.record import DatasetKind, RecordStore

app = typer.Typer(help="Browse and search the IAB Tech Lab taxonomies.")

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Directory with the taxonomy .tsv files"),
]


def version_string() -> str:
    lines = [__version__]
    lines.extend(f"{kind.title}: {kind.version}" for kind in DatasetKind)
    lines.extend(["", TAXONOMY_URL])
    return "\n".join(lines)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(version_string())
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: Annotated[
        bool,
        typer.Option(
            "--version", callback=_version_callback, is_eager=True, help="Show versions and exit"
        ),
    ] = False,
) -> None:
    ctx.obj = {"verbose": verbose}
    configure_logging(verbose=verbose)


def _data_dir(data_dir: Path | None) -> Path:
    try:
        return resolve_data_directory(data_dir)
    except FileNotFoundError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e


def _load_store(data_dir: Path | None, kind: DatasetKind) -> RecordStore:
    try:
        return load_dataset(_data_dir(data_dir), kind)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Cannot load {} taxonomy: {}", kind.title, e)
        raise typer.Exit(1) from e


@app.command()
def browse(
    ctx: typer.Context,
    data_dir: DataDirOption = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", "-l", help="Where to log while the browser runs"),
    ] = None,
) -> None:
    """Browse the taxonomies as an interactive, filterable tree."""
    from iab_taxonomy.core.session import BrowserSession
    from iab_taxonomy.tui.app import TaxonomyBrowserApp

    source = TsvDatasetSource(_data_dir(data_dir))
    try:
        stores = load_all(source)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Cannot load taxonomies: {}", e)
        raise typer.Exit(1) from e

    verbose = (ctx.obj or {}).get("verbose", False)
    configure_logging(verbose=verbose, log_file=log_file or DEFAULT_LOG_FILE)
    TaxonomyBrowserApp(BrowserSession(stores)).run()


@app.command(name="lookup")
def lookup_cmd(
    content: bool = typer.Option(False, "--content", "-c", help="Search the content taxonomy"),
    product: bool = typer.Option(False, "--product", "-p", help="Search the product taxonomy"),
    audience: bool = typer.Option(False, "--audience", "-a", help="Search the audience taxonomy"),
    record_id: Annotated[
        str | None, typer.Option("--id", "-i", help="Filter by unique ID")
    ] = None,
    parent: Annotated[
        str | None, typer.Option("--parent", "-t", help="Filter by parent ID")
    ] = None,
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="Filter by name (case-insensitive substring match)"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Print the records of one taxonomy that match an id, parent or name."""
    chosen = [
        kind
        for kind, flag in (
            (DatasetKind.CONTENT, content),
            (DatasetKind.PRODUCT, product),
            (DatasetKind.AUDIENCE, audience),
        )
        if flag
    ]
    if not chosen:
        typer.echo("Error: Must specify one of --content, --product, or --audience", err=True)
        raise typer.Exit(1)
    if len(chosen) > 1:
        typer.echo("Error: Can only specify one taxonomy at a time", err=True)
        raise typer.Exit(1)

    filters = [
        LookupFilter(field, value)
        for field, value in (
            (LookupField.ID, record_id),
            (LookupField.PARENT, parent),
            (LookupField.NAME, name),
        )
        if value is not None
    ]
    if len(filters) != 1:
        typer.echo("Error: Must specify exactly one of --id, --parent, or --name", err=True)
        raise typer.Exit(1)

    kind = chosen[0]
    store = _load_store(data_dir, kind)
    console = Console(highlight=False, soft_wrap=True)
    for record in lookup(store, filters[0]):
        console.print(render_details(record, kind))


@app.command()
def datasets(
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List the available taxonomies."""
    summary = []
    for kind in DatasetKind:
        store = _load_store(data_dir, kind)
        forest = build_forest(store)
        summary.append(
            {
                "taxonomy": kind.title,
                "version": kind.version,
                "records": len(store),
                "roots": len(forest.roots),
            }
        )

    if output_json:
        typer.echo(json.dumps({"datasets": summary, "count": len(summary)}, indent=2))
        return

    for entry in summary:
        typer.echo(
            f"  {entry['taxonomy']} {entry['version']} - "
            f"{entry['records']} records, {entry['roots']} top-level categories"
        )
