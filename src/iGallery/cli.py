"""Typer-based CLI entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich import print
from rich.table import Table

from iGallery.appctx import AppContext
from iGallery.application.use_cases import UseCaseResponse
from iGallery.config import DATA_DIR_ENV
from iGallery.settings.manager import default_data_dir
from iGallery.utils.logging import get_logger, setup_logging

app = typer.Typer(help="Image gallery backend: listings, imports and the thumbnail cache")
LOGGER = get_logger("cli")


def _context(ctx: typer.Context) -> AppContext:
    return ctx.obj


def _check(response: UseCaseResponse) -> None:
    if not response.success:
        typer.echo(f"Error ({response.error_kind}): {response.error}", err=True)
        raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        envvar=DATA_DIR_ENV,
        help="Directory holding settings.json and the thumbnail cache.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    setup_logging(logging.DEBUG if verbose else logging.WARNING)
    appctx = AppContext.for_data_dir(data_dir or default_data_dir())
    LOGGER.debug("Using settings file %s", appctx.settings.path)
    ctx.obj = appctx
    ctx.call_on_close(appctx.shutdown)


@app.command("list")
def list_cmd(ctx: typer.Context, directory: Path = typer.Argument(...)) -> None:
    """List the images in a collection directory."""

    response = _context(ctx).list_images(str(directory))
    _check(response)
    for path in response.paths:
        typer.echo(path)


@app.command()
def thumb(
    ctx: typer.Context,
    paths: List[Path] = typer.Argument(..., help="Source images."),
    size: int = typer.Option(256, "--size", "-s", min=1, help="Bounding size in pixels."),
) -> None:
    """Print the cached thumbnail path for each image, rendering on a miss."""

    appctx = _context(ctx)
    failed = False
    for path in paths:
        response = appctx.get_or_create_thumbnail(str(path), size)
        if response.success:
            typer.echo(response.thumbnail_path)
        else:
            failed = True
            typer.echo(f"Error ({response.error_kind}) for {path}: {response.error}", err=True)
    if failed:
        raise typer.Exit(1)


@app.command()
def invalidate(ctx: typer.Context, directory: Path = typer.Argument(...)) -> None:
    """Remove cached thumbnails for every image currently in a directory."""

    response = _context(ctx).invalidate_collection(str(directory))
    _check(response)
    for outcome in response.outcomes:
        if outcome.error and not outcome.skipped:
            typer.echo(f"Warning: {outcome.path}: {outcome.error}", err=True)
    print(f"[green]Removed {response.removed_count} cached thumbnail(s)")


@app.command()
def sweep(
    ctx: typer.Context,
    directories: List[Path] = typer.Argument(..., help="Every collection still in use."),
) -> None:
    """Delete thumbnails that no image in the given directories can reach."""

    response = _context(ctx).sweep_orphans([str(d) for d in directories])
    _check(response)
    table = Table(title="Orphan sweep")
    table.add_column("Scanned", justify="right")
    table.add_column("Kept", justify="right")
    table.add_column("Removed", justify="right")
    table.add_column("Errors", justify="right")
    table.add_row(
        str(response.scanned), str(response.kept), str(response.removed_count), str(len(response.errors))
    )
    print(table)


@app.command("import")
def import_cmd(
    ctx: typer.Context,
    sources: List[Path] = typer.Argument(...),
    target: Path = typer.Option(..., "--to", help="Destination collection directory."),
    move: bool = typer.Option(False, "--move", help="Move instead of copy."),
) -> None:
    """Copy or move files into a collection without overwriting."""

    response = _context(ctx).import_files(
        [str(s) for s in sources], str(target), "move" if move else "copy"
    )
    _check(response)
    for dest in response.imported_paths:
        typer.echo(dest)
    for source, reason in response.failed_paths.items():
        typer.echo(f"Failed: {source}: {reason}", err=True)
    print(f"[green]Imported {len(response.imported_paths)} file(s)")


@app.command()
def delete(ctx: typer.Context, path: Path = typer.Argument(...)) -> None:
    """Delete an image file."""

    _check(_context(ctx).delete_image(str(path)))
    print(f"[green]Deleted {path}")


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@app.command()
def config(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Dotted settings key, e.g. thumbnails.witness."),
    value: str = typer.Argument(..., help="JSON value; bare words are taken as strings."),
) -> None:
    """Change a persisted setting."""

    response = _context(ctx).update_setting(key, _parse_value(value))
    _check(response)
    typer.echo(f"{key} = {json.dumps(response.value)}")


if __name__ == "__main__":  # pragma: no cover
    app()
