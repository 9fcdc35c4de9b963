"""CLI entry point for scaleticket."""

import logging
import sys
from pathlib import Path

import click

from .adapters.catalog import create_catalog
from .adapters.storage import FilesystemTicketStore
from .config import load_settings
from .domain.exceptions import CatalogError
from .domain.extraction import FieldExtractor
from .domain.vehicles import auto_select_vehicle
from .presentation import (
    extraction_lines,
    stored_ticket_line,
    ticket_lines,
    vehicle_line,
)
from .watcher import create_issuing_service, run_watcher


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """ScaleTicket - weighbridge tickets from CTe / NFe XML."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def extract(ctx: click.Context, file: Path) -> None:
    """Show the fields extracted from an XML document."""
    settings = load_settings(ctx.obj["config_path"])
    result = FieldExtractor().extract_file(file)

    for line in extraction_lines(result):
        click.echo(line)

    if result.error:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)

    if result.net_weight is not None:
        try:
            vehicles = create_catalog(settings.catalog).list_vehicles()
        except CatalogError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        selection = auto_select_vehicle(
            result.net_weight, vehicles, settings.selection.to_rules()
        )
        click.echo(f"vehicle: {selection.message}")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--vehicle", "vehicle_id", help="Vehicle id (skip automatic selection)")
@click.option("--dry-run", is_flag=True, help="Compute the ticket without storing it")
@click.pass_context
def issue(
    ctx: click.Context, file: Path, vehicle_id: str | None, dry_run: bool
) -> None:
    """Issue a weighbridge ticket for an XML document."""
    settings = load_settings(ctx.obj["config_path"])
    if not dry_run:
        settings.ensure_dirs()

    try:
        service = create_issuing_service(settings)
    except CatalogError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    result = service.issue(file, vehicle_id=vehicle_id, dry_run=dry_run)

    if result.selection:
        click.echo(result.selection.message)

    if result.success and result.ticket:
        ticket_id = result.stored.id if result.stored else None
        for line in ticket_lines(result.ticket, ticket_id):
            click.echo(line)
    else:
        click.echo(f"Errors: {result.errors}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def vehicles(ctx: click.Context) -> None:
    """List the vehicle catalog."""
    settings = load_settings(ctx.obj["config_path"])
    try:
        catalog = create_catalog(settings.catalog)
    except CatalogError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for vehicle in catalog.list_vehicles():
        click.echo(vehicle_line(vehicle))


@cli.command()
@click.option("--limit", default=20, show_default=True, type=click.IntRange(min=1))
@click.pass_context
def tickets(ctx: click.Context, limit: int) -> None:
    """List recently issued tickets."""
    settings = load_settings(ctx.obj["config_path"])
    store = FilesystemTicketStore(settings.paths.tickets)

    recent = store.list_recent(limit)
    if not recent:
        click.echo("No tickets issued yet")
        return

    for stored in recent:
        click.echo(stored_ticket_line(stored))


@cli.command()
@click.pass_context
def watch(ctx: click.Context) -> None:
    """Run the inbox watcher daemon."""
    settings = load_settings(ctx.obj["config_path"])
    run_watcher(settings)


if __name__ == "__main__":
    cli()
