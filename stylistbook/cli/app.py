"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional

import pendulum
import typer
import yaml
from rich.console import Console
from rich.table import Table

from ..adapters.stylist_directory import InMemoryStylistDirectory, StylistDirectoryProtocol
from ..config import AppConfig, get_default_config_path
from ..domain.booking_ledger import create_ledger
from ..domain.exceptions import BookingError
from ..domain.models import AppointmentRequest, AppointmentResponse, Slot
from ..services.create_appointment import CreateAppointmentCommand

app = typer.Typer(
    name="stylistbook",
    help="Book stylist appointments against discrete time slots",
    add_completion=False
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_timestamp(value: str, tz: str):
    try:
        parsed = pendulum.parse(value, tz=tz)
    except Exception as e:
        raise ValueError(f"Could not parse timestamp '{value}': {e}") from e

    # parse() also yields Duration, Interval, Date or Time for non-timestamp input
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"Could not parse timestamp '{value}'")
    return parsed


def _build_request(
    directory: StylistDirectoryProtocol,
    tz: str,
    stylist: str,
    start: str,
    end: str,
    client: str,
) -> AppointmentRequest:
    resolved = directory.resolve(stylist)
    slot = Slot(
        start=_parse_timestamp(start, tz),
        end=_parse_timestamp(end, tz),
        resource_id=resolved.id,
    )
    return AppointmentRequest(slot=slot, client_id=client)


def _load_batch(batch_file: Path) -> List[Dict[str, Any]]:
    """
    Load booking requests from a YAML file.

    Expected format: a mapping with a ``requests`` list whose entries carry
    ``stylist``, ``start``, ``end`` and ``client``.
    """
    if not batch_file.exists():
        raise FileNotFoundError(f"Batch file not found: {batch_file}")

    try:
        with open(batch_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {batch_file}: {exc}") from exc

    entries = data.get("requests") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ValueError("Batch file must contain a 'requests' list.")

    required = ("stylist", "start", "end", "client")
    for idx, entry in enumerate(entries, 1):
        missing = [key for key in required if not isinstance(entry, dict) or key not in entry]
        if missing:
            raise ValueError(f"Request #{idx} is missing: {', '.join(missing)}")

    return entries


def _render_results(
    directory: StylistDirectoryProtocol,
    requests: List[AppointmentRequest],
    responses: List[AppointmentResponse],
) -> None:
    table = Table(
        title="Buchungen",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("#", style="dim")
    table.add_column("Stylist", style="bold yellow")
    table.add_column("Zeit")
    table.add_column("Kunde")
    table.add_column("Status")

    for idx, (request, response) in enumerate(zip(requests, responses), 1):
        slot = request.slot
        status = "[green]✓ gebucht[/green]" if response.success else "[red]✗ belegt[/red]"
        table.add_row(
            str(idx),
            directory.get_by_id(slot.resource_id).display_name(),
            f"{slot.start.format('DD.MM.YYYY HH:mm')} - {slot.end.format('HH:mm')}",
            request.client_id,
            status,
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def book(
    stylist: Annotated[Optional[str], typer.Option("--stylist", "-s", help="Stylist id or name")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Slot start (e.g. 2024-06-01T10:00)")] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="Slot end (e.g. 2024-06-01T11:00)")] = None,
    client: Annotated[Optional[str], typer.Option("--client", help="Client identifier")] = None,
    batch: Annotated[Optional[Path], typer.Option("--batch", "-b", help="YAML file with a list of requests")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """
    Book one slot, or a batch of slots against a single in-process ledger.

    Examples:

        stylistbook book --stylist anna --start 2024-06-01T10:00 --end 2024-06-01T11:00 --client c1

        stylistbook book --batch requests.yaml
    """
    _configure_logging(verbose)

    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)
        tz = config.timezone

        directory = InMemoryStylistDirectory.from_config(config)
        command = CreateAppointmentCommand(create_ledger(config.ledger.partitioning))

        if batch:
            requests = [
                _build_request(
                    directory,
                    tz,
                    str(entry["stylist"]),
                    str(entry["start"]),
                    str(entry["end"]),
                    str(entry["client"]),
                )
                for entry in _load_batch(batch)
            ]
        else:
            missing = [
                name for name, value in
                (("--stylist", stylist), ("--start", start), ("--end", end), ("--client", client))
                if not value
            ]
            if missing:
                console.print(f"[bold red]Fehler:[/bold red] Fehlende Optionen: {', '.join(missing)}")
                raise typer.Exit(1)
            requests = [_build_request(directory, tz, stylist, start, end, client)]

        responses = command.execute_many(requests)
        _render_results(directory, requests, responses)

        booked = sum(1 for response in responses if response.success)
        console.print(f"[bold green]{booked}[/bold green] von {len(responses)} Anfrage(n) gebucht.\n")

    except FileNotFoundError as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)

    except (ValueError, BookingError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def stylists(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List all configured stylists.
    """
    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)

        if not config.stylists:
            console.print("[yellow]Keine Stylisten in der Config-Datei definiert.[/yellow]")
            return

        table = Table(
            title="Konfigurierte Stylisten",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("ID", style="dim")
        table.add_column("Name (Alias)", style="bold yellow")

        for stylist in config.stylists:
            table.add_row(stylist.id, stylist.name)

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]stylistbook[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
