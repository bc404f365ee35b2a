"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..adapters.json_booking_store import JsonBookingStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import BookingRequestError, SlotEngineError
from ..domain.models import TimeOfDay
from ..domain.slot_engine import resolve_working_hours
from ..services.availability import AvailabilityService

app = typer.Typer(
    name="slotengine",
    help="Show bookable appointment slots for service providers",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
DataOption = Annotated[Optional[Path], typer.Option("--data", help="Path to the booking data JSON file")]


def _load_config(config_file: Optional[Path], data_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration, falling back to built-in defaults.

    An explicitly given config file must exist; the default location is
    optional.
    """
    if config_file is not None:
        config = AppConfig.load_from_yaml(config_file)
    else:
        default_path = get_default_config_path()
        config = AppConfig.load_from_yaml(default_path) if default_path.exists() else AppConfig()

    if data_file is not None:
        config.data_file = data_file

    return config


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_date(value: Optional[str], tz: str):
    """Parse a YYYY-MM-DD option, defaulting to today."""
    if not value:
        return pendulum.today(tz).date()
    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=tz).date()
    except ValueError as e:
        console.print(f"[red]Could not parse date '{value}': {e}[/red]")
        raise typer.Exit(1)


def _build_service(config: AppConfig, now: Optional[str]) -> AvailabilityService:
    clock = None
    if now:
        try:
            fixed_now = pendulum.parse(now, tz=config.timezone)
        except ValueError as e:
            console.print(f"[red]Could not parse --now '{now}': {e}[/red]")
            raise typer.Exit(1)
        clock = lambda: fixed_now  # noqa: E731

    store = JsonBookingStore(config.data_file)
    return AvailabilityService(booking_store=store, config=config, clock=clock)


@app.command()
def slots(
    provider_id: Annotated[str, typer.Argument(help="Provider id")],
    service_id: Annotated[str, typer.Argument(help="Service id")],
    date: Annotated[Optional[str], typer.Option("--date", "-d", help="Day to show (YYYY-MM-DD). Defaults to today")] = None,
    config_file: ConfigOption = None,
    data_file: DataOption = None,
    available_only: Annotated[bool, typer.Option("--available-only", help="Hide slots that are already booked.")] = False,
    now: Annotated[Optional[str], typer.Option("--now", help="Override the current time (ISO 8601).")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Show the slots of a provider's day for one service.

    Examples:

        slotengine slots p1 s1
        slotengine slots p1 s1 --date 2024-11-25 --available-only
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file, data_file)
        selected_date = _parse_date(date, config.timezone)
        service = _build_service(config, now)

        day_slots = service.get_day_slots(
            provider_id,
            service_id,
            selected_date,
            include_unavailable=not available_only,
        )
    except (SlotEngineError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print()
    if not day_slots:
        console.print(f"[yellow]No slots available on {selected_date}.[/yellow]\n")
        return

    table = Table(
        title=f"Slots for {provider_id} / {service_id} on {selected_date}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Start", style="bold")
    table.add_column("End")
    table.add_column("Time", style="dim")
    table.add_column("Status")

    for slot in day_slots:
        status = "[green]open[/green]" if slot.available else "[red]booked[/red]"
        table.add_row(str(slot.start), str(slot.end), slot.display_label, status)

    console.print(table)
    console.print()


@app.command()
def providers(
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    List providers with their effective working hours and services.
    """
    try:
        config = _load_config(config_file, data_file)
        store = JsonBookingStore(config.data_file)
    except (SlotEngineError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    provider_list = store.list_providers()
    if not provider_list:
        console.print("[yellow]No providers found in the booking data.[/yellow]")
        return

    defaults = config.defaults.get_working_hours()

    table = Table(
        title="Providers",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Id", style="bold yellow")
    table.add_column("Name")
    table.add_column("Working hours")
    table.add_column("Services", style="dim")

    for provider in provider_list:
        services = ", ".join(
            f"{s.service_id} ({s.duration} min)" for s in store.list_services(provider.provider_id)
        )
        table.add_row(
            provider.provider_id,
            provider.name,
            str(resolve_working_hours(provider, defaults)),
            services or "-",
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def check(
    provider_id: Annotated[str, typer.Argument(help="Provider id")],
    service_id: Annotated[str, typer.Argument(help="Service id")],
    date: Annotated[str, typer.Argument(help="Day (YYYY-MM-DD)")],
    time: Annotated[str, typer.Argument(help="Start time (HH:MM)")],
    config_file: ConfigOption = None,
    data_file: DataOption = None,
    now: Annotated[Optional[str], typer.Option("--now", help="Override the current time (ISO 8601).")] = None,
):
    """
    Check whether a booking could be placed at the given time.
    """
    try:
        config = _load_config(config_file, data_file)
        selected_date = _parse_date(date, config.timezone)
        service = _build_service(config, now)
        slot = service.check_booking_request(
            provider_id,
            service_id,
            selected_date,
            TimeOfDay.parse(time),
        )
    except BookingRequestError as e:
        console.print(f"[bold red]✗ Not bookable:[/bold red] {e}")
        raise typer.Exit(1)
    except (SlotEngineError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓ {slot.display_label} - {slot.end} on {selected_date} is open.[/green]")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]slotengine[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
