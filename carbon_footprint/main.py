"""Command-line entry point for flight carbon estimates."""

import logging
from typing import Optional
import typer
from pydantic import SecretStr, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from .api_client import ClientSetupError
from .config import CABIN_CLASSES, DEFAULT_CABIN_CLASS, DISTANCE_UNITS, Config
from .logger import configure_logging
from .presenter import render_table
from .session import EstimateSession, QueryOutcome
from .validator import FlightValidationError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="carbon-footprint",
    help="Estimate the carbon footprint of a flight via Carbon Interface.",
    add_completion=False,
)
console = Console()


def print_banner() -> None:
    console.print(
        Panel(
            "[bold green]Flight carbon footprint estimator[/bold green]\n"
            "[dim]Estimates are provided by carboninterface.com[/dim]",
            border_style="green",
        )
    )


def prompt_api_key() -> SecretStr:
    """Ask for the API key with hidden input until a non-empty one is given."""
    while True:
        key = Prompt.ask("Please enter your API key", password=True, console=console)
        if key.strip():
            return SecretStr(key.strip())
        console.print("The API key cannot be empty.", style="red", markup=False)


def resolve_credential(config: Config) -> SecretStr:
    configured = config.CARBON_INTERFACE_API_KEY
    if configured is not None and configured.get_secret_value().strip():
        return SecretStr(configured.get_secret_value().strip())
    return prompt_api_key()


def open_session(config: Config, credential: SecretStr) -> EstimateSession:
    """Create the estimate session; setup failures are fatal."""
    try:
        return EstimateSession.from_config(config, credential)
    except ClientSetupError as e:
        logger.error(f"Client setup failed: {e}")
        console.print(f"Error: {e}", style="bold red", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(1)


def print_outcome(outcome: QueryOutcome) -> None:
    if outcome.ok:
        console.print()
        console.print(render_table(outcome.estimate))
        console.print(outcome.text, style="green", markup=False, highlight=False, soft_wrap=True)
    else:
        console.print(outcome.text, style="red", markup=False, highlight=False, soft_wrap=True)


def run_query(
    session: EstimateSession,
    passengers: str,
    departure: str,
    destination: str,
    cabin_class: Optional[str],
    distance_unit: Optional[str],
) -> QueryOutcome:
    with console.status("Estimating..."):
        outcome = session.run_query(passengers, departure, destination, cabin_class, distance_unit)
    print_outcome(outcome)
    return outcome


def query_cycle(session: EstimateSession) -> QueryOutcome:
    """Prompt for one flight and print its estimate or error."""
    console.print("\n[bold]Enter the flight details:[/bold]")
    passengers = Prompt.ask("Number of passengers", console=console)
    departure = Prompt.ask("Departure airport IATA code", console=console)
    destination = Prompt.ask("Destination airport IATA code", console=console)
    cabin_class = Prompt.ask(
        f"Cabin class ({', '.join(CABIN_CLASSES)})",
        default=DEFAULT_CABIN_CLASS,
        console=console,
    )
    distance_unit = Prompt.ask(
        f"Distance unit ({' or '.join(DISTANCE_UNITS)})",
        default=session.config.DEFAULT_DISTANCE_UNIT,
        console=console,
    )
    return run_query(session, passengers, departure, destination, cabin_class, distance_unit)


def run_interactive(config: Config) -> None:
    """Prompt for the API key once, then estimate flights until the operator stops."""
    print_banner()
    session = None
    try:
        credential = resolve_credential(config)
        session = open_session(config, credential)
        while True:
            outcome = query_cycle(session)
            if isinstance(outcome.result, FlightValidationError):
                continue
            if not Confirm.ask("\nEstimate another flight?", default=True, console=console):
                break
    except (KeyboardInterrupt, EOFError):
        console.print()
    finally:
        if session is not None:
            session.close()
    console.print("Goodbye!")


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
):
    """
    Estimate flight emissions interactively (default) or with `estimate`.
    """
    try:
        config = Config()
    except ValidationError as e:
        console.print(
            f"Error: invalid configuration: {e}",
            style="bold red",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        raise typer.Exit(1)
    if log_level:
        config = config.model_copy(update={"LOG_LEVEL": log_level})
    configure_logging(config.LOG_LEVEL, config.LOG_FILE)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        run_interactive(config)


@app.command()
def estimate(
    ctx: typer.Context,
    passengers: str = typer.Option(..., "--passengers", "-p", help="Number of passengers"),
    departure: str = typer.Option(..., "--from", help="Departure airport IATA code"),
    destination: str = typer.Option(..., "--to", help="Destination airport IATA code"),
    cabin_class: str = typer.Option(DEFAULT_CABIN_CLASS, "--cabin-class", "-c", help="Cabin class"),
    distance_unit: Optional[str] = typer.Option(None, "--distance-unit", "-u", help="km or mi"),
):
    """Estimate a single flight and exit (status 1 on any error)."""
    config: Config = ctx.obj
    credential = resolve_credential(config)
    session = open_session(config, credential)
    try:
        outcome = run_query(session, passengers, departure, destination, cabin_class, distance_unit)
    finally:
        session.close()
    if not outcome.ok:
        raise typer.Exit(1)


def main() -> None:
    app(prog_name="carbon-footprint")


if __name__ == "__main__":
    main()
