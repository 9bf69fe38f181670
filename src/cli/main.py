"""CLI principal (Typer).

Cada comando es un "envío de formulario": navega a la vista que lo aloja
(el guard puede redirigir a login), ejecuta la operación del módulo de
dominio y traduce un `Failure` a código de salida 1. El feedback visual lo
dan el presenter (áreas de resultado) y el canal de notificaciones.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import typer
from rich.console import Console

from adapters.storage import JsonFileStorage, MemoryStorage
from cli import doctor
from cli.presenter import RichPresenter
from cli.shell import run_shell
from cli.ui_components import build_identity_panel, print_banner
from core.config import AppSettings
from core.domain.models import ApiResult, Failure
from core.domain.views import View
from core.logger import setup_logger
from core.orchestration import DomainModules
from core.services.context import ClientContext, build_context

app = typer.Typer(no_args_is_help=True, help="Terminal client for the train ticketing API.")
user_app = typer.Typer(no_args_is_help=True, help="User administration.")
train_app = typer.Typer(no_args_is_help=True, help="Train administration.")
ticket_app = typer.Typer(no_args_is_help=True, help="Ticket release, purchase and queries.")
route_app = typer.Typer(no_args_is_help=True, help="Route queries.")

app.add_typer(user_app, name="user")
app.add_typer(train_app, name="train")
app.add_typer(ticket_app, name="ticket")
app.add_typer(route_app, name="route")
app.add_typer(doctor.app, name="doctor")

_console = Console()

Action = Callable[[DomainModules], Awaitable[ApiResult]]


def _open(*, ephemeral: bool = False, announce_views: bool = False) -> tuple[ClientContext, DomainModules]:
    settings = AppSettings()
    setup_logger(level=settings.log_level, log_file=settings.log_file)
    storage = MemoryStorage() if ephemeral else JsonFileStorage(settings.resolved_session_file())
    context = build_context(
        settings,
        storage=storage,
        presenter=RichPresenter(_console, announce_views=announce_views),
    )
    return context, DomainModules.from_context(context)


def _submit(view: View, action: Action) -> None:
    context, modules = _open()
    landed = context.state.router.navigate(view)
    if landed is not view:
        _console.print("[yellow]Not logged in.[/yellow] Run `trainsys login` first.")
        raise typer.Exit(code=1)

    result = asyncio.run(action(modules))
    if isinstance(result, Failure):
        raise typer.Exit(code=1)


# --- Sesión ---------------------------------------------------------------


@app.command()
def login(
    user_id: str | None = typer.Option(None, "--user-id", "-u", help="Numeric user id."),
    password: str | None = typer.Option(None, "--password", "-p", prompt=True, hide_input=True),
) -> None:
    """Log in and store the session."""

    _submit(View.LOGIN, lambda m: m.users.login({"userId": user_id, "password": password}))


@app.command()
def register(
    user_id: str | None = typer.Option(None, "--user-id", "-u"),
    username: str | None = typer.Option(None, "--username"),
    password: str | None = typer.Option(None, "--password", "-p", prompt=True, hide_input=True),
) -> None:
    """Create a new account."""

    _submit(
        View.REGISTER,
        lambda m: m.users.register({"userId": user_id, "username": username, "password": password}),
    )


@app.command()
def logout() -> None:
    """Forget the stored session (local only)."""

    _context, modules = _open()
    modules.users.logout()
    _console.print("[green]Logged out.[/green]")


@app.command()
def whoami() -> None:
    """Show the identity of the stored session."""

    context, _modules = _open()
    identity = context.state.current_user
    if identity is None:
        _console.print("[dim]Not logged in.[/dim]")
        raise typer.Exit(code=1)
    _console.print(build_identity_panel(identity))
    role = "administrator" if context.state.is_admin else "user"
    _console.print(f"[dim]Role:[/dim] {role}")


@app.command()
def go(view: str = typer.Argument(..., help="View id, e.g. buy-ticket.")) -> None:
    """Resolve a navigation through the session guard."""

    context, _modules = _open()
    try:
        landed = context.state.router.navigate(view)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _console.print(f"→ {landed.value}")


@app.command()
def shell(
    ephemeral: bool = typer.Option(False, "--ephemeral", help="Do not persist the session."),
) -> None:
    """Interactive session: views, forms and live notifications."""

    print_banner(_console)
    context, modules = _open(ephemeral=ephemeral, announce_views=True)
    asyncio.run(run_shell(context, modules, _console))


# --- Usuarios -------------------------------------------------------------


@user_app.command("query")
def user_query(user_id: str | None = typer.Option(None, "--user-id", "-u")) -> None:
    """Show a user's public profile."""

    _submit(View.USER_MANAGEMENT, lambda m: m.users.query_user({"userId": user_id}))


@user_app.command("privilege")
def user_privilege(
    user_id: str | None = typer.Option(None, "--user-id", "-u"),
    privilege: str | None = typer.Option(None, "--privilege"),
) -> None:
    """Change a user's privilege level."""

    _submit(
        View.USER_MANAGEMENT,
        lambda m: m.users.modify_privilege({"userId": user_id, "privilege": privilege}),
    )


@user_app.command("password")
def user_password(
    user_id: str | None = typer.Option(None, "--user-id", "-u"),
    password: str | None = typer.Option(None, "--password", "-p", prompt="New password", hide_input=True),
) -> None:
    """Change a user's password."""

    _submit(
        View.USER_MANAGEMENT,
        lambda m: m.users.modify_password({"userId": user_id, "password": password}),
    )


# --- Trenes ---------------------------------------------------------------


@train_app.command("add")
def train_add(
    train_id: str | None = typer.Option(None, "--train-id", "-t"),
    seat_num: str | None = typer.Option(None, "--seat-num"),
    station_count: str | None = typer.Option(None, "--station-count"),
    stations: str | None = typer.Option(None, "--stations", help="Slash separated, e.g. A/B/C."),
    durations: str | None = typer.Option(None, "--durations", help="Minutes between stops, e.g. 10/20."),
    prices: str | None = typer.Option(None, "--prices", help="Price per section, e.g. 5/8."),
) -> None:
    """Register a train schedule."""

    form = {
        "trainId": train_id,
        "seatNum": seat_num,
        "stationCount": station_count,
        "stations": stations,
        "durations": durations,
        "prices": prices,
    }
    _submit(View.TRAIN_MANAGEMENT, lambda m: m.trains.add_train(form))


@train_app.command("query")
def train_query(train_id: str | None = typer.Option(None, "--train-id", "-t")) -> None:
    """Show a train schedule."""

    _submit(View.TRAIN_MANAGEMENT, lambda m: m.trains.query_train({"trainId": train_id}))


# --- Billetes -------------------------------------------------------------


@ticket_app.command("release")
def ticket_release(
    train_id: str | None = typer.Option(None, "--train-id", "-t"),
    date: str | None = typer.Option(None, "--date", "-d"),
) -> None:
    """Open ticket sales for a train and date."""

    _submit(View.TICKET_MANAGEMENT, lambda m: m.tickets.release_ticket({"trainId": train_id, "date": date}))


@ticket_app.command("expire")
def ticket_expire(
    train_id: str | None = typer.Option(None, "--train-id", "-t"),
    date: str | None = typer.Option(None, "--date", "-d"),
) -> None:
    """Close ticket sales for a train and date."""

    _submit(View.TICKET_MANAGEMENT, lambda m: m.tickets.expire_ticket({"trainId": train_id, "date": date}))


def _seat_form(train_id: str | None, date: str | None, departure: str | None) -> dict[str, str | None]:
    return {"trainId": train_id, "date": date, "departureStation": departure}


@ticket_app.command("remaining")
def ticket_remaining(
    train_id: str | None = typer.Option(None, "--train-id", "-t"),
    date: str | None = typer.Option(None, "--date", "-d"),
    departure: str | None = typer.Option(None, "--from", "-f"),
) -> None:
    """Show remaining seats."""

    _submit(View.TICKET_QUERY, lambda m: m.tickets.query_remaining(_seat_form(train_id, date, departure)))


@ticket_app.command("buy")
def ticket_buy(
    train_id: str | None = typer.Option(None, "--train-id", "-t"),
    date: str | None = typer.Option(None, "--date", "-d"),
    departure: str | None = typer.Option(None, "--from", "-f"),
) -> None:
    """Buy a ticket."""

    _submit(View.BUY_TICKET, lambda m: m.tickets.buy_ticket(_seat_form(train_id, date, departure)))


@ticket_app.command("orders")
def ticket_orders() -> None:
    """List my orders."""

    _submit(View.MY_ORDERS, lambda m: m.tickets.query_orders())


@ticket_app.command("refund")
def ticket_refund(
    train_id: str | None = typer.Option(None, "--train-id", "-t"),
    date: str | None = typer.Option(None, "--date", "-d"),
    departure: str | None = typer.Option(None, "--from", "-f"),
) -> None:
    """Refund a ticket."""

    _submit(View.MY_ORDERS, lambda m: m.tickets.refund_ticket(_seat_form(train_id, date, departure)))


# --- Rutas ----------------------------------------------------------------


@route_app.command("display")
def route_display(
    start: str | None = typer.Option(None, "--start", "-s"),
    end: str | None = typer.Option(None, "--end", "-e"),
) -> None:
    """List routes between two stations."""

    _submit(View.ROUTE_QUERY, lambda m: m.routes.display_route({"startStation": start, "endStation": end}))


@route_app.command("best")
def route_best(
    start: str | None = typer.Option(None, "--start", "-s"),
    end: str | None = typer.Option(None, "--end", "-e"),
    preference: str | None = typer.Option(None, "--preference", help="time or price."),
) -> None:
    """Find the best path between two stations."""

    form = {"startStation": start, "endStation": end, "preference": preference}
    _submit(View.ROUTE_QUERY, lambda m: m.routes.find_best_path(form))


@route_app.command("accessibility")
def route_accessibility(
    start: str | None = typer.Option(None, "--start", "-s"),
    end: str | None = typer.Option(None, "--end", "-e"),
) -> None:
    """Check whether two stations are connected."""

    _submit(
        View.ROUTE_QUERY,
        lambda m: m.routes.check_accessibility({"startStation": start, "endStation": end}),
    )


def run() -> None:
    app()
