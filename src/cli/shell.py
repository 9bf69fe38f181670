"""Shell interactivo: la "página" del cliente en la terminal.

Todo corre en un único event loop. La lectura de teclado se delega a un
hilo (`asyncio.to_thread`) para que los temporizadores de notificación y las
peticiones en curso sigan avanzando mientras el usuario escribe.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from rich.console import Console
from rich.table import Table

from core.domain.models import ApiResult
from core.domain.views import View
from core.orchestration import DomainModules
from core.orchestration.forms import FormInput
from core.services.context import ClientContext

ReadLine = Callable[[str, bool], Awaitable[str]]


@dataclass(frozen=True)
class FormAction:
    """Un formulario de una vista: nombre, campos y operación que lo envía."""

    name: str
    fields: tuple[str, ...]
    submit: Callable[[DomainModules, FormInput], Awaitable[ApiResult]]
    secret: frozenset[str] = field(default_factory=frozenset)


VIEW_ACTIONS: dict[View, tuple[FormAction, ...]] = {
    View.LOGIN: (
        FormAction("login", ("userId", "password"), lambda m, f: m.users.login(f), frozenset({"password"})),
    ),
    View.REGISTER: (
        FormAction(
            "register",
            ("userId", "username", "password"),
            lambda m, f: m.users.register(f),
            frozenset({"password"}),
        ),
    ),
    View.TICKET_QUERY: (
        FormAction("remaining", ("trainId", "date", "departureStation"), lambda m, f: m.tickets.query_remaining(f)),
    ),
    View.BUY_TICKET: (
        FormAction("buy", ("trainId", "date", "departureStation"), lambda m, f: m.tickets.buy_ticket(f)),
    ),
    View.MY_ORDERS: (
        FormAction("orders", (), lambda m, f: m.tickets.query_orders(f)),
        FormAction("refund", ("trainId", "date", "departureStation"), lambda m, f: m.tickets.refund_ticket(f)),
    ),
    View.ROUTE_QUERY: (
        FormAction("display", ("startStation", "endStation"), lambda m, f: m.routes.display_route(f)),
        FormAction("best", ("startStation", "endStation", "preference"), lambda m, f: m.routes.find_best_path(f)),
        FormAction("accessibility", ("startStation", "endStation"), lambda m, f: m.routes.check_accessibility(f)),
    ),
    View.TRAIN_MANAGEMENT: (
        FormAction(
            "add-train",
            ("trainId", "seatNum", "stationCount", "stations", "durations", "prices"),
            lambda m, f: m.trains.add_train(f),
        ),
        FormAction("query-train", ("trainId",), lambda m, f: m.trains.query_train(f)),
    ),
    View.TICKET_MANAGEMENT: (
        FormAction("release", ("trainId", "date"), lambda m, f: m.tickets.release_ticket(f)),
        FormAction("expire", ("trainId", "date"), lambda m, f: m.tickets.expire_ticket(f)),
    ),
    View.USER_MANAGEMENT: (
        FormAction("query-user", ("userId",), lambda m, f: m.users.query_user(f)),
        FormAction("privilege", ("userId", "privilege"), lambda m, f: m.users.modify_privilege(f)),
        FormAction(
            "password",
            ("userId", "password"),
            lambda m, f: m.users.modify_password(f),
            frozenset({"password"}),
        ),
    ),
}


def find_action(view: View, name: str) -> FormAction | None:
    for action in VIEW_ACTIONS.get(view, ()):
        if action.name == name:
            return action
    return None


def _console_reader(console: Console) -> ReadLine:
    async def read(prompt: str, secret: bool = False) -> str:
        return await asyncio.to_thread(console.input, prompt, password=secret)

    return read


def _help_table(view: View) -> Table:
    table = Table(title=f"{view.label()} actions", show_header=True)
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Fields", style="white")
    for action in VIEW_ACTIONS.get(view, ()):
        table.add_row(action.name, ", ".join(action.fields) or "-")
    table.add_row("go <view>", ", ".join(v.value for v in View))
    table.add_row("wait", "-")
    table.add_row("whoami / logout / quit", "-")
    return table


async def _drain(tasks: set[asyncio.Task[ApiResult]]) -> None:
    if tasks:
        await asyncio.gather(*tasks)


async def run_shell(
    context: ClientContext,
    modules: DomainModules,
    console: Console,
    *,
    read_line: ReadLine | None = None,
) -> None:
    read = read_line or _console_reader(console)
    state = context.state
    in_flight: set[asyncio.Task[ApiResult]] = set()
    state.router.navigate(state.router.current)

    while True:
        try:
            line = (await read(f"trainsys:{state.current_view.value}> ", False)).strip()
        except (EOFError, KeyboardInterrupt):
            break
        if not line:
            continue

        command, _, argument = line.partition(" ")
        if command in ("quit", "exit"):
            break
        if command == "wait":
            await _drain(in_flight)
        elif command == "help":
            console.print(_help_table(state.current_view))
        elif command == "go":
            try:
                state.router.navigate(argument)
            except ValueError as exc:
                console.print(f"[red]{exc}[/red]")
        elif command == "logout":
            modules.users.logout()
        elif command == "whoami":
            user = state.current_user
            console.print(user.label() if user else "[dim]Not logged in.[/dim]")
        else:
            action = find_action(state.current_view, command)
            if action is None:
                console.print(f"[yellow]Unknown command {command!r}; try `help`.[/yellow]")
                continue
            form: dict[str, str] = {}
            for name in action.fields:
                form[name] = await read(f"  {name}: ", name in action.secret)
            # No bloquea: se puede reenviar antes de que llegue la respuesta.
            task = asyncio.create_task(action.submit(modules, form))
            in_flight.add(task)
            task.add_done_callback(in_flight.discard)

    await _drain(in_flight)
