"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles entre comandos sueltos y el `shell`.
"""

from __future__ import annotations

from pydantic import BaseModel
from rich.align import Align
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Identity, NotificationMessage, Severity
from core.domain.view_models import (
    Accessibility,
    InlineError,
    OrderList,
    RemainingSeats,
    RouteListing,
    RoutePath,
    TrainInfo,
)

SEVERITY_STYLES: dict[Severity, str] = {
    Severity.INFO: "cyan",
    Severity.SUCCESS: "green",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}

ARROW = " → "


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("TRAINSYS", style="bold cyan")
    subtitle = Text("Billetes • Trenes • Rutas", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_toast(message: NotificationMessage) -> Panel:
    style = SEVERITY_STYLES.get(message.severity, "white")
    return Panel(
        Text(message.text),
        title=Text(message.severity.value.upper(), style=f"bold {style}"),
        border_style=style,
        expand=False,
    )


def _card(title: str, rows: list[tuple[str, str]], *, border_style: str = "cyan") -> Panel:
    body = Text()
    for i, (label, value) in enumerate(rows):
        if i:
            body.append("\n")
        body.append(f"{label}: ", style="bold")
        body.append(value)
    return Panel(body, title=Text(title, style="bold"), border_style=border_style, expand=False)


def build_identity_panel(identity: Identity) -> Panel:
    return _card(
        "User",
        [
            ("User ID", str(identity.user_id)),
            ("Username", identity.username),
            ("Privilege", str(identity.privilege_level)),
        ],
    )


def build_train_panel(train: TrainInfo) -> Panel:
    rows = [
        ("Train", train.train_id),
        ("Seats", str(train.seat_num)),
        ("Stations", str(train.station_count)),
    ]
    if train.stations:
        rows.append(("Stops", ARROW.join(train.stations)))
    return _card("Train", rows)


def build_remaining_panel(seats: RemainingSeats) -> Panel:
    return _card(
        "Remaining seats",
        [
            ("Train", seats.train_id),
            ("Date", seats.date),
            ("From", seats.departure_station),
            ("Remaining", str(seats.remaining_seats)),
        ],
    )


def build_orders_table(orders: OrderList) -> RenderableType:
    if not orders.orders:
        return Text("No orders yet", style="dim")
    table = Table(title="My orders")
    table.add_column("Train", style="cyan", no_wrap=True)
    table.add_column("Date", style="white")
    table.add_column("From", style="white")
    table.add_column("Status", style="green")
    for order in orders.orders:
        table.add_row(order.train_id, order.date, order.departure_station, "purchased")
    return table


def build_routes_panel(listing: RouteListing) -> Panel:
    return _card(
        "Routes",
        [
            ("From", listing.start_station or "-"),
            ("To", listing.end_station or "-"),
            ("Routes", ARROW.join(listing.routes) if listing.routes else "none"),
        ],
    )


def build_best_path_panel(path: RoutePath) -> Panel:
    return _card(
        "Best path",
        [
            ("From", path.start_station or "-"),
            ("To", path.end_station or "-"),
            ("Path", ARROW.join(path.path) if path.path else "none"),
            ("Total time", f"{path.total_time} min"),
            ("Total price", str(path.total_price)),
        ],
    )


def build_accessibility_panel(result: Accessibility) -> Panel:
    return _card(
        "Accessibility",
        [
            ("From", result.start_station or "-"),
            ("To", result.end_station or "-"),
            ("Status", "reachable" if result.accessible else "unreachable"),
        ],
        border_style="green" if result.accessible else "red",
    )


def build_inline_error(error: InlineError) -> Text:
    return Text(f"Query failed: {error.message}", style="red")


def render_view_model(model: BaseModel) -> RenderableType:
    """Elige el componente según el tipo de view model."""

    if isinstance(model, InlineError):
        return build_inline_error(model)
    if isinstance(model, Identity):
        return build_identity_panel(model)
    if isinstance(model, TrainInfo):
        return build_train_panel(model)
    if isinstance(model, RemainingSeats):
        return build_remaining_panel(model)
    if isinstance(model, OrderList):
        return build_orders_table(model)
    if isinstance(model, RouteListing):
        return build_routes_panel(model)
    if isinstance(model, RoutePath):
        return build_best_path_panel(model)
    if isinstance(model, Accessibility):
        return build_accessibility_panel(model)
    return Text(model.model_dump_json(indent=2))
