"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.storage import JsonFileStorage
from core.config import AppSettings, write_user_env_vars
from core.services.session_store import SessionStore

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    """Any HTTP answer from the API host counts as reachable."""

    try:
        async with build_async_client(settings) as client:
            response = await client.get("/")
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="trainsys doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API base_url", "OK", settings.api_base_url)
    table.add_row("Notification", "OK", f"{settings.notification_duration_ms} ms")

    session_path = settings.resolved_session_file()
    session = SessionStore(JsonFileStorage(session_path)).load()
    if session.identity is not None:
        table.add_row("Session", "OK", f"{session.identity.label()} @ {session_path}")
    else:
        table.add_row("Session", "NONE", f"Not logged in ({session_path})")

    ok_http, detail_http = asyncio.run(_check_http(settings))
    table.add_row("API connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] Set the API address with `trainsys doctor setup` "
            "or the TRAINSYS_API_BASE_URL environment variable."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()
    base_url = typer.prompt("API base URL", default=settings.api_base_url, show_default=True).strip()
    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")

    env_path = write_user_env_vars({"TRAINSYS_API_BASE_URL": base_url})
    _console.print(f"[green]Saved config to:[/green] {env_path}")
