"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from love.client import Client
from love.core.config import ClientSettings, get_user_env_file, write_user_env_vars
from love.core.domain.errors import LoveError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(settings: ClientSettings) -> tuple[bool, str]:
    """Request the first page of categories to validate site and credentials."""

    try:
        client = Client.from_settings(settings, sleep_between_requests=0)
        with client:
            count = sum(1 for _ in client.iter_categories(end_page=1))
        return True, f"{count} categories on the first page"
    except (LoveError, httpx.HTTPError) as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ClientSettings.load()

    table = Table(title="Love Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Site", "OK" if settings.site else "MISSING", settings.site or "Set TENDER_SITE")
    table.add_row("API key", "OK" if settings.api_key else "MISSING", "" if settings.api_key else "Set TENDER_API_KEY")
    table.add_row("API host", "OK", settings.api_host)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Sleep between pages", "OK", f"{settings.sleep_between_requests:g}s")

    # Connectivity (best-effort)
    ok_api = False
    if settings.site and settings.api_key:
        ok_api, detail_api = _check_api(settings)
        table.add_row("API access", "OK" if ok_api else "FAIL", detail_api)
    else:
        table.add_row("API access", "SKIPPED", "Missing site or API key")

    _console.print(table)

    if not ok_api:
        _console.print("\n[yellow]Note:[/yellow] run `love doctor setup` to store your site and API key.")
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores site and API key in the user config .env)."""

    site = typer.prompt("Tender site (account name)").strip()
    api_key = typer.prompt("Tender API key", hide_input=True, confirmation_prompt=False).strip()

    if not site or not api_key:
        raise typer.BadParameter("site and API key are required")

    env_path = write_user_env_vars(
        {
            "TENDER_SITE": site,
            "TENDER_API_KEY": api_key,
        },
        get_user_env_file(),
    )

    _console.print(f"[green]Saved Tender config to:[/green] {env_path}")
