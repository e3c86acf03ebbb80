"""CLI principal (typer).

Comandos:
- `love list <kind>`: recorre una colección (tabla Rich o JSON).
- `love get <kind> <id-or-href>`: muestra un recurso.
- `love doctor ...`: diagnóstico y configuración.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from itertools import islice
from pathlib import Path
from typing import Any, Optional

import httpx
import typer
from rich.console import Console

from love import __version__
from love.adapters.json_exporter import export_records_json
from love.cli import doctor
from love.cli.logging_setup import setup_logging
from love.cli.ui_components import build_record_panel, build_records_table, print_banner
from love.client import Client
from love.core.config import ClientSettings
from love.core.domain.errors import LoveError
from love.core.domain.models import ResourceKind

app = typer.Typer(no_args_is_help=True, help="Command-line access to the Tender help-desk API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def build_cli_client(site: Optional[str], api_key: Optional[str], *, persistent: bool = True) -> Client:
    """Cliente a partir de la config (env/.env) con overrides de la línea de comandos."""

    overrides = {key: value for key, value in {"site": site, "api_key": api_key}.items() if value}
    settings = ClientSettings.load(**overrides)
    return Client.from_settings(settings, persistent=persistent)


def _fail(exc: Exception) -> typer.Exit:
    _err_console.print(f"[red]Error:[/red] {exc}")
    return typer.Exit(code=1)


def _print_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"love {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP requests (debug level)."),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    setup_logging(logging.DEBUG if verbose else logging.WARNING, log_file=log_file)


@app.command("list")
def list_records(
    kind: ResourceKind = typer.Argument(..., help="Resource collection to iterate."),
    since: Optional[datetime] = typer.Option(
        None, "--since", formats=["%Y-%m-%d"], help="Only records updated since this date."
    ),
    start_page: int = typer.Option(1, "--start-page", min=1, help="First page to request."),
    end_page: Optional[int] = typer.Option(None, "--end-page", min=1, help="Last page to request."),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Stop after this many records."),
    as_json: bool = typer.Option(False, "--json", help="Print records as JSON instead of a table."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write records to a JSON file."),
    site: Optional[str] = typer.Option(None, "--site", help="Tender site (overrides TENDER_SITE)."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="API key (overrides TENDER_API_KEY)."),
) -> None:
    """Iterate over a resource collection."""

    try:
        client = build_cli_client(site, api_key)
        with client:
            records = client.iter_resources(kind, since=since, start_page=start_page, end_page=end_page)
            collected = list(islice(records, limit) if limit else records)
    except (LoveError, httpx.HTTPError) as exc:
        raise _fail(exc) from exc

    if output:
        export_records_json(records=collected, output_path=output)
        _err_console.print(f"[green]Saved {len(collected)} records to:[/green] {output}")
    if as_json:
        _print_json(collected)
    elif not output:
        print_banner(_console, client.site)
        _console.print(build_records_table(kind, collected))


@app.command("get")
def get_record(
    kind: ResourceKind = typer.Argument(..., help="Resource kind."),
    id_or_href: str = typer.Argument(..., help="Numeric ID or full API URI."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the record to a JSON file."),
    site: Optional[str] = typer.Option(None, "--site", help="Tender site (overrides TENDER_SITE)."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="API key (overrides TENDER_API_KEY)."),
) -> None:
    """Fetch a single resource by ID or href."""

    try:
        client = build_cli_client(site, api_key, persistent=False)
        record = client.get(kind, id_or_href)
    except (LoveError, httpx.HTTPError) as exc:
        raise _fail(exc) from exc

    if output:
        export_records_json(records=[record], output_path=output)
        _err_console.print(f"[green]Saved record to:[/green] {output}")
    if as_json:
        _print_json(record)
    elif not output:
        _console.print(build_record_panel(kind, record))


def run() -> None:
    app()
