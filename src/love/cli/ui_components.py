"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from love.core.domain.models import ResourceKind

_LABEL_FIELDS = ("title", "name", "email")


def print_banner(console: Console, site: str) -> None:
    """Imprime el banner con el site activo.

    No se usa en modos no interactivos (JSON/pipelines).
    """

    title = Text("Love", style="bold magenta")
    subtitle = Text(f"Tender API • {site}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="magenta", padding=(1, 4)))


def record_label(record: dict[str, Any]) -> str:
    """Texto representativo de un registro (título, nombre o email)."""

    for key in _LABEL_FIELDS:
        value = record.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return "-"


def build_records_table(kind: ResourceKind, records: Iterable[dict[str, Any]]) -> Table:
    """Crea una tabla Rich con una fila por registro."""

    table = Table(title=kind.value.capitalize())
    table.add_column("#", style="dim", justify="right")
    table.add_column("Label", style="white")
    table.add_column("Href", style="cyan")
    for index, record in enumerate(records, start=1):
        href = record.get("href")
        table.add_row(str(index), record_label(record), href if isinstance(href, str) else "")
    return table


def build_record_panel(kind: ResourceKind, record: Any) -> Panel:
    """Panel con el JSON de un recurso individual."""

    rendered = json.dumps(record, ensure_ascii=False, indent=2, sort_keys=True)
    title = Text(kind.label().capitalize(), style="bold yellow")
    return Panel(Syntax(rendered, "json", word_wrap=True), title=title, border_style="yellow")
