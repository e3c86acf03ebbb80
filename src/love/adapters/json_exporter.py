"""Exportación JSON de registros.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Los registros de la API se guardan tal cual, sin esquema.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable


def export_records_json(*, records: Iterable[Any], output_path: Path) -> Path:
    """Exporta registros a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = list(records)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
