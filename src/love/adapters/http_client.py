"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y base URL para todas las peticiones a Tender.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from love.core.config import ClientSettings

TENDER_ACCEPT = "application/vnd.tender-v1+json"


def build_client(
    settings: ClientSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que cada conexión se comporte igual.
    - Sin redirecciones: una respuesta 3xx se trata como error de la API.
    """

    settings = settings or ClientSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": TENDER_ACCEPT,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        base_url=f"https://{settings.api_host}",
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )


def safely_decode_utf8(raw: bytes) -> str:
    """Decodifica bytes (casi) UTF-8 sustituyendo secuencias inválidas por U+FFFD."""

    return raw.decode("utf-8", errors="replace")


def parse_json_body(raw: bytes) -> Any:
    """JSON de un cuerpo binario que no garantiza ser UTF-8 válido.

    Un cuerpo vacío (p.ej. 204) se devuelve como `None`.
    """

    if not raw.strip():
        return None
    return json.loads(safely_decode_utf8(raw))
