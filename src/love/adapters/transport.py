"""Transporte HTTPS hacia la API de Tender.

Por qué aquí (adapters):
- Es I/O puro (httpx); el Core solo ve `JSONTransport.get`.

Modos de conexión:
- No persistente (por defecto): cada petición abre y cierra su propia
  conexión, también cuando la petición o la clasificación fallan.
- Persistente: una sola conexión reutilizada hasta `close_connection()`.
  No es thread-safe.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlsplit

import httpx

from love.adapters.http_client import TENDER_ACCEPT, build_client
from love.adapters.responses import classify_response
from love.core.config import ClientSettings
from love.core.domain.errors import InvalidURI


class TenderTransport:
    """Ejecuta GETs autenticados contra el host de la API."""

    def __init__(
        self,
        api_key: str,
        settings: ClientSettings | None = None,
        *,
        persistent: bool = False,
        http_transport: httpx.BaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.api_key = api_key
        self.settings = settings or ClientSettings()
        self.persistent = bool(persistent)
        self._http_transport = http_transport
        self._logger = logger or logging.getLogger(__name__)
        self._connection: httpx.Client | None = None

    @property
    def request_headers(self) -> dict[str, str]:
        return {"Accept": TENDER_ACCEPT, "X-Tender-Auth": self.api_key}

    @property
    def connection(self) -> httpx.Client:
        """Conexión actual, abriéndola si hace falta."""

        if self._connection is None or self._connection.is_closed:
            self._connection = build_client(
                self.settings,
                extra_headers=self.request_headers,
                transport=self._http_transport,
            )
        return self._connection

    @property
    def connected(self) -> bool:
        return self._connection is not None and not self._connection.is_closed

    def close_connection(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def _check_uri(self, uri: str) -> None:
        parts = urlsplit(uri)
        if parts.scheme != "https" or parts.netloc != self.settings.api_host:
            raise InvalidURI("This is not a Tender API URI.")

    def get(self, uri: str) -> Any:
        self._check_uri(uri)

        parts = urlsplit(uri)
        request_uri = f"{parts.path}?{parts.query}" if parts.query else parts.path
        self._logger.debug("GET %s", request_uri)

        try:
            response = self.connection.get(uri)
            return classify_response(response)
        finally:
            if not self.persistent:
                self.close_connection()
