"""Iteración paginada sobre colecciones Tender.

El Paginator pide la primera página, deduce el número de páginas a partir de
`total`/`per_page` y recorre el resto en orden estricto, entregando los
registros uno a uno. Tras cada página hace una pausa bloqueante para no
saturar la API.

La iteración no es transaccional: si una página falla, los registros ya
entregados no se deshacen y la excepción se propaga al consumidor.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from pydantic import ValidationError

from love.core.domain.errors import TenderAPIError
from love.core.domain.models import PageDescriptor, PagingOptions
from love.core.interfaces.transport import JSONTransport
from love.core.resource_uri import ResourceURIBuilder

logger = logging.getLogger(__name__)

DEFAULT_SLEEP_BETWEEN_REQUESTS = 0.5


@dataclass
class Paginator:
    """Recorre las páginas de una colección usando un `JSONTransport`."""

    transport: JSONTransport
    sleep_between_requests: float | None = DEFAULT_SLEEP_BETWEEN_REQUESTS
    sleep: Callable[[float], None] = time.sleep
    logger: logging.Logger = field(default=logger)

    def iterate(
        self,
        base_uri: str,
        list_key: str,
        options: PagingOptions | None = None,
    ) -> Iterator[dict[str, Any]]:
        """Genera los registros de `list_key` de cada página, en orden.

        No se envía ninguna petición hasta que se consume el primer elemento.
        """

        options = options or PagingOptions()
        query_params = options.query_params()
        first_page = query_params["page"]

        initial = self.transport.get(ResourceURIBuilder.append_query(base_uri, query_params))

        try:
            max_page = PageDescriptor.from_body(initial).max_page
        except ValidationError as exc:
            raise TenderAPIError(f"Invalid page descriptor from {base_uri}", body=str(initial)) from exc
        end_page = max_page if options.end_page is None else min(options.end_page, max_page)

        self.logger.debug(
            "Paged requests to %s: %d total pages, importing %d upto %d.",
            base_uri,
            max_page,
            first_page,
            end_page,
        )

        yield from self._emit(initial, list_key)

        for page in range(first_page + 1, end_page + 1):
            query_params["page"] = page
            result = self.transport.get(ResourceURIBuilder.append_query(base_uri, query_params))
            yield from self._emit(result, list_key)

    def _emit(self, body: Any, list_key: str) -> Iterator[dict[str, Any]]:
        records = body.get(list_key) if isinstance(body, dict) else None
        if not isinstance(records, list):
            return
        yield from records
        self._pause()

    def _pause(self) -> None:
        if self.sleep_between_requests:
            self.sleep(self.sleep_between_requests)
