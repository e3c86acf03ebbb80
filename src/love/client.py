"""Cliente de la API REST de Tender.

Obtén una instancia con `love.connect(...)` o abre una sesión con conexión
persistente con `love.session(...)`:

    with love.session("mysupport", api_key) as client:
        for discussion in client.iter_discussions(since=date(2024, 1, 1)):
            ...

Los recursos sueltos se piden con `get_user`, `get_discussion`, etc. y las
colecciones se recorren con `iter_users`, `iter_discussions`, etc.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator

import httpx

from love.adapters.transport import TenderTransport
from love.core.config import ClientSettings
from love.core.domain.errors import LoveError
from love.core.domain.models import PagingOptions, ResourceKind
from love.core.resource_uri import ResourceURIBuilder
from love.core.services.paginator import DEFAULT_SLEEP_BETWEEN_REQUESTS, Paginator


class Client:
    """Cliente síncrono para un site de Tender.

    Crear el cliente no abre ninguna conexión. Con `persistent=True` la primera
    petición abre una conexión que se reutiliza hasta `close_connection()`.
    """

    def __init__(
        self,
        site: str,
        api_key: str,
        *,
        persistent: bool = False,
        sleep_between_requests: float | None = DEFAULT_SLEEP_BETWEEN_REQUESTS,
        settings: ClientSettings | None = None,
        http_transport: httpx.BaseTransport | None = None,
        logger: logging.Logger | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not api_key:
            raise LoveError("An API key is required to use the Tender API.")

        self.settings = settings or ClientSettings()
        self.logger = logger or logging.getLogger(__name__)
        self.sleep_between_requests = sleep_between_requests
        self._sleep = sleep

        self.uris = ResourceURIBuilder(site, api_host=self.settings.api_host)
        self._transport = TenderTransport(
            api_key,
            self.settings,
            persistent=persistent,
            http_transport=http_transport,
            logger=self.logger,
        )

    @classmethod
    def from_settings(cls, settings: ClientSettings | None = None, **kwargs: Any) -> "Client":
        """Crea un cliente a partir de `ClientSettings` (env vars / .env).

        Es la única vía del cliente que lee ficheros `.env`; `Client(...)` y
        `connect(...)` solo usan variables de entorno.
        """

        settings = settings or ClientSettings.load()
        if not settings.site:
            raise LoveError("No Tender site configured (set TENDER_SITE).")
        kwargs.setdefault("persistent", settings.persistent)
        kwargs.setdefault("sleep_between_requests", settings.sleep_between_requests)
        return cls(settings.site, settings.api_key or "", settings=settings, **kwargs)

    @property
    def site(self) -> str:
        return self.uris.site

    @property
    def api_key(self) -> str:
        return self._transport.api_key

    @property
    def persistent(self) -> bool:
        return self._transport.persistent

    @property
    def request_headers(self) -> dict[str, str]:
        return self._transport.request_headers

    # -- singletons -------------------------------------------------------

    def get(self, kind: ResourceKind | str, id_or_href: Any) -> Any:
        """Devuelve un recurso por ID (int o str numérico) o por su URI completa."""

        kind = ResourceKind(kind)
        return self._transport.get(self.uris.singleton_uri(id_or_href, kind))

    def get_user(self, id_or_href: Any) -> Any:
        return self.get(ResourceKind.USERS, id_or_href)

    def get_discussion(self, id_or_href: Any) -> Any:
        return self.get(ResourceKind.DISCUSSIONS, id_or_href)

    def get_category(self, id_or_href: Any) -> Any:
        return self.get(ResourceKind.CATEGORIES, id_or_href)

    def get_queue(self, id_or_href: Any) -> Any:
        return self.get(ResourceKind.QUEUES, id_or_href)

    # -- collections ------------------------------------------------------

    def iter_collection(
        self,
        collection: Any,
        list_key: str,
        options: PagingOptions | None = None,
        **option_kwargs: Any,
    ) -> Iterator[dict[str, Any]]:
        """Recorre una colección arbitraria (nombre o URI) página a página.

        Acepta un `PagingOptions` o sus campos como kwargs
        (`since`, `start_page`, `end_page`).
        """

        if options is None:
            options = PagingOptions(**option_kwargs)
        elif option_kwargs:
            options = PagingOptions(**{**options.model_dump(), **option_kwargs})

        paginator = Paginator(
            transport=self._transport,
            sleep_between_requests=self.sleep_between_requests,
            sleep=self._sleep,
            logger=self.logger,
        )
        return paginator.iterate(self.uris.collection_uri(collection), list_key, options)

    def iter_resources(self, kind: ResourceKind | str, **options: Any) -> Iterator[dict[str, Any]]:
        kind = ResourceKind(kind)
        return self.iter_collection(
            self.uris.collection_uri(kind.collection, kind=kind),
            kind.list_key,
            **options,
        )

    def iter_categories(self, **options: Any) -> Iterator[dict[str, Any]]:
        return self.iter_resources(ResourceKind.CATEGORIES, **options)

    def iter_queues(self, **options: Any) -> Iterator[dict[str, Any]]:
        return self.iter_resources(ResourceKind.QUEUES, **options)

    def iter_users(self, **options: Any) -> Iterator[dict[str, Any]]:
        return self.iter_resources(ResourceKind.USERS, **options)

    def iter_discussions(self, **options: Any) -> Iterator[dict[str, Any]]:
        return self.iter_resources(ResourceKind.DISCUSSIONS, **options)

    # -- connection -------------------------------------------------------

    @property
    def connection(self) -> httpx.Client:
        """Conexión persistente, abriéndola si hace falta (uso avanzado)."""

        return self._transport.connection

    @property
    def connected(self) -> bool:
        return self._transport.connected

    def close_connection(self) -> None:
        self._transport.close_connection()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close_connection()


def connect(site: str, api_key: str, **options: Any) -> Client:
    """Prepara un cliente sin comunicarse todavía con la API.

    Por defecto cada petición usa una conexión nueva; pasa `persistent=True`
    para reutilizarla (y cierra con `close_connection()` al terminar).
    """

    return Client(site, api_key, **options)


@contextmanager
def session(site: str, api_key: str, **options: Any) -> Iterator[Client]:
    """Cliente con conexión persistente cuya conexión se cierra siempre al salir."""

    options["persistent"] = True
    client = Client(site, api_key, **options)
    try:
        yield client
    finally:
        client.close_connection()
