"""Love: cliente Python para la API REST de Tender (help desk).

El objeto principal es `Client`, que se obtiene con `connect()` o, con
conexión persistente, con el context manager `session()`.
"""

from __future__ import annotations

import logging

from love.client import Client, connect, session
from love.core.config import ClientSettings
from love.core.domain.errors import InvalidURI, LoveError, NotFound, TenderAPIError, Unauthorized
from love.core.domain.models import PagingOptions, ResourceHref, ResourceId, ResourceKind

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Client",
    "ClientSettings",
    "InvalidURI",
    "LoveError",
    "NotFound",
    "PagingOptions",
    "ResourceHref",
    "ResourceId",
    "ResourceKind",
    "TenderAPIError",
    "Unauthorized",
    "__version__",
    "connect",
    "session",
]
