"""Jerarquía de errores del cliente.

Ningún error se reintenta internamente: todos se propagan al llamador en el
punto de la petición que falló.
"""

from __future__ import annotations


class LoveError(Exception):
    """Base de todos los errores de la librería."""


class InvalidURI(LoveError, ValueError):
    """Referencia a un recurso mal formada, de otra cuenta o de otro host."""


class TenderAPIError(LoveError):
    """Respuesta no-2xx de la API.

    Conserva `status_code` y `body` para diagnóstico.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class Unauthorized(TenderAPIError):
    """Credenciales inválidas (401) o recurso prohibido (403)."""


class NotFound(TenderAPIError):
    """El recurso no existe (404)."""
