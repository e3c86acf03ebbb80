"""Contrato del transporte HTTP.

Por qué Protocol:
- El Paginator solo necesita "dame el JSON de esta URI".
- Permite sustituir el transporte real (httpx) por un fake en tests sin
  acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class JSONTransport(Protocol):
    """Contrato mínimo para obtener un documento JSON de la API.

    Reglas de diseño:
    - `get` es bloqueante: una sola petición en vuelo.
    - Los fallos (no-2xx, red) se propagan como excepciones.
    """

    def get(self, uri: str) -> Any:
        """Ejecuta un GET sobre `uri` y devuelve el cuerpo JSON decodificado."""

        ...
