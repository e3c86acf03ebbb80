"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Las opciones de paginación se validan una sola vez, en el borde.

Nota:
- Los registros devueltos por la API no se modelan: se entregan al llamador
  como `dict` sin tocar.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class ResourceKind(str, Enum):
    """Tipos de recurso expuestos por la API de Tender."""

    CATEGORIES = "categories"
    QUEUES = "queues"
    USERS = "users"
    DISCUSSIONS = "discussions"

    @property
    def collection(self) -> str:
        """Segmento de ruta de la colección (y prefijo del singleton)."""

        return self.value

    @property
    def list_key(self) -> str:
        """Clave bajo la que cada página anida sus registros."""

        if self is ResourceKind.QUEUES:
            return "named_queues"
        return self.value

    def label(self) -> str:
        return self.value[:-3] + "y" if self.value.endswith("ies") else self.value[:-1]


class ResourceId(BaseModel):
    """Referencia por identificador numérico."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0, description="Identificador decimal del recurso.")


class ResourceHref(BaseModel):
    """Referencia por URI completa (p.ej. un `href` de una respuesta previa)."""

    model_config = ConfigDict(frozen=True)

    href: str = Field(..., min_length=1, description="URI completa del recurso.")


ResourceRef = Union[ResourceId, ResourceHref]


def as_reference(value: Any) -> ResourceRef:
    """Convierte una entrada laxa (int, str, URL) en un `ResourceRef`.

    - `int` o string con solo dígitos -> `ResourceId`.
    - Cualquier otro string/URL -> `ResourceHref` (se valida al resolverlo).
    """

    if isinstance(value, (ResourceId, ResourceHref)):
        return value
    if isinstance(value, bool):
        raise TypeError("A boolean is not a resource reference.")
    if isinstance(value, int):
        return ResourceId(id=value)
    text = str(value).strip()
    if text.isascii() and text.isdigit():
        return ResourceId(id=int(text))
    return ResourceHref(href=text)


class PageDescriptor(BaseModel):
    """Triple `{page, per_page, total}` leído de la primera página."""

    model_config = ConfigDict(extra="ignore")

    page: int = Field(default=1, ge=0)
    per_page: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)

    @field_validator("page", "per_page", "total", mode="before")
    @classmethod
    def _none_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @property
    def max_page(self) -> int:
        """Número de páginas de la colección (mínimo 1)."""

        if self.per_page <= 0:
            return 1
        return max(math.ceil(self.total / self.per_page), 1)

    @classmethod
    def from_body(cls, body: Any) -> "PageDescriptor":
        if isinstance(body, dict):
            return cls.model_validate(body)
        return cls()


class PagingOptions(BaseModel):
    """Opciones de iteración de una colección."""

    model_config = ConfigDict(frozen=True)

    since: date | None = Field(
        default=None,
        description="Solo registros actualizados desde esta fecha (no todos los recursos lo soportan).",
    )
    start_page: int = Field(
        default=1,
        description="Página inicial; valores < 1 se tratan como 1.",
    )
    end_page: int | None = Field(
        default=None,
        description="Página final; se recorta al máximo calculado.",
    )

    @field_validator("since", mode="before")
    @classmethod
    def _datetime_as_date(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        return value

    @field_validator("start_page", mode="before")
    @classmethod
    def _clamp_start_page(cls, value: Any) -> Any:
        if value is None:
            return 1
        return max(int(value), 1)

    def query_params(self) -> dict[str, Any]:
        """Parámetros GET de la primera petición."""

        params: dict[str, Any] = {}
        if self.since is not None:
            params["since"] = self.since.isoformat()
        params["page"] = self.start_page
        return params
