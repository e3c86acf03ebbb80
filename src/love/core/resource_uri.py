"""Construcción y validación de URIs de recursos Tender.

Por qué un componente propio:
- Las referencias llegan como `href` de respuestas previas o como IDs sueltos;
  aquí se normalizan a una única URI canónica.
- Rechaza URIs de otra cuenta para no mezclar datos entre sites.

Todas las URIs se manejan como `str`; nunca se modifican en sitio.
"""

from __future__ import annotations

import re
from typing import Any, Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from love.core.config import TENDER_API_HOST
from love.core.domain.errors import InvalidURI
from love.core.domain.models import ResourceHref, ResourceId, ResourceKind, as_reference

_RESOURCE_NAME = re.compile(r"[\w-]+", re.ASCII)
_NUMERIC_ID = re.compile(r"\d+", re.ASCII)


def _kind_name(kind: ResourceKind | str) -> str:
    return kind.collection if isinstance(kind, ResourceKind) else str(kind)


class ResourceURIBuilder:
    """Construye URIs de colección y de recurso para una cuenta concreta."""

    scheme = "https"

    def __init__(self, site: str, api_host: str = TENDER_API_HOST) -> None:
        if not site or not _RESOURCE_NAME.fullmatch(site):
            raise InvalidURI(f"{site!r} is not a valid Tender site name!")
        self.site = site
        self.api_host = api_host

    def _base(self) -> str:
        return f"{self.scheme}://{self.api_host}/{self.site}"

    def _account_path(self, uri: str) -> list[str] | None:
        """Segmentos de ruta tras la cuenta, o `None` si la URI no es de esta cuenta."""

        parts = urlsplit(uri)
        if parts.scheme != self.scheme or parts.netloc != self.api_host or parts.fragment:
            return None
        segments = parts.path.split("/")[1:]
        if not segments or segments[0] != self.site:
            return None
        return segments[1:]

    def collection_uri(self, value: Any, kind: ResourceKind | str | None = None) -> str:
        """URI de una colección a partir de un nombre de recurso o una URI completa.

        Si se indica `kind`, una URI completa solo se acepta si apunta
        exactamente a esa colección.
        """

        text = _kind_name(value) if isinstance(value, ResourceKind) else str(value)
        if _RESOURCE_NAME.fullmatch(text):
            if kind is not None and text != _kind_name(kind):
                raise InvalidURI(f"{text!r} is not the {_kind_name(kind)} collection!")
            return f"{self._base()}/{text}"

        segments = self._account_path(text)
        if (
            segments is not None
            and len(segments) == 1
            and _RESOURCE_NAME.fullmatch(segments[0])
            and (kind is None or segments[0] == _kind_name(kind))
        ):
            return text
        raise InvalidURI("This does not appear to be a valid Tender collection URI!")

    def singleton_uri(self, value: Any, kind: ResourceKind | str) -> str:
        """URI de un recurso a partir de su ID (int/str) o de su URI completa."""

        name = _kind_name(kind)
        try:
            reference = as_reference(value)
        except (TypeError, ValueError) as exc:
            raise InvalidURI(f"This does not appear to be a Tender {name} URI or ID!") from exc

        if isinstance(reference, ResourceId):
            return f"{self._base()}/{name}/{reference.id}"

        segments = self._account_path(reference.href) if isinstance(reference, ResourceHref) else None
        if (
            segments is not None
            and len(segments) == 2
            and segments[0] == name
            and _NUMERIC_ID.fullmatch(segments[1])
        ):
            return reference.href
        raise InvalidURI(f"This does not appear to be a Tender {name} URI or ID!")

    @staticmethod
    def append_query(base_uri: str, added_params: Mapping[str, Any] | None = None) -> str:
        """Añade parámetros GET a una URI sin modificar la original.

        Los parámetros repetidos se sustituyen por el nuevo valor; las listas se
        expanden en pares `clave=valor` repetidos. Codificación de formulario
        (espacio -> `+`).
        """

        parts = urlsplit(str(base_uri))
        merged: dict[str, Any] = {}
        for key, val in parse_qsl(parts.query, keep_blank_values=True):
            previous = merged.get(key)
            if previous is None:
                merged[key] = [val]
            else:
                previous.append(val)
        for key, val in (added_params or {}).items():
            merged[str(key)] = val

        pairs: list[tuple[str, str]] = []
        for key, val in merged.items():
            if isinstance(val, (list, tuple)):
                pairs.extend((key, str(v)) for v in val)
            else:
                pairs.append((key, str(val)))

        return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(pairs), parts.fragment))
