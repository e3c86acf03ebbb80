"""Modelos y errores del dominio.

El dominio no conoce HTTP ni CLI: solo recursos, referencias y paginación.
"""

from love.core.domain.errors import InvalidURI, LoveError, NotFound, TenderAPIError, Unauthorized
from love.core.domain.models import (
    PageDescriptor,
    PagingOptions,
    ResourceHref,
    ResourceId,
    ResourceKind,
    ResourceRef,
    as_reference,
)

__all__ = [
    "InvalidURI",
    "LoveError",
    "NotFound",
    "PageDescriptor",
    "PagingOptions",
    "ResourceHref",
    "ResourceId",
    "ResourceKind",
    "ResourceRef",
    "TenderAPIError",
    "Unauthorized",
    "as_reference",
]
