"""Clasificación de respuestas HTTP.

Mapea el status de la respuesta a un valor JSON o a un error tipado. Sin
reintentos: todo no-2xx es terminal.
"""

from __future__ import annotations

from typing import Any

import httpx

from love.adapters.http_client import parse_json_body, safely_decode_utf8
from love.core.domain.errors import NotFound, TenderAPIError, Unauthorized


def classify_response(response: httpx.Response) -> Any:
    status = response.status_code
    if 200 <= status < 300:
        try:
            return parse_json_body(response.content)
        except ValueError as exc:
            raise TenderAPIError(
                f"{status}: invalid JSON body",
                status_code=status,
                body=safely_decode_utf8(response.content),
            ) from exc

    body = safely_decode_utf8(response.content)
    if status == 401:
        raise Unauthorized("Invalid credentials used!", status_code=status, body=body)
    if status == 403:
        raise Unauthorized(
            "You don't have permission to access this resource!",
            status_code=status,
            body=body,
        )
    if status == 404:
        raise NotFound("The resource was not found!", status_code=status, body=body)
    raise TenderAPIError(f"{status}: {body}", status_code=status, body=body)
