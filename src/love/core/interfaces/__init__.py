"""Interfaces/abstracciones del Core.

- `JSONTransport`: lo único que el Paginator necesita del mundo HTTP.
"""

from love.core.interfaces.transport import JSONTransport

__all__ = ["JSONTransport"]
