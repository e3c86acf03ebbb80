"""Adaptadores de I/O: transporte httpx, clasificación de respuestas y exportación."""
