"""Servicios del Core (paginación)."""
