"""Core: configuración, dominio y servicios sin I/O directo."""
