"""Configuración de logging para la CLI.

La librería solo emite logs (logger `love` con `NullHandler`); los handlers
se configuran aquí, en el borde.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    log_level: int = logging.WARNING,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Path | None = None,
) -> None:
    """Configura el logger `love`.

    Args:
        log_level: Nivel mínimo (p.ej. logging.DEBUG con `--verbose`).
        log_format: Formato de los mensajes.
        log_file: Ruta opcional para duplicar la salida en un fichero.
    """

    package_logger = logging.getLogger("love")
    package_logger.setLevel(log_level)

    for handler in package_logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            package_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(log_format)

    # stderr: stdout queda para la salida de datos (--json).
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.debug("Logging configured. Level=%s", logging.getLevelName(log_level))
