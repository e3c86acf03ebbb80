"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el cliente, el transporte y la CLI lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

TENDER_API_HOST = "api.tenderapp.com"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "love-tender"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "love-tender"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "love-tender"
    return Path.home() / ".config" / "love-tender"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves existentes se conservan; los valores `None` se ignoran.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# love-tender user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class ClientSettings(BaseSettings):
    """Configuración central del cliente Tender.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para cliente/CLI.
    """

    model_config = SettingsConfigDict(
        env_prefix="TENDER_",
        extra="ignore",
        case_sensitive=False,
        env_file_encoding="utf-8",
    )

    site: str | None = Field(
        default=None,
        description="Cuenta (site) de Tender; primer segmento de todas las rutas.",
    )
    api_key: str | None = Field(
        default=None,
        description="API key enviada en la cabecera X-Tender-Auth.",
    )
    api_host: str = Field(
        default=TENDER_API_HOST,
        min_length=1,
        description="Host de la API REST de Tender.",
    )
    persistent: bool = Field(
        default=False,
        description="Reutilizar una única conexión entre peticiones.",
    )
    sleep_between_requests: float = Field(
        default=0.5,
        ge=0,
        description="Pausa (segundos) tras cada página de una colección.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="love-tender/0.1",
        min_length=1,
        description="User-Agent para las peticiones a la API.",
    )

    @classmethod
    def load(cls, **values: object) -> "ClientSettings":
        """Settings desde env vars y ficheros `.env`.

        Orden: proyecto primero (dev), luego config global de usuario. La ruta
        del `.env` de usuario se resuelve en cada llamada.
        """

        return cls(_env_file=(".env", str(get_user_env_file())), **values)
