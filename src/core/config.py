"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/almacenamiento) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias).

    Aquí viven el `.env` global y el fichero de sesión persistida.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "trainsys"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "trainsys"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "trainsys"
    return Path.home() / ".config" / "trainsys"


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


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except OSError:
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# trainsys user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAINSYS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="http://localhost:8080/api",
        min_length=8,
        description="Base URL de la API remota; se fija una vez al arrancar.",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout de transporte de httpx (segundos); None = sin límite.",
    )
    user_agent: str = Field(
        default="trainsys-client/0.1",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )

    notification_duration_ms: int = Field(
        default=3000,
        gt=0,
        description="Tiempo que una notificación permanece visible.",
    )
    admin_privilege_threshold: int = Field(
        default=2,
        ge=0,
        description="Privilegio mínimo (inclusive) para la vista de administración.",
    )

    session_file: Path | None = Field(
        default=None,
        description="Fichero JSON de sesión persistida (por defecto en el config dir).",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ...).",
    )
    log_file: Path | None = Field(
        default=None,
        description="Fichero de log opcional además de stderr.",
    )

    def resolved_session_file(self) -> Path:
        return self.session_file or (get_user_config_dir() / "session.json")
