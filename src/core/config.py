"""Configuración del cliente.

- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los adaptadores (transporte HTTP) leen la config desde aquí.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language

DEFAULT_API_URL = "https://api.goteborg.com/content/graphql"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "gbgco-content-api"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "gbgco-content-api"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "gbgco-content-api"
    return Path.home() / ".config" / "gbgco-content-api"


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

    lines = ["# gbgco-content-api user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="GBGCO_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        min_length=8,
        description="Endpoint GraphQL de la API de contenido.",
    )
    subscription_key: SecretStr | None = Field(
        default=None,
        description="Clave de suscripción; viaja como query param `subscription-key`.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="gbgco-content-api/0.1",
        min_length=1,
        description="User-Agent de las peticiones.",
    )
    default_language: Language = Field(
        default=Language.SWEDISH,
        description="Idioma por defecto para get-by-id y la CLI (sv/en).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI (DEBUG, INFO, WARNING...).",
    )
