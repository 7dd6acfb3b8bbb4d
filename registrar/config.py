"""Settings for the Registrar service, read from the environment."""

import os
from dataclasses import dataclass, field

_DEFAULT_CORS_ORIGINS = ["http://localhost:5173"]


@dataclass
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"
    cors_origins: list[str] = field(default_factory=lambda: list(_DEFAULT_CORS_ORIGINS))


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"REGISTRAR_PORT must be an integer, got '{raw}'") from None
    if not 0 < port < 65536:
        raise ValueError(f"REGISTRAR_PORT out of range: {port}")
    return port


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from REGISTRAR_* environment variables.

    Unset variables keep their defaults. ``REGISTRAR_CORS_ORIGINS`` is a
    comma-separated list; an empty value disables CORS origins entirely.
    """
    env = os.environ if environ is None else environ
    settings = Settings()

    if "REGISTRAR_HOST" in env:
        settings.host = env["REGISTRAR_HOST"]
    if "REGISTRAR_PORT" in env:
        settings.port = _parse_port(env["REGISTRAR_PORT"])
    if "REGISTRAR_LOG_LEVEL" in env:
        settings.log_level = env["REGISTRAR_LOG_LEVEL"].strip().lower()
    if "REGISTRAR_CORS_ORIGINS" in env:
        settings.cors_origins = [
            o.strip() for o in env["REGISTRAR_CORS_ORIGINS"].split(",") if o.strip()
        ]
    return settings
