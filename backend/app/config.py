"""Runtime configuration read from the environment (a local .env is honoured by the entry point)."""

import os
from dataclasses import dataclass

DEFAULT_CORS_ORIGINS = ("http://localhost:3000",)
DEFAULT_WS_PATH = "/ws"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5232

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    ws_path: str = DEFAULT_WS_PATH
    mandatory_jump: bool = True
    notify_rejections: bool = False
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


def _env_bool(name: str, default: bool) -> bool:
    value = _env(name).lower()
    if not value:
        return default
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of {sorted(_TRUE_VALUES | _FALSE_VALUES)}, got {value!r}")


def _env_int(name: str, default: int) -> int:
    value = _env(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


def get_settings() -> Settings:
    origins = tuple(o.strip() for o in _env("CHECKERS_CORS_ORIGINS").split(",") if o.strip())
    ws_path = _env("CHECKERS_WS_PATH") or DEFAULT_WS_PATH
    if not ws_path.startswith("/"):
        ws_path = f"/{ws_path}"
    return Settings(
        cors_origins=origins or DEFAULT_CORS_ORIGINS,
        ws_path=ws_path,
        mandatory_jump=_env_bool("CHECKERS_MANDATORY_JUMP", True),
        notify_rejections=_env_bool("CHECKERS_NOTIFY_REJECTIONS", False),
        host=_env("CHECKERS_HOST") or DEFAULT_HOST,
        port=_env_int("CHECKERS_PORT", DEFAULT_PORT),
        log_level=(_env("LOG_LEVEL") or "INFO").upper(),
    )
