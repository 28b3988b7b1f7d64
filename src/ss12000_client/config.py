from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Type

from dotenv import load_dotenv

from .client import DEFAULT_TIMEOUT_SECONDS, SS12000Client
from .errors import ConfigurationError

BASE_URL_ENV = "SS12000_BASE_URL"
AUTH_TOKEN_ENV = "SS12000_AUTH_TOKEN"
TIMEOUT_ENV = "SS12000_TIMEOUT_SECONDS"


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    auth_token: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def _read_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be greater than zero")
    return value


def load_env_config(*, use_dotenv: bool = True) -> ClientConfig:
    """Load SS12000 base URL, token and timeout from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    base_url = os.getenv(BASE_URL_ENV, "").strip()
    auth_token = os.getenv(AUTH_TOKEN_ENV, "").strip() or None
    return ClientConfig(
        base_url=base_url,
        auth_token=auth_token,
        timeout_seconds=_read_float_env(TIMEOUT_ENV, DEFAULT_TIMEOUT_SECONDS),
    )


def create_client_from_env(
    *, client_cls: Type[SS12000Client] = SS12000Client, **kwargs
) -> SS12000Client:
    """Create an SS12000Client from environment variables."""
    cfg = load_env_config()
    if not cfg.base_url:
        raise ConfigurationError(f"Missing {BASE_URL_ENV} in environment.")
    kwargs.setdefault("timeout_seconds", cfg.timeout_seconds)
    return client_cls(cfg.base_url, cfg.auth_token, **kwargs)


__all__ = [
    "ClientConfig",
    "load_env_config",
    "create_client_from_env",
    "BASE_URL_ENV",
    "AUTH_TOKEN_ENV",
    "TIMEOUT_ENV",
]
