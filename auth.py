import os
import logging
from dataclasses import dataclass
from typing import Optional

import streamlit as st

from infrastructure.identity.firebase_identity_service import FirebaseIdentityService

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class IdentityConfig:
    api_key: str
    emulator_host: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS


def get_secret(key):
    try:
        return st.secrets.get(key)
    except FileNotFoundError:
        return None


def _setting(key):
    return get_secret(key) or os.getenv(key)


def load_identity_config() -> IdentityConfig:
    api_key = _setting("FIREBASE_API_KEY")
    if not api_key:
        raise ConfigError("FIREBASE_API_KEY is not set in secrets.toml or the environment.")

    raw_timeout = _setting("IDENTITY_TIMEOUT")
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
    except ValueError as e:
        raise ConfigError(f"IDENTITY_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from e

    emulator_host = _setting("FIREBASE_AUTH_EMULATOR_HOST") or None
    if emulator_host:
        log.info(f"Using Firebase Auth emulator at {emulator_host}")

    return IdentityConfig(api_key=api_key, emulator_host=emulator_host, timeout=timeout)


def get_identity_service(config: Optional[IdentityConfig] = None) -> FirebaseIdentityService:
    config = config or load_identity_config()
    return FirebaseIdentityService(
        api_key=config.api_key,
        emulator_host=config.emulator_host,
        timeout=config.timeout,
    )
