"""Gestion centralisée de la configuration du client NewsDesk."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_TOKEN_PATH = Path.home() / ".newsdesk" / "tokens.json"
DEFAULT_TIMEOUT = 15.0
DEFAULT_PAGE_SIZE = 12
DEFAULT_CHAT_DELAY_MS = 1000

INTERESTS_ENDPOINTS = ("profile", "interests")
THEMES = ("dark", "light")

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class ConfigError(RuntimeError):
    """Erreur levée lorsque la configuration est invalide."""


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Paramètres nécessaires pour dialoguer avec l'API NewsDesk."""

    api_base_url: str = DEFAULT_API_URL
    token_path: Path = DEFAULT_TOKEN_PATH
    request_timeout: float = DEFAULT_TIMEOUT
    page_size: int = DEFAULT_PAGE_SIZE
    chat_delay_ms: int = DEFAULT_CHAT_DELAY_MS
    interests_endpoint: str = "profile"
    log_level: str = "INFO"
    theme: str = "dark"


def _read_number(name: str, default: float, cast: type) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} doit être un nombre (reçu : {raw!r}).") from exc
    if value <= 0:
        raise ConfigError(f"{name} doit être strictement positif.")
    return value


def _read_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    value = os.getenv(name, default).strip().lower()
    if value not in choices:
        raise ConfigError(f"{name} doit valoir l'une des options {', '.join(choices)}.")
    return value


def load_config() -> AppConfig:
    """Charge la configuration depuis l'environnement (et un éventuel .env)."""
    load_dotenv()

    api_base_url = os.getenv("NEWSDESK_API_URL", DEFAULT_API_URL).rstrip("/")
    if not api_base_url.startswith(("http://", "https://")):
        raise ConfigError("NEWSDESK_API_URL doit commencer par http:// ou https://.")

    token_path = Path(os.getenv("NEWSDESK_TOKEN_PATH", str(DEFAULT_TOKEN_PATH))).expanduser()

    log_level = os.getenv("NEWSDESK_LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"NEWSDESK_LOG_LEVEL inconnu : {log_level}.")

    return AppConfig(
        api_base_url=api_base_url,
        token_path=token_path,
        request_timeout=_read_number("NEWSDESK_TIMEOUT", DEFAULT_TIMEOUT, float),
        page_size=int(_read_number("NEWSDESK_PAGE_SIZE", DEFAULT_PAGE_SIZE, int)),
        chat_delay_ms=int(_read_number("NEWSDESK_CHAT_DELAY_MS", DEFAULT_CHAT_DELAY_MS, int)),
        interests_endpoint=_read_choice(
            "NEWSDESK_INTERESTS_ENDPOINT", "profile", INTERESTS_ENDPOINTS
        ),
        log_level=log_level,
        theme=_read_choice("NEWSDESK_THEME", "dark", THEMES),
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure le logger racine une seule fois pour toute l'application."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # urllib3 est très bavard en DEBUG.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
