"""Persistance locale des jetons d'authentification."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from newsdesk.models import TokenPair

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "accessToken"
REFRESH_TOKEN_KEY = "refreshToken"


class TokenStore:
    """Stocke la paire de jetons dans un fichier JSON à clés fixes.

    Les deux jetons sont écrits et effacés ensemble, jamais séparément.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        try:
            with open(self._path, encoding="utf-8") as handle:
                data = json.load(handle)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Fichier de jetons illisible (%s) : %s", self._path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def access_token(self) -> str | None:
        return self._read().get(ACCESS_TOKEN_KEY) or None

    def refresh_token(self) -> str | None:
        return self._read().get(REFRESH_TOKEN_KEY) or None

    def save(self, tokens: TokenPair) -> None:
        """Écrit les deux jetons et restreint les droits du fichier."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as handle:
            json.dump(
                {
                    ACCESS_TOKEN_KEY: tokens.access_token,
                    REFRESH_TOKEN_KEY: tokens.refresh_token,
                },
                handle,
            )
        try:
            os.chmod(self._path, 0o600)
        except OSError:
            # Windows ne gère pas ces permissions.
            pass

    def clear(self) -> None:
        """Supprime les deux jetons."""
        try:
            os.remove(self._path)
        except FileNotFoundError:
            pass
