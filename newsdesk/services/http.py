"""Client HTTP partagé par toutes les pages."""

from __future__ import annotations

import logging
from typing import Any

import requests

from newsdesk.services.token_store import TokenStore

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    """Erreur générique levée lors des appels à l'API NewsDesk.

    ``status`` vaut None pour une panne réseau ; ``payload`` contient le
    corps JSON décodé de la réponse quand il existe.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload

    @property
    def is_auth_error(self) -> bool:
        return self.status in (401, 403)

    @property
    def is_server_error(self) -> bool:
        return self.status is not None and self.status >= 500

    def message_or(self, default: str) -> str:
        """Message lisible extrait du corps de la réponse, sinon ``default``."""
        return extract_error_message(self.payload, default)


def extract_error_message(payload: Any, default: str) -> str:
    """Ramène un corps d'erreur à une seule chaîne affichable.

    Ordre de recherche : ``error.message``, ``message``, puis ``error`` s'il
    s'agit d'une chaîne.
    """
    if not isinstance(payload, dict):
        return default

    error = payload.get("error")
    if isinstance(error, dict):
        nested = error.get("message")
        if isinstance(nested, str) and nested:
            return nested

    message = payload.get("message")
    if isinstance(message, str) and message:
        return message

    if isinstance(error, str) and error:
        return error

    return default


class HttpClient:
    """Enveloppe ``requests`` : URL de base, jeton d'accès et erreurs normalisées."""

    def __init__(
        self,
        base_url: str,
        tokens: TokenStore,
        *,
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._tokens = tokens
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.setdefault("Accept", "application/json")

    def _headers(self) -> dict[str, str]:
        token = self._tokens.access_token()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        logger.debug("%s %s params=%s", method, url, params)

        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise ApiError(f"Impossible de joindre le serveur : {exc}") from exc

        payload = self._decode(response)
        if not response.ok:
            message = extract_error_message(payload, f"HTTP {response.status_code}")
            logger.info("%s %s -> %s (%s)", method, url, response.status_code, message)
            raise ApiError(message, status=response.status_code, payload=payload)
        return payload

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def close(self) -> None:
        self._session.close()
