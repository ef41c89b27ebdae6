"""Structures de données partagées entre la couche UI et les services."""

from __future__ import annotations

from dataclasses import dataclass

from newsdesk.models import User


@dataclass(slots=True)
class SessionState:
    """Croyance du client sur l'identité actuellement connectée."""

    user: User | None = None
    loading: bool = True

    @property
    def is_authenticated(self) -> bool:
        """Retourne True si un utilisateur est chargé."""
        return self.user is not None

    def reset(self) -> None:
        """Oublie l'utilisateur courant sans toucher à l'indicateur de chargement."""
        self.user = None
