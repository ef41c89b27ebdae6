"""Modèle de la page Profil : identité, centres d'intérêt et statistiques."""

from __future__ import annotations

import logging
from typing import Callable

from newsdesk.models import AccountStats, User
from newsdesk.services.news_api import NewsApi
from newsdesk.services.session_store import SessionStore
from newsdesk.tasks import TaskRunner
from newsdesk.views.base import PageModel

logger = logging.getLogger(__name__)


def parse_interests(text: str) -> list[str]:
    """Découpe une saisie séparée par des virgules en liste nettoyée."""
    return [part.strip() for part in text.split(",") if part.strip()]


def initials(user: User | None) -> str:
    if user is None:
        return "?"
    source = user.name or user.email
    parts = [part for part in source.replace("@", " ").split() if part]
    return "".join(part[0].upper() for part in parts[:2]) or "?"


class ProfileModel(PageModel):
    def __init__(
        self,
        session: SessionStore,
        api: NewsApi,
        runner: TaskRunner,
        *,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(runner, on_change=on_change)
        self._session = session
        self._api = api
        user = session.user
        self.name = (user.name or "") if user else ""
        self.avatar_url = (user.avatar_url or "") if user else ""
        self.interests_text = ", ".join(user.interests) if user else ""
        self.stats = AccountStats()
        self.loading = False
        self.success = ""
        self.error = ""

    @property
    def user(self) -> User | None:
        return self._session.user

    def load_stats(self) -> None:
        self._run(self._api.account_stats, self._stats_loaded, self._stats_failed)

    def _stats_loaded(self, stats: AccountStats) -> None:
        self.stats = stats
        self._changed()

    def _stats_failed(self, exc: Exception) -> None:
        logger.error("Erreur de chargement des statistiques : %s", exc)

    def _start(self) -> bool:
        if self.loading:
            return False
        self.loading = True
        self.success = ""
        self.error = ""
        self._changed()
        return True

    def save_profile(self, name: str, avatar_url: str) -> bool:
        if not self._start():
            return False
        self.name = name
        self.avatar_url = avatar_url
        self._run(
            lambda: self._session.update_profile(name=name, avatar_url=avatar_url),
            lambda _: self._done("Profil mis à jour"),
            lambda _: self._fail("Échec de la mise à jour du profil"),
        )
        return True

    def save_interests(self, text: str) -> bool:
        if not self._start():
            return False
        self.interests_text = text
        interests = parse_interests(text)
        self._run(
            lambda: self._session.update_interests(interests),
            lambda _: self._done("Centres d'intérêt mis à jour"),
            lambda _: self._fail("Échec de la mise à jour des centres d'intérêt"),
        )
        return True

    def change_password(self, current: str, new: str, confirmation: str) -> bool:
        if not current or not new:
            self.error = "Veuillez remplir les champs du mot de passe."
            self._changed()
            return False
        if new != confirmation:
            self.error = "Les mots de passe ne correspondent pas."
            self._changed()
            return False
        if not self._start():
            return False
        self._run(
            lambda: self._session.change_password(current, new),
            lambda _: self._done("Mot de passe modifié"),
            lambda _: self._fail("Échec du changement de mot de passe"),
        )
        return True

    def _done(self, message: str) -> None:
        self.loading = False
        self.success = message
        self._changed()

    def _fail(self, message: str) -> None:
        self.loading = False
        self.error = message
        self._changed()
