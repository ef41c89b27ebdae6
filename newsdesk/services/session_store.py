"""Source unique de vérité sur l'utilisateur connecté."""

from __future__ import annotations

import logging
from typing import Callable

from newsdesk.models import User
from newsdesk.services.http import ApiError
from newsdesk.services.news_api import NewsApi
from newsdesk.services.token_store import TokenStore
from newsdesk.state import SessionState

logger = logging.getLogger(__name__)

# Signature : notifier(niveau, message) avec niveau "success" ou "error".
Notifier = Callable[[str, str], None]
Listener = Callable[[SessionState], None]


def _log_notifier(level: str, message: str) -> None:
    logger.info("[%s] %s", level, message)


class SessionStore:
    """Détient ``SessionState`` et les opérations qui modifient l'identité.

    Aucune exclusion mutuelle : deux opérations concurrentes se terminent
    dans l'ordre où elles écrivent l'état (la dernière gagne).
    """

    def __init__(
        self,
        api: NewsApi,
        tokens: TokenStore,
        *,
        notifier: Notifier | None = None,
        state: SessionState | None = None,
    ) -> None:
        self._api = api
        self._tokens = tokens
        self._notify = notifier or _log_notifier
        self._state = state or SessionState()
        self._initialized = False
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user(self) -> User | None:
        return self._state.user

    @property
    def loading(self) -> bool:
        return self._state.loading

    def set_notifier(self, notifier: Notifier) -> None:
        self._notify = notifier

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Enregistre un observateur ; retourne la fonction de désinscription."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)

    def _set_user(self, user: User | None) -> None:
        self._state.user = user
        self._changed()

    # ------------------------------------------------------------ Démarrage -
    def initialize(self) -> None:
        """Restaure la session persistée ; n'agit qu'une fois par instance."""
        if self._initialized:
            return
        self._initialized = True

        try:
            if not self._tokens.access_token():
                return
            try:
                user = self._api.fetch_profile()
            except ApiError as exc:
                # Jeton expiré ou invalide : on repart déconnecté, sans alerte.
                logger.info("Session persistée invalide (%s), jetons effacés.", exc)
                self._tokens.clear()
                self._state.user = None
            else:
                self._state.user = user
        finally:
            self._state.loading = False
            self._changed()

    # ---------------------------------------------------------- Opérations -
    def login(self, email: str, password: str) -> User:
        try:
            result = self._api.login(email, password)
        except ApiError as exc:
            self._notify("error", exc.message_or("Échec de la connexion"))
            raise

        self._tokens.save(result.tokens)
        self._set_user(result.user)
        logger.info("Connexion réussie pour %s", result.user.email)
        self._notify("success", "Connexion réussie !")
        return result.user

    def register(self, name: str, email: str, password: str) -> User:
        try:
            result = self._api.register(name, email, password)
        except ApiError as exc:
            self._notify("error", exc.message_or("Échec de l'inscription"))
            raise

        self._tokens.save(result.tokens)
        self._set_user(result.user)
        logger.info("Compte créé pour %s", result.user.email)
        self._notify("success", "Inscription réussie !")
        return result.user

    def logout(self) -> None:
        """Déconnecte l'utilisateur ; les jetons sont effacés quoi qu'il arrive."""
        try:
            self._api.logout()
        except ApiError as exc:
            logger.warning("Échec de l'appel de déconnexion : %s", exc)
        finally:
            self._tokens.clear()
            self._state.reset()
            self._changed()
            self._notify("success", "Déconnexion effectuée")

    def update_profile(self, *, name: str | None = None, avatar_url: str | None = None) -> User:
        changes: dict[str, str] = {}
        if name is not None:
            changes["name"] = name
        if avatar_url is not None:
            changes["avatarUrl"] = avatar_url

        try:
            user = self._api.update_profile(changes)
        except ApiError as exc:
            self._notify("error", exc.message_or("Échec de la mise à jour du profil"))
            raise

        self._set_user(user)
        self._notify("success", "Profil mis à jour !")
        return user

    def update_interests(self, interests: list[str]) -> User:
        try:
            user = self._api.update_interests(interests)
        except ApiError as exc:
            self._notify("error", exc.message_or("Échec de la mise à jour des centres d'intérêt"))
            raise

        self._set_user(user)
        self._notify("success", "Centres d'intérêt mis à jour !")
        return user

    def change_password(self, current_password: str, new_password: str) -> None:
        try:
            self._api.change_password(current_password, new_password)
        except ApiError as exc:
            self._notify("error", exc.message_or("Échec du changement de mot de passe"))
            raise
        self._notify("success", "Mot de passe modifié !")
