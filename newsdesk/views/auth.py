"""Modèles des écrans de connexion et d'inscription."""

from __future__ import annotations

import re
from typing import Callable

from newsdesk.models import User
from newsdesk.services.http import ApiError
from newsdesk.services.session_store import SessionStore
from newsdesk.tasks import TaskRunner
from newsdesk.views.base import PageModel

MIN_SUBMITTABLE_STRENGTH = 2


def password_strength(password: str) -> int:
    """Score de 0 à 5 : longueur, majuscule, minuscule, chiffre, symbole."""
    checks = (
        len(password) >= 8,
        re.search(r"[A-Z]", password) is not None,
        re.search(r"[a-z]", password) is not None,
        re.search(r"[0-9]", password) is not None,
        re.search(r"[^A-Za-z0-9]", password) is not None,
    )
    return sum(checks)


def strength_label(strength: int) -> str:
    if strength < 2:
        return "Faible"
    if strength < 4:
        return "Moyen"
    return "Fort"


class _AuthForm(PageModel):
    default_error = "Échec de l'opération"

    def __init__(
        self,
        session: SessionStore,
        runner: TaskRunner,
        *,
        on_success: Callable[[User], None] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(runner, on_change=on_change)
        self._session = session
        self._on_success = on_success
        self.loading = False
        self.error = ""

    def _submit(self, work: Callable[[], User]) -> bool:
        if self.loading:
            return False
        self.loading = True
        self.error = ""
        self._changed()
        self._run(work, self._succeeded, self._failed)
        return True

    def _succeeded(self, user: User) -> None:
        self.loading = False
        self._changed()
        if self._on_success is not None:
            self._on_success(user)

    def _failed(self, exc: Exception) -> None:
        self.loading = False
        if isinstance(exc, ApiError):
            self.error = exc.message_or(self.default_error)
        else:
            self.error = self.default_error
        self._changed()


class LoginForm(_AuthForm):
    default_error = "Échec de la connexion"

    def submit(self, email: str, password: str) -> bool:
        if not email.strip() or not password:
            self.error = "Veuillez saisir votre e-mail et votre mot de passe."
            self._changed()
            return False
        return self._submit(lambda: self._session.login(email.strip(), password))


class RegisterForm(_AuthForm):
    default_error = "Échec de l'inscription"

    def can_submit(self, password: str) -> bool:
        return not self.loading and password_strength(password) >= MIN_SUBMITTABLE_STRENGTH

    def submit(self, name: str, email: str, password: str) -> bool:
        if not name.strip() or not email.strip():
            self.error = "Le nom et l'e-mail sont obligatoires."
            self._changed()
            return False
        if password_strength(password) < MIN_SUBMITTABLE_STRENGTH:
            self.error = "Mot de passe trop faible."
            self._changed()
            return False
        return self._submit(
            lambda: self._session.register(name.strip(), email.strip(), password)
        )
