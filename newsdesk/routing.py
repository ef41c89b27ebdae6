"""Garde de navigation et routeur des pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol

from newsdesk.state import SessionState

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "login"


class GuardDecision(str, Enum):
    LOADING = "loading"
    ALLOW = "allow"
    REDIRECT = "redirect"


def guard(state: SessionState) -> GuardDecision:
    """Décide du rendu d'une page protégée à partir de l'état de session."""
    if state.loading:
        return GuardDecision.LOADING
    if state.user is not None:
        return GuardDecision.ALLOW
    return GuardDecision.REDIRECT


class Page(Protocol):
    def dispose(self) -> None: ...


class RouterHost(Protocol):
    """Surface d'affichage : la fenêtre principale ou un double de test."""

    def show_loading(self) -> None: ...

    def mount(self, name: str, page: Page) -> None: ...


@dataclass(frozen=True, slots=True)
class Route:
    name: str
    factory: Callable[..., Page]
    public: bool = False


class Router:
    """Associe un nom de route à une fabrique de page.

    Une page protégée demandée pendant le chargement de la session reste en
    attente ; une redirection vers la connexion oublie la destination.
    """

    def __init__(self, state: SessionState, host: RouterHost) -> None:
        self._state = state
        self._host = host
        self._routes: dict[str, Route] = {}
        self._current: tuple[str, Page] | None = None
        self._pending: tuple[str, dict[str, Any]] | None = None

    @property
    def current_route(self) -> str | None:
        return self._current[0] if self._current else None

    def register(self, name: str, factory: Callable[..., Page], *, public: bool = False) -> None:
        self._routes[name] = Route(name=name, factory=factory, public=public)

    def navigate(self, name: str, **params: Any) -> GuardDecision:
        try:
            route = self._routes[name]
        except KeyError:
            raise ValueError(f"Route inconnue : {name}") from None

        if route.public:
            self._pending = None
            self._open(route, params)
            return GuardDecision.ALLOW

        decision = guard(self._state)
        if decision is GuardDecision.LOADING:
            self._pending = (name, params)
            self._close_current()
            self._host.show_loading()
        elif decision is GuardDecision.REDIRECT:
            self._pending = None
            logger.info("Accès à %s refusé, redirection vers la connexion.", name)
            self._open(self._routes[LOGIN_ROUTE], {})
        else:
            self._pending = None
            self._open(route, params)
        return decision

    def refresh(self) -> None:
        """Réévalue la garde après un changement de session."""
        if self._pending is not None:
            name, params = self._pending
            self.navigate(name, **params)
            return

        name = self.current_route
        if name is not None and not self._routes[name].public and self._state.user is None:
            self.navigate(name)

    def _close_current(self) -> None:
        if self._current is not None:
            self._current[1].dispose()
            self._current = None

    def _open(self, route: Route, params: dict[str, Any]) -> None:
        self._close_current()
        page = route.factory(**params)
        self._current = (route.name, page)
        logger.debug("Page affichée : %s %s", route.name, params or "")
        self._host.mount(route.name, page)
