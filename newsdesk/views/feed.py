"""Modèle du fil d'actualité filtrable et paginé."""

from __future__ import annotations

import logging
from typing import Any, Callable

from newsdesk.models import Article
from newsdesk.services.news_api import FeedFilters, NewsApi
from newsdesk.services.session_store import Notifier
from newsdesk.tasks import TaskRunner
from newsdesk.views.base import PageModel

logger = logging.getLogger(__name__)

CATEGORIES = (
    "Technology", "Business", "Health", "Science", "Sports",
    "Entertainment", "Politics", "World", "Local",
)
SOURCES = (
    "BBC News", "CNN", "Reuters", "The Guardian", "New York Times",
    "Washington Post", "Associated Press", "Bloomberg",
)
TAGS = (
    "Breaking", "Analysis", "Opinion", "Interview", "Review",
    "Investigation", "Feature", "Update",
)

LOAD_ERROR = "Impossible de charger les articles"


class FeedModel(PageModel):
    """Articles affichés, filtres courants et pagination.

    La première page est demandée sans paramètre de pagination ; le nombre
    d'articles qu'elle renvoie fixe le ``limit`` des pages suivantes. Un
    changement de filtres pendant un chargement relance la requête dès que
    la réponse en cours arrive, sans l'afficher.
    """

    def __init__(
        self,
        api: NewsApi,
        runner: TaskRunner,
        *,
        page_size: int = 12,
        notifier: Notifier | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(runner, on_change=on_change)
        self._api = api
        self._notify = notifier
        self.page_size = page_size
        self.filters = FeedFilters()
        self.articles: list[Article] = []
        self.loading = False
        self.error = ""
        self.page = 1
        self.has_more = True
        self._limit = page_size
        self._reload_pending = False

    @property
    def is_empty(self) -> bool:
        return not self.loading and not self.articles and not self.error

    def load(self, reset: bool = False) -> bool:
        """Charge une page ; ignoré si un chargement est déjà en cours."""
        if self.loading:
            return False
        self.loading = True
        self.error = ""
        self._changed()

        page = 1 if reset else self.page
        kwargs: dict[str, Any] = {}
        if page > 1:
            kwargs = {"page": page, "limit": self._limit}
        filters = self.filters

        self._run(
            lambda: self._api.feed(filters, **kwargs),
            lambda articles: self._loaded(articles, reset),
            self._failed,
        )
        return True

    def _reload(self) -> bool:
        if self.loading:
            self._reload_pending = True
            return False
        return self.load(reset=True)

    def _resume_pending(self) -> bool:
        if not self._reload_pending:
            return False
        self._reload_pending = False
        self.loading = False
        self.load(reset=True)
        return True

    def _loaded(self, articles: list[Article], reset: bool) -> None:
        # Réponse obtenue avec des filtres périmés.
        if self._resume_pending():
            return
        if reset:
            self.articles = list(articles)
            self.page = 2
            self._limit = len(articles)
            self.has_more = len(articles) >= self.page_size
        else:
            self.articles = self.articles + list(articles)
            self.page += 1
            self.has_more = len(articles) == self._limit
        self.loading = False
        self._changed()

    def _failed(self, exc: Exception) -> None:
        logger.error("Erreur de chargement du fil : %s", exc)
        if self._resume_pending():
            return
        self.error = LOAD_ERROR
        self.loading = False
        self._changed()

    def refresh(self) -> bool:
        return self.load(reset=True)

    def load_more(self) -> bool:
        if not self.has_more or self._limit < 1:
            return False
        return self.load(reset=False)

    def update_filters(self, **changes: Any) -> bool:
        """Fusionne les filtres et recharge depuis la première page."""
        self.filters = self.filters.merge(**changes)
        return self._reload()

    def clear_filters(self) -> bool:
        self.filters = FeedFilters()
        return self._reload()

    def toggle(self, field: str, value: str) -> bool:
        """Coche ou décoche une catégorie, une source ou un tag."""
        current = list(getattr(self.filters, field))
        if value in current:
            current.remove(value)
        else:
            current.append(value)
        return self.update_filters(**{field: current})

    def save(self, article: Article) -> None:
        self._run(
            lambda: self._api.save_article(article),
            lambda _: self._saved(article),
            self._save_failed,
        )

    def _saved(self, article: Article) -> None:
        article.saved = True
        if self._notify is not None:
            self._notify("success", "Article enregistré !")
        self._changed()

    def _save_failed(self, exc: Exception) -> None:
        logger.error("Erreur d'enregistrement de l'article : %s", exc)
        if self._notify is not None:
            self._notify("error", "Impossible d'enregistrer l'article")
