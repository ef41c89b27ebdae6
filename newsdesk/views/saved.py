"""Modèle de la page des articles enregistrés."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from newsdesk.models import Article
from newsdesk.services.news_api import NewsApi
from newsdesk.services.session_store import Notifier
from newsdesk.tasks import TaskRunner
from newsdesk.views.base import PageModel

logger = logging.getLogger(__name__)

LOAD_ERROR = "Impossible de charger les articles enregistrés"


@dataclass(frozen=True, slots=True)
class SavedStats:
    total: int
    sources: int
    categories: int


def matches(article: Article, term: str) -> bool:
    needle = term.lower()
    return (
        needle in article.title.lower()
        or needle in article.description.lower()
        or needle in article.source.lower()
    )


class SavedModel(PageModel):
    def __init__(
        self,
        api: NewsApi,
        runner: TaskRunner,
        *,
        notifier: Notifier | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(runner, on_change=on_change)
        self._api = api
        self._notify = notifier
        self.items: list[Article] = []
        self.loading = False
        self.error = ""
        self.search_term = ""

    def load(self) -> None:
        self.loading = True
        self.error = ""
        self._changed()
        self._run(self._api.saved_articles, self._loaded, self._failed)

    def _loaded(self, items: list[Article]) -> None:
        self.items = list(items)
        self.loading = False
        self._changed()

    def _failed(self, exc: Exception) -> None:
        logger.error("Erreur de chargement des articles enregistrés : %s", exc)
        self.error = LOAD_ERROR
        self.loading = False
        self._changed()

    def remove(self, article_id: str) -> None:
        """Supprime côté serveur puis retire l'article de la liste locale."""
        self._run(
            lambda: self._api.remove_saved(article_id),
            lambda _: self._removed(article_id),
            self._remove_failed,
        )

    def _removed(self, article_id: str) -> None:
        self.items = [item for item in self.items if item.id != article_id]
        if self._notify is not None:
            self._notify("success", "Article retiré des enregistrements")
        self._changed()

    def _remove_failed(self, exc: Exception) -> None:
        logger.error("Erreur de suppression de l'article : %s", exc)
        if self._notify is not None:
            self._notify("error", "Impossible de retirer l'article")

    def set_search(self, term: str) -> None:
        self.search_term = term
        self._changed()

    @property
    def filtered(self) -> list[Article]:
        if not self.search_term:
            return list(self.items)
        return [item for item in self.items if matches(item, self.search_term)]

    @property
    def stats(self) -> SavedStats:
        return SavedStats(
            total=len(self.items),
            sources=len({item.source for item in self.items}),
            categories=len({category for item in self.items for category in item.categories}),
        )

    @property
    def count_label(self) -> str:
        count = len(self.items)
        return f"{count} article{'s' if count != 1 else ''} enregistré{'s' if count != 1 else ''}"
