"""Modèle de la page de détail d'un article."""

from __future__ import annotations

import logging
from typing import Callable

from newsdesk.models import Article
from newsdesk.services.news_api import NewsApi
from newsdesk.services.session_store import Notifier
from newsdesk.tasks import TaskRunner
from newsdesk.views.base import PageModel

logger = logging.getLogger(__name__)

LOAD_ERROR = "Impossible de charger l'article"


class ArticleModel(PageModel):
    def __init__(
        self,
        api: NewsApi,
        runner: TaskRunner,
        article_id: str,
        *,
        notifier: Notifier | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(runner, on_change=on_change)
        self._api = api
        self._notify = notifier
        self.article_id = article_id
        self.article: Article | None = None
        self.bookmarked = False
        self.saving = False
        self.loading = False
        self.error = ""

    def load(self) -> None:
        if not self.article_id:
            return
        self.loading = True
        self.error = ""
        self._changed()
        self._run(lambda: self._api.article(self.article_id), self._loaded, self._failed)

    def _loaded(self, article: Article) -> None:
        self.article = article
        self.bookmarked = article.saved
        self.loading = False
        self._changed()

    def _failed(self, exc: Exception) -> None:
        logger.error("Erreur de chargement de l'article %s : %s", self.article_id, exc)
        self.error = LOAD_ERROR
        self.loading = False
        self._changed()

    def toggle_save(self) -> bool:
        """Enregistre ou retire l'article ; ignoré pendant une sauvegarde."""
        if self.saving or self.article is None:
            return False
        article = self.article
        self.saving = True
        self._changed()

        if self.bookmarked:
            work = lambda: self._api.unsave_article(article.id)  # noqa: E731
        else:
            work = lambda: self._api.save_article(article)  # noqa: E731
        target = not self.bookmarked
        self._run(work, lambda _: self._toggled(target), self._toggle_failed)
        return True

    def _toggled(self, bookmarked: bool) -> None:
        self.bookmarked = bookmarked
        self.saving = False
        self._changed()

    def _toggle_failed(self, exc: Exception) -> None:
        logger.error("Erreur lors de l'enregistrement de l'article : %s", exc)
        self.saving = False
        if self._notify is not None:
            self._notify("error", "Impossible de modifier l'enregistrement")
        self._changed()
