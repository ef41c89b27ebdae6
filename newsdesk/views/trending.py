"""Modèle du tableau de bord des tendances."""

from __future__ import annotations

import logging
from typing import Callable

from newsdesk.models import TrendingStats
from newsdesk.services.news_api import NewsApi
from newsdesk.tasks import TaskRunner
from newsdesk.views.base import PageModel

logger = logging.getLogger(__name__)

LOAD_ERROR = "Impossible de charger les tendances"


class TrendingModel(PageModel):
    def __init__(
        self,
        api: NewsApi,
        runner: TaskRunner,
        *,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(runner, on_change=on_change)
        self._api = api
        self.stats = TrendingStats()
        self.loading = False
        self.error = ""

    def load(self) -> None:
        self.loading = True
        self.error = ""
        self._changed()
        self._run(self._api.trending, self._loaded, self._failed)

    def _loaded(self, stats: TrendingStats) -> None:
        self.stats = stats
        self.loading = False
        self._changed()

    def _failed(self, exc: Exception) -> None:
        logger.error("Erreur de chargement des tendances : %s", exc)
        self.error = LOAD_ERROR
        self.loading = False
        self._changed()

    def share(self, count: int) -> float:
        """Part d'une catégorie dans le total, en pourcentage."""
        total = sum(item.count for item in self.stats.categories)
        return round(100 * count / total, 1) if total else 0.0
