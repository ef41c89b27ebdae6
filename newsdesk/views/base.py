"""Socle commun des modèles de page."""

from __future__ import annotations

from typing import Callable, TypeVar

from newsdesk.tasks import Lifecycle, TaskRunner

T = TypeVar("T")


class PageModel:
    """État d'une page, indépendant de Tkinter.

    Les requêtes passent par ``TaskRunner`` et sont liées au ``Lifecycle``
    de la page : après ``dispose``, plus aucun résultat n'est appliqué.
    """

    def __init__(self, runner: TaskRunner, *, on_change: Callable[[], None] | None = None) -> None:
        self._runner = runner
        self._lifecycle = Lifecycle()
        self._on_change = on_change

    @property
    def disposed(self) -> bool:
        return self._lifecycle.disposed

    def bind(self, on_change: Callable[[], None]) -> None:
        self._on_change = on_change

    def _changed(self) -> None:
        if self._on_change is not None and not self._lifecycle.disposed:
            self._on_change()

    def _run(
        self,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        self._runner.submit(self._lifecycle, work, on_success, on_error)

    def dispose(self) -> None:
        self._lifecycle.dispose()
