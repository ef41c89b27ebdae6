"""Exécution des appels réseau hors du thread de l'interface.

Chaque page possède un ``Lifecycle`` ; lorsqu'elle est quittée, ses jetons
sont annulés et les réponses qui arrivent ensuite sont ignorées.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Planifie l'exécution d'une fonction sur le thread de l'interface.
Dispatch = Callable[[Callable[[], None]], None]


class CancellationToken:
    """Drapeau d'annulation partagé entre une page et ses requêtes."""

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()


class Lifecycle:
    """Durée de vie d'une page : tous ses jetons sont annulés à ``dispose``."""

    def __init__(self) -> None:
        self._tokens: list[CancellationToken] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def token(self) -> CancellationToken:
        token = CancellationToken()
        if self._disposed:
            token.cancel()
        else:
            self._tokens.append(token)
        return token

    @property
    def active_tokens(self) -> int:
        return len(self._tokens)

    def release(self, token: CancellationToken) -> None:
        """Oublie un jeton dont le résultat a été traité."""
        if token in self._tokens:
            self._tokens.remove(token)

    def dispose(self) -> None:
        self._disposed = True
        for token in self._tokens:
            token.cancel()
        self._tokens.clear()


class TaskRunner:
    """Lance un travail bloquant et livre son résultat via ``dispatch``."""

    def __init__(
        self,
        dispatch: Dispatch,
        *,
        executor: Executor | None = None,
        max_workers: int = 4,
    ) -> None:
        self._dispatch = dispatch
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="newsdesk",
        )

    def submit(
        self,
        lifecycle: Lifecycle,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[Exception], None] | None = None,
    ) -> Future:
        token = lifecycle.token()
        future = self._executor.submit(work)
        future.add_done_callback(
            lambda done: self._dispatch(
                lambda: self._deliver(lifecycle, token, done, on_success, on_error)
            )
        )
        return future

    @staticmethod
    def _deliver(
        lifecycle: Lifecycle,
        token: CancellationToken,
        future: Future,
        on_success: Callable[[T], None],
        on_error: Callable[[Exception], None] | None,
    ) -> None:
        lifecycle.release(token)
        if token.cancelled:
            logger.debug("Résultat tardif ignoré : la page a été quittée.")
            return

        error = future.exception()
        if error is None:
            on_success(future.result())
        elif on_error is not None:
            on_error(error)
        else:
            logger.error("Tâche en arrière-plan en échec : %s", error, exc_info=error)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
