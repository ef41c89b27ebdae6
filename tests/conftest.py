"""Fixtures partagées : exécution synchrone et doubles de l'API."""

from concurrent.futures import Executor, Future
from unittest.mock import Mock

import pytest

from newsdesk.models import User
from newsdesk.services.news_api import NewsApi
from newsdesk.services.token_store import TokenStore
from newsdesk.tasks import TaskRunner


class ImmediateExecutor(Executor):
    """Exécute le travail dans le thread appelant."""

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


class DeferredDispatch:
    """Retient les livraisons jusqu'à ``flush`` pour simuler la boucle UI."""

    def __init__(self):
        self.pending = []

    def __call__(self, callback):
        self.pending.append(callback)

    def flush(self):
        pending, self.pending = self.pending, []
        for callback in pending:
            callback()


@pytest.fixture
def runner():
    return TaskRunner(lambda callback: callback(), executor=ImmediateExecutor())


@pytest.fixture
def deferred():
    return DeferredDispatch()


@pytest.fixture
def deferred_runner(deferred):
    return TaskRunner(deferred, executor=ImmediateExecutor())


@pytest.fixture
def tokens(tmp_path):
    return TokenStore(tmp_path / "tokens.json")


@pytest.fixture
def api():
    return Mock(spec=NewsApi)


@pytest.fixture
def demo_user():
    return User(id="1", email="demo@example.com", name="Demo", interests=["tech"])
