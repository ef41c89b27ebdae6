"""Tests du SessionStore."""

from unittest.mock import Mock

import pytest

from newsdesk.models import TokenPair, User
from newsdesk.services.http import ApiError
from newsdesk.services.news_api import AuthResult
from newsdesk.services.session_store import SessionStore
from newsdesk.services.token_store import TokenStore


def make_store(api, tokens):
    notifier = Mock()
    return SessionStore(api, tokens, notifier=notifier), notifier


class TestInitialize:
    def test_without_token_ends_logged_out_without_network_call(self, api, tokens):
        store, _ = make_store(api, tokens)
        assert store.loading is True

        store.initialize()

        assert store.loading is False
        assert store.user is None
        api.fetch_profile.assert_not_called()

    def test_with_token_and_valid_profile_sets_user(self, api, tokens, demo_user):
        tokens.save(TokenPair("t", "r"))
        api.fetch_profile.return_value = demo_user
        store, notifier = make_store(api, tokens)

        store.initialize()

        assert store.user == demo_user
        assert store.loading is False
        assert tokens.access_token() == "t"
        notifier.assert_not_called()

    def test_failing_profile_clears_tokens_silently(self, api, tokens):
        tokens.save(TokenPair("t", "r"))
        api.fetch_profile.side_effect = ApiError("expired", status=401)
        store, notifier = make_store(api, tokens)

        store.initialize()

        assert store.user is None
        assert store.loading is False
        assert tokens.access_token() is None
        assert tokens.refresh_token() is None
        notifier.assert_not_called()

    def test_runs_only_once(self, api, tokens, demo_user):
        tokens.save(TokenPair("t", "r"))
        api.fetch_profile.return_value = demo_user
        store, _ = make_store(api, tokens)

        store.initialize()
        store.initialize()

        assert api.fetch_profile.call_count == 1

    def test_notifies_listeners(self, api, tokens):
        store, _ = make_store(api, tokens)
        listener = Mock()
        store.subscribe(listener)

        store.initialize()

        listener.assert_called_once_with(store.state)


class TestLogin:
    def test_success_persists_tokens_and_sets_user(self, api, tokens):
        api.login.return_value = AuthResult(
            tokens=TokenPair("t", "r"),
            user=User(id="1", email="demo@example.com"),
        )
        store, notifier = make_store(api, tokens)

        user = store.login("demo@example.com", "password123")

        api.login.assert_called_once_with("demo@example.com", "password123")
        assert tokens.access_token() == "t"
        assert tokens.refresh_token() == "r"
        assert store.user.email == "demo@example.com"
        assert user is store.user
        notifier.assert_called_once_with("success", "Connexion réussie !")

    def test_failure_keeps_previous_state_and_surfaces_message(self, api, tokens, demo_user):
        api.login.side_effect = ApiError(
            "HTTP 401",
            status=401,
            payload={"error": {"message": "Invalid credentials"}},
        )
        store, notifier = make_store(api, tokens)
        store.state.user = demo_user

        with pytest.raises(ApiError):
            store.login("demo@example.com", "wrong")

        assert store.user is demo_user
        assert tokens.access_token() is None
        notifier.assert_called_once_with("error", "Invalid credentials")

    def test_failure_without_message_uses_default(self, api, tokens):
        api.login.side_effect = ApiError("boom", payload={})
        store, notifier = make_store(api, tokens)

        with pytest.raises(ApiError):
            store.login("a@b.c", "x")

        notifier.assert_called_once_with("error", "Échec de la connexion")


class TestRegister:
    def test_success_uses_register_endpoint(self, api, tokens):
        api.register.return_value = AuthResult(
            tokens=TokenPair("t2", "r2"),
            user=User(id="2", email="new@example.com", name="New"),
        )
        store, notifier = make_store(api, tokens)

        store.register("New", "new@example.com", "Secret123!")

        api.register.assert_called_once_with("New", "new@example.com", "Secret123!")
        assert tokens.access_token() == "t2"
        assert store.user.name == "New"
        notifier.assert_called_once_with("success", "Inscription réussie !")

    def test_failure_uses_flat_error_string(self, api, tokens):
        api.register.side_effect = ApiError("HTTP 400", status=400, payload={"error": "Email taken"})
        store, notifier = make_store(api, tokens)

        with pytest.raises(ApiError):
            store.register("New", "new@example.com", "Secret123!")

        assert store.user is None
        notifier.assert_called_once_with("error", "Email taken")


class TestLogout:
    def test_clears_tokens_and_user(self, api, tokens, demo_user):
        tokens.save(TokenPair("t", "r"))
        store, _ = make_store(api, tokens)
        store.state.user = demo_user

        store.logout()

        api.logout.assert_called_once()
        assert store.user is None
        assert tokens.access_token() is None

    def test_clears_even_when_network_call_fails(self, api, tokens, demo_user):
        tokens.save(TokenPair("t", "r"))
        api.logout.side_effect = ApiError("offline")
        store, notifier = make_store(api, tokens)
        store.state.user = demo_user

        store.logout()

        assert store.user is None
        assert tokens.access_token() is None
        notifier.assert_called_once_with("success", "Déconnexion effectuée")


class TestProfileUpdates:
    def test_update_profile_replaces_user_with_server_copy(self, api, tokens, demo_user):
        server_user = User(id="1", email="demo@example.com", name="Renamed", interests=["ai"])
        api.update_profile.return_value = server_user
        store, _ = make_store(api, tokens)
        store.state.user = demo_user

        store.update_profile(name="Renamed")

        api.update_profile.assert_called_once_with({"name": "Renamed"})
        assert store.user is server_user
        assert store.user.interests == ["ai"]

    def test_update_profile_failure_leaves_user(self, api, tokens, demo_user):
        api.update_profile.side_effect = ApiError("bad", status=400, payload={"message": "Invalid URL"})
        store, notifier = make_store(api, tokens)
        store.state.user = demo_user

        with pytest.raises(ApiError):
            store.update_profile(avatar_url="nope")

        assert store.user is demo_user
        notifier.assert_called_once_with("error", "Invalid URL")

    def test_update_interests(self, api, tokens, demo_user):
        server_user = User(id="1", email="demo@example.com", interests=["science", "sports"])
        api.update_interests.return_value = server_user
        store, _ = make_store(api, tokens)
        store.state.user = demo_user

        store.update_interests(["science", "sports"])

        api.update_interests.assert_called_once_with(["science", "sports"])
        assert store.user.interests == ["science", "sports"]

    def test_change_password(self, api, tokens):
        store, notifier = make_store(api, tokens)

        store.change_password("old", "New123!")

        api.change_password.assert_called_once_with("old", "New123!")
        notifier.assert_called_once_with("success", "Mot de passe modifié !")


def test_unsubscribe_stops_notifications(api, tokens):
    store, _ = make_store(api, tokens)
    listener = Mock()
    unsubscribe = store.subscribe(listener)
    unsubscribe()

    store.initialize()

    listener.assert_not_called()


def test_isolated_sessions_do_not_share_state(api, tmp_path, demo_user):
    first, _ = make_store(api, TokenStore(tmp_path / "a.json"))
    second, _ = make_store(api, TokenStore(tmp_path / "b.json"))
    first.state.user = demo_user

    assert second.user is None
