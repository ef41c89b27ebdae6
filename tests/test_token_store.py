"""Tests de la persistance des jetons."""

import json

from newsdesk.models import TokenPair
from newsdesk.services.token_store import TokenStore


def test_missing_file_means_no_token(tokens):
    assert tokens.access_token() is None
    assert tokens.refresh_token() is None


def test_save_writes_both_keys(tokens):
    tokens.save(TokenPair("access", "refresh"))

    data = json.loads(tokens.path.read_text(encoding="utf-8"))
    assert data == {"accessToken": "access", "refreshToken": "refresh"}
    assert tokens.access_token() == "access"
    assert tokens.refresh_token() == "refresh"


def test_clear_removes_both_tokens(tokens):
    tokens.save(TokenPair("access", "refresh"))

    tokens.clear()

    assert not tokens.path.exists()
    assert tokens.access_token() is None
    assert tokens.refresh_token() is None


def test_clear_without_file_is_a_no_op(tokens):
    tokens.clear()
    assert tokens.access_token() is None


def test_corrupted_file_is_treated_as_empty(tmp_path):
    path = tmp_path / "tokens.json"
    path.write_text("{not json", encoding="utf-8")

    assert TokenStore(path).access_token() is None


def test_creates_parent_directory(tmp_path):
    store = TokenStore(tmp_path / "nested" / "dir" / "tokens.json")
    store.save(TokenPair("a", "r"))
    assert store.access_token() == "a"
