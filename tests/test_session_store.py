"""Tests for SessionStore: pair invariant, persistence and rehydration."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from adapters.storage import JsonFileStorage, MemoryStorage
from core.domain.models import Identity, Session
from core.services.session_store import IDENTITY_KEY, TOKEN_KEY, SessionStore


class BrokenStorage(MemoryStorage):
    def set_item(self, key: str, value: str) -> None:
        raise OSError("disk full")

    def remove_item(self, key: str) -> None:
        raise OSError("read-only")


@pytest.fixture
def identity() -> Identity:
    return Identity(userId=42, username="bob", privilege=2)


def test_set_then_get_returns_exact_pair(identity: Identity) -> None:
    store = SessionStore(MemoryStorage())
    store.set_session("abc", identity)

    session = store.get_session()
    assert session.token == "abc"
    assert session.identity == identity
    assert store.is_authenticated()


def test_clear_session_unauthenticates_and_removes_keys(identity: Identity) -> None:
    storage = MemoryStorage()
    store = SessionStore(storage)
    store.set_session("abc", identity)

    store.clear_session()

    assert not store.is_authenticated()
    assert store.get_session() == Session.empty()
    assert storage.data == {}


def test_set_session_overwrites_without_merging(identity: Identity) -> None:
    store = SessionStore(MemoryStorage())
    store.set_session("first", identity)
    other = Identity(userId=1, username="carol", privilege=1)

    store.set_session("second", other)

    assert store.token == "second"
    assert store.identity == other


def test_persists_under_two_fixed_keys(identity: Identity) -> None:
    storage = MemoryStorage()
    SessionStore(storage).set_session("abc", identity)

    assert storage.data[TOKEN_KEY] == "abc"
    assert json.loads(storage.data[IDENTITY_KEY]) == {"userId": 42, "username": "bob", "privilege": 2}


def test_load_rehydrates_from_storage(identity: Identity) -> None:
    storage = MemoryStorage()
    SessionStore(storage).set_session("abc", identity)

    fresh = SessionStore(storage)
    assert not fresh.is_authenticated()
    fresh.load()

    assert fresh.token == "abc"
    assert fresh.identity == identity


@pytest.mark.parametrize(
    "data",
    [
        {TOKEN_KEY: "abc"},
        {IDENTITY_KEY: json.dumps({"userId": 1, "username": "x", "privilege": 1})},
        {TOKEN_KEY: "abc", IDENTITY_KEY: "{not json"},
        {TOKEN_KEY: "abc", IDENTITY_KEY: json.dumps({"username": "missing id"})},
    ],
)
def test_load_with_incomplete_pair_starts_empty(data: dict[str, str]) -> None:
    store = SessionStore(MemoryStorage(data))
    session = store.load()

    assert session == Session.empty()
    assert not store.is_authenticated()


def test_get_session_does_not_reread_storage(identity: Identity) -> None:
    storage = MemoryStorage()
    store = SessionStore(storage)
    store.set_session("abc", identity)

    storage.data.clear()

    assert store.is_authenticated()
    assert store.get_session().token == "abc"


def test_storage_failures_are_best_effort(identity: Identity) -> None:
    store = SessionStore(BrokenStorage())

    store.set_session("abc", identity)
    assert store.is_authenticated()

    store.clear_session()
    assert not store.is_authenticated()


def test_is_admin_threshold_is_inclusive() -> None:
    store = SessionStore(MemoryStorage())
    assert not store.is_admin(2)

    store.set_session("t", Identity(userId=1, username="a", privilege=2))
    assert store.is_admin(2)

    store.set_session("t", Identity(userId=1, username="a", privilege=1))
    assert not store.is_admin(2)


def test_session_rejects_half_pairs(identity: Identity) -> None:
    with pytest.raises(ValidationError):
        Session(token="abc")
    with pytest.raises(ValidationError):
        Session(identity=identity)


def test_json_file_storage_survives_restart(tmp_path, identity: Identity) -> None:
    path = tmp_path / "nested" / "session.json"
    SessionStore(JsonFileStorage(path)).set_session("abc", identity)

    assert path.is_file()
    reloaded = SessionStore(JsonFileStorage(path))
    reloaded.load()
    assert reloaded.identity == identity

    reloaded.clear_session()
    assert json.loads(path.read_text(encoding="utf-8")) == {}


def test_json_file_storage_ignores_corrupt_file(tmp_path) -> None:
    path = tmp_path / "session.json"
    path.write_text("garbage", encoding="utf-8")

    store = SessionStore(JsonFileStorage(path))
    assert store.load() == Session.empty()
