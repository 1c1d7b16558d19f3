"""Shared fixtures: an in-memory ShortURL DAO for service and end-to-end tests.

The in-memory DAO honours the ShortURLBaseDAO contract (uniqueness, scoping,
atomic increments under a lock) so service-level behaviour can be tested
without a Redis server. Failures are injected per method via
`increment_error` / `set_error` / `get_error` / `insert_error`.
"""

import threading
from concurrent.futures import Future
from dataclasses import replace

import pytest

from snipurl.models import ShortURLModel
from snipurl.dao.base import ShortURLBaseDAO
from snipurl.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


class MemoryStore:
    def __init__(self):
        self.records: dict[str, ShortURLModel] = {}
        self.lock = threading.Lock()
        self.writes = 0


class InMemoryShortURLDAO(ShortURLBaseDAO):
    def __init__(self, store: MemoryStore, owner_id: str | None = None):
        self.store = store
        self.owner_id = owner_id
        self.insert_error: Exception | None = None
        self.get_error: Exception | None = None
        self.increment_error: Exception | None = None
        self.set_error: Exception | None = None

    def insert(self, short_url: ShortURLModel, **kwargs) -> 'InMemoryShortURLDAO':
        self._authorize(short_url.owner_id)
        if self.insert_error is not None:
            raise self.insert_error
        with self.store.lock:
            if short_url.shortcode in self.store.records:
                raise ShortURLAlreadyExistsError(short_url.shortcode)
            self.store.records[short_url.shortcode] = short_url
            self.store.writes += 1
        return self

    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        if self.get_error is not None:
            raise self.get_error
        with self.store.lock:
            try:
                return self.store.records[shortcode]
            except KeyError:
                raise ShortURLNotFoundError(shortcode) from None

    def increment_clicks(self, shortcode: str, **kwargs) -> int:
        if self.increment_error is not None:
            raise self.increment_error
        with self.store.lock:
            if shortcode not in self.store.records:
                raise ShortURLNotFoundError(shortcode)
            record = self.store.records[shortcode]
            self.store.records[shortcode] = replace(record, clicks=record.clicks + 1)
            self.store.writes += 1
            return record.clicks + 1

    def set_clicks(self, shortcode: str, clicks: int, **kwargs) -> 'InMemoryShortURLDAO':
        if self.set_error is not None:
            raise self.set_error
        with self.store.lock:
            if shortcode not in self.store.records:
                raise ShortURLNotFoundError(shortcode)
            self.store.records[shortcode] = replace(self.store.records[shortcode], clicks=clicks)
            self.store.writes += 1
        return self

    def list_by_owner(self, owner_id: str, limit: int = 50, **kwargs) -> list[ShortURLModel]:
        self._authorize(owner_id)
        with self.store.lock:
            owned = [r for r in self.store.records.values() if r.owner_id == owner_id]
        return sorted(owned, key=lambda r: r.created_at, reverse=True)[:limit]


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def memory_dao_factory(memory_store):
    """Build in-memory DAOs sharing one store, scoped to the given owner."""

    def _factory(owner_id: str | None = None) -> InMemoryShortURLDAO:
        return InMemoryShortURLDAO(memory_store, owner_id=owner_id)

    return _factory


@pytest.fixture
def memory_dao(memory_dao_factory) -> InMemoryShortURLDAO:
    return memory_dao_factory()


@pytest.fixture
def run_inline(monkeypatch):
    """Run fire-and-forget work synchronously so its effects are observable."""

    def _fire_and_forget(fn, /, *args, **kwargs) -> Future:
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:  # surfaced through the future, like the real executor
            future.set_exception(e)
        return future

    import snipurl.services.clicks as clicks_module

    monkeypatch.setattr(clicks_module, 'fire_and_forget', _fire_and_forget)
    return _fire_and_forget
