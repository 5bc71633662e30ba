"""Tests for the persisted processed id set."""

from dataclasses import dataclass

import pytest

from photo_deleter.services.processed import ProcessedIdSet
from tests.conftest import InMemoryKeyValueStore


def test_processed_ids_load_existing_values() -> None:
    store = InMemoryKeyValueStore(sets={"processedPhotoIds": {"A", "B"}})

    processed = ProcessedIdSet(store)

    assert "A" in processed
    assert "C" not in processed
    assert len(processed) == 2


def test_processed_ids_persist_after_each_insert() -> None:
    store = InMemoryKeyValueStore()
    processed = ProcessedIdSet(store, key="custom")

    processed.add("A")
    processed.add("B")

    assert store.sets["custom"] == {"A", "B"}
    assert store.writes == 2


def test_processed_ids_ignore_duplicates() -> None:
    store = InMemoryKeyValueStore()
    processed = ProcessedIdSet(store)

    processed.add("A")
    processed.add("A")

    assert store.writes == 1
    assert processed.snapshot() == frozenset({"A"})


def test_processed_ids_survive_restart() -> None:
    store = InMemoryKeyValueStore()
    ProcessedIdSet(store).add("A")

    restarted = ProcessedIdSet(store)

    assert "A" in restarted


@dataclass
class FailingKeyValueStore(InMemoryKeyValueStore):
    """Rejects every write."""

    def set_string_set(self, key: str, value: set[str]) -> None:
        raise ConnectionError("store offline")


def test_processed_ids_unchanged_when_persist_fails() -> None:
    store = FailingKeyValueStore(sets={"processedPhotoIds": {"A"}})
    processed = ProcessedIdSet(store)

    with pytest.raises(ConnectionError):
        processed.add("B")

    assert "B" not in processed
    assert processed.snapshot() == frozenset({"A"})
