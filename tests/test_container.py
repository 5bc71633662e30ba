"""Tests for container wiring."""

import asyncio

import pytest

from photo_deleter.adapters.supabase_key_value_store import SupabaseKeyValueStore
from photo_deleter.containers import build_container


def test_build_container_creates_services(
    settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        SupabaseKeyValueStore, "get_string_set", lambda self, key: {"A"}
    )

    container = build_container(settings)

    assert container.session_controller is not None
    assert "A" in container.processed_ids
    assert container.quarantine.name == "To Delete"
    asyncio.run(container.close_resources())
