"""Persisted set of photos the user has already judged."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_PROCESSED_IDS_KEY = "processedPhotoIds"


class KeyValueStore(Protocol):
    """Durable storage for named string sets."""

    def get_string_set(self, key: str) -> set[str]:
        """Return the stored set, empty when the key is unknown."""

    def set_string_set(self, key: str, value: set[str]) -> None:
        """Replace the stored set."""


@dataclass
class ProcessedIdSet:
    """Append-only set of asset ids, written back after every insertion."""

    store: KeyValueStore
    key: str = DEFAULT_PROCESSED_IDS_KEY
    _ids: set[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._ids = set(self.store.get_string_set(self.key))
        logger.info("Loaded %d processed photo ids", len(self._ids))

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def snapshot(self) -> frozenset[str]:
        """Return the current ids as an immutable set."""
        return frozenset(self._ids)

    def add(self, asset_id: str) -> None:
        """Insert an id and persist the whole set before returning."""
        if asset_id in self._ids:
            return
        self.store.set_string_set(self.key, self._ids | {asset_id})
        self._ids.add(asset_id)
