"""Shared test fixtures."""

import random
from dataclasses import dataclass, field

import pytest

from photo_deleter.config import Settings
from photo_deleter.containers import AppContainer
from photo_deleter.domain.assets import AlbumRef, AssetRef, ImageData, TargetSize
from photo_deleter.domain.errors import AlbumCreationError, AlbumWriteError
from photo_deleter.services.library import PhotoLibrary
from photo_deleter.services.loader import RetryBoundedLoader
from photo_deleter.services.processed import KeyValueStore, ProcessedIdSet
from photo_deleter.services.quarantine import QuarantineAlbum
from photo_deleter.services.selection import AssetSelector
from photo_deleter.services.session import SwipeSessionController


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    sets: dict[str, set[str]] = field(default_factory=dict)
    writes: int = 0

    def get_string_set(self, key: str) -> set[str]:
        return set(self.sets.get(key, set()))

    def set_string_set(self, key: str, value: set[str]) -> None:
        self.sets[key] = set(value)
        self.writes += 1


@dataclass
class FakePhotoLibrary(PhotoLibrary):
    """Fake photo library with scripted image results.

    ``image_results`` maps an asset id to a queue of exceptions or
    ``ImageData`` returned by successive ``request_image`` calls; once the
    queue is empty the asset loads successfully.
    """

    asset_ids: list[str] = field(default_factory=list)
    albums: dict[str, set[str]] = field(default_factory=dict)
    image_results: dict[str, list[object]] = field(default_factory=dict)
    access: bool = True
    fail_create: bool = False
    hide_created_albums: bool = False
    fail_add: bool = False
    created_albums: list[str] = field(default_factory=list)
    added: list[tuple[str, str]] = field(default_factory=list)
    image_requests: list[str] = field(default_factory=list)
    list_calls: int = 0

    async def has_access(self) -> bool:
        return self.access

    async def list_image_assets(self) -> list[AssetRef]:
        self.list_calls += 1
        return [AssetRef(id=asset_id) for asset_id in self.asset_ids]

    async def find_album(self, name: str) -> AlbumRef | None:
        if name not in self.albums:
            return None
        return AlbumRef(id=f"album-{name}", name=name)

    async def list_album_members(self, name: str) -> set[str]:
        return set(self.albums.get(name, set()))

    async def create_album(self, name: str) -> None:
        if self.fail_create:
            raise AlbumCreationError("create failed")
        self.created_albums.append(name)
        if not self.hide_created_albums:
            self.albums.setdefault(name, set())

    async def add_asset(self, asset: AssetRef, album: AlbumRef) -> None:
        if self.fail_add:
            raise AlbumWriteError("write failed")
        self.albums.setdefault(album.name, set()).add(asset.id)
        self.added.append((asset.id, album.name))

    async def request_image(
        self, asset: AssetRef, target_size: TargetSize
    ) -> ImageData:
        self.image_requests.append(asset.id)
        queue = self.image_results.get(asset.id, [])
        if queue:
            result = queue.pop(0)
            if isinstance(result, BaseException):
                raise result
            return result
        return ImageData(asset_id=asset.id, content=f"pixels-{asset.id}".encode())


def build_controller(
    library: FakePhotoLibrary,
    store: InMemoryKeyValueStore | None = None,
    seed: int = 7,
) -> SwipeSessionController:
    """Build a controller over in-memory collaborators."""
    processed = ProcessedIdSet(store=store or InMemoryKeyValueStore())
    quarantine = QuarantineAlbum(library)
    selector = AssetSelector(
        library=library,
        quarantine=quarantine,
        processed=processed,
        rng=random.Random(seed),
    )
    return SwipeSessionController(
        selector=selector,
        loader=RetryBoundedLoader(library),
        quarantine=quarantine,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        immich_base_url="https://photos.example.com",
        immich_api_key="immich-key",
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
    )


@pytest.fixture
def key_value_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def photo_library() -> FakePhotoLibrary:
    return FakePhotoLibrary(asset_ids=["A", "B", "C"])


@pytest.fixture
def container(
    settings: Settings,
    key_value_store: InMemoryKeyValueStore,
    photo_library: FakePhotoLibrary,
) -> AppContainer:
    processed_ids = ProcessedIdSet(
        store=key_value_store, key=settings.processed_ids_key
    )
    quarantine = QuarantineAlbum(
        library=photo_library, name=settings.quarantine_album_name
    )
    selector = AssetSelector(
        library=photo_library,
        quarantine=quarantine,
        processed=processed_ids,
        rng=random.Random(3),
    )
    session_controller = SwipeSessionController(
        selector=selector,
        loader=RetryBoundedLoader(photo_library),
        quarantine=quarantine,
        target_size=settings.image_target_size,
    )

    async def close_resources() -> None:
        await session_controller.close()

    return AppContainer(
        settings=settings,
        photo_library=photo_library,
        processed_ids=processed_ids,
        quarantine=quarantine,
        selector=selector,
        session_controller=session_controller,
        close_resources=close_resources,
    )
