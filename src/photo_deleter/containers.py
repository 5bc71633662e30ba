"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from photo_deleter.adapters.immich_photo_library import ImmichPhotoLibrary
from photo_deleter.adapters.supabase_key_value_store import SupabaseKeyValueStore
from photo_deleter.config import Settings
from photo_deleter.services.library import PhotoLibrary
from photo_deleter.services.loader import RetryBoundedLoader
from photo_deleter.services.processed import ProcessedIdSet
from photo_deleter.services.quarantine import QuarantineAlbum
from photo_deleter.services.selection import AssetSelector
from photo_deleter.services.session import SwipeSessionController


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    photo_library: PhotoLibrary
    processed_ids: ProcessedIdSet
    quarantine: QuarantineAlbum
    selector: AssetSelector
    session_controller: SwipeSessionController
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    key_value_store = SupabaseKeyValueStore(supabase_client)
    photo_library = ImmichPhotoLibrary.create(
        base_url=resolved_settings.immich_base_url,
        api_key=resolved_settings.immich_api_key,
    )
    processed_ids = ProcessedIdSet(
        store=key_value_store, key=resolved_settings.processed_ids_key
    )
    quarantine = QuarantineAlbum(
        library=photo_library, name=resolved_settings.quarantine_album_name
    )
    selector = AssetSelector(
        library=photo_library, quarantine=quarantine, processed=processed_ids
    )
    session_controller = SwipeSessionController(
        selector=selector,
        loader=RetryBoundedLoader(photo_library),
        quarantine=quarantine,
        target_size=resolved_settings.image_target_size,
    )

    async def close_resources() -> None:
        await session_controller.close()
        await photo_library.close()

    return AppContainer(
        settings=resolved_settings,
        photo_library=photo_library,
        processed_ids=processed_ids,
        quarantine=quarantine,
        selector=selector,
        session_controller=session_controller,
        close_resources=close_resources,
    )
