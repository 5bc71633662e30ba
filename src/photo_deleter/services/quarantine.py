"""Quarantine album for photos marked for deletion."""

import asyncio
import logging
from dataclasses import dataclass, field

from photo_deleter.domain.assets import AssetRef
from photo_deleter.domain.errors import AlbumCreationError
from photo_deleter.services.library import PhotoLibrary

logger = logging.getLogger(__name__)

QUARANTINE_ALBUM_NAME = "To Delete"


@dataclass
class QuarantineAlbum:
    """Stages assets in a fixed album instead of deleting them."""

    library: PhotoLibrary
    name: str = QUARANTINE_ALBUM_NAME
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def members(self) -> set[str]:
        """Return ids already staged, empty when the album does not exist."""
        return await self.library.list_album_members(self.name)

    async def ensure_album_and_add(self, asset: AssetRef) -> None:
        """Add an asset to the album, creating the album on first use.

        Album creation does not hand back a usable reference, so a freshly
        created album is fetched again by name before the asset is added.
        Moves run one at a time so concurrent first uses create one album.
        """
        async with self._lock:
            await self._ensure_album_and_add(asset)

    async def _ensure_album_and_add(self, asset: AssetRef) -> None:
        album = await self.library.find_album(self.name)
        if album is None:
            await self.library.create_album(self.name)
            logger.info("Created album %r", self.name)
            album = await self.library.find_album(self.name)
            if album is None:
                raise AlbumCreationError(
                    f"Album {self.name!r} not found after creation"
                )
        await self.library.add_asset(asset, album)
        logger.info("Moved asset %s to album %r", asset.id, self.name)
